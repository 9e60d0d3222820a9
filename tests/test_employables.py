"""
# Macro-Grammar: test_employables.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `employables.py`.
"""

import unittest

from macrogrammar.employables import (
    AddressRangeParser,
    BlockTagParser,
    LimitationParser,
    MethodCallParser,
    PatternLiteralParser,
    PropertyAnyValueParser,
    PropertyListParser,
    PropertyParser,
    WordParser,
)
from macrogrammar.kinds import BlockTag, Outcome


class TestEmployables(unittest.TestCase):
    def test_unrelated_text_is_never_an_error(self):
        for parser_class in [
            WordParser,
            PropertyParser,
            PropertyAnyValueParser,
            PropertyListParser,
            BlockTagParser,
            LimitationParser,
            AddressRangeParser,
            PatternLiteralParser,
            MethodCallParser,
        ]:
            parser = parser_class()
            for source in ['', 'completely unrelated text!', '42 is the answer', '{ braces }']:
                with self.subTest(parser=parser_class.__name__, source=source):
                    self.assertIs(parser.parse(source), Outcome.NO_MATCH)
                    self.assertEqual(parser.error_text, '')

    def test_word_parser(self):
        parser = WordParser()

        self.assertIs(parser.parse('  foo123 '), Outcome.OK)
        self.assertEqual(parser.name, 'foo123')

        self.assertIs(parser.parse('a_b_c'), Outcome.OK)
        self.assertEqual(parser.name, 'a_b_c')

        self.assertIs(parser.parse('123foo'), Outcome.NO_MATCH)
        self.assertIs(parser.parse(''), Outcome.NO_MATCH)
        self.assertIs(parser.parse('_foo'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('foo bar'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('foo;'), Outcome.NO_MATCH)
        self.assertEqual(parser.mismatch_text, 'cannot interpret `foo;` as a word')

    def test_property_parser(self):
        parser = PropertyParser()

        self.assertIs(parser.parse('bus width : 32'), Outcome.OK)
        self.assertEqual(parser.name, 'bus width')
        self.assertEqual(parser.val, '32')

        self.assertIs(parser.parse('data-bus-width:0x20'), Outcome.OK)
        self.assertEqual(parser.name, 'data-bus-width')
        self.assertEqual(parser.val, '0x20')

        self.assertIs(parser.parse('bus width : 32 bits'), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'expected <value> but got `32 bits` in `bus width : 32 bits`')
        self.assertEqual(parser.name, '')

        self.assertIs(parser.parse('width :'), Outcome.ERROR)
        self.assertIs(parser.parse('width : a,b'), Outcome.ERROR)

        self.assertIs(parser.parse('bus width 32'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('foo(a: b)'), Outcome.NO_MATCH)

    def test_property_any_value_parser(self):
        parser = PropertyAnyValueParser()

        self.assertIs(parser.parse('init : configure(1, "a:b")  '), Outcome.OK)
        self.assertEqual(parser.name, 'init')
        self.assertEqual(parser.val, 'configure(1, "a:b")')

        self.assertIs(parser.parse('empty:'), Outcome.OK)
        self.assertEqual(parser.name, 'empty')
        self.assertEqual(parser.val, '')

        self.assertIs(parser.parse('no colon'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('bus width : 32'), Outcome.NO_MATCH)

    def test_property_list_parser(self):
        parser = PropertyListParser()

        self.assertIs(parser.parse('modes: read, write, exec'), Outcome.OK)
        self.assertEqual(parser.name, 'modes')
        self.assertEqual(parser.vals, ['read', 'write', 'exec'])

        self.assertIs(parser.parse('modes : read'), Outcome.OK)
        self.assertEqual(parser.vals, ['read'])

        self.assertIs(parser.parse('modes:a ,a,  b'), Outcome.OK)
        self.assertEqual(parser.vals, ['a', 'a', 'b'])

        self.assertIs(parser.parse('modes: read write'), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'expected <value>[,<value>*] but got `read write` in `modes: read write`')
        self.assertEqual(parser.vals, [])

        self.assertIs(parser.parse('modes: read,'), Outcome.ERROR)
        self.assertIs(parser.parse('modes: ,read'), Outcome.ERROR)
        self.assertIs(parser.parse('modes read'), Outcome.NO_MATCH)

    def test_block_tag_parser(self):
        parser = BlockTagParser()

        self.assertIs(parser.parse('<routing>'), Outcome.OK)
        self.assertIs(parser.tag, BlockTag.ROUTING)
        self.assertTrue(parser.enter)

        self.assertIs(parser.parse('  </routing>  '), Outcome.OK)
        self.assertIs(parser.tag, BlockTag.ROUTING)
        self.assertFalse(parser.enter)

        self.assertIs(parser.parse('<safe_address_ranges>'), Outcome.OK)
        self.assertIs(parser.tag, BlockTag.SAFE_ADDRESS_RANGES)

        self.assertIs(parser.parse('<foo>'), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'Unknown blocktag `foo` in `<foo>`')
        self.assertIsNone(parser.tag)

        self.assertIs(parser.parse('<Routing>'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Unknown blocktag'))

        self.assertIs(parser.parse('<rout ing>'), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'Malformed blocktag `<rout ing>`')

        for source in ['< routing>', '<routing >', '</ routing>', '<>', '<//routing>', '<routing/>']:
            with self.subTest(source=source):
                self.assertIs(parser.parse(source), Outcome.ERROR)
                self.assertTrue(parser.error_text.startswith('Malformed blocktag'))

        self.assertIs(parser.parse('routing'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('<routing'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('x <routing>'), Outcome.NO_MATCH)

    def test_limitation_parser(self):
        parser = LimitationParser()

        self.assertIs(parser.parse('add max_err : 3'), Outcome.OK)
        self.assertEqual(parser.keyword, 'add')
        self.assertEqual(parser.name, 'max_err')
        self.assertEqual(parser.val, '3')

        self.assertIs(parser.parse('  set width=8 '), Outcome.OK)
        self.assertEqual(parser.keyword, 'set')
        self.assertEqual(parser.name, 'width')
        self.assertEqual(parser.val, '8')

        self.assertIs(parser.parse('rm region: low'), Outcome.OK)
        self.assertEqual(parser.keyword, 'rm')

        self.assertIs(parser.parse('add badline'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('settle x : 3'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('max_err : 3'), Outcome.NO_MATCH)

        self.assertIs(parser.parse('add foo:bar:baz'), Outcome.ERROR)
        self.assertEqual(
            parser.error_text,
            'Bad syntax in limitation `add foo:bar:baz`, should be add|set|rm name : value',
        )
        self.assertEqual(parser.keyword, '')

        self.assertIs(parser.parse('add two words : 3'), Outcome.ERROR)
        self.assertIs(parser.parse('set x = '), Outcome.ERROR)

    def test_address_range_parser(self):
        parser = AddressRangeParser()

        self.assertIs(parser.parse('0x1000..0x2000'), Outcome.OK)
        self.assertEqual(parser.min_address, 0x1000)
        self.assertEqual(parser.max_address, 0x2000)
        self.assertEqual(parser.tags, [])
        self.assertEqual(parser.bus_interfaces, [])
        self.assertFalse(parser.inverse)

        self.assertIs(parser.parse('0x2000..0x1000'), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'Reversed address range `0x2000..0x1000`')
        self.assertIsNone(parser.min_address)

        self.assertIs(parser.parse('range 0x1000..0x2000 with secure, debug for M0,M1'), Outcome.OK)
        self.assertEqual(parser.min_address, 0x1000)
        self.assertEqual(parser.max_address, 0x2000)
        self.assertEqual(parser.tags, ['secure', 'debug'])
        self.assertEqual(parser.bus_interfaces, ['M0', 'M1'])
        self.assertFalse(parser.inverse)

        self.assertIs(parser.parse('range 0x1000..0x2000 with secure, debug for M0,M0'), Outcome.ERROR)
        self.assertTrue(parser.error_text.endswith('contains identical items'))
        self.assertEqual(parser.tags, [])

        self.assertIs(parser.parse('add range 0..255 using rw notfor M2'), Outcome.OK)
        self.assertEqual(parser.max_address, 255)
        self.assertEqual(parser.tags, ['rw'])
        self.assertEqual(parser.bus_interfaces, ['M2'])
        self.assertTrue(parser.inverse)

        self.assertIs(parser.parse('add_range: 0x10 .. 0x20 : secure'), Outcome.OK)
        self.assertEqual(parser.tags, ['secure'])

        self.assertIs(parser.parse('0x10..0x10:secure,secure'), Outcome.OK)
        self.assertEqual(parser.tags, ['secure', 'secure'])

        self.assertIs(parser.parse('range foo..0x10'), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'Non-numeric value `foo` in address range `range foo..0x10`')

        self.assertIs(parser.parse('0..' + '9' * 5000), Outcome.ERROR)
        self.assertEqual(parser.error_text, 'Value of 5000 characters is too large in address range')

        self.assertIs(parser.parse('range'), Outcome.ERROR)
        self.assertIs(parser.parse('range 0x10'), Outcome.ERROR)
        self.assertIs(parser.parse('0x10..0x20 with'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Malformed tag qualifier'))
        self.assertIs(parser.parse('0x10..0x20 for M0'), Outcome.ERROR)
        self.assertIs(parser.parse('0x10..0x20 with a for'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Malformed bus interface qualifier'))
        self.assertIs(parser.parse('0x10..0x20 with a besides M0'), Outcome.ERROR)

        self.assertIs(parser.parse('ranges: a, b'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('range_size : 3'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('0x10 0x20'), Outcome.NO_MATCH)

    def test_address_range_parser_formatting(self):
        parser = AddressRangeParser()

        self.assertEqual(parser.range_string(), '')
        self.assertEqual(parser.tags_string(), '')
        self.assertEqual(parser.bus_interfaces_string(), '')
        self.assertFalse(parser.is_inverse())

        parser.parse('range 0x1000..0x2000 with secure, debug notfor M0,M1')
        self.assertEqual(parser.range_string(), "'h0000_1000, 'h0000_2000")
        self.assertEqual(parser.tags_string(), '{secure;debug}')
        self.assertEqual(parser.bus_interfaces_string(), '{"M0";"M1"}')
        self.assertTrue(parser.is_inverse())

        parser.parse('0..0xFFFFFFFF')
        self.assertEqual(parser.range_string(), "'h0000_0000, 'hFFFF_FFFF")
        self.assertEqual(parser.tags_string(), '{}')
        self.assertEqual(parser.bus_interfaces_string(), '{}')
        self.assertFalse(parser.is_inverse())

        parser.parse('0x2000..0x1000')
        self.assertEqual(parser.range_string(), '')
        self.assertFalse(parser.is_inverse())

    def test_pattern_literal_parser(self):
        parser = PatternLiteralParser()

        self.assertIs(parser.parse('  "abc.*[0-9]+"  '), Outcome.OK)
        self.assertEqual(parser.pattern, 'abc.*[0-9]+')

        self.assertIs(parser.parse('""'), Outcome.OK)
        self.assertEqual(parser.pattern, '')

        self.assertIs(parser.parse('"[a-"'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Invalid string match pattern `[a-`'))
        self.assertEqual(parser.pattern, '')

        self.assertIs(parser.parse('"(unclosed"'), Outcome.ERROR)

        self.assertIs(parser.parse('"a{99999999999}"'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Invalid string match pattern `a{99999999999}`: '))

        deeply_nested = '(' * 2000 + ')' * 2000
        self.assertIs(parser.parse(f'"{deeply_nested}"'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith(f'Invalid string match pattern `{deeply_nested}`: '))

        self.assertIs(parser.parse('abc'), Outcome.NO_MATCH)
        self.assertEqual(parser.mismatch_text, 'Not a string literal: `abc`')
        self.assertIs(parser.parse('"'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('"abc'), Outcome.NO_MATCH)
        self.assertIs(parser.parse("'abc'"), Outcome.NO_MATCH)

    def test_method_call_parser(self):
        parser = MethodCallParser()

        self.assertIs(parser.parse('foo(a, b, "x,y")'), Outcome.OK)
        self.assertEqual(parser.method_name, 'foo')
        self.assertEqual(parser.arguments, ['a', 'b', '"x,y"'])

        self.assertIs(parser.parse('foo(a, (b,c))'), Outcome.OK)
        self.assertEqual(parser.arguments, ['a', '(b,c)'])

        self.assertIs(parser.parse('foo()'), Outcome.OK)
        self.assertEqual(parser.arguments, [''])

        self.assertIs(parser.parse('  bar ( x )  '), Outcome.OK)
        self.assertEqual(parser.method_name, 'bar')
        self.assertEqual(parser.arguments, ['x'])

        self.assertIs(parser.parse('foo(a,,b,)'), Outcome.OK)
        self.assertEqual(parser.arguments, ['a', '', 'b', ''])

        self.assertIs(parser.parse('foo((a, ")"), b)'), Outcome.OK)
        self.assertEqual(parser.arguments, ['(a, ")")', 'b'])

        self.assertIs(parser.parse('foo("a\\"b, c", d)'), Outcome.OK)
        self.assertEqual(parser.arguments, ['"a\\"b, c"', 'd'])

        self.assertIs(parser.parse('foo("\\\\", e)'), Outcome.OK)
        self.assertEqual(parser.arguments, ['"\\\\"', 'e'])

        self.assertIs(parser.parse('foo(a\\,b)'), Outcome.OK)
        self.assertEqual(parser.arguments, ['a\\', 'b'])

        self.assertIs(parser.parse('foo(a, (b,c)'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Mismatched parentheses or quotes in `a, (b,c`'))
        self.assertEqual(parser.arguments, [])

        self.assertIs(parser.parse('foo("abc)'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('Mismatched parentheses or quotes'))

        self.assertIs(parser.parse('foo(a), b)'), Outcome.ERROR)
        self.assertTrue(parser.error_text.startswith('unexpected close-parenthesis in `a)`'))

        self.assertIs(parser.parse('foo'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('123(a)'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('foo(a) + 1'), Outcome.NO_MATCH)
        self.assertIs(parser.parse('foo(a'), Outcome.NO_MATCH)

    def test_method_call_parser_split_arguments(self):
        self.assertEqual(MethodCallParser.split_arguments(''), ([''], None))
        self.assertEqual(MethodCallParser.split_arguments(' x '), (['x'], None))
        self.assertEqual(MethodCallParser.split_arguments('f(g(1, 2), 3), 4'), (['f(g(1, 2), 3)', '4'], None))
        self.assertEqual(
            MethodCallParser.split_arguments('")", ("(")'),
            (['")"', '("(")'], None),
        )
        self.assertEqual(
            MethodCallParser.split_arguments('a)'),
            ([], 'unexpected close-parenthesis in `a)`'),
        )
        self.assertEqual(
            MethodCallParser.split_arguments('"\\"'),
            ([], 'Mismatched parentheses or quotes in `"\\"`'),
        )


if __name__ == '__main__':
    unittest.main()
