"""
# Macro-Grammar: employables.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Line grammars that are actually offered to callers.
"""

import re
from typing import NamedTuple, Optional

from macrogrammar.bases import Parser
from macrogrammar.constants import ADDRESS_TOKEN_MAX_LENGTH, HEX_LITERAL_PREFIX, LIMITATION_KEYWORDS
from macrogrammar.idioms import (
    IDENTIFIER_REGEX,
    LEGACY_NAME_REGEX,
    WORD_TOKEN_REGEX,
    build_keyword_regex,
    build_word_list_regex,
    compute_property_prefix_match,
)
from macrogrammar.kinds import BlockTag, Kind
from macrogrammar.utilities import compute_unsigned_integer, format_hex_groups, has_duplicates, split_and_trim


class WordParser(Parser):
    """
    A grammar for a single identifier.

    Syntax:
    ````
    «name»
    ````
    where «name» is a letter followed by letters, digits or underscores.
    """
    _name: str

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.WORD, verbose_mode_enabled)

    @property
    def name(self) -> str:
        return self._name

    def _clear_results(self):
        self._name = ''

    @staticmethod
    def compute_word_match(source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'[\s]* (?P<name> {IDENTIFIER_REGEX} ) [\s]*',
            string=source,
            flags=re.ASCII | re.VERBOSE,
        )

    def _parse(self, source: str, trimmed_source: str):
        word_match = WordParser.compute_word_match(source)
        if word_match is None:
            self._decline(f'cannot interpret `{trimmed_source}` as a word')
            return

        self._name = word_match.group('name')
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'name': self._name}


class PropertyParser(Parser):
    """
    A grammar for a property with a single-token value.

    Syntax:
    ````
    «name» : «value»
    ````
    where «name» may contain spaces and hyphens (legacy multi-word property names)
    and «value» is a single word token.
    """
    _name: str
    _val: str

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.PROPERTY, verbose_mode_enabled)

    @property
    def name(self) -> str:
        return self._name

    @property
    def val(self) -> str:
        return self._val

    def _clear_results(self):
        self._name = ''
        self._val = ''

    @staticmethod
    def compute_value_match(value_part: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'[\s]* (?P<val> {WORD_TOKEN_REGEX} ) [\s]*',
            string=value_part,
            flags=re.ASCII | re.VERBOSE,
        )

    def _parse(self, source: str, trimmed_source: str):
        property_match = compute_property_prefix_match(source, name_regex=LEGACY_NAME_REGEX)
        if property_match is None:
            self._decline(f'no `<name> :` in `{trimmed_source}`')
            return

        value_part = property_match.group('value_part')
        value_match = PropertyParser.compute_value_match(value_part)
        if value_match is None:
            self._fail(f'expected <value> but got `{value_part.strip()}` in `{trimmed_source}`')
            return

        self._name = property_match.group('name')
        self._val = value_match.group('val')
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'name': self._name, 'val': self._val}


class PropertyAnyValueParser(Parser):
    """
    A grammar for a property whose value is the whole remaining text.

    Syntax:
    ````
    «name» : «anything»
    ````
    """
    _name: str
    _val: str

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.PROPERTY_ANY_VALUE, verbose_mode_enabled)

    @property
    def name(self) -> str:
        return self._name

    @property
    def val(self) -> str:
        return self._val

    def _clear_results(self):
        self._name = ''
        self._val = ''

    def _parse(self, source: str, trimmed_source: str):
        property_match = compute_property_prefix_match(source)
        if property_match is None:
            self._decline(f'no `<name> :` in `{trimmed_source}`')
            return

        self._name = property_match.group('name')
        self._val = property_match.group('value_part').strip()
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'name': self._name, 'val': self._val}


class PropertyListParser(Parser):
    """
    A grammar for a property with a comma-separated list of values.

    Syntax:
    ````
    «name» : «value», «value», [...]
    ````
    Duplicate values are permitted.
    """
    _name: str
    _vals: list[str]

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.PROPERTY_LIST, verbose_mode_enabled)

    @property
    def name(self) -> str:
        return self._name

    @property
    def vals(self) -> list[str]:
        return self._vals

    def _clear_results(self):
        self._name = ''
        self._vals = []

    @staticmethod
    def compute_value_list_match(value_part: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'[\s]* {build_word_list_regex("vals")} [\s]*',
            string=value_part,
            flags=re.ASCII | re.VERBOSE,
        )

    def _parse(self, source: str, trimmed_source: str):
        property_match = compute_property_prefix_match(source)
        if property_match is None:
            self._decline(f'no `<name> :` in `{trimmed_source}`')
            return

        value_part = property_match.group('value_part')
        value_list_match = PropertyListParser.compute_value_list_match(value_part)
        if value_list_match is None:
            self._fail(f'expected <value>[,<value>*] but got `{value_part.strip()}` in `{trimmed_source}`')
            return

        self._name = property_match.group('name')
        self._vals = split_and_trim(value_list_match.group('vals'))
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'name': self._name, 'vals': list(self._vals)}


class BlockTagParser(Parser):
    """
    A grammar for an opening or closing block tag.

    Syntax:
    ````
    <«tag»>
    </«tag»>
    ````
    where «tag» is one of the names in `BLOCK_TAG_NAMES`.
    Text without the outer angle brackets is not claimed,
    so this grammar may be tried against any line.
    """
    _tag: Optional[BlockTag]
    _enter: bool

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.BLOCKTAG, verbose_mode_enabled)

    @property
    def tag(self) -> Optional[BlockTag]:
        return self._tag

    @property
    def enter(self) -> bool:
        return self._enter

    def _clear_results(self):
        self._tag = None
        self._enter = False

    @staticmethod
    def compute_outer_match(trimmed_source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'[<] (?P<inner> [\s\S]* ) [>]',
            string=trimmed_source,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def compute_inner_match(inner: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'(?P<slash> [/] )? (?P<tag_name> {WORD_TOKEN_REGEX} )',
            string=inner,
            flags=re.ASCII | re.VERBOSE,
        )

    def _parse(self, source: str, trimmed_source: str):
        outer_match = BlockTagParser.compute_outer_match(trimmed_source)
        if outer_match is None:
            self._decline(f'no `<...>` in `{trimmed_source}`')
            return

        inner_match = BlockTagParser.compute_inner_match(outer_match.group('inner'))
        if inner_match is None:
            self._fail(f'Malformed blocktag `{trimmed_source}`')
            return

        tag_name = inner_match.group('tag_name')
        tag = BlockTag.from_spelling(tag_name)
        if tag is None:
            self._fail(f'Unknown blocktag `{tag_name}` in `{trimmed_source}`')
            return

        self._tag = tag
        self._enter = inner_match.group('slash') is None
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'tag': self._tag.value, 'enter': self._enter}


class LimitationParser(Parser):
    """
    A grammar for a limitation directive.

    Syntax:
    ````
    add «name» : «value»
    set «name» : «value»
    rm «name» : «value»
    ````
    where `=` may be used instead of `:`.

    A line is only claimed if it starts with one of the keywords
    and contains a `:` or `=` somewhere after it.
    Once claimed, anything other than the exact syntax is an error.
    """
    _keyword: str
    _name: str
    _val: str

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.LIMITATION, verbose_mode_enabled)

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def name(self) -> str:
        return self._name

    @property
    def val(self) -> str:
        return self._val

    def _clear_results(self):
        self._keyword = ''
        self._name = ''
        self._val = ''

    @staticmethod
    def compute_claim_match(source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'[\s]* {build_keyword_regex(LIMITATION_KEYWORDS, "keyword")} [\s]+ [^:=]* [:=] [\s\S]*',
            string=source,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def compute_limitation_match(source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'''
                [\s]*
                {build_keyword_regex(LIMITATION_KEYWORDS, "keyword")} [\s]+
                (?P<name> {WORD_TOKEN_REGEX} ) [\s]*
                [:=] [\s]*
                (?P<val> {WORD_TOKEN_REGEX} ) [\s]*
            ''',
            string=source,
            flags=re.ASCII | re.VERBOSE,
        )

    def _parse(self, source: str, trimmed_source: str):
        if LimitationParser.compute_claim_match(source) is None:
            self._decline(f'no `add|set|rm <name> :` in `{trimmed_source}`')
            return

        limitation_match = LimitationParser.compute_limitation_match(source)
        if limitation_match is None:
            self._fail(f'Bad syntax in limitation `{trimmed_source}`, should be add|set|rm name : value')
            return

        self._keyword = limitation_match.group('keyword')
        self._name = limitation_match.group('name')
        self._val = limitation_match.group('val')
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'keyword': self._keyword, 'name': self._name, 'val': self._val}


class AddressRangeParser(Parser):
    """
    A grammar for an address range with optional tag and bus-interface qualifiers.

    Syntax:
    ````
    [[add ]range] «start»..«end» [with|:|using «tag», [...] [for|notfor «bif», [...]]]
    ````
    With the leading `range` keyword, the line is claimed and any later failure is an error.
    Without it, the line is only claimed once `«start»..«end»` has been recognised.

    The `*_string()` methods format the results for interpolation into generated calls.
    """
    _min_address: Optional[int]
    _max_address: Optional[int]
    _tags: list[str]
    _bus_interfaces: list[str]
    _inverse: bool

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.ADDRESS_RANGE, verbose_mode_enabled)

    @property
    def min_address(self) -> Optional[int]:
        return self._min_address

    @property
    def max_address(self) -> Optional[int]:
        return self._max_address

    @property
    def tags(self) -> list[str]:
        return self._tags

    @property
    def bus_interfaces(self) -> list[str]:
        return self._bus_interfaces

    @property
    def inverse(self) -> bool:
        return self._inverse

    def _clear_results(self):
        self._min_address = None
        self._max_address = None
        self._tags = []
        self._bus_interfaces = []
        self._inverse = False

    @staticmethod
    def compute_keyword_match(source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [\s]*
                (?P<keyword> (?: add [\s_\-]* )? range )
                (?: [\s]* [:=] [\s]* | [\s]+ | \Z )
                (?P<range_expression> [\s\S]* )
            ''',
            string=source,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def compute_range_match(range_expression: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'''
                [\s]*
                (?P<start> {WORD_TOKEN_REGEX} ) [\s]* [.]{{2}} [\s]* (?P<end> {WORD_TOKEN_REGEX} )
                (?P<qualifiers> [\W] [\s\S]* )?
            ''',
            string=range_expression,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def compute_tag_qualifier_match(qualifiers: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'''
                (?: (?: with | using ) [\s]+ | [:] [\s]* )
                {build_word_list_regex("tags")}
                (?: [\s]+ (?P<bus_interface_qualifier> [\S] [\s\S]* ) )?
            ''',
            string=qualifiers,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def compute_bus_interface_qualifier_match(bus_interface_qualifier: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'(?P<mode> for | notfor ) [\s]+ {build_word_list_regex("bus_interfaces")}',
            string=bus_interface_qualifier,
            flags=re.ASCII | re.VERBOSE,
        )

    def _parse(self, source: str, trimmed_source: str):
        keyword_match = AddressRangeParser.compute_keyword_match(source)
        if keyword_match is not None:
            range_expression = keyword_match.group('range_expression')
        else:
            range_expression = source

        range_match = AddressRangeParser.compute_range_match(range_expression)
        if range_match is None:
            if keyword_match is None:
                self._decline(f'no `<start>..<end>` in `{trimmed_source}`')
            else:
                self._fail(f'expected <start>..<end> but got `{range_expression.strip()}` in `{trimmed_source}`')
            return

        bounds = []
        for token in (range_match.group('start'), range_match.group('end')):
            if len(token) > ADDRESS_TOKEN_MAX_LENGTH:
                self._fail(f'Value of {len(token)} characters is too large in address range')
                return

            address = compute_unsigned_integer(token)
            if address is None:
                self._fail(f'Non-numeric value `{token}` in address range `{trimmed_source}`')
                return
            bounds.append(address)

        min_address, max_address = bounds
        if min_address > max_address:
            self._fail(f'Reversed address range `{trimmed_source}`')
            return

        tags: list[str] = []
        bus_interfaces: list[str] = []
        inverse = False

        qualifiers = (range_match.group('qualifiers') or '').strip()
        if qualifiers:
            tag_qualifier_match = AddressRangeParser.compute_tag_qualifier_match(qualifiers)
            if tag_qualifier_match is None:
                self._fail(f'Malformed tag qualifier `{qualifiers}` in `{trimmed_source}`, '
                           f'should be with|:|using tag[, tag]*')
                return

            tags = split_and_trim(tag_qualifier_match.group('tags'))

            bus_interface_qualifier = tag_qualifier_match.group('bus_interface_qualifier')
            if bus_interface_qualifier is not None:
                bus_interface_qualifier = bus_interface_qualifier.strip()
                bus_interface_qualifier_match = \
                    AddressRangeParser.compute_bus_interface_qualifier_match(bus_interface_qualifier)
                if bus_interface_qualifier_match is None:
                    self._fail(f'Malformed bus interface qualifier `{bus_interface_qualifier}` '
                               f'in `{trimmed_source}`, should be for|notfor bif[, bif]*')
                    return

                bus_interfaces = split_and_trim(bus_interface_qualifier_match.group('bus_interfaces'))
                if has_duplicates(bus_interfaces):
                    self._fail(f'Bus interface list `{bus_interface_qualifier}` contains identical items')
                    return

                inverse = bus_interface_qualifier_match.group('mode') == 'notfor'

        self._min_address = min_address
        self._max_address = max_address
        self._tags = tags
        self._bus_interfaces = bus_interfaces
        self._inverse = inverse
        self._succeed()

    def range_string(self) -> str:
        if not self.is_ok:
            return ''

        return (
            f'{HEX_LITERAL_PREFIX}{format_hex_groups(self._min_address)}, '
            f'{HEX_LITERAL_PREFIX}{format_hex_groups(self._max_address)}'
        )

    def tags_string(self) -> str:
        if not self.is_ok:
            return ''

        return '{' + ';'.join(self._tags) + '}'

    def bus_interfaces_string(self) -> str:
        if not self.is_ok:
            return ''

        return '{' + ';'.join(f'"{bus_interface}"' for bus_interface in self._bus_interfaces) + '}'

    def is_inverse(self) -> bool:
        if not self.is_ok:
            return False

        return self._inverse

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {
            'min': self._min_address,
            'max': self._max_address,
            'tags': list(self._tags),
            'bus_interfaces': list(self._bus_interfaces),
            'inverse': self._inverse,
        }


class PatternLiteralParser(Parser):
    """
    A grammar for a double-quoted match pattern.

    Syntax:
    ````
    "«pattern»"
    ````
    «pattern» is checked for regex syntax by searching with it in the empty string.
    """
    _pattern: str

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.PATTERN_LITERAL, verbose_mode_enabled)

    @property
    def pattern(self) -> str:
        return self._pattern

    def _clear_results(self):
        self._pattern = ''

    @staticmethod
    def compute_literal_match(trimmed_source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'["] (?P<pattern> [\s\S]* ) ["]',
            string=trimmed_source,
            flags=re.VERBOSE,
        )

    @staticmethod
    def compute_pattern_error(pattern: str) -> Optional[str]:
        try:
            re.search(pattern, '')
        except (re.error, OverflowError, RecursionError) as pattern_error:
            return str(pattern_error) or type(pattern_error).__name__

        return None

    def _parse(self, source: str, trimmed_source: str):
        literal_match = PatternLiteralParser.compute_literal_match(trimmed_source)
        if literal_match is None:
            self._decline(f'Not a string literal: `{trimmed_source}`')
            return

        pattern = literal_match.group('pattern')
        pattern_error = PatternLiteralParser.compute_pattern_error(pattern)
        if pattern_error is not None:
            self._fail(f'Invalid string match pattern `{pattern}`: {pattern_error}')
            return

        self._pattern = pattern
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'pattern': self._pattern}


class ArgumentSplit(NamedTuple):
    arguments: list[str]
    error_text: Optional[str]


class MethodCallParser(Parser):
    """
    A grammar for a method call with a parenthesised argument list.

    Syntax:
    ````
    «method_name»(«argument», [...])
    ````
    Arguments are split on top-level commas only;
    commas inside nested parentheses or double-quoted strings are part of the argument.
    Inside a string, a backslash escapes the character after it.
    Arguments are trimmed but otherwise left uninterpreted.
    An empty argument list gives a single empty argument.
    """
    PAREN = 'paren'
    QUOTE = 'quote'
    ESCAPE = 'escape'

    _method_name: str
    _arguments: list[str]

    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.METHOD_CALL, verbose_mode_enabled)

    @property
    def method_name(self) -> str:
        return self._method_name

    @property
    def arguments(self) -> list[str]:
        return self._arguments

    def _clear_results(self):
        self._method_name = ''
        self._arguments = []

    @staticmethod
    def compute_call_match(trimmed_source: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'(?P<method_name> {IDENTIFIER_REGEX} ) [\s]* [(] (?P<argument_list> [\s\S]* ) [)]',
            string=trimmed_source,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def split_arguments(argument_list: str) -> 'ArgumentSplit':
        """
        Split an argument list on its top-level commas.

        The scan keeps a stack of open constructs (PAREN, QUOTE, ESCAPE):
        - at top level, `,` ends an argument, `(` and `"` open a construct, and `)` is an error;
        - inside a string, `"` closes it and `\\` escapes the next character;
        - inside parentheses, `)` closes them, and `(` and `"` open a nested construct.
        """
        stack: list[str] = []
        arguments: list[str] = []
        boundary = 0

        for index, character in enumerate(argument_list):
            if len(stack) == 0:
                if character == ',':
                    arguments.append(argument_list[boundary:index].strip())
                    boundary = index + 1
                elif character == '(':
                    stack.append(MethodCallParser.PAREN)
                elif character == '"':
                    stack.append(MethodCallParser.QUOTE)
                elif character == ')':
                    return ArgumentSplit([], f'unexpected close-parenthesis in `{argument_list[:index + 1]}`')
            elif stack[-1] == MethodCallParser.ESCAPE:
                stack.pop()
            elif stack[-1] == MethodCallParser.QUOTE:
                if character == '"':
                    stack.pop()
                elif character == '\\':
                    stack.append(MethodCallParser.ESCAPE)
            else:
                if character == ')':
                    stack.pop()
                elif character == '(':
                    stack.append(MethodCallParser.PAREN)
                elif character == '"':
                    stack.append(MethodCallParser.QUOTE)

        if len(stack) > 0:
            return ArgumentSplit([], f'Mismatched parentheses or quotes in `{argument_list}`')

        arguments.append(argument_list[boundary:].strip())

        return ArgumentSplit(arguments, None)

    def _parse(self, source: str, trimmed_source: str):
        call_match = MethodCallParser.compute_call_match(trimmed_source)
        if call_match is None:
            self._decline(f'no `<name>(...)` in `{trimmed_source}`')
            return

        method_name = call_match.group('method_name')
        arguments, error_text = MethodCallParser.split_arguments(call_match.group('argument_list'))
        if error_text is not None:
            self._fail(f'{error_text} (call to `{method_name}`)')
            return

        self._method_name = method_name
        self._arguments = arguments
        self._succeed()

    def describe_results(self) -> dict[str, object]:
        if not self.is_ok:
            return {}

        return {'method_name': self._method_name, 'arguments': list(self._arguments)}
