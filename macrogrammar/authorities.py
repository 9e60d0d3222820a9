"""
# Macro-Grammar: authorities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The higher power that decides which grammar a line belongs to.
"""

from typing import Hashable, Iterable, Optional, Type

from macrogrammar.bases import Parser, UnknownParser
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
from macrogrammar.exceptions import UnregisteredKindException
from macrogrammar.kinds import Kind, Outcome


STANDARD_PARSER_CLASS_FROM_KIND: dict[Kind, Type['Parser']] = {
    Kind.WORD: WordParser,
    Kind.PROPERTY: PropertyParser,
    Kind.PROPERTY_ANY_VALUE: PropertyAnyValueParser,
    Kind.PROPERTY_LIST: PropertyListParser,
    Kind.BLOCKTAG: BlockTagParser,
    Kind.LIMITATION: LimitationParser,
    Kind.ADDRESS_RANGE: AddressRangeParser,
    Kind.PATTERN_LITERAL: PatternLiteralParser,
    Kind.METHOD_CALL: MethodCallParser,
}

# Keyword- and bracket-led grammars first. PROPERTY_ANY_VALUE takes every single-token name,
# so PROPERTY only ever sees legacy multi-word names and never rejects a list or call value.
STANDARD_KIND_ORDER: list[Kind] = [
    Kind.BLOCKTAG,
    Kind.PATTERN_LITERAL,
    Kind.ADDRESS_RANGE,
    Kind.LIMITATION,
    Kind.METHOD_CALL,
    Kind.WORD,
    Kind.PROPERTY_ANY_VALUE,
    Kind.PROPERTY,
]


class ParserAuthority:
    """
    Object governing the registration and dispatch of line grammars.

    ## `register`

    Associates a kind with a parser class. One parser instance is kept per kind
    and reused across calls.

    ## `try_parse`

    Tries the grammars for the given kinds in order against the same source,
    stopping at the first OK or ERROR. If every grammar gives NO_MATCH,
    the kind becomes UNKNOWN.
    """
    _parser_from_kind: dict[Hashable, 'Parser']
    _unknown_parser: 'UnknownParser'
    _kind: Hashable
    _outcome: Outcome
    _verbose_mode_enabled: bool

    def __init__(self, verbose_mode_enabled: bool = False, use_standard_parsers: bool = True):
        self._parser_from_kind = {}
        self._unknown_parser = UnknownParser(verbose_mode_enabled)
        self._kind = Kind.UNKNOWN
        self._outcome = Outcome.NO_MATCH
        self._verbose_mode_enabled = verbose_mode_enabled

        if use_standard_parsers:
            for kind, parser_class in STANDARD_PARSER_CLASS_FROM_KIND.items():
                self.register(kind, parser_class)

    @property
    def kind(self) -> Hashable:
        return self._kind

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def registered_kinds(self) -> list[Hashable]:
        return list(self._parser_from_kind.keys())

    def register(self, kind: Hashable, parser_class: Type['Parser']):
        parser = parser_class(verbose_mode_enabled=self._verbose_mode_enabled)
        parser.kind = kind
        self._parser_from_kind[kind] = parser

    def get_parser(self, kind: Hashable) -> 'Parser':
        try:
            return self._parser_from_kind[kind]
        except KeyError:
            raise UnregisteredKindException(kind)

    def parse(self, source: str, kind: Hashable) -> 'Parser':
        parser = self.get_parser(kind)
        parser.kind = kind
        self._kind = kind
        self._outcome = parser.parse(source)

        return parser

    def try_parse(self, source: str, kinds: Optional[Iterable[Hashable]] = None) -> 'Parser':
        if kinds is None:
            kinds = STANDARD_KIND_ORDER

        for kind in kinds:
            parser = self.parse(source, kind)
            if parser.outcome is not Outcome.NO_MATCH:
                return parser

        self._kind = Kind.UNKNOWN
        self._outcome = self._unknown_parser.parse(source)

        return self._unknown_parser
