"""
# Macro-Grammar: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core classification logic.

A macro body is classified line by line:
- whitespace-only lines and comments (beginning with `#`) are skipped;
- every other line is dispatched through the grammars in the given kind order;
- block tags open and close blocks on a `BlockTagStack`.
Blocks left open at the end of the text are reported after the last line.
"""

import re
from typing import Hashable, Iterable, NamedTuple, Optional

from macrogrammar.authorities import STANDARD_KIND_ORDER, ParserAuthority
from macrogrammar.blocks import BlockTagStack
from macrogrammar.employables import BlockTagParser
from macrogrammar.exceptions import BlockTagNestingException
from macrogrammar.kinds import Kind, Outcome


class LineClassification(NamedTuple):
    line_number: int
    line: str
    kind: Hashable
    outcome: Outcome
    fields: dict[str, object]
    message: str
    open_tags: tuple[str, ...]


def is_whitespace_only(line: str) -> bool:
    return bool(re.fullmatch(pattern=r'[\s]*', string=line, flags=re.ASCII))


def is_comment(line: str) -> bool:
    return line.lstrip().startswith('#')


def classify_lines(text: str, kinds: Optional[Iterable[Hashable]] = None, nesting_allowed: bool = True,
                   verbose_mode_enabled: bool = False) -> list['LineClassification']:
    if kinds is None:
        kinds = STANDARD_KIND_ORDER
    kinds = list(kinds)

    parser_authority = ParserAuthority(verbose_mode_enabled)
    block_tag_stack = BlockTagStack(nesting_allowed)
    classifications: list['LineClassification'] = []

    lines = text.splitlines()
    for line_number, line in enumerate(lines, start=1):
        if is_whitespace_only(line) or is_comment(line):
            continue

        parser = parser_authority.try_parse(line, kinds)
        outcome = parser.outcome
        message = parser.error_text or parser.mismatch_text
        fields = parser.describe_results()

        if isinstance(parser, BlockTagParser) and parser.is_ok:
            try:
                block_tag_stack.apply(parser)
            except BlockTagNestingException as nesting_exception:
                outcome = Outcome.ERROR
                message = str(nesting_exception).removeprefix('error: ')
                fields = {}

        classifications.append(
            LineClassification(
                line_number=line_number,
                line=line,
                kind=parser_authority.kind,
                outcome=outcome,
                fields=fields,
                message=message,
                open_tags=tuple(tag.value for tag in block_tag_stack.tags),
            )
        )

    if not block_tag_stack.is_empty:
        classifications.append(
            LineClassification(
                line_number=len(lines) + 1,
                line='',
                kind=Kind.BLOCKTAG,
                outcome=Outcome.ERROR,
                fields={},
                message=f'unclosed block tags at end of text: {block_tag_stack.describe()}',
                open_tags=tuple(tag.value for tag in block_tag_stack.tags),
            )
        )

    return classifications


def find_first_error(classifications: list['LineClassification']) -> Optional['LineClassification']:
    for classification in classifications:
        if classification.outcome is Outcome.ERROR:
            return classification

    return None
