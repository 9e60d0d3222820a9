"""
# Macro-Grammar: blocks.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Tracking of open block tags.
"""

from typing import Optional

from macrogrammar.employables import BlockTagParser
from macrogrammar.exceptions import BlockTagNestingException
from macrogrammar.kinds import BlockTag


class BlockTagStack:
    """
    Object storing the currently open block tags, outermost first.

    If `nesting_allowed` is False, a tag cannot be opened while another is open.
    A closing tag must always match the innermost open tag.
    """
    _tags: list['BlockTag']
    _nesting_allowed: bool

    def __init__(self, nesting_allowed: bool = True):
        self._tags = []
        self._nesting_allowed = nesting_allowed

    @property
    def tags(self) -> list['BlockTag']:
        return list(self._tags)

    @property
    def innermost(self) -> Optional['BlockTag']:
        if len(self._tags) == 0:
            return None

        return self._tags[-1]

    @property
    def is_empty(self) -> bool:
        return len(self._tags) == 0

    def is_open(self, tag: 'BlockTag') -> bool:
        return tag in self._tags

    def push(self, tag: 'BlockTag'):
        if not self._nesting_allowed and len(self._tags) > 0:
            raise BlockTagNestingException(
                f'error: cannot open <{tag.value}> inside <{self._tags[-1].value}> (nesting not allowed)'
            )

        self._tags.append(tag)

    def pop(self, tag: 'BlockTag') -> 'BlockTag':
        if len(self._tags) == 0:
            raise BlockTagNestingException(f'error: </{tag.value}> without an open <{tag.value}>')

        innermost = self._tags[-1]
        if innermost is not tag:
            raise BlockTagNestingException(f'error: </{tag.value}> does not close the innermost <{innermost.value}>')

        return self._tags.pop()

    def apply(self, block_tag_parser: 'BlockTagParser'):
        """
        Open or close the tag of a successfully parsed block tag.
        """
        if not block_tag_parser.is_ok:
            return

        if block_tag_parser.enter:
            self.push(block_tag_parser.tag)
        else:
            self.pop(block_tag_parser.tag)

    def describe(self) -> str:
        return ' > '.join(f'<{tag.value}>' for tag in self._tags)
