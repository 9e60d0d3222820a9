"""
# Macro-Grammar: utilities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common utility functions.
"""

import re
from typing import Optional

from macrogrammar.constants import HEX_GROUP_BIT_COUNT, HEX_GROUP_DIGIT_COUNT


def split_and_trim(string: str, separator: str = ',') -> list[str]:
    """
    Split a string on a separator and trim each piece.

    Empty pieces are kept, so that `'a,,b'` gives `['a', '', 'b']`.
    """
    return [piece.strip() for piece in string.split(separator)]


def compute_unsigned_integer(token: str) -> Optional[int]:
    """
    Convert a numeric token to an unsigned integer.

    Accepted forms are decimal (leading zeros allowed),
    and hexadecimal, octal or binary with a `0x`, `0o` or `0b` prefix.
    Underscores between digits are allowed.
    Returns None if the token is not numeric.
    Decimal tokens beyond the interpreter's integer string conversion limit
    (4300 digits by default) also give None, so callers bound the length first.
    """
    if not re.fullmatch(pattern=r'[0-9][0-9A-Za-z_]*', string=token, flags=re.ASCII):
        return None

    try:
        return int(token, 0)
    except ValueError:
        pass

    try:
        return int(token, 10)
    except ValueError:
        return None


def format_hex_groups(value: int, group_count: int = 2) -> str:
    """
    Render a value as underscore-separated groups of hex digits, most significant first.

    The leading group absorbs any bits beyond `group_count` groups,
    so that `format_hex_groups(0x1000)` gives `0000_1000`
    and `format_hex_groups(0x1_0000_0000)` gives `10000_0000`.
    """
    groups = []
    for _ in range(group_count - 1):
        groups.append(f'{value & ((1 << HEX_GROUP_BIT_COUNT) - 1):0{HEX_GROUP_DIGIT_COUNT}X}')
        value >>= HEX_GROUP_BIT_COUNT
    groups.append(f'{value:0{HEX_GROUP_DIGIT_COUNT}X}')

    return '_'.join(reversed(groups))


def has_duplicates(items: list[str]) -> bool:
    return len(set(items)) != len(items)

