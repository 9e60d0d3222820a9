"""
# Macro-Grammar: kinds.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Enumerations shared by all parsers.
"""

import enum
from typing import Optional

from macrogrammar.constants import BLOCK_TAG_NAMES


class Outcome(enum.Enum):
    """
    Result of a parse attempt.

    - NO_MATCH: the grammar does not apply to the text (not an error)
    - ERROR: the text was claimed by the grammar but does not conform
    - OK: fully parsed
    """
    NO_MATCH = 'NoMatch'
    ERROR = 'Error'
    OK = 'Ok'


class Kind(enum.Enum):
    UNKNOWN = 'unknown'
    WORD = 'word'
    PROPERTY = 'property'
    PROPERTY_ANY_VALUE = 'property_any_value'
    PROPERTY_LIST = 'property_list'
    BLOCKTAG = 'blocktag'
    LIMITATION = 'limitation'
    ADDRESS_RANGE = 'address_range'
    PATTERN_LITERAL = 'pattern_literal'
    METHOD_CALL = 'method_call'

    @staticmethod
    def from_name(name: str) -> Optional['Kind']:
        """
        Look up a kind by its value, ignoring case and treating hyphens as underscores.
        """
        normalised_name = name.strip().lower().replace('-', '_')
        for kind in Kind:
            if kind.value == normalised_name:
                return kind

        return None


class BlockTag(enum.Enum):
    """
    The closed vocabulary of block tags.

    Each value is the exact spelling used between the angle brackets.
    """
    ADDRESS_RANGES = 'address_ranges'
    SAFE_ADDRESS_RANGES = 'safe_address_ranges'
    UNSAFE_ADDRESS_RANGES = 'unsafe_address_ranges'
    ACCESS_LIMITATIONS = 'access_limitations'
    LIMITATIONS = 'limitations'
    DEFAULT_SLAVE = 'default_slave'
    ROUTING = 'routing'

    @staticmethod
    def from_spelling(spelling: str) -> Optional['BlockTag']:
        if spelling not in BLOCK_TAG_NAMES:
            return None

        return BlockTag(spelling)
