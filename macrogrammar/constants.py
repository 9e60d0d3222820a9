"""
# Macro-Grammar: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

BLOCK_TAG_NAMES = [
    'address_ranges',
    'safe_address_ranges',
    'unsafe_address_ranges',
    'access_limitations',
    'limitations',
    'default_slave',
    'routing',
]
LIMITATION_KEYWORDS = [
    'add',
    'set',
    'rm',
]

HEX_GROUP_BIT_COUNT = 16
HEX_GROUP_DIGIT_COUNT = 4
HEX_LITERAL_PREFIX = "'h"
ADDRESS_TOKEN_MAX_LENGTH = 256

ERROR_BOX_SYMBOL = '*'
ERROR_BOX_MIN_WIDTH = 40

MACRO_LINE_SYNTAX_HELP = '''\
A macro body line is classified as one of the following:
(1) a word (`«name»`);
(2) a property (`«name» : «value»`, where «name» may contain spaces or hyphens);
(3) a property with any value (`«name» : «anything»`);
(4) a property list (`«name» : «value», «value», [...]`);
(5) a block tag (`<«tag»>` or `</«tag»>`);
(6) a limitation (`add|set|rm «name» : «value»`, `=` also allowed);
(7) an address range (`[add ]range «start»..«end» [with «tag», [...] [for|notfor «bif», [...]]]`);
(8) a pattern literal (`"«pattern»"`);
(9) a method call (`«name»(«argument», [...])`).
Whitespace-only lines and comments (beginning with `#`) are skipped.
'''
