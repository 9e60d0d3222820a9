"""
# Macro-Grammar: idioms.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common idioms.

All regex fragments here are written for `re.ASCII | re.VERBOSE`.
"""

import re
from typing import Optional


IDENTIFIER_REGEX = r'[A-Za-z] [\w]*'
WORD_TOKEN_REGEX = r'[\w]+'
LEGACY_NAME_REGEX = r'[\w] (?: [\w \-]* [\w] )?'


def build_keyword_regex(keywords: list[str], capture_group_name: str) -> str:
    keyword_regex = ' | '.join(re.escape(keyword) for keyword in keywords)

    return f'(?P<{capture_group_name}> {keyword_regex} ) (?! [\\w] )'


def build_word_list_regex(capture_group_name: str) -> str:
    """
    Build a regex for a comma-separated list of word tokens.

    Whitespace is allowed either side of each comma.
    """
    return fr'(?P<{capture_group_name}> {WORD_TOKEN_REGEX} (?: [\s]* [,] [\s]* {WORD_TOKEN_REGEX} )* )'


def build_property_prefix_regex(name_regex: str) -> str:
    """
    Build a regex for `«name» :` followed by a captured remainder.
    """
    return fr'[\s]* (?P<name> {name_regex} ) [\s]* [:] (?P<value_part> [\s\S]* )'


def compute_property_prefix_match(source: str, name_regex: str = WORD_TOKEN_REGEX) -> Optional[re.Match]:
    return re.fullmatch(
        pattern=build_property_prefix_regex(name_regex),
        string=source,
        flags=re.ASCII | re.VERBOSE,
    )
