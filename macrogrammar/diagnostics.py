"""
# Macro-Grammar: diagnostics.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Boxed error messages for parse errors that a caller treats as fatal.
"""

import sys
from typing import Optional

from macrogrammar.constants import ERROR_BOX_MIN_WIDTH, ERROR_BOX_SYMBOL


def build_error_box(message: str, snippet: Optional[str] = None) -> str:
    """
    Build a box of `ERROR_BOX_SYMBOL` around a message and, if given, the offending snippet.

    ````
    ********************
    * ERROR: «message» *
    *                  *
    *   «snippet»      *
    ********************
    ````
    Multi-line messages and snippets keep their line breaks.
    """
    lines = [f'ERROR: {line}' if index == 0 else f'       {line}' for index, line in enumerate(message.splitlines())]
    if len(lines) == 0:
        lines = ['ERROR:']

    if snippet is not None:
        lines.append('')
        lines.extend(f'  {line}' for line in snippet.splitlines() or [''])

    inner_width = max(ERROR_BOX_MIN_WIDTH, *(len(line) for line in lines))
    border = ERROR_BOX_SYMBOL * (inner_width + 4)

    boxed_lines = [border]
    for line in lines:
        boxed_lines.append(f'{ERROR_BOX_SYMBOL} {line.ljust(inner_width)} {ERROR_BOX_SYMBOL}')
    boxed_lines.append(border)

    return '\n'.join(boxed_lines) + '\n'


def print_error_box(message: str, snippet: Optional[str] = None):
    print(build_error_box(message, snippet), file=sys.stderr, end='')
