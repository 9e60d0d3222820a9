"""
# Macro-Grammar: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import sys

from macrogrammar._version import __version__
from macrogrammar.authorities import STANDARD_KIND_ORDER
from macrogrammar.constants import COMMAND_LINE_ERROR_EXIT_CODE, GENERIC_ERROR_EXIT_CODE, MACRO_LINE_SYNTAX_HELP
from macrogrammar.core import LineClassification, classify_lines, find_first_error
from macrogrammar.diagnostics import print_error_box
from macrogrammar.exceptions import UnrecognisedKindNameException
from macrogrammar.kinds import Kind, Outcome

DESCRIPTION = '''
    Classify each line of a macro body against the line grammars.
'''
FILE_NAME_HELP = '''
    name of file containing macro body lines (`-` for standard input)
'''
KINDS_HELP = f'''
    comma-separated grammars to try, in order
    (default: {','.join(kind.value for kind in STANDARD_KIND_ORDER)})
'''
FORBID_NESTING_HELP = '''
    report an error when a block tag is opened inside another
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints every parse attempt)
'''


def parse_kind_names(kind_names: str) -> list[Kind]:
    """
    Convert a comma-separated list of kind names to kinds.

    Names are matched case-insensitively, with hyphens read as underscores.
    """
    kinds = []
    for kind_name in kind_names.split(','):
        if kind_name.strip() == '':
            continue

        kind = Kind.from_name(kind_name)
        if kind is None or kind is Kind.UNKNOWN:
            raise UnrecognisedKindNameException(f'unrecognised kind `{kind_name.strip()}`')

        kinds.append(kind)

    return kinds


def format_classification(classification: 'LineClassification') -> str:
    kind = classification.kind
    kind_name = getattr(kind, 'value', str(kind))

    if classification.outcome is Outcome.OK:
        details = ', '.join(f'{name}={value!r}' for name, value in classification.fields.items())
    else:
        details = classification.message

    return f'{classification.line_number}: {kind_name} {classification.outcome.value}: {details}'


def parse_command_line_arguments() -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(
        description=DESCRIPTION,
        epilog=MACRO_LINE_SYNTAX_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-k', '--kinds',
        dest='kind_names',
        default=None,
        help=KINDS_HELP,
        metavar='KIND[,KIND...]',
    )
    argument_parser.add_argument(
        '-n', '--forbid-nesting',
        dest='nesting_forbidden',
        action='store_true',
        help=FORBID_NESTING_HELP,
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        'file_names',
        default=[],
        help=FILE_NAME_HELP,
        metavar='file',
        nargs='*',
    )

    return argument_parser.parse_args()


def read_source(file_name: str) -> str:
    if file_name == '-':
        return sys.stdin.read()

    try:
        with open(file_name, 'r', encoding='utf-8') as source_file:
            return source_file.read()
    except FileNotFoundError:
        print(f'error: argument `{file_name}`: file not found', file=sys.stderr)
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)


def classify_file(file_name: str, kinds: list[Kind], nesting_allowed: bool, verbose_mode_enabled: bool) -> bool:
    """
    Print the classification of every line of a file; return whether it was free of errors.
    """
    source = read_source(file_name)
    classifications = classify_lines(source, kinds, nesting_allowed, verbose_mode_enabled)

    for classification in classifications:
        print(format_classification(classification))

    first_error = find_first_error(classifications)
    if first_error is not None:
        print(f'error: `{file_name}`, line {first_error.line_number}: {first_error.message}', file=sys.stderr)
        print_error_box(first_error.message, first_error.line or None)
        return False

    return True


def main():
    parsed_arguments = parse_command_line_arguments()
    file_names = parsed_arguments.file_names
    nesting_allowed = not parsed_arguments.nesting_forbidden
    verbose_mode_enabled = parsed_arguments.verbose_mode_enabled

    if parsed_arguments.kind_names is None:
        kinds = STANDARD_KIND_ORDER
    else:
        try:
            kinds = parse_kind_names(parsed_arguments.kind_names)
        except UnrecognisedKindNameException as unrecognised_kind_name_exception:
            print(f'error: argument -k/--kinds: {unrecognised_kind_name_exception}', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

        if len(kinds) == 0:
            print('error: argument -k/--kinds: no kinds given', file=sys.stderr)
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    if len(file_names) == 0:
        print('error: no file given', file=sys.stderr)
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    for file_name in file_names:
        if not classify_file(file_name, kinds, nesting_allowed, verbose_mode_enabled):
            sys.exit(GENERIC_ERROR_EXIT_CODE)


if __name__ == '__main__':
    main()
