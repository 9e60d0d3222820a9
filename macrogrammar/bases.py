"""
# Macro-Grammar: bases.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Base class for line grammars.
"""

import abc

from macrogrammar.constants import VERBOSE_MODE_DIVIDER_SYMBOL_COUNT
from macrogrammar.kinds import Kind, Outcome


class Parser(abc.ABC):
    """
    Base class for a line grammar.

    A call to `parse(source)` always runs in two steps:
    1. `_reset(source)`, which clears the outcome, the diagnostics and all result fields,
       and returns the trimmed source;
    2. `_parse(source, trimmed_source)`, the grammar-specific body.

    The outcome is exactly one of NO_MATCH, ERROR, OK after every call.
    `error_text` is non-empty if and only if the outcome is ERROR.
    The reason for a NO_MATCH, if any, is kept in `mismatch_text`.

    Result fields are only meaningful when the outcome is OK.
    An instance may be reused for successive calls, but not for concurrent ones.
    """
    _kind: Kind
    _outcome: Outcome
    _error_text: str
    _mismatch_text: str
    _verbose_mode_enabled: bool

    def __init__(self, kind: Kind, verbose_mode_enabled: bool = False):
        self._kind = kind
        self._outcome = Outcome.NO_MATCH
        self._error_text = ''
        self._mismatch_text = ''
        self._verbose_mode_enabled = verbose_mode_enabled
        self._clear_results()

    @property
    def kind(self) -> Kind:
        return self._kind

    @kind.setter
    def kind(self, value: Kind):
        self._kind = value

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def error_text(self) -> str:
        return self._error_text

    @property
    def mismatch_text(self) -> str:
        return self._mismatch_text

    @property
    def is_ok(self) -> bool:
        return self._outcome is Outcome.OK

    @property
    def is_error(self) -> bool:
        return self._outcome is Outcome.ERROR

    @property
    def is_no_match(self) -> bool:
        return self._outcome is Outcome.NO_MATCH

    def parse(self, source: str) -> Outcome:
        trimmed_source = self._reset(source)
        self._parse(source, trimmed_source)

        if self._verbose_mode_enabled:
            self._print_trace(source)

        return self._outcome

    def _reset(self, source: str) -> str:
        self._outcome = Outcome.NO_MATCH
        self._error_text = ''
        self._mismatch_text = ''
        self._clear_results()

        return source.strip()

    def _succeed(self):
        self._outcome = Outcome.OK

    def _fail(self, error_text: str):
        """
        Claim the source for this grammar but reject it.
        """
        self._clear_results()
        self._outcome = Outcome.ERROR
        self._error_text = error_text

    def _decline(self, mismatch_text: str = ''):
        self._clear_results()
        self._outcome = Outcome.NO_MATCH
        self._mismatch_text = mismatch_text

    def _print_trace(self, source: str):
        kind_name = getattr(self._kind, 'name', str(self._kind))
        if self._outcome is Outcome.ERROR:
            message = f': {self._error_text}'
        elif self._mismatch_text:
            message = f': {self._mismatch_text}'
        else:
            message = ''

        print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BEFORE {kind_name}')
        print(source)
        print('=' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT)
        print(f'{self._outcome.value}{message}')
        print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' AFTER {kind_name}')
        print('\n')

    @abc.abstractmethod
    def _clear_results(self):
        """
        Set all result fields to their empty values.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _parse(self, source: str, trimmed_source: str):
        """
        Run the grammar-specific logic, setting the outcome and result fields.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def describe_results(self) -> dict[str, object]:
        """
        Return the result fields by name (empty unless the outcome is OK).
        """
        raise NotImplementedError


class UnknownParser(Parser):
    """
    The record returned when no grammar matched.
    """
    def __init__(self, verbose_mode_enabled: bool = False):
        super().__init__(Kind.UNKNOWN, verbose_mode_enabled)

    def _clear_results(self):
        pass

    def _parse(self, source: str, trimmed_source: str):
        self._decline(f'no grammar matched `{trimmed_source}`')

    def describe_results(self) -> dict[str, object]:
        return {}
