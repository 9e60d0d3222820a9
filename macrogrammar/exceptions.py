"""
# Macro-Grammar: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.

Parse outcomes are never raised; these signal misuse of the library by the caller.
"""


class UnregisteredKindException(Exception):
    _kind: object

    def __init__(self, kind: object):
        super().__init__(f'error: no parser registered for kind `{kind}`')
        self._kind = kind

    @property
    def kind(self) -> object:
        return self._kind


class BlockTagNestingException(Exception):
    pass


class UnrecognisedKindNameException(Exception):
    pass
