"""Exception types raised by the reader adapters.

The converter facade catches every :class:`ConversionError` and turns
it into a failed :class:`filemd.result.ConversionResult`, so callers of
:mod:`filemd.converter` never see these directly.
"""

from __future__ import annotations

from typing import List, Sequence


class ConversionError(Exception):
    """Base class for recoverable conversion failures."""


class EmptyInputError(ConversionError):
    """No rows or no non-blank lines were left to render."""


class SheetNotFoundError(ConversionError):
    def __init__(self, name: str, available: Sequence[str]) -> None:
        super().__init__(f'Sheet "{name}" not found')
        self.name = name
        self.available: List[str] = list(available)


class UnsupportedFormatError(ConversionError):
    """The file extension or option combination is not handled."""


class PasswordError(ConversionError):
    """An encrypted document could not be opened with the given password."""
