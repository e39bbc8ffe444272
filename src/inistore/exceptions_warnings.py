"""inistore-specific exceptions and warnings"""

from .type_converters.exceptions import WrongType

# ---------- #
# Exceptions
# ---------- #


class IniStoreError(Exception):
    """Base class for inistore exceptions."""


class ExtractionError(IniStoreError):
    """Raised when an entity could not be extracted from a line."""


# ---------- #
# Warnings
# ---------- #


class IniStoreWarning(Warning):
    """Base class for inistore warnings."""


class IniIOWarning(IniStoreWarning):
    """Raised when an ini file could not be read or written."""


class UnreconciledSectionWarning(IniStoreWarning):
    """Raised when a section holds raw lines and key/value entries at the same time
    and only the raw lines get written."""


__all__ = [
    "WrongType",
    "IniStoreError",
    "ExtractionError",
    "IniStoreWarning",
    "IniIOWarning",
    "UnreconciledSectionWarning",
]
