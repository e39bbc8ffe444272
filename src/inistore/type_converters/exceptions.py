"""Exceptions of the type converters."""


class WrongType(ValueError):
    """Raised when a string could not be converted to the requested type."""
