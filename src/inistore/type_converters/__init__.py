from .converters import (
    TypeConverter,
    converter,
    string_converter,
    bool_converter,
    numeric_converter,
    list_converter,
    enum_converter,
    guess_converter,
    try_parse,
    format_value,
)
from .exceptions import WrongType
