"""Converter classes and functions. They translate between the strings stored in a
Section and typed python values."""

from enum import Enum
from functools import wraps
from typing import (
    Callable,
    Any,
    overload,
    get_args,
    get_origin,
)
import re
import contextlib
from .exceptions import WrongType

type ScalarTypes = int | float | complex | bool
"""Possible scalar conversion result types."""
type ConvertibleTypes = ScalarTypes | list | str | Enum
"""Possible conversion result types."""


type TypeConverter[ConvertedType] = Callable[[Any], ConvertedType | Any]
"""Type of type converter functions. To create a type converter, use converter decorator."""


def converter[T](processor: Callable[[str], T]) -> TypeConverter[T]:
    """Create a new TypeConverter.

    Args:
        processor (Callable[[str], T]): Callable to process the string input and
            convert it into an instance of arbitrary type. If conversion is not
            possible, should raise exceptions.WrongType.

    Returns:
        TypeConverter[T]: TypeConverter that will return the processed input on call
            or the input itself if conversion was not possible. The strict processor
            stays reachable as __wrapped__.
    """

    @wraps(processor)
    def convert(value: Any) -> T | Any:
        """Convert value.

        Args:
            value (Any): The value to convert.

        Returns:
            Any: The converted value or the unchanged value if conversion was impossible.
        """
        if isinstance(value, str):
            with contextlib.suppress(WrongType):
                return processor(value)
        return value

    return convert


def string_converter(strip_whitespace: bool = True) -> TypeConverter[str]:
    """Create a new string converter.

    Args:
        strip_whitespace (bool, optional): Whether to strip leading and trailing
            whitespace from the string. Defaults to True.
    """

    @converter
    def to_string(string: str) -> str:
        """Strip string of whitespace.

        Args:
            string (str): The string to strip.

        Returns:
            str: The stripped string.
        """
        if not isinstance(string, str):
            raise WrongType
        return string.strip() if strip_whitespace else string

    return to_string


DEFAULT_STRING_CONVERTER = string_converter()
"""String converter with default conversion parameters."""
VERBATIM_STRING_CONVERTER = string_converter(strip_whitespace=False)
"""String converter that returns stored values unchanged."""


def bool_converter(
    true: str | tuple[str, ...] = ("1", "true", "yes", "y"),
    false: str | tuple[str, ...] = ("0", "false", "no", "n"),
) -> TypeConverter[bool]:
    """Create a new bool converter.

    Args:
        true (str | tuple[str, ...], optional): String(s) that should be regarded as True.
            Defaults to ("1", "true", "yes", "y").
        false (str | tuple[str, ...], optional): String(s) that should be regarded as False.
            Defaults to ("0", "false", "no", "n").

    Returns:
        TypeConverter[bool]: The bool converter.
    """

    if not isinstance(true, tuple):
        true = (true,)
    true = tuple(i.lower() for i in true)

    if not isinstance(false, tuple):
        false = (false,)
    false = tuple(i.lower() for i in false)

    @converter
    def to_bool(string: str) -> bool:
        """Converts a string to bool.

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If conversion was unsuccessful.

        Returns:
            bool: The converted boolean.
        """
        string = string.lower().strip()
        if string in true:
            return True
        elif string in false:
            return False
        raise WrongType

    return to_bool


type Numerics = int | float | complex
"""Possible numeric conversion result types."""


def numeric_converter[
    T: Numerics
](
    numeric_type: type[T] | tuple[type[T], ...] = (int, float, complex),
) -> TypeConverter[T]:
    """Create a new numeric type converter.

    Args:
        numeric_type (type[Numerics] | tuple[type[Numerics], ...], optional): The type
            to convert to. If multiple are given, the type converter will return the
            first type that the conversion was successful for.
            Defaults to (int, float, complex).

    Returns:
        TypeConverter[int | float | complex]: The numeric type converter.
    """

    if not isinstance(numeric_type, tuple):
        numeric_type = (numeric_type,)

    @converter
    def to_num(string: str) -> T:
        """Convert string to numeric type. Integers may also be written with a base
        prefix (0x, 0o, 0b).

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If conversion was unsuccessful.

        Returns:
            Numerics: Converted string.
        """
        # remove whitespaces
        string = string.replace(" ", "")
        for num_type in numeric_type:
            with contextlib.suppress(ValueError):
                return num_type(string)
            if num_type is int:
                with contextlib.suppress(ValueError):
                    return int(string, 0)
        raise WrongType

    return to_num


@overload
def list_converter[
    T
](
    delimiter: str = ",",
    remove_whitespace: bool = True,
    item_converter: TypeConverter[T] = ...,
    require_delimiter: bool = True,
) -> TypeConverter[list[T | Any]]: ...
@overload
def list_converter(
    delimiter: str = ",",
    remove_whitespace: bool = True,
    item_converter: None = None,
    require_delimiter: bool = True,
) -> TypeConverter[list[ScalarTypes | Any]]: ...
def list_converter[
    T
](
    delimiter: str = ",",
    remove_whitespace: bool = True,
    item_converter: TypeConverter[T] | None = None,
    require_delimiter: bool = True,
) -> TypeConverter[list[T | Any] | list[ScalarTypes | Any]]:
    """Create a new list type converter.

    Args:
        delimiter (str, optional): Delimiter that separates list items. Defaults to ",".
        remove_whitespace (bool, optional): Whether whitespace between items and
            delimiter should be removed. Defaults to True.
        item_converter (TypeConverter[Any]): TypeConverter to convert each list
            item with. If None, will use Guess TypeConverter. Defaults to None.
        require_delimiter (bool, optional): Whether a string without delimiter is
            rejected. If False, such a string becomes a list with one item (or an
            empty list for an empty string). Defaults to True.

    Returns:
        TypeConverter[list]: The new list type converter.
    """

    if item_converter is None:
        # guess the items (but no list guess) if no item converter is given
        item_converter = guess_converter(*get_args(ScalarTypes.__value__))

    split_delimiter = (
        rf"\s*{re.escape(delimiter)}\s*" if remove_whitespace else re.escape(delimiter)
    )

    @converter
    def to_list(string: str) -> list[T | str] | list[ScalarTypes | str]:
        """Convert a string to a list.

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If conversion was unsuccessful.

        Returns:
            list: Converted list.
        """
        if delimiter not in string:
            if require_delimiter:
                raise WrongType
            if not string.strip():
                return []
        items = re.split(
            pattern=split_delimiter,
            string=string.strip() if remove_whitespace else string,
        )
        return [_strict(item_converter)(s) for s in items]

    return to_list


def enum_converter[E: Enum](enum_type: type[E]) -> TypeConverter[E]:
    """Create a new enum converter. Members are matched by name (case-insensitive)
    first, then by value.

    Args:
        enum_type (type[Enum]): The enum class to convert to.

    Returns:
        TypeConverter[Enum]: The enum converter.
    """
    members = {name.lower(): member for name, member in enum_type.__members__.items()}

    @converter
    def to_enum(string: str) -> E:
        """Convert a string to an enum member.

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If no member matches.

        Returns:
            Enum: The matching member.
        """
        string = string.strip()
        if (member := members.get(string.lower())) is not None:
            return member
        for member in enum_type:
            if str(member.value) == string:
                return member
        raise WrongType

    return to_enum


def guess_converter(
    *types: type[Any] | TypeConverter,
    fallback: TypeConverter = DEFAULT_STRING_CONVERTER,
) -> TypeConverter:
    """Create a new type converter that guesses the type.

    Args:
        *types (type): The types to guess. If not provided,
            will guess all of ConvertibleTypes.
        fallback (TypeConverter, optional): Fallback converter if no type
            could be guessed.

    Returns:
        TypeConverter: The new Guess-TypeConverter.
    """

    if types:
        # convert the types to guess into type converters
        converters = tuple(_type_hint_to_converter(t) for t in types)
    else:
        converters = (
            DEFAULT_NUMERIC_CONVERTER,
            DEFAULT_BOOL_CONVERTER,
            DEFAULT_LIST_CONVERTER,
        )

    @converter
    def guess(string: str) -> Any:
        """Convert to string to a type by guessing.

        Args:
            string (str): The string to convert.

        Raises:
            WrongType: If conversion was unsuccessful.

        Returns:
            Any: The converted type.
        """
        for conv in converters:
            if conv is not None and (guess := conv(string)) != string:
                return guess
        return fallback(string)

    return guess


@overload
def _type_hint_to_converter[
    T: ConvertibleTypes
](type_hint: type[T],) -> TypeConverter[T]: ...
@overload
def _type_hint_to_converter[
    T: Any
](type_hint: TypeConverter[T],) -> TypeConverter[T]: ...
def _type_hint_to_converter[
    T
](type_hint: Any,) -> TypeConverter[T] | None:
    """Convert a type to its respective TypeConverter.

    Args:
        type_hint (type): The type to convert.

    Returns:
        TypeConverter | None: The matching TypeConvert or None if type is not
            convertible.
    """
    if (origin := get_origin(type_hint)) and origin is list:

        if (list_args := get_args(type_hint)) and len(list_args) == 1:
            # list has exactly one type hint -> get item converter
            item_converter = _type_hint_to_converter(list_args[0])
            return list_converter(
                item_converter=item_converter, require_delimiter=False
            )

        return list_converter(require_delimiter=False)

    if type_hint in {int, float, complex}:
        return numeric_converter(numeric_type=type_hint)
    if type_hint is bool:
        return DEFAULT_BOOL_CONVERTER
    if type_hint is list:
        return list_converter(require_delimiter=False)
    if type_hint is str:
        return VERBATIM_STRING_CONVERTER
    if isinstance(type_hint, type) and issubclass(type_hint, Enum):
        return enum_converter(type_hint)
    if isinstance(type_hint, Callable):
        return type_hint

    return None


def _strict(type_converter: TypeConverter) -> Callable[[str], Any]:
    """Get the processor of a TypeConverter that raises instead of returning the
    unchanged input."""
    return getattr(type_converter, "__wrapped__", type_converter)


def try_parse[
    T
](string: str, value_type: type[T] | TypeConverter[T] = str) -> tuple[bool, T | None]:
    """Parse a stored string as value_type.

    Args:
        string (str): The stored string.
        value_type (type | TypeConverter, optional): One of the ConvertibleTypes
            (including list[...] hints and Enum classes) or a TypeConverter.
            Defaults to str.

    Raises:
        TypeError: If value_type can't be matched to a TypeConverter.

    Returns:
        tuple[bool, T | None]: (True, converted value) on success, (False, None)
            otherwise.
    """
    type_converter = _type_hint_to_converter(value_type)
    if type_converter is None:
        raise TypeError(f"No type converter for '{value_type}'.")
    try:
        return True, _strict(type_converter)(string)
    except (WrongType, ValueError, TypeError):
        return False, None


def format_value(value: Any) -> str:
    """Convert a python value into the string that gets stored in a Section.

    Booleans become "True"/"False", floats use their shortest round-trip form,
    enum members their name and lists/tuples their formatted items joined by ", ".

    Args:
        value (Any): The value to convert.

    Returns:
        str: The string representation.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    return str(value)


# default converters
DEFAULT_BOOL_CONVERTER = bool_converter()
"""Bool converter with default conversion parameters."""
DEFAULT_NUMERIC_CONVERTER = numeric_converter()
"""Numeric converter with default conversion parameters."""
DEFAULT_LIST_CONVERTER = list_converter()
"""List converter with default conversion parameters."""
