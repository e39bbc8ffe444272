"""Ini entities are either a section name, an entry (key and value) or a raw line."""

from typing import Self
from dataclasses import dataclass
from .exceptions_warnings import ExtractionError
from .args import Parameters
from .globals import (
    COMMENT_PREFIX,
    QUOTE_CHAR,
    SECTION_OPEN,
    SECTION_CLOSE,
    LINE_ENDINGS,
)


def strip_line_ending(line: str) -> str:
    """Remove trailing carriage returns and newlines."""
    return line.rstrip(LINE_ENDINGS)


def is_comment(line: str, comment_prefix: str = COMMENT_PREFIX) -> bool:
    """Whether the first non-blank character of line is the comment prefix."""
    return line.lstrip().startswith(comment_prefix)


def strip_comment(
    text: str,
    comment_prefix: str = COMMENT_PREFIX,
    quote_char: str | None = QUOTE_CHAR,
) -> str:
    """Cut off a comment from text.

    A comment prefix only counts as quoted if it sits between a quote char and a
    matching closing one. An unmatched quote char is an ordinary character.

    Args:
        text (str): The text to strip the comment from.
        comment_prefix (str, optional): The comment prefix. Defaults to "#".
        quote_char (str | None, optional): Quote char protecting comment prefixes.
            If None, every comment prefix starts a comment. Defaults to '"'.

    Returns:
        str: The text before the comment (right-stripped) or the unchanged text if
            it has no comment.
    """
    index = 0
    while index < len(text):
        char = text[index]
        if (
            quote_char is not None
            and char == quote_char
            and (closing := text.find(quote_char, index + 1)) != -1
        ):
            index = closing + 1
            continue
        if char == comment_prefix:
            return text[:index].rstrip()
        index += 1
    return text


def unquote(value: str, quote_char: str | None = QUOTE_CHAR) -> str:
    """Remove one pair of quote chars wrapping value."""
    if (
        quote_char is not None
        and len(value) >= 2
        and value[0] == quote_char
        and value[-1] == quote_char
    ):
        return value[1:-1]
    return value


def needs_quotes(
    value: str,
    comment_prefix: str = COMMENT_PREFIX,
    quote_char: str | None = QUOTE_CHAR,
) -> bool:
    """Whether value would read back differently if written without quotes."""
    if quote_char is None:
        return False
    return (
        comment_prefix in value
        or value != value.strip()
        or unquote(value, quote_char) != value
    )


class SectionName(str):
    """A section's name."""

    def __new__(
        cls, name: str | None = None, name_with_brackets: str | None = None
    ) -> Self:
        """
        Args:
            name (str | None, optional): Name of the section. Should be
                None if name_with_brackets is provided, otherwise name_with_brackets
                will be ignored. Defaults to None.
            name_with_brackets (str | None, optional): A header line like
                "[name] trailing text". The name is the trimmed text between the
                opening bracket and the first closing bracket. Defaults to None.

        Raises:
            ExtractionError: If name_with_brackets is no section header.
        """
        if name is not None:
            return super().__new__(cls, name)
        if name_with_brackets is not None:
            header = name_with_brackets.lstrip()
            if header.startswith(SECTION_OPEN) and (
                end := header.find(SECTION_CLOSE, 1)
            ) != -1:
                return super().__new__(cls, header[1:end].strip())
            raise ExtractionError(
                f"Could not extract section name from {name_with_brackets}"
            )
        raise ValueError(
            "name or name_with_brackets must be provided for"
            " initialization of a SectionName"
        )

    def to_string(self) -> str:
        """Convert the SectionName into an ini header line."""
        return f"{SECTION_OPEN}{self}{SECTION_CLOSE}"


@dataclass(slots=True)
class Entry:
    """A key/value pair of a section."""

    key: str
    value: str

    @classmethod
    def from_string(cls, string: str, parameters: Parameters | None = None) -> Self:
        """Create an Entry from a line.

        The key is everything before the first option delimiter, the value everything
        after it, both trimmed. A comment after the value is cut off and a quoted
        value is unquoted.

        Args:
            string (str): The line that contains the key and value.
            parameters (Parameters | None, optional): Markers to use. If None, will
                use default Parameters. Defaults to None.

        Raises:
            ExtractionError: If the line is a comment, a verbatim line, has no option
                delimiter or an empty key.

        Returns:
            Self: A new Entry with the extracted key and value.
        """
        if parameters is None:
            parameters = Parameters()
        stripped = string.lstrip()
        if is_comment(stripped, parameters.comment_prefix):
            raise ExtractionError("Line is a comment.")
        if stripped.startswith(parameters.verbatim_prefixes):
            raise ExtractionError("Line is a verbatim line.")

        key, delimiter, value = string.partition(parameters.option_delimiter)
        key = key.strip()
        if not delimiter or not key:
            raise ExtractionError("Entry could not be extracted.")

        value = strip_comment(
            value.strip(), parameters.comment_prefix, parameters.quote_char
        )
        return cls(key=key, value=unquote(value, parameters.quote_char))

    def to_string(self, parameters: Parameters | None = None) -> str:
        """Convert the Entry into an ini line.

        Args:
            parameters (Parameters | None, optional): Markers to use. If None, will
                use default Parameters. Defaults to None.

        Returns:
            str: The ini line.
        """
        if parameters is None:
            parameters = Parameters()
        value = self.value
        if needs_quotes(value, parameters.comment_prefix, parameters.quote_char):
            value = f"{parameters.quote_char}{value}{parameters.quote_char}"
        return f"{self.key} {parameters.option_delimiter} {value}".rstrip()


def verify_section_name(name: str) -> None:
    """Check that name is read back unchanged from its header line.

    Raises:
        TypeError: If name is no string.
        ValueError: If name contains the section close marker or a newline or has
            surrounding whitespace.
    """
    if not isinstance(name, str):
        raise TypeError(f"Section names must be strings, not {type(name).__name__}.")
    if SECTION_CLOSE in name or "\n" in name:
        raise ValueError(
            f"Section names must not contain '{SECTION_CLOSE}' or line breaks."
        )
    if name != name.strip():
        raise ValueError("Section names must not have surrounding whitespace.")


def verify_entry(key: str, value: str, parameters: Parameters) -> None:
    """Check that an entry is read back unchanged from its line.

    Args:
        key (str): The entry's key.
        value (str): The entry's (formatted) value.
        parameters (Parameters): Markers the entry gets written with.

    Raises:
        TypeError: If key is no string.
        ValueError: If key or value can't be written as one key/value line.
    """
    if not isinstance(key, str):
        raise TypeError(f"Keys must be strings, not {type(key).__name__}.")
    if not key or key != key.strip():
        raise ValueError("Keys must not be empty or have surrounding whitespace.")
    if "\n" in key or "\n" in value:
        raise ValueError("Keys and values must not contain line breaks.")
    if parameters.option_delimiter in key:
        raise ValueError(
            f"Keys must not contain the option delimiter '{parameters.option_delimiter}'."
        )
    if key.startswith(
        (SECTION_OPEN, parameters.comment_prefix, *parameters.verbatim_prefixes)
    ):
        raise ValueError(
            f"Keys must not start with '{key[0]}' (section, comment or verbatim marker)."
        )


def parse_line(line: str, parameters: Parameters | None = None) -> tuple[str, str] | None:
    """Split a line into key and value.

    Args:
        line (str): The line to parse.
        parameters (Parameters | None, optional): Markers to use. Defaults to None.

    Returns:
        tuple[str, str] | None: Key and value or None if the line is no key/value line.
    """
    try:
        entry = Entry.from_string(line, parameters)
    except ExtractionError:
        return None
    return entry.key, entry.value
