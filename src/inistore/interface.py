"""Interface classes exist for coder interaction: a Document holds the Sections of
an ini file, a Section holds its entries and raw lines."""

from typing import Any, Iterable, Iterator
from pathlib import Path
import warnings
import contextlib
from .exceptions_warnings import (
    ExtractionError,
    IniIOWarning,
    UnreconciledSectionWarning,
)
from .entities import (
    Entry,
    SectionName,
    strip_comment,
    strip_line_ending,
    is_comment,
    verify_entry,
    verify_section_name,
    parse_line as _parse_line,
)
from .args import Parameters
from .utils import CaseInsensitiveDict, fold
from .storage import read_lines, write_text
from .type_converters.converters import (
    TypeConverter,
    format_value,
    try_parse,
)


class Section:
    """A configuration section. Holds entries (case-insensitive keys, case-preserved
    values) and raw lines.

    Key-based accessors (get, set, exists, delete) only see the entries, line-based
    accessors (get_lines, set_lines) only see the raw lines. A section with raw
    lines is written as its raw lines. The two are never reconciled. A loaded
    section that holds comments or other non-pair lines keeps all of its lines,
    key/value lines included, so that it is written back as read.
    """

    def __init__(self, name: str, parameters: Parameters | None = None) -> None:
        """
        Args:
            name (str): The section name (case-sensitive).
            parameters (Parameters | None, optional): Parameters for comment removal.
                If None, will use default Parameters. Defaults to None.
        """
        verify_section_name(name)
        self._name = SectionName(name)
        self._parameters = parameters if parameters is not None else Parameters()
        self._entries: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        self._lines: list[str] = []

    @property
    def name(self) -> SectionName:
        return self._name

    @property
    def values(self) -> dict[str, str]:
        """Entries sorted case-insensitively by key."""
        return dict(self._entries.sorted_items())

    @property
    def keys_order(self) -> list[str]:
        """Keys in the order they were first set."""
        return list(self._entries)

    @property
    def lines(self) -> list[str]:
        """Copy of the raw lines."""
        return list(self._lines)

    def has_lines(self) -> bool:
        """Whether the section holds raw lines."""
        return bool(self._lines)

    def exists(self, key: str) -> bool:
        """Check whether an entry with key (any case) exists."""
        return key in self._entries

    def delete(self, key: str) -> bool:
        """Delete an entry.

        Args:
            key (str): Key of the entry (any case).

        Returns:
            bool: Whether the entry existed.
        """
        if key not in self._entries:
            return False
        del self._entries[key]
        return True

    def set(self, key: str, value: Any, default: Any | None = None) -> None:
        """Set an entry's value. An existing entry keeps the case of its key and its
        position, a new one is appended.

        Args:
            key (str): Key of the entry.
            value (Any): The new value. Non-string values are formatted by
                type_converters.format_value.
            default (Any | None, optional): The value's default. If not None and equal
                to value, the entry is deleted instead, so that files only hold
                values that differ from their defaults. Defaults to None.

        Raises:
            TypeError: If key is no string.
            ValueError: If key or the formatted value can't be written as one
                key/value line (e.g. key contains the option delimiter or value a
                line break).
        """
        if default is not None and value == default:
            self.delete(key)
            return
        value = format_value(value)
        verify_entry(key, value, self._parameters)
        self._entries[key] = value

    def get[
        T
    ](
        self,
        key: str,
        default: T | None = None,
        value_type: type[T] | TypeConverter[T] = str,
    ) -> tuple[bool, T | None]:
        """Get an entry's value.

        Args:
            key (str): Key of the entry (any case).
            default (T | None, optional): Value to return if the entry doesn't exist
                or can't be converted. Defaults to None.
            value_type (type[T] | TypeConverter[T], optional): Type to convert the
                stored string to. Defaults to str.

        Returns:
            tuple[bool, T | None]: (True, value) if the entry exists and could be
                converted, (False, default) otherwise.
        """
        if key not in self._entries:
            return False, default
        success, value = try_parse(self._entries[key], value_type)
        return (True, value) if success else (False, default)

    def set_lines(self, lines: Iterable[str]) -> None:
        """Replace the raw lines."""
        self._lines = list(lines)

    def get_lines(self, remove_comments: bool = True) -> tuple[bool, list[str]]:
        """Get the raw lines.

        Args:
            remove_comments (bool, optional): Whether to remove comments. Lines are
                then stripped of whitespace, comment lines are dropped and comments
                after content are cut off. Defaults to True.

        Returns:
            tuple[bool, list[str]]: (False, []) if the section has no raw lines,
                (True, lines) otherwise.
        """
        if not self._lines:
            return False, []
        if not remove_comments:
            return True, list(self._lines)

        prefix, quote_char = self._parameters.comment_prefix, self._parameters.quote_char
        lines = []
        for line in self._lines:
            line = line.strip()
            if is_comment(line, prefix):
                continue
            lines.append(strip_comment(line, prefix, quote_char).strip())
        return True, lines

    def lines_hold_entries(self) -> bool:
        """Whether writing the raw lines keeps every entry, i.e. reading them back
        gives each entry its current value."""
        written: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        for line in self._lines:
            with contextlib.suppress(ExtractionError):
                entry = Entry.from_string(line, self._parameters)
                written[entry.key] = entry.value
        return all(
            key in written and written[key] == value
            for key, value in self._entries.items()
        )

    def items(self) -> list[tuple[str, str]]:
        """Entries in the order their keys were first set."""
        return list(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __lt__(self, other: "Section") -> bool:
        return fold(self._name) < fold(other._name)

    def __repr__(self) -> str:
        return "[%s] { .entries = %d, .lines = %d }" % (
            self._name,
            len(self._entries),
            len(self._lines),
        )


class Document:
    """An ini document: uniquely named Sections in insertion order."""

    def __init__(self, parameters: Parameters | None = None) -> None:
        """
        Args:
            parameters (Parameters | None, optional): Parameters for reading and
                writing. If None, will use default Parameters. Defaults to None.
        """
        self._parameters = parameters if parameters is not None else Parameters()
        self._sections: list[Section] = []

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @property
    def sections(self) -> tuple[Section, ...]:
        return tuple(self._sections)

    # ----
    # reading and writing
    # ----

    def load(self, path: str | Path, keep_current_data: bool = False) -> bool:
        """Load an ini file.

        Args:
            path (str | Path): Path to the ini file.
            keep_current_data (bool, optional): If True, extends the current sections
                and entries with the loaded ones (loaded entries win). If False, the
                current content is replaced. Defaults to False.

        Returns:
            bool: False if the file couldn't be read (the document stays unchanged),
                True otherwise.
        """
        try:
            lines = read_lines(path, self._parameters.encoding)
        except (OSError, UnicodeDecodeError) as e:
            warnings.warn(f"Could not read '{path}': {e}", IniIOWarning, stacklevel=2)
            return False
        self.load_lines(lines, keep_current_data)
        return True

    def loads(self, text: str, keep_current_data: bool = False) -> None:
        """Load ini content from a string. See load."""
        self.load_lines(text.split("\n"), keep_current_data)

    def load_lines(self, lines: Iterable[str], keep_current_data: bool = False) -> None:
        """Load ini content from lines. See load."""
        if not keep_current_data:
            self.clear()
        _ReadIni(self, lines)

    def save(self, path: str | Path) -> bool:
        """Save the document to an ini file.

        Args:
            path (str | Path): Path to the ini file.

        Returns:
            bool: False if the file couldn't be written, True otherwise.
        """
        try:
            write_text(path, self.dumps(), self._parameters.encoding)
        except OSError as e:
            warnings.warn(f"Could not write '{path}': {e}", IniIOWarning, stacklevel=2)
            return False
        return True

    def dumps(self) -> str:
        """Convert the document into ini text.

        Every section is written as its header followed by its raw lines if it has
        any, otherwise by its entries in the order their keys were first set. Warns
        if raw lines are written that don't hold all entries of their section.

        Returns:
            str: The ini text.
        """
        blocks = []
        for section in self._sections:
            out = [section.name.to_string()]
            if section.has_lines():
                if not section.lines_hold_entries():
                    warnings.warn(
                        f"Section '{section.name}' holds raw lines, thus entries set"
                        " apart from them are not written.",
                        UnreconciledSectionWarning,
                        stacklevel=2,
                    )
                out.extend(section.lines)
            else:
                out.extend(
                    Entry(key, value).to_string(self._parameters)
                    for key, value in section.items()
                )
            blocks.append("\n".join(out))

        if not blocks:
            return ""
        return ("\n" * (self._parameters.section_spacing + 1)).join(blocks) + "\n"

    @staticmethod
    def parse_line(line: str, parameters: Parameters | None = None) -> tuple[str, str] | None:
        """Split a line into key and value (None if it isn't a key/value line)."""
        return _parse_line(line, parameters)

    # ----
    # sections
    # ----

    def get_section(self, name: str) -> Section | None:
        """Get a section by its (case-sensitive) name or None if it doesn't exist."""
        return next((sec for sec in self._sections if sec.name == name), None)

    def get_or_create_section(self, name: str) -> Section:
        """Get a section by its (case-sensitive) name. Appends a new, empty section
        if it doesn't exist."""
        if (section := self.get_section(name)) is None:
            section = Section(name, self._parameters)
            self._sections.append(section)
        return section

    def delete_section(self, name: str) -> bool:
        """Delete a section.

        Returns:
            bool: Whether the section existed.
        """
        if (section := self.get_section(name)) is None:
            return False
        self._sections.remove(section)
        return True

    def sort_sections(self) -> None:
        """Order the sections case-insensitively by name."""
        self._sections.sort()

    def clear(self) -> None:
        """Remove all sections."""
        self._sections.clear()

    # ----
    # entries
    # ----

    def exists(self, section: str, key: str) -> bool:
        """Check whether section exists and has an entry with key (any case)."""
        return (sec := self.get_section(section)) is not None and sec.exists(key)

    def get_if_exists[
        T
    ](
        self,
        section: str,
        key: str,
        default: T | None = None,
        value_type: type[T] | TypeConverter[T] = str,
    ) -> tuple[bool, T | None]:
        """Get an entry's value without creating the section. See Section.get.

        Returns:
            tuple[bool, T | None]: (True, value) if the entry exists and could be
                converted, (False, default) otherwise.
        """
        if (sec := self.get_section(section)) is None:
            return False, default
        return sec.get(key, default, value_type)

    def get_keys(self, section: str) -> tuple[bool, list[str]]:
        """Get the keys of a section in the order they were first set.

        Returns:
            tuple[bool, list[str]]: (False, []) if the section doesn't exist,
                (True, keys) otherwise.
        """
        if (sec := self.get_section(section)) is None:
            return False, []
        return True, sec.keys_order

    def delete_key(self, section: str, key: str) -> bool:
        """Delete an entry.

        Returns:
            bool: False if the section or entry doesn't exist, True otherwise.
        """
        if (sec := self.get_section(section)) is None:
            return False
        return sec.delete(key)

    def set_lines(self, section: str, lines: Iterable[str]) -> None:
        """Replace the raw lines of a section (created if missing)."""
        self.get_or_create_section(section).set_lines(lines)

    def get_lines(
        self, section: str, remove_comments: bool = True
    ) -> tuple[bool, list[str]]:
        """Get the raw lines of a section. See Section.get_lines.

        Returns:
            tuple[bool, list[str]]: (False, []) if the section doesn't exist or has no
                raw lines, (True, lines) otherwise.
        """
        if (sec := self.get_section(section)) is None:
            return False, []
        return sec.get_lines(remove_comments)

    def __getitem__(self, name: str) -> Section:
        if (section := self.get_section(name)) is None:
            raise KeyError(name)
        return section

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get_section(name) is not None

    def __iter__(self) -> Iterator[Section]:
        return iter(tuple(self._sections))

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({[str(sec.name) for sec in self._sections]})"


class _ReadIni:

    def __init__(self, target: Document, lines: Iterable[str]) -> None:
        """Read lines into target. For more info cf. Document.load."""
        self.target = target
        self.parameters = target.parameters

        # lines before the first section header are dropped
        self.current_section: Section | None = None
        self.current_entity_content: str = ""
        # body lines per section, in file order, and the sections that got a line
        # which is no entry
        self.body_lines: dict[Section, list[str]] = {}
        self.raw_sections: set[Section] = set()

        for line in lines:
            self.current_entity_content = strip_line_ending(line)

            if self._is_empty_entity():
                continue

            elif (extracted_section_name := self._extract_section_name()) is not None:
                self.current_section = self._handle_section_name(extracted_section_name)

            elif self.current_section is None:
                continue

            elif entry := self._extract_entry():
                self._handle_entry(entry)

            else:
                self._handle_raw_line()

        self._keep_raw_sections()

    def _extract_section_name(self) -> SectionName | None:
        """Extract a section name if present in self.current_entity_content.

        Returns:
            SectionName | None: The extracted section name or None if no section name
                was found in self.current_entity_content.
        """
        with contextlib.suppress(ExtractionError):
            return SectionName(name_with_brackets=self.current_entity_content)
        return None

    def _handle_section_name(self, extracted_section_name: SectionName) -> Section:
        """Get the section of an extracted SectionName (added if new)."""
        section = self.target.get_or_create_section(extracted_section_name)
        if section not in self.body_lines:
            # entries of an earlier load lead the lines if the section turns raw
            self.body_lines[section] = (
                []
                if section.has_lines()
                else [
                    Entry(key, value).to_string(self.parameters)
                    for key, value in section.items()
                ]
            )
        return section

    def _extract_entry(self) -> Entry | None:
        """Extract an entry if present in self.current_entity_content."""
        with contextlib.suppress(ExtractionError):
            return Entry.from_string(self.current_entity_content, self.parameters)
        return None

    def _handle_entry(self, extracted_entry: Entry) -> None:
        assert self.current_section is not None
        self.current_section._entries[extracted_entry.key] = extracted_entry.value
        self.body_lines[self.current_section].append(self.current_entity_content)

    def _handle_raw_line(self) -> None:
        """Remember a line that is no entry (comment, directive, ...)."""
        assert self.current_section is not None
        self.body_lines[self.current_section].append(self.current_entity_content)
        self.raw_sections.add(self.current_section)

    def _keep_raw_sections(self) -> None:
        """Keep the body lines of sections that have or got lines which are no
        entries. Pure key/value sections stay without raw lines."""
        for section, lines in self.body_lines.items():
            if section in self.raw_sections or section.has_lines():
                section._lines.extend(lines)

    def _is_empty_entity(self) -> bool:
        """Check whether self.current_entity_content qualifies as empty."""
        return not self.current_entity_content.strip()
