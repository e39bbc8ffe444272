from .globals import (
    VALID_MARKERS,
    COMMENT_PREFIX,
    OPTION_DELIMITER,
    QUOTE_CHAR,
    VERBATIM_PREFIXES,
    SECTION_OPEN,
)


class Parameters:
    """Parameters for reading and writing."""

    def __init__(
        self,
        comment_prefix: VALID_MARKERS = COMMENT_PREFIX,
        option_delimiter: VALID_MARKERS = OPTION_DELIMITER,
        verbatim_prefixes: VALID_MARKERS | tuple[VALID_MARKERS, ...] | None = (
            VERBATIM_PREFIXES
        ),
        quote_char: VALID_MARKERS | None = QUOTE_CHAR,
        section_spacing: int = 1,
        encoding: str | None = None,
    ) -> None:
        """
        Args:
            comment_prefix (VALID_MARKERS, optional): Character that starts a comment,
                either at the start of a line or after an option value.
                Defaults to "#".
            option_delimiter (VALID_MARKERS, optional): Character that delimits option
                keys from values. The first occurrence in a line counts.
                Defaults to "=".
            verbatim_prefixes (VALID_MARKERS | tuple[VALID_MARKERS, ...] | None,
                optional): Prefix character(s) of lines that are kept as raw lines of
                their section even if they contain the option delimiter. None or ()
                for none. Defaults to ("$", "*", "+").
            quote_char (VALID_MARKERS | None, optional): Character that protects the
                comment prefix inside option values. Values wrapped in it are unquoted
                on reading and values that need it are quoted on writing. If None, no
                quoting is done. Defaults to '"'.
            section_spacing (int, optional): Number of blank lines written between
                sections. Defaults to 1.
            encoding (str | None, optional): Encoding of files. If None, will read
                UTF-8 and fall back to charset detection, and write UTF-8.
                Defaults to None.
        """
        # because markers check each other on setting
        self._comment_prefix = ""
        self._option_delimiter = ""
        self._verbatim_prefixes = ()
        self._quote_char = None

        self.comment_prefix = comment_prefix
        self.option_delimiter = option_delimiter
        self.verbatim_prefixes = verbatim_prefixes
        self.quote_char = quote_char
        self.section_spacing = section_spacing
        self.encoding = encoding

    @property
    def comment_prefix(self) -> VALID_MARKERS:
        return self._comment_prefix

    @comment_prefix.setter
    def comment_prefix(self, value: VALID_MARKERS) -> None:
        self.verify_marker((value,), "comment prefix")
        self._comment_prefix = value
        self.verify_between_markers()

    @property
    def option_delimiter(self) -> VALID_MARKERS:
        return self._option_delimiter

    @option_delimiter.setter
    def option_delimiter(self, value: VALID_MARKERS) -> None:
        self.verify_marker((value,), "option delimiter")
        self._option_delimiter = value
        self.verify_between_markers()

    @property
    def verbatim_prefixes(self) -> tuple[VALID_MARKERS, ...]:
        return self._verbatim_prefixes

    @verbatim_prefixes.setter
    def verbatim_prefixes(
        self, value: VALID_MARKERS | tuple[VALID_MARKERS, ...] | None
    ) -> None:
        if value is None:
            value = ()
        elif not isinstance(value, tuple):
            value = (value,)
        self.verify_marker(value, "verbatim prefix")
        self._verbatim_prefixes = value
        self.verify_between_markers()

    @property
    def quote_char(self) -> VALID_MARKERS | None:
        return self._quote_char

    @quote_char.setter
    def quote_char(self, value: VALID_MARKERS | None) -> None:
        if value is not None:
            self.verify_marker((value,), "quote char")
        self._quote_char = value
        self.verify_between_markers()

    @property
    def section_spacing(self) -> int:
        return self._section_spacing

    @section_spacing.setter
    def section_spacing(self, value: int) -> None:
        if value < 0:
            raise ValueError("section_spacing must not be negative.")
        self._section_spacing = value

    def verify_marker(self, marker: tuple[str, ...], name: str) -> None:
        for val in marker:
            if len(val) != 1:
                raise ValueError(f"A {name} must be exactly one character.")
            if val == SECTION_OPEN:
                raise ValueError(
                    f"'{SECTION_OPEN}' (section name identifier) is not allowed as a {name}."
                )
            if val.isspace() or val.isalnum():
                raise ValueError(f"Whitespace and alphanumerics are no valid {name}.")

    def verify_between_markers(self) -> None:
        if self.comment_prefix and self.comment_prefix == self.option_delimiter:
            raise ValueError(
                "Comment prefix and option delimiter have to be distinct from each other."
            )
        if self.quote_char is not None and self.quote_char in {
            self.comment_prefix,
            self.option_delimiter,
        }:
            raise ValueError(
                "Quote char has to be distinct from comment prefix and option delimiter."
            )
        if self.option_delimiter in self.verbatim_prefixes:
            raise ValueError(
                "Verbatim prefixes and option delimiter have to be distinct from each other."
            )

    def update(self, **kwargs) -> None:
        """Update parameters with kwargs

        Args:
            **kwargs: Keyword-arguments to update the parameters with.
        """
        for k, v in kwargs.items():
            setattr(self, k, v)
