from typing import Literal

COMMENT_PREFIX = "#"
OPTION_DELIMITER = "="
QUOTE_CHAR = '"'
VERBATIM_PREFIXES = ("$", "*", "+")
"""Line prefixes of directive lines that are kept as raw lines, even if they contain
the option delimiter (e.g. "$Infinite Health" or "*enabled=1")."""
SECTION_OPEN = "["
SECTION_CLOSE = "]"
LINE_ENDINGS = "\r\n"
VALID_MARKERS = Literal[
    "\\",
    "!",
    '"',
    "§",
    "%",
    "&",
    "/",
    "(",
    ")",
    "?",
    ":",
    ";",
    "#",
    "'",
    "*",
    ">",
    "<",
    "=",
    "$",
    "+",
]
"""Valid characters for markers (option delimiter, comment prefix, quote char or
verbatim prefix)."""
