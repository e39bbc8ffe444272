"""Reading and writing ini files as a whole."""

from pathlib import Path
from charset_normalizer import from_bytes as read_from_bytes


def decode(raw: bytes, encoding: str | None = None) -> str:
    """Decode the content of an ini file.

    Args:
        raw (bytes): The file content.
        encoding (str | None, optional): Encoding to decode with. If None, will try
            UTF-8 (with or without BOM) and fall back to charset detection.
            Defaults to None.

    Raises:
        UnicodeDecodeError: If the content can't be decoded.

    Returns:
        str: The decoded text.
    """
    if encoding is not None:
        return raw.decode(encoding)
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as ude:
        if (best := read_from_bytes(raw).best()) is None:
            raise ude
        return str(best)


def read_lines(path: str | Path, encoding: str | None = None) -> list[str]:
    """Read all lines of a text file.

    Args:
        path (str | Path): Path to the file.
        encoding (str | None, optional): See decode. Defaults to None.

    Raises:
        OSError: If the file can't be read.
        UnicodeDecodeError: If the file content can't be decoded.

    Returns:
        list[str]: The lines. Carriage returns of CRLF line endings are kept and
            removed by the parser.
    """
    return decode(Path(path).read_bytes(), encoding).split("\n")


def write_text(path: str | Path, text: str, encoding: str | None = None) -> None:
    """Write text to a file, replacing its content.

    Args:
        path (str | Path): Path to the file.
        text (str): The text to write.
        encoding (str | None, optional): Encoding to write with. If None, will write
            UTF-8. Defaults to None.

    Raises:
        OSError: If the file can't be written.
    """
    Path(path).write_text(text, encoding=encoding or "utf-8", newline="\n")
