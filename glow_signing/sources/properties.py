"""Reader for Java ``.properties`` files such as ``key.properties``.

The format follows java.util.Properties: ``key=value``, ``key: value`` or
``key value`` pairs, ``#``/``!`` comments, backslash line continuations and
backslash escapes including ``\\uXXXX``. Lines end at ``\\n``, ``\\r`` or
``\\r\\n`` only.
"""

import logging
import re
import string
from collections.abc import Iterator, Mapping
from pathlib import Path

from glow_signing.exceptions import PropertiesFormatError

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties file content.

    Args:
        text: Decoded file content

    Returns:
        Mapping of keys to values; later duplicates override earlier ones

    Raises:
        PropertiesFormatError: If a ``\\u`` escape is malformed

    Example:
        >>> parse_properties("storeFile=/keys/release.jks\\nkeyAlias : prod")
        {'storeFile': '/keys/release.jks', 'keyAlias': 'prod'}
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[key] = value
    return properties


def load_properties(path: Path) -> dict[str, str]:
    """Read and parse a properties file.

    The file is decoded as UTF-8, falling back to ISO-8859-1 which is the
    historical default encoding for properties files.

    Args:
        path: File to read

    Returns:
        Parsed properties

    Raises:
        PropertiesFormatError: If the file cannot be read or parsed
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise PropertiesFormatError(
            f"Cannot read properties file: {e}",
            reference=str(path),
        ) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Properties file is not UTF-8, decoding as ISO-8859-1: {path}")
        text = raw.decode("iso-8859-1")

    try:
        return parse_properties(text)
    except PropertiesFormatError as e:
        raise PropertiesFormatError(e.message, reference=str(path)) from e


def _logical_lines(text: str) -> Iterator[str]:
    """Join continued lines and drop blanks and comments."""
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        if pending is None:
            line = raw.lstrip(_WHITESPACE)
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + raw.lstrip(_WHITESPACE)

        if _continues(line):
            pending = line[:-1]
            continue

        pending = None
        yield line

    if pending is not None:
        yield pending


def _continues(line: str) -> bool:
    """A line continues when it ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_key_value(line: str) -> tuple[str, str]:
    n = len(line)
    i = 0
    while i < n:
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        i += 1
    key_end = min(i, n)

    while i < n and line[i] in _WHITESPACE:
        i += 1
    if i < n and line[i] in _SEPARATORS:
        i += 1
        while i < n and line[i] in _WHITESPACE:
            i += 1

    return _unescape(line[:key_end]), _unescape(line[i:])


def _unescape(value: str) -> str:
    out: list[str] = []
    n = len(value)
    i = 0
    while i < n:
        char = value[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue

        i += 1
        if i >= n:
            break
        char = value[i]
        if char == "u":
            digits = value[i + 1 : i + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise PropertiesFormatError(f"Malformed \\uXXXX escape: \\u{digits}")
            out.append(chr(int(digits, 16)))
            i += 5
            continue

        out.append(_ESCAPES.get(char, char))
        i += 1

    # Rejoin surrogate pairs written as two \u escapes
    try:
        return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError as e:
        raise PropertiesFormatError(f"Unpaired surrogate in escape sequence: {value!r}") from e


def dump_properties(properties: Mapping[str, str]) -> str:
    """Render a mapping as properties file content.

    Keys and values are escaped so that parse_properties() reads them back
    unchanged. Characters outside printable Latin-1 are written as ``\\uXXXX``
    escapes. Output is meant to be written as UTF-8.
    """
    lines = [f"{_escape(key, is_key=True)}={_escape(value)}" for key, value in properties.items()]
    return "\n".join(lines) + "\n" if lines else ""


def _escape(text: str, is_key: bool = False) -> str:
    out: list[str] = []
    for index, char in enumerate(text):
        if char == "\\":
            out.append("\\\\")
        elif char in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[char])
        elif char in "=:#!":
            out.append("\\" + char)
        elif char == " " and (is_key or index == 0):
            out.append("\\ ")
        elif ord(char) > 0xFF or not char.isprintable():
            out.append(_unicode_escape(char))
        else:
            out.append(char)
    return "".join(out)


def _unicode_escape(char: str) -> str:
    """Write a character as \\uXXXX, as a surrogate pair above U+FFFF."""
    units = char.encode("utf-16-be")
    return "".join(f"\\u{int.from_bytes(units[i : i + 2], 'big'):04X}" for i in range(0, len(units), 2))
