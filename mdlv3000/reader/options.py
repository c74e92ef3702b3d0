"""
Key/value option parsing.

Trailing fields of a CTAB record are written as ``KEY=value``,
``KEY=(count item item ...)`` or ``KEY="quoted value"``.
"""

from __future__ import annotations

from mdlv3000.utils import logger


def _is_key_char(char: str) -> bool:
    return char.isalnum() or char == "_"


class _OptionScanner:
    """Character scanner over an option string.

    Provides the small set of lookahead operations needed to split
    ``KEY=value`` fragments.
    """

    __slots__ = ("_string", "_pos")

    def __init__(self, string: str) -> None:
        self._string = string
        self._pos = 0

    @property
    def remaining(self) -> str:
        """Remaining unparsed string."""
        return self._string[self._pos:]

    def peek(self) -> str | None:
        """Look at the current character without consuming it."""
        if self._pos >= len(self._string):
            return None
        return self._string[self._pos]

    def is_eof(self) -> bool:
        """Check if at end of string."""
        return self._pos >= len(self._string)

    def skip_space(self) -> None:
        self.read_while(str.isspace)

    def read_while(self, predicate) -> str:
        """Read characters while predicate is true.

        Args:
            predicate: Function(char) -> bool.

        Returns:
            String of consumed characters.
        """
        start = self._pos
        while self._pos < len(self._string) and predicate(self._string[self._pos]):
            self._pos += 1
        return self._string[start:self._pos]

    def read_enclosed(self, close: str) -> str | None:
        """Read a span opened at the current character up to ``close``.

        Returns:
            Text between the delimiters, or None (nothing consumed) if the
            closing character is missing.
        """
        end = self._string.find(close, self._pos + 1)
        if end < 0:
            return None
        value = self._string[self._pos + 1:end]
        self._pos = end + 1
        return value

    def read_token(self) -> str:
        """Read up to the next whitespace."""
        return self.read_while(lambda c: not c.isspace())

    def read_key(self) -> str | None:
        """Read ``KEY=`` and return KEY, or None (nothing consumed)."""
        start = self._pos
        key = self.read_while(_is_key_char)
        if key and self.peek() == "=":
            self._pos += 1
            return key
        self._pos = start
        return None


def parse_options(string: str) -> dict[str, str]:
    """Parse trailing ``KEY=value`` fields of a record.

    A parenthesized value may contain spaces; the parentheses are removed.
    A parenthesis that is never closed is read as an ordinary token. Parsing
    stops quietly at the first fragment that is not a key/value pair. For
    repeated keys the last value wins.

    Args:
        string: Text following the positional fields.

    Returns:
        Mapping of key to raw value, in order of appearance.

    Example:
        >>> parse_options("CHG=-1 ATOMS=(3 1 2 3) LABEL=Ph")
        {'CHG': '-1', 'ATOMS': '3 1 2 3', 'LABEL': 'Ph'}
    """
    scanner = _OptionScanner(string)
    options: dict[str, str] = {}

    while True:
        scanner.skip_space()
        if scanner.is_eof():
            break

        key = scanner.read_key()
        if key is None:
            logger.debug("Quitting; could not parse options: %s", scanner.remaining)
            break

        char = scanner.peek()
        value: str | None = None
        if char == "(":
            value = scanner.read_enclosed(")")
        elif char == '"':
            value = scanner.read_enclosed('"')
        if value is None:
            value = scanner.read_token()

        options[key] = value

    return options


def parse_id_list(value: str) -> list[int]:
    """Parse a count-prefixed identifier list such as ``"3 1 2 3"``.

    The leading count is not part of the data.

    Raises:
        ValueError: If the count or any identifier is not an integer.
    """
    tokens = value.split()
    if not tokens:
        raise ValueError("empty list")
    int(tokens[0])
    return [int(token) for token in tokens[1:]]
