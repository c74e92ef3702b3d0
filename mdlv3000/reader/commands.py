"""
Physical line access and logical command assembly.

Every CTAB record is written as ``M  V30 <command>``. A command ending in
``-`` continues on the next physical line.
"""

from __future__ import annotations

from typing import Final, Iterable, Iterator

from mdlv3000.exceptions import FormatError, MolfileIOError
from mdlv3000.utils import logger

PREFIX: Final[str] = "M  V30 "
CONTINUATION: Final[str] = "-"

_BARE_PREFIX: Final[str] = PREFIX.rstrip()


class LineSource:
    """Pull-based reader over an iterable of text lines.

    Line terminators are removed. One line of push-back is supported so the
    header reader can hand an unconsumed line back.
    """

    __slots__ = ("_lines", "_pushed", "_line_number")

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self._pushed: list[str] = []
        self._line_number = 0

    @property
    def line_number(self) -> int:
        """Number of physical lines consumed so far."""
        return self._line_number

    def read_line(self) -> str | None:
        """Consume and return the next line, or None at end of input.

        Raises:
            MolfileIOError: If the underlying source fails.
        """
        if self._pushed:
            self._line_number += 1
            return self._pushed.pop()
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Unexpected error while reading input: %s", exc)
            raise MolfileIOError(
                f"unexpected error while reading input: {exc}",
                self._line_number + 1,
            ) from exc
        self._line_number += 1
        return line.rstrip("\r\n")

    def push_back(self, line: str) -> None:
        """Return a line so the next read_line() yields it again."""
        self._pushed.append(line)
        self._line_number -= 1


class CommandAssembler:
    """Turns prefixed physical lines into logical commands.

    Example:
        >>> cmds = CommandAssembler(LineSource(["M  V30 1 C 0 0 -", "M  V30 0 0"]))
        >>> cmds.next_command()
        '1 C 0 0 0 0'
    """

    __slots__ = ("_source",)

    def __init__(self, source: LineSource) -> None:
        self._source = source

    @property
    def line_number(self) -> int:
        """Physical line number of the last line read."""
        return self._source.line_number

    def next_command(self) -> str | None:
        """Read the next logical command.

        Blank lines are skipped. Continuation lines are joined without a
        separator, exactly as written.

        Returns:
            Command text without its prefix, or None at end of input.

        Raises:
            FormatError: On a non-blank line without the record prefix, or
                end of input inside a continued command.
        """
        line = self._source.read_line()
        while line is not None and not line.strip():
            line = self._source.read_line()
        if line is None:
            return None

        parts: list[str] = []
        content = self._strip_prefix(line)
        while content.endswith(CONTINUATION):
            parts.append(content[:-1])
            line = self._source.read_line()
            if line is None:
                raise FormatError(
                    "unexpected end of file in continued command",
                    self.line_number,
                )
            content = self._strip_prefix(line)
        parts.append(content)

        command = "".join(parts)
        logger.debug("command at line %d: %s", self.line_number, command)
        return command

    def _strip_prefix(self, line: str) -> str:
        line = line.rstrip()
        if line.startswith(PREFIX):
            return line[len(PREFIX):]
        if line == _BARE_PREFIX:
            return ""
        raise FormatError("unexpected line", self.line_number, line)
