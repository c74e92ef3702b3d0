"""Tests for line access and command assembly."""

import io

import pytest
from mdlv3000.exceptions import FormatError, MolfileIOError
from mdlv3000.reader.commands import CommandAssembler, LineSource


def commands_from(lines):
    return CommandAssembler(LineSource(lines))


class TestLineSource:
    """Test LineSource."""

    def test_strips_terminators(self):
        """Line terminators are removed."""
        source = LineSource(io.StringIO("first\r\nsecond\n"))
        assert source.read_line() == "first"
        assert source.read_line() == "second"
        assert source.read_line() is None

    def test_line_number(self):
        """Physical lines are counted."""
        source = LineSource(["a", "b"])
        source.read_line()
        source.read_line()
        assert source.line_number == 2

    def test_push_back(self):
        """A pushed back line is read again."""
        source = LineSource(["a", "b"])
        line = source.read_line()
        source.push_back(line)
        assert source.line_number == 0
        assert source.read_line() == "a"
        assert source.read_line() == "b"

    def test_io_failure(self):
        """OSError from the source is wrapped."""
        def failing():
            yield "line"
            raise OSError("device lost")
        
        source = LineSource(failing())
        assert source.read_line() == "line"
        with pytest.raises(MolfileIOError) as exc_info:
            source.read_line()
        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.line_number == 2


class TestCommandAssembler:
    """Test CommandAssembler."""

    def test_single_command(self):
        """Prefix is stripped."""
        assert commands_from(["M  V30 BEGIN CTAB"]).next_command() == "BEGIN CTAB"

    def test_end_of_input(self):
        """None at end of input."""
        assert commands_from([]).next_command() is None

    def test_blank_lines_skipped(self):
        """Blank lines between commands are ignored."""
        commands = commands_from(["", "   ", "M  V30 END CTAB"])
        assert commands.next_command() == "END CTAB"

    def test_bare_prefix(self):
        """A prefix with nothing after it is an empty command."""
        assert commands_from(["M  V30"]).next_command() == ""

    def test_trailing_whitespace(self):
        """Trailing whitespace is removed before looking for a continuation."""
        commands = commands_from(["M  V30 1 C 0 0 -   ", "M  V30 0 0"])
        assert commands.next_command() == "1 C 0 0 0 0"

    def test_continuation(self):
        """Continued lines are joined without a separator."""
        commands = commands_from([
            "M  V30 1 C 0 0 0 0 CH-",
            "M  V30 G=1",
        ])
        assert commands.next_command() == "1 C 0 0 0 0 CHG=1"

    def test_many_continuations(self):
        """Long chains of continuations are joined iteratively."""
        lines = ["M  V30 A-"] * 5000 + ["M  V30 B"]
        assert commands_from(lines).next_command() == "A" * 5000 + "B"

    @pytest.mark.parametrize("split_at", [1, 5, 10, 14])
    def test_split_anywhere(self, split_at):
        """A command split at any point reads the same as unsplit."""
        command = "1 C 0 0 0 0 CHG=1"
        lines = [f"M  V30 {command[:split_at]}-", f"M  V30 {command[split_at:]}"]
        assert commands_from(lines).next_command() == command

    def test_unprefixed_line(self):
        """A line without the prefix is an error."""
        commands = commands_from(["M  V30 BEGIN CTAB", "garbage"])
        commands.next_command()
        with pytest.raises(FormatError) as exc_info:
            commands.next_command()
        assert exc_info.value.line_number == 2
        assert exc_info.value.line == "garbage"

    def test_eof_in_continuation(self):
        """End of input inside a continued command is an error."""
        with pytest.raises(FormatError):
            commands_from(["M  V30 1 C -"]).next_command()
