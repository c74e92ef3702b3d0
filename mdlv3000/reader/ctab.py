"""
V3000 connection table reader.

Reads the optional four-line molfile header and the ``BEGIN CTAB`` ...
``END CTAB`` body, dispatching each block to its parser, and finalizes the
resulting molecule.

    >>> lines = [
    ...     "M  V30 BEGIN CTAB",
    ...     "M  V30 COUNTS 1 0 0 0 0",
    ...     "M  V30 BEGIN ATOM",
    ...     "M  V30 1 O 0 0 0 0",
    ...     "M  V30 END ATOM",
    ...     "M  V30 END CTAB",
    ... ]
    >>> mol = read_molfile(lines)
    >>> mol.atoms[0].implicit_hydrogens
    2
"""

from __future__ import annotations

import os
from typing import Any, Callable, Final, Iterable

from mdlv3000.exceptions import FormatError
from mdlv3000.reader.blocks import (
    read_atom_block,
    read_bond_block,
    read_collection_block,
    read_sgroup_block,
)
from mdlv3000.reader.commands import PREFIX, CommandAssembler, LineSource
from mdlv3000.reader.finalize import finalize_molecule
from mdlv3000.reader.settings import Mode, ReaderOptions
from mdlv3000.reader.state import ReadState
from mdlv3000.types import Dimensionality, Molecule
from mdlv3000.utils import logger, warn_unsupported

# 0-based column of the dimensional code on the header's program line
_DIMENSION_COLUMN: Final[int] = 20

# 0-based field of the chiral flag, counting COUNTS itself
_CHIRAL_FIELD: Final[int] = 5


class MDLV3000Reader:
    """Reader for one V3000 connection table.
    
    The source may be an open text file, any iterable of lines, or a whole
    molfile as a single string. The reader owns the source: close it with
    close() or use the reader as a context manager.
    
    Example:
        >>> with MDLV3000Reader(open("ethanol.mol")) as reader:  # doctest: +SKIP
        ...     mol = reader.read()
    """
    
    def __init__(
        self,
        source: Iterable[str] | str,
        mode: Mode = Mode.RELAXED,
        options: ReaderOptions | None = None,
    ) -> None:
        """Initialize reader.
        
        Args:
            source: Lines of a molfile, with or without line terminators.
            mode: STRICT rejects unknown element symbols.
            options: Reader options, defaults if omitted.
        """
        self._handle = source
        self._lines: Iterable[str] = source.splitlines() if isinstance(source, str) else source
        self.mode = mode
        self.options = options if options is not None else ReaderOptions()
    
    def __enter__(self) -> "MDLV3000Reader":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
    
    def close(self) -> None:
        """Close the underlying source if it can be closed."""
        close = getattr(self._handle, "close", None)
        if callable(close):
            close()
    
    @staticmethod
    def accepts(obj: Any) -> bool:
        """Check whether the reader can produce the given object or class."""
        if isinstance(obj, type):
            return issubclass(obj, Molecule)
        return isinstance(obj, Molecule)
    
    def read(self) -> Molecule:
        """Read the connection table.
        
        Returns:
            The parsed and finalized molecule.
        
        Raises:
            FormatError: If the input is not a well-formed V3000 CTAB.
            FieldParseError: If a field value cannot be converted.
            MolfileIOError: If reading the source fails.
        """
        state = ReadState()
        source = LineSource(self._lines)
        self._read_header(source, state)
        self._read_body(CommandAssembler(source), state)
        return finalize_molecule(state, self.options)
    
    read_connection_table = read
    
    def _read_header(self, source: LineSource, state: ReadState) -> None:
        title = source.read_line()
        if title is None:
            raise FormatError("expected a header line, but found nothing")
        if title.startswith(PREFIX.rstrip()):
            logger.debug("No header, reading connection table directly")
            source.push_back(title)
            return
        
        info = source.read_line() or ""
        comment = source.read_line() or ""
        program = source.read_line()
        if program is None or "3000" not in program:
            logger.error("Missing V3000 marker in header")
            raise FormatError("not a V3000 molfile", source.line_number, program)
        
        mol = state.mol
        if title:
            mol.title = title
        if comment:
            mol.comment = comment
        if info.startswith("2D", _DIMENSION_COLUMN):
            state.dimensionality = Dimensionality.TWO_D
        elif info.startswith("3D", _DIMENSION_COLUMN):
            state.dimensionality = Dimensionality.THREE_D
    
    def _read_body(self, commands: CommandAssembler, state: ReadState) -> None:
        blocks: dict[str, Callable[[], None]] = {
            "BEGIN ATOM": lambda: read_atom_block(commands, state, self.mode, self.options),
            "BEGIN BOND": lambda: read_bond_block(commands, state),
            "BEGIN SGROUP": lambda: read_sgroup_block(commands, state),
            "BEGIN COLLECTION": lambda: read_collection_block(commands, state),
        }
        
        while True:
            command = commands.next_command()
            if command is None:
                raise FormatError("unexpected end of file", commands.line_number)
            command = command.strip()
            
            if command == "END CTAB":
                return
            if command == "BEGIN CTAB":
                continue
            if command.startswith("COUNTS"):
                fields = command.split()
                state.chiral = len(fields) > _CHIRAL_FIELD and fields[_CHIRAL_FIELD] == "1"
                logger.debug("Chiral flag: %s", state.chiral)
                continue
            
            block = blocks.get(command)
            if block is not None:
                block()
            else:
                warn_unsupported(f"Unsupported command: {command}")


def read_molfile(
    source: Iterable[str] | str,
    *,
    mode: Mode = Mode.RELAXED,
    options: ReaderOptions | None = None,
) -> Molecule:
    """Read a molecule from V3000 molfile text.
    
    Args:
        source: Molfile text, or an iterable of its lines.
        mode: Reader strictness.
        options: Reader options.
    
    Returns:
        The parsed molecule.
    """
    with MDLV3000Reader(source, mode=mode, options=options) as reader:
        return reader.read()


def read_file(
    path: str | os.PathLike[str],
    *,
    mode: Mode = Mode.RELAXED,
    options: ReaderOptions | None = None,
) -> Molecule:
    """Read a molecule from a V3000 molfile on disk."""
    with MDLV3000Reader(open(path, encoding="utf-8"), mode=mode, options=options) as reader:
        return reader.read()
