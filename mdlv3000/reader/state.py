"""Mutable state shared by the block parsers during one read."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

from mdlv3000.types import Dimensionality, Molecule, StereoGroup

T = TypeVar("T")


class IdTable(Generic[T]):
    """Growable table from 1-based file identifiers to graph indices.
    
    Identifiers are usually small and sequential, so entries live in a list
    indexed by identifier. They need not be contiguous; unset slots read as
    None. Growing never drops stored entries.
    """
    
    __slots__ = ("_slots",)
    
    def __init__(self, capacity: int = 64) -> None:
        self._slots: list[T | None] = [None] * capacity
    
    @property
    def capacity(self) -> int:
        """Current number of slots."""
        return len(self._slots)
    
    def _grow(self, required: int) -> None:
        cap = len(self._slots)
        new_cap = max(cap + (cap >> 1), required + 1)
        self._slots.extend([None] * (new_cap - cap))
    
    def put(self, ident: int, value: T) -> None:
        """Store value under ident, replacing any earlier entry."""
        if ident < 0:
            raise ValueError(f"Negative identifier: {ident}")
        if ident >= len(self._slots):
            self._grow(ident)
        self._slots[ident] = value
    
    def get(self, ident: int) -> T | None:
        """Get the value stored under ident, or None."""
        if 0 <= ident < len(self._slots):
            return self._slots[ident]
        return None
    
    def __contains__(self, ident: int) -> bool:
        return self.get(ident) is not None
    
    def items(self) -> Iterator[tuple[int, T]]:
        """Iterate over (ident, value) for stored entries."""
        for ident, value in enumerate(self._slots):
            if value is not None:
                yield ident, value


@dataclass
class ReadState:
    """State for a single connection table read.
    
    Attributes:
        mol: Molecule under construction.
        dimensionality: Header hint, finalized after all atoms are read.
        chiral: Chiral flag from the COUNTS line.
        stereo_groups: Atom identifier -> stereo group, None without a
            COLLECTION block.
        parity_hints: Atom index -> 0D parity from atom CFG.
        atoms: Atom identifier -> atom index.
        bonds: Bond identifier -> bond index.
        rgroup_counter: Next number for R-group atoms without one.
    """
    
    mol: Molecule = field(default_factory=Molecule)
    dimensionality: Dimensionality = Dimensionality.UNKNOWN
    chiral: bool = False
    stereo_groups: dict[int, StereoGroup] | None = None
    parity_hints: dict[int, int] = field(default_factory=dict)
    atoms: IdTable[int] = field(default_factory=IdTable)
    bonds: IdTable[int] = field(default_factory=IdTable)
    rgroup_counter: int = 1
    
    def add_atom(self, ident: int, atom_idx: int) -> None:
        """Register an atom under its identifier (last one wins)."""
        self.atoms.put(ident, atom_idx)
    
    def add_bond(self, ident: int, bond_idx: int) -> None:
        """Register a bond under its identifier (last one wins)."""
        self.bonds.put(ident, bond_idx)
    
    def get_atom(self, ident: int) -> int | None:
        return self.atoms.get(ident)
    
    def get_bond(self, ident: int) -> int | None:
        return self.bonds.get(ident)
