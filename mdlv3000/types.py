"""
Core molecular data types.

This module defines the data structures a connection table is read into:
Atom, Bond and Molecule, plus the substructure groups and tetrahedral stereo
elements that hang off a molecule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Final, Iterator

from .elements import (
    BondOrder,
    BondStereo,
    SpinMultiplicity,
)

# Property key for the substructure group list
CTAB_SGROUPS: Final[str] = "ctab_sgroups"


class Dimensionality(IntEnum):
    """Coordinate dimensionality of a molecule."""

    UNKNOWN = -1
    ZERO_D = 0
    TWO_D = 2
    THREE_D = 3


class SgroupType(Enum):
    """Substructure group kinds."""

    CTAB_ABBREVIATION = "SUP"
    EXT_MULTICENTER = "MUL"


class StereoGroupKind(Enum):
    """Enhanced stereo collection kinds."""

    ABSOLUTE = "ABS"
    RELATIVE = "REL"
    RACEMIC = "RAC"


class Winding(Enum):
    """Arrangement of carriers 2-4 looking from carrier 1 toward the focus."""

    CLOCKWISE = "@@"
    ANTICLOCKWISE = "@"

    def invert(self) -> "Winding":
        """Get the opposite winding."""
        if self is Winding.CLOCKWISE:
            return Winding.ANTICLOCKWISE
        return Winding.CLOCKWISE


@dataclass(frozen=True, slots=True)
class StereoGroup:
    """Stereo group tag, e.g. AND1 (racemic 1) or OR2 (relative 2)."""

    kind: StereoGroupKind
    number: int

    def __str__(self) -> str:
        if self.kind is StereoGroupKind.ABSOLUTE:
            return "abs"
        prefix = "&" if self.kind is StereoGroupKind.RACEMIC else "or"
        return f"{prefix}{self.number}"


@dataclass(slots=True)
class TetrahedralStereo:
    """Tetrahedral stereo element.

    Attributes:
        focus: Index of the stereocenter.
        carriers: Four atom indices surrounding the focus. An implicit
            hydrogen (or lone pair) is represented by the focus index.
        winding: Arrangement of carriers[1:] seen from carriers[0].
        group: Stereo group tag, or None if untagged.
    """

    focus: int
    carriers: tuple[int, int, int, int]
    winding: Winding
    group: StereoGroup | None = None


@dataclass(slots=True)
class Sgroup:
    """Substructure group.

    Attributes:
        type: Group kind.
        atoms: Indices of member atoms.
        bonds: Indices of member (or crossing) bonds.
        subscript: Display label, for abbreviations.
    """

    type: SgroupType
    atoms: list[int] = field(default_factory=list)
    bonds: list[int] = field(default_factory=list)
    subscript: str | None = None

    def add_atom(self, atom_idx: int) -> None:
        """Add a member atom."""
        self.atoms.append(atom_idx)

    def add_bond(self, bond_idx: int) -> None:
        """Add a member bond."""
        self.bonds.append(bond_idx)


@dataclass(slots=True)
class Bond:
    """Represents a chemical bond between two atoms.

    Attributes:
        idx: Unique index of this bond in the molecule.
        atom1_idx: Index of the begin atom.
        atom2_idx: Index of the end atom.
        order: Bond order, UNSET for query orders.
        stereo: Wedge display, relative to the begin atom.
        id: Identifier the bond was declared with in the file.
    """

    idx: int
    atom1_idx: int
    atom2_idx: int
    order: BondOrder = BondOrder.SINGLE
    stereo: BondStereo = BondStereo.NONE
    id: str | None = None

    def other_atom(self, atom_idx: int) -> int:
        """Get the index of the atom on the other end of this bond.

        Args:
            atom_idx: Index of one atom in the bond.

        Returns:
            Index of the other atom.

        Raises:
            ValueError: If atom_idx is not part of this bond.
        """
        if atom_idx == self.atom1_idx:
            return self.atom2_idx
        if atom_idx == self.atom2_idx:
            return self.atom1_idx
        raise ValueError(f"Atom {atom_idx} not in bond {self.idx}")

    def __contains__(self, atom_idx: int) -> bool:
        """Check if atom is part of this bond."""
        return atom_idx in (self.atom1_idx, self.atom2_idx)


@dataclass(slots=True)
class Atom:
    """Represents an atom in a molecule.

    Attributes:
        idx: Unique index of this atom in the molecule.
        symbol: Element symbol, or the label of a pseudo atom.
        atomic_number: Atomic number, 0 for pseudo atoms.
        charge: Formal charge.
        isotope: Mass number, or None for natural abundance.
        is_pseudo: True for generic, R-group and unrecognized atoms.
        point2d: 2D coordinates, once dimensionality is resolved.
        point3d: 3D coordinates.
        valence: Explicit (VAL) or resolved valence.
        implicit_hydrogens: Implicit hydrogen count, None until resolved.
        stereo_parity: 0D parity hint (1 or 2).
        spin_multiplicity: Radical state.
        id: Identifier the atom was declared with in the file.
        bond_indices: Indices of bonds connected to this atom.
    """

    idx: int
    symbol: str
    atomic_number: int = 0
    charge: int = 0
    isotope: int | None = None
    is_pseudo: bool = False
    point2d: tuple[float, float] | None = None
    point3d: tuple[float, float, float] | None = None
    valence: int | None = None
    implicit_hydrogens: int | None = None
    stereo_parity: int | None = None
    spin_multiplicity: SpinMultiplicity | None = None
    id: str | None = None
    bond_indices: list[int] = field(default_factory=list)

    def degree(self) -> int:
        """Number of explicit bonds to this atom."""
        return len(self.bond_indices)

    def neighbors(self, mol: "Molecule") -> Iterator[int]:
        """Iterate over indices of neighboring atoms.

        Args:
            mol: Parent molecule.

        Yields:
            Indices of atoms bonded to this atom.
        """
        for bond_idx in self.bond_indices:
            bond = mol.bonds[bond_idx]
            yield bond.other_atom(self.idx)

    def get_bonds(self, mol: "Molecule") -> Iterator[Bond]:
        """Iterate over bonds connected to this atom.

        Args:
            mol: Parent molecule.

        Yields:
            Bond objects connected to this atom.
        """
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx]


@dataclass
class Molecule:
    """Represents a molecular structure read from a connection table.

    Attributes:
        atoms: List of atoms in the molecule.
        bonds: List of bonds in the molecule.
        title: Title line from the molfile header.
        comment: Comment line from the molfile header.
        properties: Free-form keyed properties (e.g. CTAB_SGROUPS).
        single_electrons: Atom index for each unpaired electron.
        stereo_elements: Tetrahedral stereo elements.
        dimensionality: Coordinate dimensionality.
        is_query: True if the molecule carries query bonds.

    Example:
        >>> mol = Molecule()
        >>> c1 = mol.add_atom("C", atomic_number=6)
        >>> c2 = mol.add_atom("C", atomic_number=6)
        >>> mol.add_bond(c1, c2)
        0
        >>> len(mol)
        2
    """

    atoms: list[Atom] = field(default_factory=list)
    bonds: list[Bond] = field(default_factory=list)
    title: str | None = None
    comment: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    single_electrons: list[int] = field(default_factory=list)
    stereo_elements: list[TetrahedralStereo] = field(default_factory=list)
    dimensionality: Dimensionality = Dimensionality.UNKNOWN
    is_query: bool = False

    def __len__(self) -> int:
        """Return number of atoms."""
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        """Iterate over atoms."""
        return iter(self.atoms)

    def add_atom(
        self,
        symbol: str,
        *,
        atomic_number: int = 0,
        charge: int = 0,
        isotope: int | None = None,
        point3d: tuple[float, float, float] | None = None,
        id: str | None = None,
    ) -> int:
        """Add an element atom to the molecule.

        Args:
            symbol: Element symbol.
            atomic_number: Atomic number.
            charge: Formal charge.
            isotope: Mass number.
            point3d: Coordinates.
            id: File identifier.

        Returns:
            Index of the newly added atom.
        """
        idx = len(self.atoms)
        self.atoms.append(Atom(
            idx=idx,
            symbol=symbol,
            atomic_number=atomic_number,
            charge=charge,
            isotope=isotope,
            point3d=point3d,
            id=id,
        ))
        return idx

    def add_pseudo_atom(
        self,
        symbol: str,
        *,
        point3d: tuple[float, float, float] | None = None,
        id: str | None = None,
    ) -> int:
        """Add a pseudo atom (generic, R-group or unknown symbol).

        Returns:
            Index of the newly added atom.
        """
        idx = len(self.atoms)
        self.atoms.append(Atom(
            idx=idx,
            symbol=symbol,
            is_pseudo=True,
            point3d=point3d,
            id=id,
        ))
        return idx

    def add_bond(
        self,
        atom1_idx: int,
        atom2_idx: int,
        *,
        order: BondOrder = BondOrder.SINGLE,
        stereo: BondStereo = BondStereo.NONE,
        id: str | None = None,
    ) -> int:
        """Add a bond between two atoms.

        Args:
            atom1_idx: Index of the begin atom.
            atom2_idx: Index of the end atom.
            order: Bond order.
            stereo: Wedge display.
            id: File identifier.

        Returns:
            Index of the newly added bond.

        Raises:
            IndexError: If atom indices are out of bounds.
        """
        if atom1_idx >= len(self.atoms) or atom2_idx >= len(self.atoms):
            raise IndexError(f"Atom index out of bounds: {atom1_idx}, {atom2_idx}")

        idx = len(self.bonds)
        self.bonds.append(Bond(
            idx=idx,
            atom1_idx=atom1_idx,
            atom2_idx=atom2_idx,
            order=order,
            stereo=stereo,
            id=id,
        ))
        self.atoms[atom1_idx].bond_indices.append(idx)
        self.atoms[atom2_idx].bond_indices.append(idx)
        return idx

    def add_single_electron(self, atom_idx: int) -> None:
        """Place an unpaired electron on an atom."""
        if atom_idx >= len(self.atoms):
            raise IndexError(f"Atom index out of bounds: {atom_idx}")
        self.single_electrons.append(atom_idx)

    def single_electron_count(self, atom_idx: int) -> int:
        """Number of unpaired electrons on an atom."""
        return self.single_electrons.count(atom_idx)

    def add_stereo_element(self, element: TetrahedralStereo) -> None:
        """Append a stereo element."""
        self.stereo_elements.append(element)

    def set_stereo_elements(self, elements: list[TetrahedralStereo]) -> None:
        """Replace all stereo elements."""
        self.stereo_elements = list(elements)

    @property
    def sgroups(self) -> list[Sgroup]:
        """Substructure groups, empty if none were read."""
        return self.properties.get(CTAB_SGROUPS, [])

    def add_sgroup(self, sgroup: Sgroup) -> None:
        """Append a substructure group, creating the list on first use."""
        self.properties.setdefault(CTAB_SGROUPS, []).append(sgroup)

    def get_bonds(self, atom_idx: int) -> Iterator[Bond]:
        """Iterate over bonds connected to an atom."""
        return self.atoms[atom_idx].get_bonds(self)

    def neighbors(self, atom_idx: int) -> Iterator[int]:
        """Iterate over neighbor indices of an atom."""
        return self.atoms[atom_idx].neighbors(self)

    def get_bond_between(self, atom1_idx: int, atom2_idx: int) -> Bond | None:
        """Find the bond between two atoms.

        Args:
            atom1_idx: Index of the first atom.
            atom2_idx: Index of the second atom.

        Returns:
            Bond object if found, None otherwise.
        """
        for bond_idx in self.atoms[atom1_idx].bond_indices:
            bond = self.bonds[bond_idx]
            if atom1_idx in bond and atom2_idx in bond:
                return bond
        return None

    def bond_order_sum(self, atom_idx: int) -> int | None:
        """Sum of bond orders at an atom, or None if a query bond is attached."""
        total = 0
        for bond in self.get_bonds(atom_idx):
            if bond.order == BondOrder.UNSET:
                return None
            total += int(bond.order)
        return total

    def atom_by_id(self, atom_id: str | int) -> Atom | None:
        """Find the last atom declared with a file identifier."""
        atom_id = str(atom_id)
        for atom in reversed(self.atoms):
            if atom.id == atom_id:
                return atom
        return None

    @property
    def num_atoms(self) -> int:
        """Number of atoms in the molecule."""
        return len(self.atoms)

    @property
    def num_bonds(self) -> int:
        """Number of bonds in the molecule."""
        return len(self.bonds)
