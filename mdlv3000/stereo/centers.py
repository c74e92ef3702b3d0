"""
Tetrahedral stereocenter candidates.

A candidate has four single-bonded ligands (one of which may be an implicit
hydrogen) that are all constitutionally different. Ligands are compared by
symmetry class, computed by iterative refinement of atom invariants.
"""

from __future__ import annotations

from typing import Final, Hashable, Sequence

from mdlv3000.elements import BondOrder
from mdlv3000.types import Atom, Molecule

# B-, C, N+, Si, P+, Ge, As+, Sn
_TETRAHEDRAL_ELEMENTS: Final[frozenset[int]] = frozenset({5, 6, 7, 14, 15, 32, 33, 50})

# Ligand key shared by implicit and plain explicit hydrogens
_HYDROGEN: Final[tuple[str]] = ("H",)


def _rank(keys: Sequence[Hashable]) -> list[int]:
    """Replace each key by the rank of its value among the distinct keys."""
    ordering = {key: rank for rank, key in enumerate(sorted(set(keys)))}
    return [ordering[key] for key in keys]


def symmetry_classes(mol: Molecule) -> list[int]:
    """Partition atoms into constitutional symmetry classes.
    
    Starts from atom invariants and refines with neighbor classes and bond
    orders until the number of classes stops growing.
    
    Args:
        mol: Molecule with implicit hydrogens resolved.
    
    Returns:
        Class number per atom index. Equal numbers mean equivalent atoms.
    """
    invariants = [
        (
            atom.atomic_number,
            atom.symbol if atom.is_pseudo else "",
            atom.isotope or 0,
            atom.charge,
            atom.degree(),
            atom.implicit_hydrogens or 0,
            mol.single_electron_count(atom.idx),
        )
        for atom in mol.atoms
    ]
    classes = _rank(invariants)
    n_classes = len(set(classes))
    
    while True:
        keys = []
        for atom in mol.atoms:
            neighborhood = sorted(
                (classes[bond.other_atom(atom.idx)], int(bond.order))
                for bond in atom.get_bonds(mol)
            )
            keys.append((classes[atom.idx], tuple(neighborhood)))
        refined = _rank(keys)
        n_refined = len(set(refined))
        if n_refined == n_classes:
            return classes
        classes, n_classes = refined, n_refined


def _is_plain_hydrogen(atom: Atom) -> bool:
    return (
        atom.atomic_number == 1
        and atom.isotope is None
        and atom.charge == 0
        and atom.degree() == 1
    )


def is_tetrahedral_candidate(mol: Molecule, atom: Atom) -> bool:
    """Check the local geometry requirements of a tetrahedral center."""
    if atom.is_pseudo or atom.atomic_number not in _TETRAHEDRAL_ELEMENTS:
        return False
    hcount = atom.implicit_hydrogens or 0
    degree = atom.degree()
    if degree not in (3, 4) or hcount > 1 or degree + hcount != 4:
        return False
    if mol.single_electron_count(atom.idx):
        return False
    return all(bond.order == BondOrder.SINGLE for bond in atom.get_bonds(mol))


def find_tetrahedral_centers(mol: Molecule) -> list[int]:
    """Find atoms that are tetrahedral stereocenters by constitution.
    
    Args:
        mol: Molecule with implicit hydrogens resolved.
    
    Returns:
        Indices of stereocenter atoms, ascending.
    """
    classes: list[int] | None = None
    centers: list[int] = []
    
    for atom in mol.atoms:
        if not is_tetrahedral_candidate(mol, atom):
            continue
        if classes is None:
            classes = symmetry_classes(mol)
        
        ligands: list[Hashable] = []
        for nbr in atom.neighbors(mol):
            if _is_plain_hydrogen(mol.atoms[nbr]):
                ligands.append(_HYDROGEN)
            else:
                ligands.append(("atom", classes[nbr]))
        if atom.implicit_hydrogens:
            ligands.append(_HYDROGEN)
        
        if len(set(ligands)) == 4:
            centers.append(atom.idx)
    
    return centers
