"""
Implicit hydrogen assignment.

Molfiles do not list implicit hydrogens; they follow from the MDL valence
model, the atom's charge and its bond order sum.
"""

from __future__ import annotations

from mdlv3000.elements import mdl_implicit_valence
from mdlv3000.types import Atom, Molecule
from mdlv3000.utils import logger


def apply_atom_valence(atom: Atom, explicit_valence: int, unpaired: int) -> None:
    """Set valence and implicit hydrogen count of one atom.
    
    Args:
        atom: Atom to update.
        explicit_valence: Bond order sum plus unpaired electrons.
        unpaired: Unpaired electrons on the atom.
    """
    if atom.valence is not None:
        if atom.valence >= explicit_valence:
            atom.implicit_hydrogens = atom.valence - (explicit_valence - unpaired)
        else:
            atom.implicit_hydrogens = 0
        return
    
    implicit_valence = mdl_implicit_valence(atom.atomic_number, atom.charge, explicit_valence)
    if implicit_valence < explicit_valence:
        atom.valence = explicit_valence
        atom.implicit_hydrogens = 0
    else:
        atom.valence = implicit_valence
        atom.implicit_hydrogens = implicit_valence - explicit_valence


def apply_valence_model(mol: Molecule) -> bool:
    """Assign implicit hydrogens to every atom of a molecule.
    
    Atoms attached to a query bond are left unresolved and mark the
    molecule as a query.
    
    Args:
        mol: Molecule to update in place.
    
    Returns:
        True if the molecule is a query molecule.
    
    Example:
        >>> mol = Molecule()
        >>> c = mol.add_atom("C", atomic_number=6)
        >>> apply_valence_model(mol)
        False
        >>> mol.atoms[c].implicit_hydrogens
        4
    """
    for atom in mol.atoms:
        bond_order_sum = mol.bond_order_sum(atom.idx)
        if bond_order_sum is None:
            mol.is_query = True
            logger.warning("Cannot set valence for atom with query bonds: %s", atom.symbol)
            continue
        unpaired = mol.single_electron_count(atom.idx)
        apply_atom_valence(atom, bond_order_sum + unpaired, unpaired)
    return mol.is_query
