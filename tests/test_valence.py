"""Tests for implicit hydrogen assignment."""

from __future__ import annotations

import pytest
from conftest import build_molfile

from mdlv3000 import read_molfile
from mdlv3000.elements import BondOrder
from mdlv3000.transform import apply_atom_valence, apply_valence_model
from mdlv3000.types import Molecule


def single_atom(symbol: str, atomic_number: int, charge: int = 0) -> Molecule:
    mol = Molecule()
    mol.add_atom(symbol, atomic_number=atomic_number, charge=charge)
    return mol


class TestApplyValenceModel:
    """Test apply_valence_model."""

    @pytest.mark.parametrize("symbol,atomic_number,charge,expected_h", [
        ("C", 6, 0, 4),
        ("N", 7, 0, 3),
        ("O", 8, 0, 2),
        ("F", 9, 0, 1),
        ("S", 16, 0, 2),
        ("Cl", 17, 0, 1),
        ("N", 7, 1, 4),
        ("O", 8, -1, 1),
        ("O", 8, 1, 3),
        ("B", 5, -1, 4),
        ("Na", 11, 1, 0),
        ("Cl", 17, -1, 0),
    ])
    def test_isolated_atoms(self, symbol, atomic_number, charge, expected_h):
        """Hydrides of isolated atoms and ions."""
        mol = single_atom(symbol, atomic_number, charge)
        assert apply_valence_model(mol) is False
        assert mol.atoms[0].implicit_hydrogens == expected_h

    def test_ethene(self):
        """Double bonds count twice."""
        mol = Molecule()
        c1 = mol.add_atom("C", atomic_number=6)
        c2 = mol.add_atom("C", atomic_number=6)
        mol.add_bond(c1, c2, order=BondOrder.DOUBLE)
        apply_valence_model(mol)
        assert [a.implicit_hydrogens for a in mol.atoms] == [2, 2]
        assert [a.valence for a in mol.atoms] == [4, 4]

    def test_hypervalent_sulfur(self):
        """Sulfur steps up to its next allowed valence."""
        mol = Molecule()
        s = mol.add_atom("S", atomic_number=16)
        for _ in range(3):
            c = mol.add_atom("C", atomic_number=6)
            mol.add_bond(s, c)
        apply_valence_model(mol)
        assert mol.atoms[s].valence == 4
        assert mol.atoms[s].implicit_hydrogens == 1

    def test_over_valent(self):
        """An atom above every allowed valence keeps its bond sum."""
        mol = Molecule()
        c = mol.add_atom("C", atomic_number=6)
        for _ in range(5):
            mol.add_bond(c, mol.add_atom("F", atomic_number=9))
        apply_valence_model(mol)
        assert mol.atoms[c].valence == 5
        assert mol.atoms[c].implicit_hydrogens == 0

    @pytest.mark.parametrize("electrons,expected_h", [(1, 3), (2, 2)])
    def test_radicals(self, electrons, expected_h):
        """Unpaired electrons take the place of hydrogens."""
        mol = single_atom("C", 6)
        for _ in range(electrons):
            mol.add_single_electron(0)
        apply_valence_model(mol)
        atom = mol.atoms[0]
        assert atom.implicit_hydrogens == expected_h
        assert atom.valence == 4

    def test_pseudo_atom(self):
        """Pseudo atoms get no hydrogens."""
        mol = Molecule()
        r = mol.add_pseudo_atom("R1")
        c = mol.add_atom("C", atomic_number=6)
        mol.add_bond(r, c)
        apply_valence_model(mol)
        assert mol.atoms[r].implicit_hydrogens == 0
        assert mol.atoms[c].implicit_hydrogens == 3

    def test_query_bond(self):
        """Atoms on query bonds are skipped and mark a query molecule."""
        mol = Molecule()
        a = mol.add_atom("C", atomic_number=6)
        b = mol.add_atom("C", atomic_number=6)
        c = mol.add_atom("O", atomic_number=8)
        mol.add_bond(a, b, order=BondOrder.UNSET)
        mol.add_bond(b, c)
        assert apply_valence_model(mol) is True
        assert mol.is_query
        assert mol.atoms[a].implicit_hydrogens is None
        assert mol.atoms[b].implicit_hydrogens is None
        assert mol.atoms[c].implicit_hydrogens == 1


class TestExplicitValence:
    """Test apply_atom_valence with a VAL setting."""

    @pytest.mark.parametrize("valence,explicit,unpaired,expected_h", [
        (3, 0, 0, 3),
        (3, 2, 0, 1),
        (0, 0, 0, 0),
        (2, 3, 0, 0),
        (4, 2, 1, 3),
    ])
    def test_explicit_valence(self, valence, explicit, unpaired, expected_h):
        """Hydrogens fill the explicit valence."""
        mol = single_atom("C", 6)
        atom = mol.atoms[0]
        atom.valence = valence
        apply_atom_valence(atom, explicit, unpaired)
        assert atom.implicit_hydrogens == expected_h
        assert atom.valence == valence

    def test_val_from_molfile(self):
        """VAL=15 means no hydrogens at all."""
        mol = read_molfile(build_molfile(["C 0 0 0 0 VAL=15", "N 1 1 0 0 VAL=4"]))
        assert mol.atoms[0].implicit_hydrogens == 0
        assert mol.atoms[1].implicit_hydrogens == 4


class TestValenceIdentity:
    """Bond order sum plus hydrogens matches the resolved valence."""

    def test_identity(self, sample_molfiles):
        """Checked over a set of ordinary molecules."""
        for text in sample_molfiles:
            mol = read_molfile(text)
            for atom in mol.atoms:
                unpaired = mol.single_electron_count(atom.idx)
                total = mol.bond_order_sum(atom.idx) + atom.implicit_hydrogens - unpaired
                assert total == atom.valence, f"{atom.symbol} in {mol.title!r}"
