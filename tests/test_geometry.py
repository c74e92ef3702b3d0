"""Tests for coordinate dimensionality."""

from __future__ import annotations

import pytest
from mdlv3000.geometry import apply_dimensionality, infer_dimensionality
from mdlv3000.reader.finalize import finalize_dimensionality
from mdlv3000.reader.settings import ReaderOptions
from mdlv3000.reader.state import ReadState
from mdlv3000.types import Dimensionality, Molecule


def molecule(*points) -> Molecule:
    mol = Molecule()
    for point in points:
        mol.add_atom("C", atomic_number=6, point3d=point)
    return mol


class TestInferDimensionality:
    """Test infer_dimensionality."""

    def test_all_zero(self):
        """No coordinates means 0D."""
        mol = molecule((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
        assert infer_dimensionality(mol) is Dimensionality.ZERO_D

    def test_empty(self):
        """An empty molecule is 0D."""
        assert infer_dimensionality(Molecule()) is Dimensionality.ZERO_D

    def test_triangle(self):
        """A flat triangle is 2D."""
        mol = molecule((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.5, 0.866, 0.0))
        assert infer_dimensionality(mol) is Dimensionality.TWO_D

    def test_z_makes_3d(self):
        """Any nonzero z is 3D, whatever the header says."""
        mol = molecule((1.0, 1.0, 0.0), (0.0, 0.0, 0.5))
        assert infer_dimensionality(mol, Dimensionality.TWO_D) is Dimensionality.THREE_D

    def test_axis_only_uses_hint(self):
        """Atoms on one axis fall back to the header hint."""
        mol = molecule((0.0, 0.0, 0.0), (1.5, 0.0, 0.0))
        assert infer_dimensionality(mol) is Dimensionality.ZERO_D
        assert infer_dimensionality(mol, Dimensionality.TWO_D) is Dimensionality.TWO_D


class TestApplyDimensionality:
    """Test apply_dimensionality."""

    def test_two_d(self):
        """2D projects onto x and y."""
        mol = molecule((1.0, 2.0, 0.0))
        apply_dimensionality(mol, Dimensionality.TWO_D)
        assert mol.atoms[0].point2d == (1.0, 2.0)
        assert mol.atoms[0].point3d is None
        assert mol.dimensionality is Dimensionality.TWO_D

    def test_zero_d(self):
        """0D removes coordinates."""
        mol = molecule((0.0, 0.0, 0.0))
        apply_dimensionality(mol, Dimensionality.ZERO_D)
        assert mol.atoms[0].point2d is None
        assert mol.atoms[0].point3d is None

    def test_three_d(self):
        """3D keeps coordinates."""
        mol = molecule((1.0, 2.0, 3.0))
        apply_dimensionality(mol, Dimensionality.THREE_D)
        assert mol.atoms[0].point3d == (1.0, 2.0, 3.0)


class TestFinalizeDimensionality:
    """Test finalize_dimensionality."""

    @pytest.mark.parametrize("points,hint", [
        (((0.0, 0.0, 0.0), (1.0, 1.0, 0.0)), Dimensionality.UNKNOWN),
        (((0.0, 0.0, 0.0), (1.0, 1.0, 1.0)), Dimensionality.UNKNOWN),
        (((0.0, 0.0, 0.0), (0.0, 0.0, 0.0)), Dimensionality.UNKNOWN),
        (((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)), Dimensionality.TWO_D),
        (((0.0, 0.0, 0.0), (0.0, 0.0, 0.0)), Dimensionality.THREE_D),
    ])
    def test_idempotent(self, points, hint):
        """Running the step twice gives the same result."""
        state = ReadState(mol=molecule(*points), dimensionality=hint)
        first = finalize_dimensionality(state, ReaderOptions())
        second = finalize_dimensionality(state, ReaderOptions())
        assert first is second
        assert state.mol.dimensionality is first

    def test_header_3d_kept(self):
        """A 3D header keeps flat coordinates as 3D."""
        state = ReadState(
            mol=molecule((1.0, 1.0, 0.0)),
            dimensionality=Dimensionality.THREE_D,
        )
        assert finalize_dimensionality(state, ReaderOptions()) is Dimensionality.THREE_D
        assert state.mol.atoms[0].point3d == (1.0, 1.0, 0.0)

    def test_force_3d(self):
        """Forcing 3D never downgrades coordinates."""
        state = ReadState(mol=molecule((1.0, 1.0, 0.0)))
        options = ReaderOptions(force_read_as_3d=True)
        assert finalize_dimensionality(state, options) is Dimensionality.THREE_D
        assert state.mol.atoms[0].point3d == (1.0, 1.0, 0.0)
