"""
Tetrahedral stereo element creation.

Configurations come from 3D coordinates, from 2D coordinates plus wedge
bonds, or from 0D atom parity when there are no coordinates.
"""

from __future__ import annotations

import math
from typing import Final

from mdlv3000.elements import BondStereo
from mdlv3000.stereo.centers import find_tetrahedral_centers
from mdlv3000.types import Molecule, TetrahedralStereo, Winding

Point = tuple[float, float, float]

_EPSILON: Final[float] = 1e-6

_ELEVATION: Final[dict[BondStereo, int]] = {
    BondStereo.NONE: 0,
    BondStereo.UP: 1,
    BondStereo.DOWN: -1,
}


def signed_volume(p1: Point, p2: Point, p3: Point, p4: Point) -> float:
    """Determinant of (p2 - p1, p3 - p1, p4 - p1).
    
    Positive when p2, p3, p4 appear clockwise looking from p1 toward the
    center of the tetrahedron.
    """
    ax, ay, az = p2[0] - p1[0], p2[1] - p1[1], p2[2] - p1[2]
    bx, by, bz = p3[0] - p1[0], p3[1] - p1[1], p3[2] - p1[2]
    cx, cy, cz = p4[0] - p1[0], p4[1] - p1[1], p4[2] - p1[2]
    return (
        ax * (by * cz - bz * cy)
        + ay * (bz * cx - bx * cz)
        + az * (bx * cy - by * cx)
    )


def winding_of(points: list[Point]) -> Winding | None:
    """Winding of four carrier positions, or None if they are coplanar."""
    volume = signed_volume(*points)
    if abs(volume) < _EPSILON:
        return None
    return Winding.CLOCKWISE if volume > 0 else Winding.ANTICLOCKWISE


def stereo_from_3d(mol: Molecule) -> list[TetrahedralStereo]:
    """Create tetrahedral stereo elements from 3D coordinates.
    
    An implicit hydrogen is placed at the focus position.
    """
    elements: list[TetrahedralStereo] = []
    for focus in find_tetrahedral_centers(mol):
        atom = mol.atoms[focus]
        if atom.point3d is None:
            continue
        
        carriers = list(atom.neighbors(mol))
        points = [mol.atoms[nbr].point3d for nbr in carriers]
        if any(point is None for point in points):
            continue
        if len(carriers) == 3:
            carriers.append(focus)
            points.append(atom.point3d)
        
        winding = winding_of(points)
        if winding is not None:
            elements.append(TetrahedralStereo(focus, tuple(carriers), winding))
    return elements


def stereo_from_2d(mol: Molecule) -> list[TetrahedralStereo]:
    """Create tetrahedral stereo elements from 2D coordinates and wedges.
    
    Only wedges starting at the focus count. A wavy (UP_OR_DOWN) bond at
    the focus leaves the center undefined. Neighbor directions are
    normalized and lifted by +1 (up wedge) or -1 (down wedge); an implicit
    hydrogen sits at the focus.
    """
    elements: list[TetrahedralStereo] = []
    for focus in find_tetrahedral_centers(mol):
        atom = mol.atoms[focus]
        if atom.point2d is None:
            continue
        fx, fy = atom.point2d
        
        carriers: list[int] = []
        points: list[Point] = []
        has_wedge = False
        defined = True
        for bond in atom.get_bonds(mol):
            nbr = bond.other_atom(focus)
            point = mol.atoms[nbr].point2d
            elevation = 0
            if bond.atom1_idx == focus:
                if bond.stereo == BondStereo.UP_OR_DOWN:
                    defined = False
                    break
                elevation = _ELEVATION[bond.stereo]
                has_wedge = has_wedge or elevation != 0
            if point is None:
                defined = False
                break
            dx, dy = point[0] - fx, point[1] - fy
            length = math.hypot(dx, dy)
            if length == 0.0:
                defined = False
                break
            carriers.append(nbr)
            points.append((dx / length, dy / length, float(elevation)))
        
        if not defined or not has_wedge:
            continue
        if len(carriers) == 3:
            carriers.append(focus)
            points.append((0.0, 0.0, 0.0))
        
        winding = winding_of(points)
        if winding is not None:
            elements.append(TetrahedralStereo(focus, tuple(carriers), winding))
    return elements


def stereo_from_parity(mol: Molecule, focus: int, parity: int) -> TetrahedralStereo | None:
    """Create a tetrahedral stereo element from a 0D atom parity.
    
    Neighbors are numbered by atom index, with a hydrogen neighbor (or the
    implicit hydrogen, standing in as the focus) last.
    Parity 1 means neighbors 1-3 run clockwise with the last neighbor
    pointing away from the viewer; parity 2 means anticlockwise.
    
    Args:
        mol: Molecule.
        focus: Index of the atom carrying the parity.
        parity: 1 (odd) or 2 (even); other values give no element.
    
    Returns:
        The stereo element, or None.
    """
    if parity not in (1, 2):
        return None
    neighbors = sorted(mol.neighbors(focus))
    if len(neighbors) not in (3, 4):
        return None
    hydrogens = [nbr for nbr in neighbors if mol.atoms[nbr].atomic_number == 1]
    if len(neighbors) == 3:
        hydrogens.append(focus)
    if len(hydrogens) > 1:
        return None
    carriers = [nbr for nbr in neighbors if nbr not in hydrogens] + hydrogens
    winding = Winding.CLOCKWISE if parity == 1 else Winding.ANTICLOCKWISE
    return TetrahedralStereo(focus, tuple(carriers), winding)
