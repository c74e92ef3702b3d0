"""
Coordinate dimensionality.

All atom coordinates are read as 3D. Once the whole atom block is known the
molecule is classified as 0D, 2D or 3D and the coordinates are converted to
match.
"""

from __future__ import annotations

from mdlv3000.types import Dimensionality, Molecule


def _coordinates(atom) -> tuple[float, float, float] | None:
    if atom.point3d is not None:
        return atom.point3d
    if atom.point2d is not None:
        return (atom.point2d[0], atom.point2d[1], 0.0)
    return None


def infer_dimensionality(
    mol: Molecule,
    hint: Dimensionality = Dimensionality.UNKNOWN,
) -> Dimensionality:
    """Classify coordinates as 3D, 2D or 0D.
    
    Any nonzero z makes the molecule 3D. Otherwise an atom with both x and y
    nonzero makes it 2D. Failing both, the header hint decides, and with no
    hint the molecule has no coordinates (0D).
    
    Args:
        mol: Molecule with coordinates in point3d (or point2d).
        hint: Dimensionality declared in the header.
    
    Returns:
        The inferred dimensionality, never UNKNOWN.
    """
    dimensions = Dimensionality.UNKNOWN
    for atom in mol.atoms:
        point = _coordinates(atom)
        if point is None:
            continue
        x, y, z = point
        if z != 0.0:
            dimensions = Dimensionality.THREE_D
            break
        if x != 0.0 and y != 0.0:
            dimensions = Dimensionality.TWO_D
    
    if dimensions is Dimensionality.UNKNOWN:
        dimensions = hint
    if dimensions is Dimensionality.UNKNOWN:
        dimensions = Dimensionality.ZERO_D
    return dimensions


def apply_dimensionality(mol: Molecule, dimensions: Dimensionality) -> None:
    """Convert atom coordinates to the given dimensionality.
    
    ZERO_D removes all coordinates, TWO_D projects onto (x, y) and THREE_D
    leaves point3d as read.
    """
    if dimensions is Dimensionality.ZERO_D:
        for atom in mol.atoms:
            atom.point2d = None
            atom.point3d = None
    elif dimensions is Dimensionality.TWO_D:
        for atom in mol.atoms:
            if atom.point3d is not None:
                x, y, _ = atom.point3d
                atom.point2d = (x, y)
                atom.point3d = None
    mol.dimensionality = dimensions
