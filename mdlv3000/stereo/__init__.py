"""Tetrahedral stereo perception and stereo groups."""

from mdlv3000.stereo.centers import (
    find_tetrahedral_centers,
    is_tetrahedral_candidate,
    symmetry_classes,
)
from mdlv3000.stereo.groups import assign_stereo_groups, next_racemic_group
from mdlv3000.stereo.perception import (
    signed_volume,
    stereo_from_2d,
    stereo_from_3d,
    stereo_from_parity,
)

__all__ = [
    "find_tetrahedral_centers",
    "is_tetrahedral_candidate",
    "symmetry_classes",
    "assign_stereo_groups",
    "next_racemic_group",
    "signed_volume",
    "stereo_from_2d",
    "stereo_from_3d",
    "stereo_from_parity",
]
