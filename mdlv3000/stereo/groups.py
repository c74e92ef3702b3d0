"""Stereo group (enhanced stereo) assignment."""

from __future__ import annotations

from typing import Mapping

from mdlv3000.types import Molecule, StereoGroup, StereoGroupKind

RACEMIC_1 = StereoGroup(StereoGroupKind.RACEMIC, 1)


def next_racemic_group(stereo_groups: Mapping[int, StereoGroup]) -> StereoGroup:
    """First racemic group after the highest one in use."""
    highest = max(
        (group.number for group in stereo_groups.values()
         if group.kind is StereoGroupKind.RACEMIC),
        default=0,
    )
    return StereoGroup(StereoGroupKind.RACEMIC, highest + 1)


def assign_stereo_groups(
    mol: Molecule,
    stereo_groups: Mapping[int, StereoGroup] | None,
    chiral: bool,
) -> None:
    """Tag tetrahedral stereo elements with their stereo group.
    
    With a stereo collection, elements whose focus atom is listed take that
    group. Unlisted elements go to a fresh racemic group if the chiral flag
    is off and stay untagged if it is on. Without a collection, a cleared
    chiral flag means every element is racemic group 1; a set flag leaves
    everything untagged (absolute).
    
    Args:
        mol: Molecule with stereo elements.
        stereo_groups: Atom identifier -> group from the COLLECTION block.
        chiral: Chiral flag from the COUNTS line.
    """
    if stereo_groups:
        default = None if chiral else next_racemic_group(stereo_groups)
        for element in mol.stereo_elements:
            focus = mol.atoms[element.focus]
            if focus.id is None:
                continue
            group = stereo_groups.get(int(focus.id))
            if group is not None:
                element.group = group
            elif default is not None:
                element.group = default
    elif not chiral:
        for element in mol.stereo_elements:
            element.group = RACEMIC_1
