"""
Post-parse derivation.

Runs once after ``END CTAB``: resolves coordinate dimensionality, assigns
implicit hydrogens, then perceives tetrahedral stereo and tags it with
stereo groups.
"""

from __future__ import annotations

from mdlv3000.geometry import apply_dimensionality, infer_dimensionality
from mdlv3000.reader.settings import ReaderOptions
from mdlv3000.reader.state import ReadState
from mdlv3000.stereo import (
    assign_stereo_groups,
    stereo_from_2d,
    stereo_from_3d,
    stereo_from_parity,
)
from mdlv3000.transform.valence import apply_valence_model
from mdlv3000.types import Dimensionality, Molecule, TetrahedralStereo
from mdlv3000.utils import logger


def finalize_dimensionality(state: ReadState, options: ReaderOptions) -> Dimensionality:
    """Resolve and apply the molecule's coordinate dimensionality.
    
    A 3D header or ``force_read_as_3d`` keeps coordinates as read.
    """
    if options.force_read_as_3d:
        state.dimensionality = Dimensionality.THREE_D
    elif state.dimensionality is not Dimensionality.THREE_D:
        state.dimensionality = infer_dimensionality(state.mol, state.dimensionality)
    apply_dimensionality(state.mol, state.dimensionality)
    logger.debug("Dimensionality resolved to %s", state.dimensionality.name)
    return state.dimensionality


def _parity_elements(state: ReadState) -> list[TetrahedralStereo]:
    elements = []
    for focus, parity in sorted(state.parity_hints.items()):
        element = stereo_from_parity(state.mol, focus, parity)
        if element is not None:
            elements.append(element)
    return elements


def finalize_stereochemistry(state: ReadState, options: ReaderOptions) -> None:
    """Create tetrahedral stereo elements and assign stereo groups.
    
    Skipped for query molecules and when stereo elements are disabled.
    """
    mol = state.mol
    if mol.is_query or not options.add_stereo_elements:
        return
    
    dims = state.dimensionality
    if dims is Dimensionality.THREE_D:
        elements = stereo_from_3d(mol)
    elif dims is Dimensionality.TWO_D:
        elements = stereo_from_2d(mol)
    elif dims is Dimensionality.ZERO_D and options.add_stereo_0d:
        elements = _parity_elements(state)
    else:
        elements = []
    
    mol.set_stereo_elements(elements)
    assign_stereo_groups(mol, state.stereo_groups, state.chiral)
    logger.debug("Created %d tetrahedral stereo elements", len(elements))


def finalize_molecule(state: ReadState, options: ReaderOptions) -> Molecule:
    """Run all post-parse steps on the molecule of a read.
    
    Args:
        state: State of a completed connection table read.
        options: Reader options.
    
    Returns:
        The finished molecule.
    """
    finalize_dimensionality(state, options)
    apply_valence_model(state.mol)
    finalize_stereochemistry(state, options)
    return state.mol
