"""
mdlv3000 - Pure Python MDL Molfile V3000 connection table reader.

A zero-dependency library that reads V3000 CTABs into a molecular graph
with implicit hydrogens, tetrahedral stereo and stereo groups resolved.

    >>> from mdlv3000 import read_molfile
    >>> mol = read_molfile(open("ethanol.mol").read())  # doctest: +SKIP
    >>> mol.num_atoms  # doctest: +SKIP
    3

Submodules:
    mdlv3000.reader    - V3000 parsing and reader options
    mdlv3000.stereo    - Tetrahedral stereo perception and stereo groups
    mdlv3000.transform - Implicit hydrogen assignment
    mdlv3000.geometry  - Coordinate dimensionality
"""

__version__ = "0.1.0"

# Core types
from mdlv3000.types import (
    CTAB_SGROUPS,
    Atom,
    Bond,
    Dimensionality,
    Molecule,
    Sgroup,
    SgroupType,
    StereoGroup,
    StereoGroupKind,
    TetrahedralStereo,
    Winding,
)

# Reading
from mdlv3000.reader import MDLV3000Reader, Mode, ReaderOptions, read_file, read_molfile

# Exceptions
from mdlv3000.exceptions import (
    ChemError,
    ConfigurationError,
    FieldParseError,
    FormatError,
    MolfileError,
    MolfileIOError,
    UnsupportedConstructWarning,
)

# Element data
from mdlv3000.elements import (
    BondOrder,
    BondStereo,
    Element,
    SpinMultiplicity,
    symbol_to_atomic_number,
)

# Submodules
from mdlv3000 import geometry, reader, stereo, transform

__all__ = [
    # Types
    "Atom", "Bond", "Molecule", "Sgroup", "SgroupType", "CTAB_SGROUPS",
    "Dimensionality", "StereoGroup", "StereoGroupKind", "TetrahedralStereo", "Winding",
    # Reading
    "MDLV3000Reader", "Mode", "ReaderOptions", "read_file", "read_molfile",
    # Exceptions
    "ChemError", "MolfileError", "FormatError", "FieldParseError",
    "MolfileIOError", "ConfigurationError", "UnsupportedConstructWarning",
    # Elements
    "Element", "BondOrder", "BondStereo", "SpinMultiplicity", "symbol_to_atomic_number",
    # Submodules
    "geometry", "reader", "stereo", "transform",
]
