"""
V3000 connection table reading.

Submodules:
    commands - physical lines and continued commands
    options  - KEY=value option parsing
    blocks   - ATOM, BOND, SGROUP and COLLECTION block parsers
    finalize - dimensionality, implicit hydrogens and stereo
    ctab     - the reader and convenience functions
"""

from mdlv3000.reader.ctab import MDLV3000Reader, read_file, read_molfile
from mdlv3000.reader.settings import Mode, ReaderOptions

__all__ = [
    "MDLV3000Reader",
    "read_file",
    "read_molfile",
    "Mode",
    "ReaderOptions",
]
