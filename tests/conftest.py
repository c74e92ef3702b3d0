"""Test configuration and fixtures for mdlv3000 tests."""

from __future__ import annotations

from typing import Sequence

import pytest

PROGRAM_LINE = "  0  0  0     0  0            999 V3000"


def v30(record: str) -> str:
    """Prefix a record with the V3000 line marker."""
    return f"M  V30 {record}"


def header(title: str = "", dims: str = "2D", comment: str = "") -> list[str]:
    """Four header lines with the dimensional code at column 20."""
    info = f"  mdlv3000{'':10}{dims}"
    return [title, info, comment, PROGRAM_LINE]


def build_molfile(
    atoms: Sequence[str],
    bonds: Sequence[str] = (),
    *,
    title: str = "",
    dims: str = "2D",
    chiral: int = 0,
    sgroups: Sequence[str] = (),
    collections: Sequence[str] = (),
) -> str:
    """Assemble a V3000 molfile.
    
    Args:
        atoms: Atom records without their index, e.g. ``"C 0 0 0 0"``.
        bonds: Bond records without their index, e.g. ``"1 1 2"``.
        title: Title line.
        dims: Dimensional code for the header ("2D", "3D" or "").
        chiral: Chiral flag for the COUNTS line.
        sgroups: Full Sgroup records, e.g. ``"1 SUP 0 ATOMS=(1 1)"``.
        collections: Full collection records.
    
    Returns:
        Molfile text, readable by RDKit as well.
    """
    lines = header(title, dims)
    lines.append(v30("BEGIN CTAB"))
    lines.append(v30(f"COUNTS {len(atoms)} {len(bonds)} {len(sgroups)} 0 {chiral}"))
    lines.append(v30("BEGIN ATOM"))
    lines.extend(v30(f"{i} {record}") for i, record in enumerate(atoms, 1))
    lines.append(v30("END ATOM"))
    if bonds:
        lines.append(v30("BEGIN BOND"))
        lines.extend(v30(f"{i} {record}") for i, record in enumerate(bonds, 1))
        lines.append(v30("END BOND"))
    if sgroups:
        lines.append(v30("BEGIN SGROUP"))
        lines.extend(v30(record) for record in sgroups)
        lines.append(v30("END SGROUP"))
    if collections:
        lines.append(v30("BEGIN COLLECTION"))
        lines.extend(v30(record) for record in collections)
        lines.append(v30("END COLLECTION"))
    lines.append(v30("END CTAB"))
    lines.append("M  END")
    return "\n".join(lines) + "\n"


@pytest.fixture
def ethanol_molfile() -> str:
    """Ethanol with 2D coordinates."""
    return build_molfile(
        ["C -1.2990 -0.2500 0 0", "C 0.0000 0.5000 0 0", "O 1.2990 -0.2500 0 0"],
        ["1 1 2", "1 2 3"],
        title="ethanol",
    )


@pytest.fixture
def acetic_acid_molfile() -> str:
    """Acetic acid with a double bond."""
    return build_molfile(
        [
            "C -1.2990 -0.2500 0 0",
            "C 0.0000 0.5000 0 0",
            "O 0.0000 2.0000 0 0",
            "O 1.2990 -0.2500 0 0",
        ],
        ["1 1 2", "2 2 3", "1 2 4"],
    )


@pytest.fixture
def chiral_center_records() -> tuple[list[str], list[str]]:
    """CHFClBr drawn in 2D with an up wedge to fluorine."""
    atoms = [
        "C 0.0000 0.0000 0 0",
        "F 0.0000 1.0000 0 0",
        "Cl -0.8660 -0.5000 0 0",
        "Br 0.8660 -0.5000 0 0",
    ]
    bonds = ["1 1 2 CFG=1", "1 1 3", "1 1 4"]
    return atoms, bonds


@pytest.fixture
def sample_molfiles(ethanol_molfile, acetic_acid_molfile) -> list[str]:
    """Small organic molecules without query features."""
    nitromethane = build_molfile(
        [
            "C -1.5000 0.0000 0 0",
            "N 0.0000 0.0000 0 0 CHG=1",
            "O 0.7500 1.2990 0 0",
            "O 0.7500 -1.2990 0 0 CHG=-1",
        ],
        ["1 1 2", "2 2 3", "1 2 4"],
    )
    dmso = build_molfile(
        [
            "S 0.0000 0.0000 0 0",
            "O 0.0000 1.5000 0 0",
            "C -1.2990 -0.7500 0 0",
            "C 1.2990 -0.7500 0 0",
        ],
        ["2 1 2", "1 1 3", "1 1 4"],
    )
    ammonium_chloride = build_molfile(
        ["N 0.0000 0.0000 0 0 CHG=1", "Cl 2.0000 0.0000 0 0 CHG=-1"],
    )
    acetonitrile = build_molfile(
        ["C -1.5000 0.0000 0 0", "C 0.0000 0.0000 0 0", "N 1.5000 0.0000 0 0"],
        ["1 1 2", "3 2 3"],
    )
    return [
        ethanol_molfile,
        acetic_acid_molfile,
        nitromethane,
        dmso,
        ammonium_chloride,
        acetonitrile,
    ]
