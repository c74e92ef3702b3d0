"""
Chemical elements and constants.

This module provides element data, periodic table information, bond and
radical enumerations, and the MDL valence model used to derive implicit
hydrogen counts for atoms read from a connection table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Final, FrozenSet


class BondOrder(IntEnum):
    """Bond order enumeration.

    ``UNSET`` marks a query bond order (CTAB bond types 4-8) that cannot
    contribute to a valence sum.
    """
    
    UNSET = 0
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    
    def __str__(self) -> str:
        return self.name.lower()


class BondStereo(IntEnum):
    """Wedge display of a bond, as given by the bond ``CFG`` option."""
    
    NONE = 0
    UP = 1
    UP_OR_DOWN = 2
    DOWN = 3


class SpinMultiplicity(IntEnum):
    """Radical state from the atom ``RAD`` option."""
    
    NONE = 0
    DIVALENT_SINGLET = 1
    MONOVALENT = 2
    DIVALENT_TRIPLET = 3
    
    @property
    def single_electrons(self) -> int:
        """Number of unpaired electrons this radical state carries."""
        return _SINGLE_ELECTRONS[self]


_SINGLE_ELECTRONS: Final[dict[SpinMultiplicity, int]] = {
    SpinMultiplicity.NONE: 0,
    SpinMultiplicity.DIVALENT_SINGLET: 2,
    SpinMultiplicity.MONOVALENT: 1,
    SpinMultiplicity.DIVALENT_TRIPLET: 2,
}


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element data.
    
    Attributes:
        atomic_number: Atomic number (proton count).
        symbol: Element symbol (e.g., "C", "Cl").
        name: Full element name.
        default_valence: Common valence for organic chemistry.
    """
    
    atomic_number: int
    symbol: str
    name: str
    default_valence: int | None = None
    
    # Class-level registry
    _by_symbol: ClassVar[dict[str, "Element"]] = {}
    _by_number: ClassVar[dict[int, "Element"]] = {}
    
    def __post_init__(self) -> None:
        Element._by_symbol[self.symbol] = self
        Element._by_number[self.atomic_number] = self
    
    @classmethod
    def from_symbol(cls, symbol: str) -> "Element | None":
        """Look up element by symbol.

        Molfile symbols are case-sensitive: "Co" is cobalt, "CO" is not an
        element.
        """
        return cls._by_symbol.get(symbol)
    
    @classmethod
    def from_atomic_number(cls, num: int) -> "Element | None":
        """Look up element by atomic number."""
        return cls._by_number.get(num)


# Initialize periodic table elements
# Common valences are used as a fallback where the MDL model has no entry
_ELEMENTS_DATA: Final[list[tuple[int, str, str, int | None]]] = [
    # (atomic_number, symbol, name, default_valence)
    (1, "H", "Hydrogen", 1),
    (2, "He", "Helium", None),
    (3, "Li", "Lithium", 1),
    (4, "Be", "Beryllium", 2),
    (5, "B", "Boron", 3),
    (6, "C", "Carbon", 4),
    (7, "N", "Nitrogen", 3),
    (8, "O", "Oxygen", 2),
    (9, "F", "Fluorine", 1),
    (10, "Ne", "Neon", None),
    (11, "Na", "Sodium", 1),
    (12, "Mg", "Magnesium", 2),
    (13, "Al", "Aluminum", 3),
    (14, "Si", "Silicon", 4),
    (15, "P", "Phosphorus", 3),
    (16, "S", "Sulfur", 2),
    (17, "Cl", "Chlorine", 1),
    (18, "Ar", "Argon", None),
    (19, "K", "Potassium", 1),
    (20, "Ca", "Calcium", 2),
    (21, "Sc", "Scandium", None),
    (22, "Ti", "Titanium", None),
    (23, "V", "Vanadium", None),
    (24, "Cr", "Chromium", None),
    (25, "Mn", "Manganese", None),
    (26, "Fe", "Iron", None),
    (27, "Co", "Cobalt", None),
    (28, "Ni", "Nickel", None),
    (29, "Cu", "Copper", None),
    (30, "Zn", "Zinc", 2),
    (31, "Ga", "Gallium", 3),
    (32, "Ge", "Germanium", 4),
    (33, "As", "Arsenic", 3),
    (34, "Se", "Selenium", 2),
    (35, "Br", "Bromine", 1),
    (36, "Kr", "Krypton", None),
    (37, "Rb", "Rubidium", 1),
    (38, "Sr", "Strontium", 2),
    (39, "Y", "Yttrium", None),
    (40, "Zr", "Zirconium", None),
    (41, "Nb", "Niobium", None),
    (42, "Mo", "Molybdenum", None),
    (43, "Tc", "Technetium", None),
    (44, "Ru", "Ruthenium", None),
    (45, "Rh", "Rhodium", None),
    (46, "Pd", "Palladium", None),
    (47, "Ag", "Silver", 1),
    (48, "Cd", "Cadmium", 2),
    (49, "In", "Indium", 3),
    (50, "Sn", "Tin", 4),
    (51, "Sb", "Antimony", 3),
    (52, "Te", "Tellurium", 2),
    (53, "I", "Iodine", 1),
    (54, "Xe", "Xenon", None),
    (55, "Cs", "Cesium", 1),
    (56, "Ba", "Barium", 2),
    (57, "La", "Lanthanum", None),
    (58, "Ce", "Cerium", None),
    (59, "Pr", "Praseodymium", None),
    (60, "Nd", "Neodymium", None),
    (61, "Pm", "Promethium", None),
    (62, "Sm", "Samarium", None),
    (63, "Eu", "Europium", None),
    (64, "Gd", "Gadolinium", None),
    (65, "Tb", "Terbium", None),
    (66, "Dy", "Dysprosium", None),
    (67, "Ho", "Holmium", None),
    (68, "Er", "Erbium", None),
    (69, "Tm", "Thulium", None),
    (70, "Yb", "Ytterbium", None),
    (71, "Lu", "Lutetium", None),
    (72, "Hf", "Hafnium", None),
    (73, "Ta", "Tantalum", None),
    (74, "W", "Tungsten", None),
    (75, "Re", "Rhenium", None),
    (76, "Os", "Osmium", None),
    (77, "Ir", "Iridium", None),
    (78, "Pt", "Platinum", None),
    (79, "Au", "Gold", 1),
    (80, "Hg", "Mercury", 2),
    (81, "Tl", "Thallium", 3),
    (82, "Pb", "Lead", 4),
    (83, "Bi", "Bismuth", 3),
    (84, "Po", "Polonium", 2),
    (85, "At", "Astatine", 1),
    (86, "Rn", "Radon", None),
    (87, "Fr", "Francium", 1),
    (88, "Ra", "Radium", 2),
    (89, "Ac", "Actinium", None),
    (90, "Th", "Thorium", None),
    (91, "Pa", "Protactinium", None),
    (92, "U", "Uranium", None),
    (93, "Np", "Neptunium", None),
    (94, "Pu", "Plutonium", None),
    (95, "Am", "Americium", None),
    (96, "Cm", "Curium", None),
    (97, "Bk", "Berkelium", None),
    (98, "Cf", "Californium", None),
    (99, "Es", "Einsteinium", None),
    (100, "Fm", "Fermium", None),
    (101, "Md", "Mendelevium", None),
    (102, "No", "Nobelium", None),
    (103, "Lr", "Lawrencium", None),
    (104, "Rf", "Rutherfordium", None),
    (105, "Db", "Dubnium", None),
    (106, "Sg", "Seaborgium", None),
    (107, "Bh", "Bohrium", None),
    (108, "Hs", "Hassium", None),
    (109, "Mt", "Meitnerium", None),
    (110, "Ds", "Darmstadtium", None),
    (111, "Rg", "Roentgenium", None),
    (112, "Cn", "Copernicium", None),
    (113, "Nh", "Nihonium", None),
    (114, "Fl", "Flerovium", None),
    (115, "Mc", "Moscovium", None),
    (116, "Lv", "Livermorium", None),
    (117, "Ts", "Tennessine", None),
    (118, "Og", "Oganesson", None),
]

# Initialize elements
ELEMENTS: Final[tuple[Element, ...]] = tuple(
    Element(num, sym, name, valence)
    for num, sym, name, valence in _ELEMENTS_DATA
)

# Hydrogen isotopes written with their own symbol in molfiles
HYDROGEN_ISOTOPES: Final[dict[str, int]] = {
    "D": 2,
    "T": 3,
}

# Generic query atoms that are kept as pseudo atoms
GENERIC_SYMBOLS: Final[FrozenSet[str]] = frozenset({
    "A", "Q", "*", "LP", "L",
})

# Outer (valence) electrons for main group elements
OUTER_ELECTRONS: Final[dict[int, int]] = {
    # Group 1
    1: 1,    # H
    3: 1,    # Li
    11: 1,   # Na
    19: 1,   # K
    37: 1,   # Rb
    55: 1,   # Cs
    87: 1,   # Fr
    # Group 2
    4: 2,    # Be
    12: 2,   # Mg
    20: 2,   # Ca
    38: 2,   # Sr
    56: 2,   # Ba
    88: 2,   # Ra
    # Group 13
    5: 3,    # B
    13: 3,   # Al
    31: 3,   # Ga
    49: 3,   # In
    81: 3,   # Tl
    # Group 14
    6: 4,    # C
    14: 4,   # Si
    32: 4,   # Ge
    50: 4,   # Sn
    82: 4,   # Pb
    # Group 15
    7: 5,    # N
    15: 5,   # P
    33: 5,   # As
    51: 5,   # Sb
    83: 5,   # Bi
    # Group 16
    8: 6,    # O
    16: 6,   # S
    34: 6,   # Se
    52: 6,   # Te
    84: 6,   # Po
    # Group 17
    9: 7,    # F
    17: 7,   # Cl
    35: 7,   # Br
    53: 7,   # I
    85: 7,   # At
}

# First-row elements cannot expand their octet
_PERIOD_TWO: Final[FrozenSet[int]] = frozenset({3, 4, 5, 6, 7, 8, 9})

# Allowed valences by (charge adjusted) outer electron count
_VALENCES_PERIOD_TWO: Final[dict[int, tuple[int, ...]]] = {
    1: (1,),
    2: (2,),
    3: (3,),
    4: (4,),
    5: (3, 5),
    6: (2,),
    7: (1,),
}

_VALENCES_HEAVY: Final[dict[int, tuple[int, ...]]] = {
    1: (1,),
    2: (2,),
    3: (3,),
    4: (4,),
    5: (3, 5),
    6: (2, 4, 6),
    7: (1, 3, 5, 7),
}

# Neutral heavy group 13/14 atoms whose lowest state keeps the s pair
_INERT_PAIR_VALENCES: Final[dict[int, tuple[int, ...]]] = {
    81: (1, 3),    # Tl
    50: (2, 4),    # Sn
    82: (2, 4),    # Pb
}


def symbol_to_atomic_number(symbol: str) -> int | None:
    """Get the atomic number for an element symbol.
    
    Args:
        symbol: Element symbol (e.g., "C", "Cl").
    
    Returns:
        Atomic number, or None if the symbol is not an element.
    """
    elem = Element.from_symbol(symbol)
    return elem.atomic_number if elem else None


def get_default_valence(atomic_num: int) -> int | None:
    """Get default valence for an element.
    
    Args:
        atomic_num: Atomic number.
    
    Returns:
        Default valence, or None if not applicable.
    """
    elem = Element.from_atomic_number(atomic_num)
    return elem.default_valence if elem else None


def get_outer_electrons(atomic_num: int) -> int:
    """Get number of outer (valence) electrons for a main group element.
    
    Args:
        atomic_num: Atomic number.
    
    Returns:
        Number of outer electrons, or 0 if unknown.
    """
    return OUTER_ELECTRONS.get(atomic_num, 0)


def allowed_valences(atomic_num: int, charge: int) -> tuple[int, ...]:
    """Valences the MDL model allows for an element in a charge state.

    A charged atom takes the valences of its isoelectronic neutral
    counterpart, so N+ behaves like C and O- like F. Only main group
    elements are listed; metals such as Zn or Ag have no entry. Group 1
    and 2 metals are listed for non-negative charges only.

    Args:
        atomic_num: Atomic number.
        charge: Formal charge.

    Returns:
        Ascending tuple of valences, empty if the model has no entry.
    """
    outer = get_outer_electrons(atomic_num)
    if outer == 0:
        return ()
    if outer <= 2 and atomic_num != 1 and charge < 0:
        return ()
    if charge == 0 and atomic_num in _INERT_PAIR_VALENCES:
        return _INERT_PAIR_VALENCES[atomic_num]

    electrons = outer - charge
    if atomic_num in _PERIOD_TWO or atomic_num == 1:
        # H+ and H- have no bonding capacity left
        if atomic_num == 1 and electrons != 1:
            return ()
        return _VALENCES_PERIOD_TWO.get(electrons, ())
    return _VALENCES_HEAVY.get(electrons, ())


def mdl_implicit_valence(atomic_num: int, charge: int, explicit_valence: int) -> int:
    """Resolve the valence of an atom under the MDL valence model.
    
    Args:
        atomic_num: Atomic number (0 for pseudo atoms).
        charge: Formal charge.
        explicit_valence: Bond order sum plus unpaired electrons.
    
    Returns:
        The smallest allowed valence that accommodates the explicit valence,
        or the explicit valence itself when no larger value is allowed or
        the element has no entry in the model.

    Example:
        >>> mdl_implicit_valence(6, 0, 2)
        4
        >>> mdl_implicit_valence(7, 0, 4)
        5
        >>> mdl_implicit_valence(30, 0, 0)
        0
    """
    valences = allowed_valences(atomic_num, charge)
    for valence in valences:
        if valence >= explicit_valence:
            return valence
    return explicit_valence
