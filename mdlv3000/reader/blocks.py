"""
Parsers for the ATOM, BOND, SGROUP and COLLECTION blocks.

Each ``read_*_block`` function is entered after its ``BEGIN`` command and
consumes records up to and including the matching ``END`` command, writing
into the shared ReadState.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterator, Union

from mdlv3000.elements import (
    GENERIC_SYMBOLS,
    HYDROGEN_ISOTOPES,
    BondOrder,
    BondStereo,
    SpinMultiplicity,
    symbol_to_atomic_number,
)
from mdlv3000.exceptions import FieldParseError, FormatError
from mdlv3000.reader.commands import CommandAssembler
from mdlv3000.reader.options import parse_id_list, parse_options
from mdlv3000.reader.settings import Mode, ReaderOptions
from mdlv3000.reader.state import ReadState
from mdlv3000.types import Sgroup, SgroupType, StereoGroup, StereoGroupKind
from mdlv3000.utils import logger, warn_unsupported

_ATOM_FIELDS: Final[tuple[str, ...]] = ("index", "type", "x", "y", "z", "aamap")
_BOND_FIELDS: Final[tuple[str, ...]] = ("index", "type", "atom 1", "atom 2")
_SGROUP_FIELDS: Final[tuple[str, ...]] = ("index", "type", "external index")

# VAL=15 is how molfiles spell a valence of zero
_ZERO_VALENCE: Final[int] = 15

_STEREO_GROUP_PREFIXES: Final[dict[str, StereoGroupKind]] = {
    "MDLV30/STERAC": StereoGroupKind.RACEMIC,
    "MDLV30/STEREL": StereoGroupKind.RELATIVE,
    "MDLV30/STEABS": StereoGroupKind.ABSOLUTE,
}


# =============================================================================
# Element symbol resolution
# =============================================================================

@dataclass(frozen=True, slots=True)
class ElementSymbol:
    """A real element, possibly with an implied mass number (D, T)."""
    atomic_number: int
    symbol: str
    mass_number: int | None = None


@dataclass(frozen=True, slots=True)
class GenericSymbol:
    """A generic query atom: A, Q, *, LP or L."""
    symbol: str


@dataclass(frozen=True, slots=True)
class RGroupSymbol:
    """An R-group attachment, numbered."""
    number: int

    @property
    def symbol(self) -> str:
        return f"R{self.number}"


@dataclass(frozen=True, slots=True)
class UnknownSymbol:
    """Anything else."""
    symbol: str


ResolvedSymbol = Union[ElementSymbol, GenericSymbol, RGroupSymbol, UnknownSymbol]


def resolve_element(
    symbol: str,
    state: ReadState,
    options: ReaderOptions,
) -> ResolvedSymbol:
    """Classify the type field of an atom record.

    R-group atoms without an explicit number take the next value of the
    state's counter; an explicit number resets the counter to it.

    Args:
        symbol: Atom type field.
        state: Read state holding the R-group counter.
        options: Reader options.

    Returns:
        The resolved symbol variant.
    """
    atomic_number = symbol_to_atomic_number(symbol)
    if atomic_number is not None:
        return ElementSymbol(atomic_number, symbol)

    if symbol in HYDROGEN_ISOTOPES and options.interpret_hydrogen_isotopes:
        return ElementSymbol(1, "H", HYDROGEN_ISOTOPES[symbol])

    if symbol in GENERIC_SYMBOLS:
        return GenericSymbol(symbol)

    if symbol.startswith("R"):
        suffix = symbol[1:]
        if suffix.isascii() and suffix.isdigit():
            number = int(suffix)
            state.rgroup_counter = number
        else:
            number = state.rgroup_counter
            state.rgroup_counter += 1
        return RGroupSymbol(number)

    return UnknownSymbol(symbol)


# =============================================================================
# Shared helpers
# =============================================================================

def _block_commands(commands: CommandAssembler, end: str) -> Iterator[str]:
    """Yield records until the ``end`` command, which is consumed."""
    while True:
        command = commands.next_command()
        if command is None:
            raise FormatError("unexpected end of file", commands.line_number)
        if command.strip() == end:
            return
        yield command


def _split_fields(
    command: str,
    names: tuple[str, ...],
    commands: CommandAssembler,
) -> tuple[list[str], str]:
    """Split a record into its positional fields and the option remainder."""
    tokens = command.split()
    if len(tokens) < len(names):
        missing = names[len(tokens)]
        logger.error("Missing %s field in: %s", missing, command)
        raise FormatError(f"missing {missing} field", commands.line_number, command)
    count = len(names)
    return tokens[:count], " ".join(tokens[count:])


def _parse_int(name: str, value: str, commands: CommandAssembler, command: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise FieldParseError(
            f"could not parse {name}:", name, value, commands.line_number, command
        ) from exc


def _resolve_atom(ident: int, state: ReadState, commands: CommandAssembler, command: str) -> int:
    atom_idx = state.get_atom(ident)
    if atom_idx is None:
        logger.error("Unresolved atom identifier %d in: %s", ident, command)
        raise FormatError(
            f"unresolved atom identifier {ident}", commands.line_number, command
        )
    return atom_idx


def _resolve_bond(ident: int, state: ReadState, commands: CommandAssembler, command: str) -> int:
    bond_idx = state.get_bond(ident)
    if bond_idx is None:
        logger.error("Unresolved bond identifier %d in: %s", ident, command)
        raise FormatError(
            f"unresolved bond identifier {ident}", commands.line_number, command
        )
    return bond_idx


# =============================================================================
# ATOM block
# =============================================================================

def read_atom_block(
    commands: CommandAssembler,
    state: ReadState,
    mode: Mode = Mode.RELAXED,
    options: ReaderOptions = ReaderOptions(),
) -> None:
    """Read atom records up to ``END ATOM``.

    Record layout: ``index type x y z aamap [KEY=value ...]``.

    Raises:
        FormatError: On a missing field, an unknown element in strict mode,
            or end of input.
        FieldParseError: On a non-numeric field or option value.
    """
    logger.info("Reading ATOM block")
    state.rgroup_counter = 1
    for command in _block_commands(commands, "END ATOM"):
        _read_atom(command, commands, state, mode, options)


def _read_atom(
    command: str,
    commands: CommandAssembler,
    state: ReadState,
    mode: Mode,
    options: ReaderOptions,
) -> None:
    logger.debug("Parsing atom from: %s", command)
    mol = state.mol
    fields, rest = _split_fields(command, _ATOM_FIELDS, commands)
    id_str, symbol, x_str, y_str, z_str, mapping = fields

    ident = _parse_int("atom index", id_str, commands, command)
    if ident < 0:
        raise FieldParseError(
            "invalid atom index:", "index", id_str, commands.line_number, command
        )

    try:
        point = (float(x_str), float(y_str), float(z_str))
    except ValueError as exc:
        logger.error("Error while parsing atom coordinates: %s", command)
        raise FieldParseError(
            "could not parse atom coordinates", None, None, commands.line_number, command
        ) from exc

    resolved = resolve_element(symbol, state, options)
    if isinstance(resolved, ElementSymbol):
        atom_idx = mol.add_atom(
            resolved.symbol,
            atomic_number=resolved.atomic_number,
            isotope=resolved.mass_number,
            point3d=point,
            id=id_str,
        )
    elif isinstance(resolved, UnknownSymbol):
        if mode is Mode.STRICT:
            logger.error("Invalid element type: %s", symbol)
            raise FormatError(
                "invalid element type; must be an existing element or one of "
                "A, Q, L, LP, *, R",
                commands.line_number,
                command,
            )
        logger.debug("Atom %s is not a regular element, creating a pseudo atom", symbol)
        atom_idx = mol.add_pseudo_atom(resolved.symbol, point3d=point, id=id_str)
    else:
        atom_idx = mol.add_pseudo_atom(resolved.symbol, point3d=point, id=id_str)

    if mapping != "0":
        logger.warning("Skipping atom-atom mapping: %s", mapping)

    atom = mol.atoms[atom_idx]
    for key, value in parse_options(rest).items():
        try:
            if key == "CFG":
                cfg = int(value)
                if cfg != 0:
                    atom.stereo_parity = cfg
                    state.parity_hints[atom_idx] = cfg
            elif key == "CHG":
                charge = int(value)
                if charge != 0:
                    atom.charge = charge
            elif key == "RAD":
                multiplicity = SpinMultiplicity(int(value))
                atom.spin_multiplicity = multiplicity
                for _ in range(multiplicity.single_electrons):
                    mol.add_single_electron(atom_idx)
            elif key == "MASS":
                atom.isotope = int(value)
            elif key == "VAL":
                if atom.is_pseudo:
                    warn_unsupported(f"Cannot set valence information for a non-element: {atom.symbol}")
                    continue
                valence = int(value)
                if valence != 0:
                    atom.valence = 0 if valence == _ZERO_VALENCE else valence
            else:
                warn_unsupported(f"Not parsing atom key: {key}")
        except ValueError as exc:
            logger.error("Error while parsing key/value %s=%s", key, value)
            raise FieldParseError(
                "error while parsing key/value", key, value, commands.line_number, command
            ) from exc

    state.add_atom(ident, atom_idx)
    logger.debug("Added atom: %s", atom.symbol)


# =============================================================================
# BOND block
# =============================================================================

def read_bond_block(
    commands: CommandAssembler,
    state: ReadState,
) -> None:
    """Read bond records up to ``END BOND``.

    Record layout: ``index type atom1 atom2 [KEY=value ...]``. A bond with
    ``ATTACH=ANY`` is a positional variation bond and also produces a
    multicenter Sgroup over its begin atom and ``ENDPTS``.

    Raises:
        FormatError: On a missing field, an unresolved atom or end of input.
        FieldParseError: On a non-numeric field or option value.
    """
    logger.info("Reading BOND block")
    for command in _block_commands(commands, "END BOND"):
        _read_bond(command, commands, state)


def _read_bond(command: str, commands: CommandAssembler, state: ReadState) -> None:
    logger.debug("Parsing bond from: %s", command)
    mol = state.mol
    fields, rest = _split_fields(command, _BOND_FIELDS, commands)
    id_str, order_str, atom1_str, atom2_str = fields

    ident = _parse_int("bond index", id_str, commands, command)
    if ident < 0:
        raise FieldParseError(
            "invalid bond index:", "index", id_str, commands.line_number, command
        )
    order_num = _parse_int("bond type", order_str, commands, command)
    if order_num <= 0:
        raise FieldParseError(
            "invalid bond type:", "type", order_str, commands.line_number, command
        )
    if order_num >= 4:
        warn_unsupported("Query order types are not supported, bond order left unset")
        order = BondOrder.UNSET
    else:
        order = BondOrder(order_num)

    atom1 = _resolve_atom(_parse_int("bond atom 1", atom1_str, commands, command), state, commands, command)
    atom2 = _resolve_atom(_parse_int("bond atom 2", atom2_str, commands, command), state, commands, command)

    stereo = BondStereo.NONE
    endpoints: list[int] = []
    attach: str | None = None
    for key, value in parse_options(rest).items():
        try:
            if key == "CFG":
                cfg = int(value)
                if BondStereo.NONE <= cfg <= BondStereo.DOWN:
                    stereo = BondStereo(cfg)
                else:
                    warn_unsupported(f"Unknown bond configuration: {cfg}")
            elif key == "ENDPTS":
                endpoint_ids = parse_id_list(value)
                endpoints = [
                    _resolve_atom(endpoint, state, commands, command)
                    for endpoint in endpoint_ids
                ]
            elif key == "ATTACH":
                attach = value
            else:
                warn_unsupported(f"Not parsing bond key: {key}")
        except ValueError as exc:
            logger.error("Error while parsing key/value %s=%s", key, value)
            raise FieldParseError(
                "error while parsing key/value", key, value, commands.line_number, command
            ) from exc

    bond_idx = mol.add_bond(atom1, atom2, order=order, stereo=stereo, id=id_str)
    state.add_bond(ident, bond_idx)

    if attach == "ANY":
        sgroup = Sgroup(SgroupType.EXT_MULTICENTER)
        sgroup.add_atom(atom1)
        sgroup.add_bond(bond_idx)
        for endpoint in endpoints:
            sgroup.add_atom(endpoint)
        mol.add_sgroup(sgroup)

    logger.debug("Added bond: %d-%d", atom1, atom2)


# =============================================================================
# SGROUP block
# =============================================================================

def read_sgroup_block(
    commands: CommandAssembler,
    state: ReadState,
) -> None:
    """Read Sgroup records up to ``END SGROUP``.

    Only abbreviation (``SUP``) groups are built; other types are skipped
    with a warning.
    """
    logger.info("Reading SGROUP block")
    for command in _block_commands(commands, "END SGROUP"):
        _read_sgroup(command, commands, state)


def _read_sgroup(command: str, commands: CommandAssembler, state: ReadState) -> None:
    logger.debug("Parsing Sgroup line: %s", command)
    fields, rest = _split_fields(command, _SGROUP_FIELDS, commands)
    index, sgroup_type, external_index = fields
    logger.debug("Skipping Sgroup index %s, external index %s", index, external_index)

    if sgroup_type != "SUP":
        warn_unsupported(f"Skipping unrecognized SGROUP type: {sgroup_type}")
        return

    sgroup = Sgroup(SgroupType.CTAB_ABBREVIATION)
    label = ""
    for key, value in parse_options(rest).items():
        try:
            if key == "ATOMS":
                for ident in parse_id_list(value):
                    sgroup.add_atom(_resolve_atom(ident, state, commands, command))
            elif key == "XBONDS":
                for ident in parse_id_list(value):
                    sgroup.add_bond(_resolve_bond(ident, state, commands, command))
            elif key == "LABEL":
                label = value
            else:
                warn_unsupported(f"Not parsing Sgroup key: {key}")
        except ValueError as exc:
            logger.error("Error while parsing key/value %s=%s", key, value)
            raise FieldParseError(
                "error while parsing key/value", key, value, commands.line_number, command
            ) from exc

    if sgroup.atoms and label:
        sgroup.subscript = label
    state.mol.add_sgroup(sgroup)


# =============================================================================
# COLLECTION block
# =============================================================================

def read_collection_block(
    commands: CommandAssembler,
    state: ReadState,
) -> None:
    """Read collection records up to ``END COLLECTION``.

    Stereo group records (``MDLV30/STERAC``, ``STEREL``, ``STEABS``) are
    stored by atom identifier; other collections are ignored.
    """
    logger.info("Reading COLLECTION block")
    if state.stereo_groups is None:
        state.stereo_groups = {}
    for command in _block_commands(commands, "END COLLECTION"):
        for prefix, kind in _STEREO_GROUP_PREFIXES.items():
            if command.startswith(prefix):
                parse_stereo_group(command, kind, state.stereo_groups)
                break
        else:
            logger.debug("Ignoring collection: %s", command)


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def parse_stereo_group(
    command: str,
    kind: StereoGroupKind,
    groups: dict[int, StereoGroup],
) -> None:
    """Parse one stereo group record into ``groups``.

    Example:
        >>> groups = {}
        >>> parse_stereo_group("MDLV30/STERAC2 ATOMS=(2 4 7)", StereoGroupKind.RACEMIC, groups)
        >>> sorted(groups)
        [4, 7]
    """
    length = len(command)
    i = len("MDLV30/STExxx")

    num = 0
    while i < length and _is_digit(command[i]):
        num = 10 * num + int(command[i])
        i += 1
    group = StereoGroup(kind, num)

    while i < length and command[i] == " ":
        i += 1
    if command.startswith("ATOMS=(", i):
        i += len("ATOMS=(")

    # skip the count
    while i < length and _is_digit(command[i]):
        i += 1
    while i < length and command[i] == " ":
        i += 1

    while i < length:
        val = 0
        start = i
        while i < length and _is_digit(command[i]):
            val = 10 * val + int(command[i])
            i += 1
        if val > 0:
            groups[val] = group
        while i < length and command[i] == " ":
            i += 1
        if i < length and command[i] == ")":
            break
        if i == start:
            # not a digit, space or ')'
            i += 1
