"""Reader configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Final, Mapping

from mdlv3000.exceptions import ConfigurationError


class Mode(Enum):
    """How recoverable anomalies are treated."""

    RELAXED = "relaxed"
    STRICT = "strict"


# Setting names accepted by from_settings() -> dataclass field
_SETTING_NAMES: Final[dict[str, str]] = {
    "ForceReadAs3DCoordinates": "force_read_as_3d",
    "ForceReadAs3D": "force_read_as_3d",
    "InterpretHydrogenIsotopes": "interpret_hydrogen_isotopes",
    "AddStereoElements": "add_stereo_elements",
    "AddStereo0d": "add_stereo_0d",
}


@dataclass(frozen=True, slots=True)
class ReaderOptions:
    """Options for reading a connection table.

    Attributes:
        force_read_as_3d: Never downgrade coordinates to 2D or 0D.
        interpret_hydrogen_isotopes: Read D and T as hydrogen isotopes.
        add_stereo_elements: Create stereo elements at all.
        add_stereo_0d: Create stereo from parity when there are no coordinates.
    """

    force_read_as_3d: bool = False
    interpret_hydrogen_isotopes: bool = True
    add_stereo_elements: bool = True
    add_stereo_0d: bool = True

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "ReaderOptions":
        """Build options from setting names or field names.

        Args:
            settings: Mapping such as ``{"AddStereo0d": "false"}``. Values may
                be booleans or the strings "true"/"false".

        Returns:
            New options with the given values applied over the defaults.

        Raises:
            ConfigurationError: On an unknown name or a non-boolean value.
        """
        field_names = {f.name for f in fields(cls)}
        values: dict[str, bool] = {}
        for name, raw in settings.items():
            key = _SETTING_NAMES.get(name, name)
            if key not in field_names:
                raise ConfigurationError(f"Unknown reader setting: {name}")
            values[key] = _to_bool(name, raw)
        return cls(**values)


def _to_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
        return raw.strip().lower() == "true"
    raise ConfigurationError(f"Setting {name} expects a boolean, got {raw!r}")
