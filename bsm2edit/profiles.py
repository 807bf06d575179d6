"""
Editor profiles: which keyword hints classify a block, which grammar parses
it, and how exported files are named.

Copyright (C) 2026 bsm2edit contributors

This library is free software; you can redistribute it and/or
modify it under the terms of the GNU Lesser General Public
License as published by the Free Software Foundation; either
version 2.1 of the License, or (at your option) any later version.

This library is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with this library; if not, write to the Free Software
Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301  USA
"""

from dataclasses import dataclass
from typing import Any, Callable

from .declarations import parse_declarations, serialize_declarations
from .waves import parse_waves, serialize_waves


@dataclass(frozen=True)
class EditorProfile:
    name: str
    hints: tuple[str, ...]
    parse: Callable[[str], list[Any]]
    serialize: Callable[[list[Any]], str]
    export_suffix: str
    default_stem: str


WAVE_HINTS = ("AddBloon", "FollowBezier", "CreateTrain", "Wave", "Bloon", "AddWave")
ENVIRONMENT_HINTS = ("var ", "const ", "let ", "this.", "Environment", "Config", "Setting")

WAVES = EditorProfile(
    name="waves",
    hints=WAVE_HINTS,
    parse=parse_waves,
    serialize=serialize_waves,
    export_suffix="_edited",
    default_stem="waves",
)

ENVIRONMENT = EditorProfile(
    name="environment",
    hints=ENVIRONMENT_HINTS,
    parse=parse_declarations,
    serialize=serialize_declarations,
    export_suffix="_env_edited",
    default_stem="environment",
)

PROFILES = {profile.name: profile for profile in (WAVES, ENVIRONMENT)}


def get_profile(name: str) -> EditorProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown editor mode {name!r} (choose from {', '.join(PROFILES)})") from None
