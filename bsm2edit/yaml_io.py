"""
YAML export/import of session records.

The YAML lists every record of the active block with its ordinal, its
derived fields (for reading) and its editable fields. Importing applies the
editable fields back onto the session records by ordinal, in the order the
YAML lists them; records left out of the YAML are removed. Derived fields in
the YAML are ignored, they are recomputed on the next parse.

The document is loaded with every scalar kept as text, so an unquoted
`0xFF`, `1.50` or `off` reaches the payload exactly as typed.

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

from enum import IntEnum
from typing import Any, Type

import yaml

from .declarations import ValueType
from .errors import NoActiveBlockError
from .profiles import ENVIRONMENT
from .session import EditorSession

YAML_FORMAT = "BSM2 Payload Records v1"


def enum_name(enum_class: Type[IntEnum], value: int, default: str = "UNKNOWN") -> str:
    """Get enum name from value, returning default if not found."""
    try:
        return enum_class(value).name
    except ValueError:
        return f"{default}_{value}"


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Expected a single text value, got {value!r}")
    return value


def _ordinal(item: Any) -> int:
    if not isinstance(item, dict) or "_ordinal" not in item:
        raise ValueError(f"Record without _ordinal: {item!r}")
    return int(item["_ordinal"])


# ============================================================================
# Export
# ============================================================================

def export_to_yaml(session: EditorSession) -> str:
    """Dump the active block's records to YAML."""
    if session.active_block is None:
        raise NoActiveBlockError("Open a file and decode a block first.")

    output: dict[str, Any] = {
        "_format": YAML_FORMAT,
        "_profile": session.profile.name,
        "_file": session.file_name,
        "_block": session.active_block.ordinal,
    }
    if session.profile.name == ENVIRONMENT.name:
        output["declarations"] = [
            {
                "_ordinal": r.ordinal,
                "name": r.name,
                "type": enum_name(ValueType, r.value_type),
                "category": r.category_name,
                "value": r.value,
            }
            for r in session.records
        ]
    else:
        waves = []
        for wave in session.records:
            entry: dict[str, Any] = {"_ordinal": wave.ordinal, "header": wave.header_line}
            if wave.synthetic:
                entry["_synthetic"] = True
            entry["events"] = [
                {"_ordinal": e.ordinal, "kind": e.kind, "content": e.content}
                for e in wave.events
            ]
            waves.append(entry)
        output["waves"] = waves

    return yaml.dump(output, allow_unicode=True, sort_keys=False, default_flow_style=False, width=120)


# ============================================================================
# Import
# ============================================================================

def import_from_yaml(yaml_str: str, session: EditorSession) -> list:
    """Apply YAML records onto an opened session. Returns the new record list."""
    data = yaml.load(yaml_str, Loader=yaml.BaseLoader)
    if not isinstance(data, dict):
        raise ValueError("YAML document is not a mapping")

    profile = data.get("_profile", session.profile.name)
    if profile != session.profile.name:
        raise ValueError(f"YAML was exported in {profile!r} mode, session is in {session.profile.name!r} mode")

    block = data.get("_block")
    if block is not None:
        block = int(block)
        if session.active_block is None or session.active_block.ordinal != block:
            session.select_block(block)

    try:
        if session.profile.name == ENVIRONMENT.name:
            return _apply_declarations(data.get("declarations") or [], session)
        return _apply_waves(data.get("waves") or [], session)
    except KeyError as e:
        raise ValueError(f"YAML refers to a record the block does not have: {e.args[0]}") from e


def _apply_declarations(items: list, session: EditorSession) -> list:
    for item in items:
        session.update_record(_ordinal(item), {"value": _scalar_text(item.get("value"))})
    return session.reorder([_ordinal(item) for item in items])


def _apply_waves(items: list, session: EditorSession) -> list:
    for item in items:
        wave_ordinal = _ordinal(item)
        if "header" in item:
            session.update_record((wave_ordinal,), {"header_line": _scalar_text(item["header"])})
        events = item.get("events") or []
        for event in events:
            session.update_record((wave_ordinal, _ordinal(event)), {"content": _scalar_text(event.get("content"))})
        session.reorder([_ordinal(event) for event in events], wave=wave_ordinal)
    return session.reorder([_ordinal(item) for item in items])
