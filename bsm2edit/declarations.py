"""
Declaration grammar for environment/config payloads.

Decoded environment payloads are script-like key/value text:

    var scrollSpeed:Number = 4;
    const debugMode = false;
    this.bgColor = 0x112233;
    lives = 3;

Each recognised line becomes a Declaration with an inferred value type and a
name-based category. Unrecognised lines are dropped.

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

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

# ============================================================================
# Enums
# ============================================================================

class ValueType(IntEnum):
    STRING = 0
    NUMBER = 1
    BOOLEAN = 2
    ARRAY = 3
    OBJECT = 4


class Category(IntEnum):
    GENERAL = 0
    PERFORMANCE = 1
    VISUAL = 2
    AUDIO = 3
    LAYOUT = 4
    GAME = 5
    DEBUG = 6


CATEGORY_NAMES = {
    Category.GENERAL: "General",
    Category.PERFORMANCE: "Performance",
    Category.VISUAL: "Visual",
    Category.AUDIO: "Audio",
    Category.LAYOUT: "Layout",
    Category.GAME: "Game",
    Category.DEBUG: "Debug",
}

# Name substring -> category, first match wins. Single letters are intended:
# coordinates such as "spawnX" belong to layout.
CATEGORY_RULES = [
    (("speed", "velocity", "rate", "time", "delay"), Category.PERFORMANCE),
    (("color", "rgb", "hex", "alpha"), Category.VISUAL),
    (("sound", "audio", "volume", "music"), Category.AUDIO),
    (("width", "height", "size", "scale", "position", "x", "y", "z"), Category.LAYOUT),
    (("health", "damage", "score", "points", "lives"), Category.GAME),
    (("debug", "test", "dev", "log"), Category.DEBUG),
]

COMMENT_PREFIXES = ("//", "/*", "*")

# Tried in order; the first that matches a line wins
KEYWORD_DECL_RE = re.compile(r"\b(?:var|const|let)\s+(\w+)\s*(?::\s*([\w.*<>]+)\s*)?[:=]\s*(.+)")
MEMBER_DECL_RE = re.compile(r"\bthis\.(\w+)\s*[:=]\s*(.+)")
BARE_DECL_RE = re.compile(r"(\w+)\s*[:=]\s*(.+)")

BOOLEAN_RE = re.compile(r"^(true|false)$", re.IGNORECASE)
NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")

LINE_BREAK_RE = re.compile(r"\r?\n")


# ============================================================================
# Record
# ============================================================================

@dataclass
class Declaration:
    """One name/value declaration from an environment payload."""
    ordinal: int
    name: str
    value: str
    value_type: ValueType = ValueType.STRING
    category: Category = Category.GENERAL
    source_line: str = ""
    annotation: Optional[str] = None

    @property
    def category_name(self) -> str:
        return CATEGORY_NAMES.get(self.category, "General")


# ============================================================================
# Inference
# ============================================================================

def infer_value_type(value: str) -> ValueType:
    """Classify a right-hand side by its literal shape."""
    if BOOLEAN_RE.match(value):
        return ValueType.BOOLEAN
    if NUMBER_RE.match(value):
        return ValueType.NUMBER
    if value.startswith("[") and value.endswith("]"):
        return ValueType.ARRAY
    if value.startswith("{") and value.endswith("}"):
        return ValueType.OBJECT
    return ValueType.STRING


def infer_category(name: str) -> Category:
    lowered = name.lower()
    for patterns, category in CATEGORY_RULES:
        if any(p in lowered for p in patterns):
            return category
    return Category.GENERAL


def clean_value(value: str) -> str:
    """Drop trailing statement terminators (';' and ',') from a value."""
    return value.strip().rstrip(";,").strip()


# ============================================================================
# Parsing
# ============================================================================

def match_declaration(line: str) -> Optional[tuple[str, str, Optional[str]]]:
    """Match one stripped line against the three grammars.

    Returns (name, raw_value, annotation) or None.
    """
    m = KEYWORD_DECL_RE.search(line)
    if m:
        return m.group(1), m.group(3), m.group(2)
    m = MEMBER_DECL_RE.search(line)
    if m:
        return m.group(1), m.group(2), None
    m = BARE_DECL_RE.search(line)
    if m:
        return m.group(1), m.group(2), None
    return None


def parse_declarations(text: str) -> list[Declaration]:
    """Parse decoded environment text into declarations, in text order."""
    records: list[Declaration] = []
    for line in LINE_BREAK_RE.split(text):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue
        matched = match_declaration(stripped)
        if matched is None:
            continue
        name, raw_value, annotation = matched
        value = clean_value(raw_value)
        records.append(Declaration(
            ordinal=len(records),
            name=name,
            value=value,
            value_type=infer_value_type(value),
            category=infer_category(name),
            source_line=stripped,
            annotation=annotation,
        ))
    return records


# ============================================================================
# Serialization
# ============================================================================

def declaration_prefix(record: Declaration) -> str:
    """Pick the emission prefix from the style of the original line."""
    source = record.source_line or ""
    if "var " in source:
        return "var "
    if "const " in source:
        return "const "
    if "this." in source:
        return "this."
    return ""


def serialize_declaration(record: Declaration) -> Optional[str]:
    """One payload line, or None when the record has nothing to emit."""
    if not record.name:
        # Nothing to rebuild from; the original line is the only safe output
        return record.source_line or None
    prefix = declaration_prefix(record)
    name = record.name
    if record.annotation and prefix in ("var ", "const "):
        name = f"{name}:{record.annotation}"
    return f"{prefix}{name} = {record.value};"


def serialize_declarations(records: list[Declaration]) -> str:
    """One line per declaration, in the given order. Empty records are skipped."""
    lines = (serialize_declaration(r) for r in records)
    return "\n".join(line for line in lines if line is not None)


def group_by_category(records: list[Declaration]) -> dict[str, list[Declaration]]:
    groups: dict[str, list[Declaration]] = {}
    for record in records:
        groups.setdefault(record.category_name, []).append(record)
    return groups
