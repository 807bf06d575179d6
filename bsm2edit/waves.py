"""
Wave/event grammar for level scripts.

Decoded wave payloads are one script call per line. Some lines open a new
wave (AddWave calls, "Wave <n>" headers, or a call on the first line), the
lines after them are that wave's events:

    CreateTrain(1)
    AddBloon(Red, 10)
    FollowBezier(0, 0, 200, 300)
    AddWave(2)
    AddBloon(Blue, 5)

Lines seen before any wave start are collected into a synthetic "Wave 1".

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
from dataclasses import dataclass, field
from enum import IntEnum

# ============================================================================
# Constants
# ============================================================================

WAVE_START_KEYWORDS = ("AddWave",)
WAVE_HEADER_RE = re.compile(r"\bWave\s*\d+", re.IGNORECASE)

# Event kind vocabulary, first contained keyword wins
EVENT_KINDS = ("CreateTrain", "FollowBezier", "AddBloon")
UNKNOWN_KIND = "Unknown"

SYNTHETIC_HEADER = "Wave 1"

# Payload lines end in \n or \r\n only
LINE_BREAK_RE = re.compile(r"\r?\n")


class ParserState(IntEnum):
    NO_WAVE_YET = 0
    IN_WAVE = 1


# ============================================================================
# Records
# ============================================================================

@dataclass
class Event:
    ordinal: int
    kind: str
    content: str


@dataclass
class Wave:
    ordinal: int
    header_line: str
    events: list[Event] = field(default_factory=list)
    synthetic: bool = False  # header generated for orphan lines


def classify_event(line: str) -> str:
    for keyword in EVENT_KINDS:
        if keyword in line:
            return keyword
    return UNKNOWN_KIND


def is_wave_start(line: str, first: bool = False) -> bool:
    """Does this line open a new wave?"""
    if any(keyword in line for keyword in WAVE_START_KEYWORDS):
        return True
    if WAVE_HEADER_RE.search(line):
        return True
    return first and "(" in line and ")" in line


# ============================================================================
# Parsing
# ============================================================================

def _make_wave(ordinal: int, header_line: str, lines: list[str], synthetic: bool = False) -> Wave:
    events = [Event(ordinal=i, kind=classify_event(line), content=line) for i, line in enumerate(lines)]
    return Wave(ordinal=ordinal, header_line=header_line, events=events, synthetic=synthetic)


def parse_waves(text: str) -> list[Wave]:
    """Parse decoded wave text into waves of events.

    State machine over non-blank lines:
      NO_WAVE_YET --wave start--> IN_WAVE (orphans flushed as synthetic "Wave 1")
      NO_WAVE_YET --other-------> NO_WAVE_YET (line kept as orphan)
      IN_WAVE     --wave start--> IN_WAVE (current wave closed, new one opened)
      IN_WAVE     --other-------> IN_WAVE (line appended as event)
    """
    waves: list[Wave] = []
    state = ParserState.NO_WAVE_YET
    orphans: list[str] = []
    header = ""
    current: list[str] = []
    first = True

    for line in LINE_BREAK_RE.split(text):
        if not line.strip():
            continue
        starts = is_wave_start(line, first)
        first = False

        if state == ParserState.NO_WAVE_YET:
            if starts:
                if orphans:
                    waves.append(_make_wave(len(waves), SYNTHETIC_HEADER, orphans, synthetic=True))
                    orphans = []
                header, current = line, []
                state = ParserState.IN_WAVE
            else:
                orphans.append(line)
        else:
            if starts:
                waves.append(_make_wave(len(waves), header, current))
                header, current = line, []
            else:
                current.append(line)

    if state == ParserState.IN_WAVE:
        waves.append(_make_wave(len(waves), header, current))
    elif orphans:
        waves.append(_make_wave(len(waves), SYNTHETIC_HEADER, orphans, synthetic=True))
    return waves


# ============================================================================
# Serialization
# ============================================================================

def serialize_waves(waves: list[Wave]) -> str:
    """Each wave's header then its events, one per line, no blank separators."""
    lines: list[str] = []
    for wave in waves:
        lines.append(wave.header_line)
        lines.extend(event.content for event in wave.events)
    return "\n".join(lines)


def count_events(waves: list[Wave]) -> dict[str, int]:
    """Event count per kind, for summaries."""
    counts: dict[str, int] = {}
    for wave in waves:
        for event in wave.events:
            counts[event.kind] = counts.get(event.kind, 0) + 1
    return counts
