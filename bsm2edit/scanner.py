"""
Block scanner: finds quoted payload blocks in host text.

A payload block is a quoted string literal whose inner text is base64
(optionally wrapped over several lines and interleaved with the mask
character) long enough to be a real compressed payload. Every block is
decoded eagerly so the caller can classify and auto-select immediately.

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
from typing import Iterable, Optional

from . import mask
from .compression import Framing, decode_payload
from .errors import PayloadError

# ============================================================================
# Constants
# ============================================================================

# Shorter quoted runs are ordinary string literals, not payloads
MIN_PAYLOAD_LENGTH = 64

BASE64_CHARS = "A-Za-z0-9+/="
BASE64_CHAR_RE = re.compile(f"[{BASE64_CHARS}]")

_PATTERN_CACHE: dict[str, re.Pattern] = {}


def block_pattern(mask_char: str = mask.MASK_CHAR) -> re.Pattern:
    """Quoted run of base64 alphabet, whitespace and mask characters."""
    pattern = _PATTERN_CACHE.get(mask_char)
    if pattern is None:
        pattern = re.compile(f"([\"'])([{BASE64_CHARS}\\s{re.escape(mask_char)}]+)\\1")
        _PATTERN_CACHE[mask_char] = pattern
    return pattern


# ============================================================================
# Payload Block
# ============================================================================

@dataclass
class PayloadBlock:
    """One candidate payload found in the host text."""
    ordinal: int
    quote_char: str
    span_start: int  # first char of inner content, after the opening quote
    span_end: int  # closing quote position
    raw_inner: str
    mask_positions: list[int] = field(default_factory=list)
    cleaned_encoded: str = ""
    decoded_text: Optional[str] = None
    framing: Optional[Framing] = None
    error: Optional[PayloadError] = None
    classification: bool = False

    @property
    def decodable(self) -> bool:
        return self.decoded_text is not None

    @property
    def label(self) -> str:
        if self.classification:
            return f"Block #{self.ordinal + 1} (likely match)"
        return f"Block #{self.ordinal + 1}"


# ============================================================================
# Scanning
# ============================================================================

def classify(decoded_text: Optional[str], hints: Iterable[str]) -> bool:
    """True if the text decoded and contains at least one keyword hint."""
    if decoded_text is None:
        return False
    return any(hint in decoded_text for hint in hints)


def build_block(ordinal: int, quote_char: str, span_start: int, raw_inner: str,
                hints: Iterable[str] = (), mask_char: str = mask.MASK_CHAR) -> PayloadBlock:
    """Create a block from one matched literal and try to decode it."""
    cleaned, positions = mask.strip(raw_inner, mask_char)
    block = PayloadBlock(
        ordinal=ordinal,
        quote_char=quote_char,
        span_start=span_start,
        span_end=span_start + len(raw_inner),
        raw_inner=raw_inner,
        mask_positions=positions,
        cleaned_encoded=cleaned,
    )
    try:
        block.framing, block.decoded_text = decode_payload(cleaned)
    except PayloadError as e:
        block.error = e
    block.classification = classify(block.decoded_text, hints)
    return block


def scan(host_text: str, hints: Iterable[str] = (), mask_char: str = mask.MASK_CHAR,
         min_length: int = MIN_PAYLOAD_LENGTH) -> list[PayloadBlock]:
    """Find every payload block in host text, in text order."""
    hints = tuple(hints)
    pattern = block_pattern(mask_char)
    blocks: list[PayloadBlock] = []
    pos = 0
    while True:
        m = pattern.search(host_text, pos)
        if m is None:
            break
        inner = m.group(2)
        if len(BASE64_CHAR_RE.findall(inner)) < min_length:
            # Rejected run: its closing quote may still open a real block
            pos = m.start() + 1
            continue
        blocks.append(build_block(len(blocks), m.group(1), m.start(2), inner, hints, mask_char))
        pos = m.end()
    return blocks


def select_block(blocks: list[PayloadBlock]) -> Optional[PayloadBlock]:
    """Auto-open policy: first classified decodable block, else first decodable."""
    for block in blocks:
        if block.classification and block.decodable:
            return block
    for block in blocks:
        if block.decodable:
            return block
    return None
