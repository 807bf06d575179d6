"""
Obfuscation mask handling.

Host files interleave a decorative character ("*") into the encoded text.
It carries no information and must be stripped before base64 decoding, but
the host only accepts the file when the character reappears at the same
structural offsets, so its positions are recorded and reapplied on export.

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

MASK_CHAR = "*"


def strip(raw_inner: str, mask_char: str = MASK_CHAR) -> tuple[str, list[int]]:
    """Remove whitespace and mask characters.

    Returns (cleaned, positions) where each position is the offset, in the
    cleaned string, at which a mask character stood.
    """
    kept: list[str] = []
    positions: list[int] = []
    for ch in raw_inner:
        if ch == mask_char:
            positions.append(len(kept))
        elif ch.isspace():
            continue
        else:
            kept.append(ch)
    return "".join(kept), positions


def reinsert(cleaned: str, positions: list[int], mask_char: str = MASK_CHAR) -> str:
    """Put mask characters back at recorded offsets of a (possibly new) string.

    Offsets past the end of `cleaned` are dropped.
    """
    if not positions:
        return cleaned
    chars = list(cleaned)
    # Highest first so earlier insertions do not shift later offsets
    for pos in sorted((p for p in positions if p <= len(cleaned)), reverse=True):
        chars.insert(pos, mask_char)
    return "".join(chars)
