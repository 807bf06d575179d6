"""
Deflate-family compression adapter.

The framing used by a payload is not recorded anywhere in the host file and
varies between producer versions, so decoding tries zlib, raw deflate and
gzip in that order. Encoding always emits the zlib framing.

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

import zlib
from enum import IntEnum

from .codec import decode_base64, decode_utf8, decode_utf8_lossy, encode_base64, encode_utf8
from .errors import DecodeError, UnsupportedEncodingError


class Framing(IntEnum):
    """Deflate framings, in the order decoding tries them."""
    ZLIB = 0
    RAW = 1
    GZIP = 2


# Framing -> zlib wbits
FRAMING_WBITS = {
    Framing.ZLIB: zlib.MAX_WBITS,
    Framing.RAW: -zlib.MAX_WBITS,
    Framing.GZIP: 16 + zlib.MAX_WBITS,
}

CANONICAL_FRAMING = Framing.ZLIB


def inflate(data: bytes) -> tuple[Framing, str]:
    """Decompress with the first framing that yields valid UTF-8 text.

    Returns (framing, text). Raises DecodeError when some framing inflated
    the bytes but none produced UTF-8, UnsupportedEncodingError otherwise.
    """
    undecodable = None
    for framing in Framing:
        try:
            raw = zlib.decompress(data, FRAMING_WBITS[framing])
        except zlib.error:
            continue
        try:
            return framing, decode_utf8(raw)
        except DecodeError:
            if undecodable is None:
                undecodable = (framing, raw)
    if undecodable is not None:
        framing, raw = undecodable
        preview = decode_utf8_lossy(raw[:32])
        raise DecodeError(
            f"{framing.name} stream inflated to {len(raw)} bytes that are not UTF-8 text "
            f"(starts {preview!r})"
        )
    raise UnsupportedEncodingError(data)


def decompress(data: bytes) -> str:
    """Decompress a payload to text, whatever its framing."""
    return inflate(data)[1]


def compress(text: str) -> bytes:
    """Compress text with the canonical (zlib-wrapped) framing."""
    return zlib.compress(encode_utf8(text))


def decode_payload(cleaned_encoded: str) -> tuple[Framing, str]:
    """base64 text -> (framing, decoded text)."""
    return inflate(decode_base64(cleaned_encoded))


def encode_payload(text: str) -> str:
    """Decoded text -> base64 of the canonical compressed form (no mask)."""
    return encode_base64(compress(text))
