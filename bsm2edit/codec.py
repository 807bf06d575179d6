"""
Byte/text conversion for payload blocks: base64 and UTF-8.

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

import base64
import binascii
import re

from .errors import DecodeError, MalformedInputError

# ============================================================================
# Constants
# ============================================================================

# Largest multiple of 3 below 32 KiB: chunks encode without interior padding
ENCODE_CHUNK_SIZE = 3 * 10922

WHITESPACE_RE = re.compile(r"\s+")


# ============================================================================
# Base64
# ============================================================================

def decode_base64(text: str) -> bytes:
    """Decode base64 text, ignoring whitespace. Strict about alphabet and padding."""
    cleaned = WHITESPACE_RE.sub("", text)
    try:
        return base64.b64decode(cleaned.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise MalformedInputError(f"Invalid base64 payload ({len(cleaned)} chars): {e}") from e


def encode_base64(data: bytes) -> str:
    """Encode bytes to base64, one fixed-size chunk at a time."""
    parts = []
    for offset in range(0, len(data), ENCODE_CHUNK_SIZE):
        chunk = data[offset:offset + ENCODE_CHUNK_SIZE]
        parts.append(base64.b64encode(chunk).decode('ascii'))
    return "".join(parts)


def encoded_length(size: int) -> int:
    """Length of the base64 text produced for `size` input bytes."""
    return 4 * ((size + 2) // 3)


# ============================================================================
# UTF-8
# ============================================================================

def encode_utf8(text: str) -> bytes:
    return text.encode("utf-8")


def decode_utf8(data: bytes) -> str:
    """Strict UTF-8 decode; never substitutes characters."""
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Payload is not valid UTF-8 text: {e}") from e


def decode_utf8_lossy(data: bytes) -> str:
    """Lossy decode for classification and diagnostics only.

    The result must never be written back into a host file.
    """
    return bytes(data).decode("utf-8", errors="replace")
