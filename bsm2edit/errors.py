"""
Error kinds raised by the payload codec and the editing session.

Per-block decode failures (MalformedInputError, UnsupportedEncodingError,
DecodeError) are stored on the PayloadBlock they belong to and only raised
when that block is acted on. File-level problems are reported once to the
caller of the triggering operation.

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


class PayloadError(ValueError):
    """Base class for every error raised by bsm2edit."""


class MalformedInputError(PayloadError):
    """Cleaned block content is not valid base64 (bad alphabet or padding)."""


class UnsupportedEncodingError(PayloadError):
    """None of the deflate framings could inflate the payload."""

    def __init__(self, data: bytes):
        self.length = len(data)
        self.head = bytes(data[:8])
        super().__init__(
            f"Unable to inflate {self.length} bytes with zlib/raw/gzip framing "
            f"(first bytes: {self.head.hex(' ') or 'none'})"
        )


class DecodeError(PayloadError):
    """Bytes were produced but are not valid UTF-8 text."""


class NoBlocksFoundError(PayloadError):
    """The host text holds no candidate payload block."""


class NoActiveBlockError(PayloadError):
    """Export was requested before any block was decoded and selected."""


class SerializationError(PayloadError):
    """A record cannot be turned back into a payload line."""
