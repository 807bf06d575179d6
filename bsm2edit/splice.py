"""
Splice re-encoded payloads back into host text, and name exported files.

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

from typing import Optional

from . import mask
from .compression import encode_payload
from .errors import NoActiveBlockError
from .scanner import PayloadBlock

DEFAULT_EXTENSION = ".as"
DEFAULT_SUFFIX = "_edited"


def encode_block(text: str, block: PayloadBlock, mask_char: str = mask.MASK_CHAR) -> str:
    """Encode decoded text into the inner content for `block`'s span.

    Unchanged text reuses the original inner content verbatim, so exporting
    without edits leaves the host file byte-identical.
    """
    if block.decoded_text is not None and text == block.decoded_text:
        return block.raw_inner
    return mask.reinsert(encode_payload(text), block.mask_positions, mask_char)


def splice(host_text: str, block: Optional[PayloadBlock], new_inner: str) -> str:
    """Replace the inner span of `block` and leave everything else untouched."""
    if block is None:
        raise NoActiveBlockError("Nothing to export: open a file and decode a block first.")
    return host_text[:block.span_start] + new_inner + host_text[block.span_end:]


def export_name(file_name: str, suffix: str = DEFAULT_SUFFIX, extension: str = DEFAULT_EXTENSION,
                default_stem: str = "waves") -> str:
    """Output file name for an export; never equal to `file_name`.

    "level.as" -> "level_edited.as"; names without the extension get the
    suffix and extension appended ("level.txt" -> "level.txt_edited.as").
    """
    if not suffix:
        raise ValueError("Export suffix must not be empty")
    if file_name.lower().endswith(extension.lower()):
        return f"{file_name[:-len(extension)]}{suffix}{extension}"
    return f"{file_name or default_stem}{suffix}{extension}"
