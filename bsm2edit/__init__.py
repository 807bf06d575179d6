"""
bsm2edit - round-trip editor for compressed payload blocks in BSM2 .as files.

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

__version__ = "1.0.0"

from .compression import Framing, compress, decompress
from .declarations import Declaration, parse_declarations, serialize_declarations
from .errors import (
    DecodeError,
    MalformedInputError,
    NoActiveBlockError,
    NoBlocksFoundError,
    PayloadError,
    SerializationError,
    UnsupportedEncodingError,
)
from .profiles import ENVIRONMENT, WAVES, get_profile
from .scanner import PayloadBlock, scan, select_block
from .session import EditorSession
from .splice import export_name, splice
from .waves import Event, Wave, parse_waves, serialize_waves
