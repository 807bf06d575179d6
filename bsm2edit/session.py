"""
Editing session: the boundary between the payload codec and a front end.

A session holds one opened host file, its scanned blocks, the active block
and the records parsed from it. Opening a file replaces all of that. The
session never reads or writes files; it takes host text in and hands host
text back.

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

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .declarations import Declaration
from .errors import NoActiveBlockError, NoBlocksFoundError, PayloadError, SerializationError
from .mask import MASK_CHAR
from .profiles import WAVES, EditorProfile
from .scanner import MIN_PAYLOAD_LENGTH, PayloadBlock, scan, select_block
from .splice import encode_block, export_name, splice
from .waves import Event, Wave

# Fields a user may change; everything else on a record is derived
EDITABLE_FIELDS = {
    Declaration: {"value"},
    Wave: {"header_line"},
    Event: {"content"},
}

RecordId = Union[int, tuple[int, ...]]


@dataclass
class OpenResult:
    blocks: list[PayloadBlock] = field(default_factory=list)
    selected: Optional[PayloadBlock] = None
    records: list = field(default_factory=list)
    error: Optional[PayloadError] = None

    @property
    def ok(self) -> bool:
        return self.selected is not None


@dataclass
class ExportResult:
    file_name: str
    text: str


class EditorSession:
    """One opened host file and the records of its active block."""

    def __init__(self, profile: EditorProfile = WAVES, mask_char: str = MASK_CHAR,
                 min_length: int = MIN_PAYLOAD_LENGTH):
        self.profile = profile
        self.mask_char = mask_char
        self.min_length = min_length
        self._reset()

    def _reset(self):
        self.file_name = ""
        self.host_text = ""
        self.blocks: list[PayloadBlock] = []
        self.active_block: Optional[PayloadBlock] = None
        self.records: list[Any] = []
        self.baseline_text: Optional[str] = None

    # ------------------------------------------------------------------
    # Opening
    # ------------------------------------------------------------------

    def open_file(self, text: str, file_name: str = "") -> OpenResult:
        """Scan host text and open the best block. Never raises for content problems."""
        self._reset()
        self.file_name = file_name
        self.host_text = text
        self.blocks = scan(text, self.profile.hints, self.mask_char, self.min_length)
        if not self.blocks:
            return OpenResult(error=NoBlocksFoundError("No quoted base64+zlib blocks detected."))

        selected = select_block(self.blocks)
        if selected is None:
            return OpenResult(blocks=self.blocks, error=self.blocks[0].error)
        self._activate(selected)
        return OpenResult(blocks=self.blocks, selected=selected, records=self.records)

    def select_block(self, ordinal: int) -> list:
        """Open a specific block; raises that block's decode error if it has one."""
        block = self.get_block(ordinal)
        if not block.decodable:
            raise block.error or PayloadError(f"{block.label} failed to decode.")
        self._activate(block)
        return self.records

    def get_block(self, ordinal: int) -> PayloadBlock:
        for block in self.blocks:
            if block.ordinal == ordinal:
                return block
        raise KeyError(f"No block #{ordinal + 1} (file has {len(self.blocks)})")

    def _activate(self, block: PayloadBlock):
        self.active_block = block
        self.records = self.profile.parse(block.decoded_text)
        # Unedited records serialize to this; such exports keep the block as it was
        self.baseline_text = self.profile.serialize(self.records)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _require_active(self):
        if self.active_block is None:
            raise NoActiveBlockError("Open a file and decode a block first.")

    def find_record(self, record_id: RecordId):
        """Declarations: ordinal. Waves: (wave,) for the header, (wave, event) for an event."""
        if isinstance(record_id, int):
            record_id = (record_id,)
        wave_or_decl = next((r for r in self.records if r.ordinal == record_id[0]), None)
        if wave_or_decl is None:
            raise KeyError(f"No record {record_id!r}")
        if len(record_id) == 1:
            return wave_or_decl
        if not isinstance(wave_or_decl, Wave) or len(record_id) != 2:
            raise KeyError(f"No record {record_id!r}")
        event = next((e for e in wave_or_decl.events if e.ordinal == record_id[1]), None)
        if event is None:
            raise KeyError(f"No record {record_id!r}")
        return event

    def update_record(self, record_id: RecordId, patch: dict) -> list:
        """Apply a field patch to one record. Derived fields cannot be patched."""
        self._require_active()
        record = self.find_record(record_id)
        editable = EDITABLE_FIELDS[type(record)]
        rejected = sorted(set(patch) - editable)
        if rejected:
            raise ValueError(
                f"Cannot edit {', '.join(rejected)} on {type(record).__name__}; "
                f"editable: {', '.join(sorted(editable))}"
            )
        values = {name: str(value) for name, value in patch.items()}
        for name, value in values.items():
            if "\n" in value or "\r" in value:
                raise SerializationError(f"{name} of {type(record).__name__} must be a single line: {value!r}")
        for name, value in values.items():
            setattr(record, name, value)
        return self.records

    def remove_record(self, record_id: RecordId) -> list:
        self._require_active()
        record = self.find_record(record_id)
        if isinstance(record, Event):
            wave = self.find_record(record_id[0])
            wave.events.remove(record)
        else:
            self.records.remove(record)
        return self.records

    def reorder(self, ordinals: list[int], wave: Optional[int] = None) -> list:
        """Rearrange records (or one wave's events) into the given ordinal order.

        Records whose ordinal is not listed are removed.
        """
        self._require_active()
        if wave is None:
            container = self.records
        else:
            container = self.find_record(wave).events
        by_ordinal = {r.ordinal: r for r in container}
        missing = [o for o in ordinals if o not in by_ordinal]
        if missing:
            raise KeyError(f"Unknown ordinal(s): {missing}")
        if len(set(ordinals)) != len(ordinals):
            raise ValueError("Duplicate ordinals in new order")
        container[:] = [by_ordinal[o] for o in ordinals]
        return self.records

    def replace_text(self, text: str) -> list:
        """Replace the whole decoded text of the active block and reparse."""
        self._require_active()
        self.records = self.profile.parse(text)
        return self.records

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def current_text(self) -> str:
        self._require_active()
        return self.profile.serialize(self.records)

    def export_file(self) -> ExportResult:
        """Serialize the records, re-encode them and splice into the host text."""
        if self.active_block is None:
            raise NoActiveBlockError("Nothing to export: open a file and decode a block first.")
        text = self.current_text()
        if text == self.baseline_text:
            new_inner = self.active_block.raw_inner
        else:
            new_inner = encode_block(text, self.active_block, self.mask_char)
        return ExportResult(
            file_name=export_name(self.file_name, self.profile.export_suffix,
                                  default_stem=self.profile.default_stem),
            text=splice(self.host_text, self.active_block, new_inner),
        )
