"""
BSM2 Payload Block Editor

Finds the compressed, base64-encoded payload blocks embedded in quoted string
literals of .as host files, decodes them, and round-trips their records
through YAML. Only the edited block's span changes in the written file.

Usage:
    bsm2edit info <level.as>
    bsm2edit decode <level.as> [--block N]
    bsm2edit export <level.as> <records.yaml> [--block N]
    bsm2edit import <level.as> <records.yaml> [--block N] [--output PATH]

Edited files are always written under a new name (level_edited.as, or
level_env_edited.as in environment mode); the input is never overwritten.

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

import argparse
import sys
from pathlib import Path

from . import __version__
from .declarations import group_by_category
from .mask import MASK_CHAR
from .profiles import ENVIRONMENT, PROFILES, WAVES, get_profile
from .scanner import MIN_PAYLOAD_LENGTH
from .session import EditorSession, OpenResult
from .waves import count_events
from .yaml_io import export_to_yaml, import_from_yaml


# ============================================================================
# File Helpers
# ============================================================================

def read_host(path: Path) -> str:
    """Read host text as UTF-8 without newline translation."""
    return path.read_bytes().decode("utf-8")


def write_host(path: Path, text: str):
    path.write_bytes(text.encode("utf-8"))


def open_session(args) -> tuple[EditorSession, OpenResult]:
    """Read the input file, open it in a session and apply --block."""
    session = EditorSession(get_profile(args.mode), mask_char=args.mask_char, min_length=args.min_length)
    input_path = Path(args.input)
    result = session.open_file(read_host(input_path), input_path.name)

    for block in result.blocks:
        if block.error is not None:
            print(f"Warning: {block.label}: {block.error}", file=sys.stderr)

    block_number = getattr(args, "block", None)
    if block_number is not None:
        session.select_block(block_number - 1)
    elif result.error is not None:
        raise result.error
    return session, result


# ============================================================================
# Text Summary (info command)
# ============================================================================

def export_to_text(session: EditorSession) -> str:
    """Human-readable summary of blocks and records."""
    lines = []
    lines.append("=" * 60)
    lines.append(f"BSM2 Payload Blocks: {session.file_name or '(unnamed)'}")
    lines.append("=" * 60)
    lines.append("")

    lines.append("[Blocks]")
    if session.blocks:
        for block in session.blocks:
            marker = "*" if block is session.active_block else " "
            if block.decodable:
                status = f"{block.framing.name.lower()}, {len(block.decoded_text)} chars decoded"
            else:
                status = f"not decodable ({type(block.error).__name__})"
            lines.append(
                f" {marker}[{block.ordinal + 1}] {block.quote_char}...{block.quote_char} "
                f"span {block.span_start}-{block.span_end}, {len(block.cleaned_encoded)} b64 chars, "
                f"{len(block.mask_positions)} masks, {status}"
                + (" (likely match)" if block.classification else "")
            )
    else:
        lines.append("  (None)")
    lines.append("")

    if session.active_block is None:
        lines.append("No decodable block.")
        return "\n".join(lines)

    if session.profile.name == ENVIRONMENT.name:
        lines.append(f"[Declarations] {len(session.records)}")
        for category, records in group_by_category(session.records).items():
            lines.append(f"  {category}:")
            for record in records:
                lines.append(f"    {record.name} = {record.value} ({record.value_type.name.lower()})")
    else:
        lines.append(f"[Waves] {len(session.records)}")
        for wave in session.records:
            suffix = " (synthetic)" if wave.synthetic else ""
            lines.append(f"  [{wave.ordinal + 1}] {wave.header_line}{suffix}: {len(wave.events)} events")
        counts = count_events(session.records)
        if counts:
            lines.append("")
            lines.append("[Event Kinds]")
            for kind, count in counts.items():
                lines.append(f"  {kind}: {count}")

    return "\n".join(lines)


# ============================================================================
# CLI
# ============================================================================

def cmd_info(args):
    """Show blocks and records of a host file."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        session = EditorSession(get_profile(args.mode), mask_char=args.mask_char, min_length=args.min_length)
        result = session.open_file(read_host(input_path), input_path.name)
        print(export_to_text(session))
        if result.error is not None:
            print(f"Warning: {result.error}", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_decode(args):
    """Print the decoded text of a block."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        session, _ = open_session(args)
        print(session.active_block.decoded_text)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_export(args):
    """Export a block's records to YAML."""
    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        session, _ = open_session(args)
        output_path.write_text(export_to_yaml(session), encoding="utf-8")
        print(f"Exported to: {output_path}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_import(args):
    """Apply YAML records and write the edited host file."""
    input_path = Path(args.input)
    yaml_path = Path(args.yaml)

    for path in (input_path, yaml_path):
        if not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return 1

    try:
        session, _ = open_session(args)
        import_from_yaml(yaml_path.read_text(encoding="utf-8"), session)
        exported = session.export_file()

        output_path = Path(args.output) if args.output else input_path.with_name(exported.file_name)
        if output_path.resolve() == input_path.resolve():
            print(f"Error: Refusing to overwrite the input file: {input_path}", file=sys.stderr)
            return 1

        write_host(output_path, exported.text)
        print(f"Imported to: {output_path}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="bsm2edit",
        description="BSM2 Payload Block Editor (waves and environment blocks in .as files)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s info level.as                          List blocks and waves
  %(prog)s --mode environment info level.as       List environment declarations
  %(prog)s decode --block 2 level.as              Print block #2 decoded
  %(prog)s export level.as level.yaml             Dump records to YAML
  %(prog)s import level.as level.yaml             Write level_edited.as from YAML

Only the selected block is re-encoded; the rest of the file is copied
byte-for-byte. Originals are never overwritten.
"""
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--mode", choices=sorted(PROFILES), default=WAVES.name,
                        help="Record grammar and keyword hints to use (default: waves)")
    parser.add_argument("--mask-char", default=MASK_CHAR,
                        help=f"Obfuscation character interleaved in payloads (default: {MASK_CHAR!r})")
    parser.add_argument("--min-length", type=int, default=MIN_PAYLOAD_LENGTH,
                        help=f"Minimum base64 characters for a payload block (default: {MIN_PAYLOAD_LENGTH})")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # info command
    info_parser = subparsers.add_parser("info", help="Show blocks and records")
    info_parser.add_argument("input", help="Input .as host file")
    info_parser.set_defaults(func=cmd_info)

    # decode command
    decode_parser = subparsers.add_parser("decode", help="Print a block's decoded text")
    decode_parser.add_argument("input", help="Input .as host file")
    decode_parser.add_argument("--block", type=int, help="Block number (1-based, default: auto-select)")
    decode_parser.set_defaults(func=cmd_decode)

    # export command
    export_parser = subparsers.add_parser("export", help="Export a block's records to YAML")
    export_parser.add_argument("input", help="Input .as host file")
    export_parser.add_argument("output", help="Output YAML file")
    export_parser.add_argument("--block", type=int, help="Block number (1-based, default: auto-select)")
    export_parser.set_defaults(func=cmd_export)

    # import command
    import_parser = subparsers.add_parser("import", help="Apply YAML records and write an edited copy")
    import_parser.add_argument("input", help="Original .as host file")
    import_parser.add_argument("yaml", help="Edited YAML file")
    import_parser.add_argument("--block", type=int, help="Block number (1-based, default: from YAML)")
    import_parser.add_argument("--output", help="Output path (default: <name>_edited.as next to input)")
    import_parser.set_defaults(func=cmd_import)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
