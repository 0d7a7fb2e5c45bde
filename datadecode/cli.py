#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Decode one value from a snapshot file and print it as JSON."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from datadecode.decode_types import Outcome
from datadecode.decoders.dispatcher import decode
from datadecode.exceptions import DecodeError
from datadecode.locations import Bytes, Location, Pointer, Slot
from datadecode.models.type_model import parse_type_identifier
from datadecode.snapshot import load_snapshot
from datadecode.utils.decode_logger import DecodeLogger, configure_logging, get_logger


def _int_argument(text: str) -> int:
    """Parse a decimal or 0x-prefixed integer argument."""
    try:
        return int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from exc


def _render(value: object) -> str:
    if isinstance(value, Outcome):
        return f"<{value.value}>"
    raise TypeError(f"Cannot render {type(value).__name__}")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="datadecode",
        description="Decode a typed value from a memory/storage snapshot",
    )
    parser.add_argument("snapshot", type=Path, help="YAML snapshot file")
    parser.add_argument(
        "type_identifier", help="Type identifier, e.g. t_string_memory_ptr"
    )
    where = parser.add_mutually_exclusive_group(required=True)
    where.add_argument(
        "--pointer", type=_int_argument, help="Memory offset of a memory reference"
    )
    where.add_argument(
        "--slot", type=_int_argument, help="Storage slot of a storage reference"
    )
    where.add_argument("--bytes", dest="raw", help="Hex bytes of a value type")
    parser.add_argument(
        "--max-length",
        type=_int_argument,
        help="Reject payloads longer than this many bytes (default: no cap)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Trace decoder decisions"
    )
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the decoder command line.

    Returns:
        0 on success, 1 if the snapshot or value could not be decoded
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=args.log_file)
    log = get_logger("cli")

    try:
        type_ = parse_type_identifier(args.type_identifier)
        state = load_snapshot(args.snapshot, logger=DecodeLogger())
        if args.max_length is not None:
            state = replace(state, max_payload_length=args.max_length)

        location: Location
        if args.pointer is not None:
            location = Pointer(args.pointer)
        elif args.slot is not None:
            location = Slot(args.slot)
        else:
            raw = args.raw[2:] if args.raw.startswith(("0x", "0X")) else args.raw
            try:
                location = Bytes(bytes.fromhex(raw))
            except ValueError as exc:
                raise DecodeError(f"--bytes is not valid hex: {exc}") from exc

        value = decode(type_, location, state)
    except DecodeError as exc:
        log.error("%s", exc)
        return 1

    print(json.dumps(value, default=_render, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
