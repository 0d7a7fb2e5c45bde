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

"""Load a region snapshot document into a decode state.

Snapshot Files
==============

A snapshot captures everything a decode reads, as YAML::

    memory: "0x0000...0005616c696365"
    storage:
      "0x0": "0x616c6963650000000000000000000000000000000000000000000000000a"
      "0x1": 2
    families:
      "0x1": "0xb10e2d527612073b26eecdfd717e6a320cf44b4afac2b0732d9fcbe2b7fa0cf6"
    declarations:
      12:
        - {name: x, type: t_uint256}
        - {name: label, type: t_string_storage}

Slots, family anchors and words accept hex strings or integers. ``families``
maps a base slot to the first slot of its derived family, so snapshots carry
the derivation results instead of the derivation algorithm.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from datadecode.decoders.state import DecodeState
from datadecode.exceptions import SnapshotError, TypeIdentifierError
from datadecode.models.declarations import DeclarationRegistry, Member
from datadecode.models.memory_model import MemoryRegion
from datadecode.models.storage_model import StorageRegion
from datadecode.models.type_model import parse_type_identifier
from datadecode.utils.decode_logger import DecodeLogger


def load_snapshot(path: Path, logger: DecodeLogger | None = None) -> DecodeState:
    """Read a YAML snapshot file and build a decode state from it.

    Args:
        path: Snapshot file
        logger: Tracing sink for the returned state (default: DecodeLogger())

    Returns:
        DecodeState backed by the snapshot's regions and declarations

    Raises:
        SnapshotError: If the file cannot be read or is not a valid snapshot
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Invalid YAML in snapshot {path}: {exc}") from exc
    return parse_snapshot(document or {}, logger=logger)


def parse_snapshot(
    document: Mapping[str, Any], logger: DecodeLogger | None = None
) -> DecodeState:
    """Build a decode state from an already-parsed snapshot document."""
    if not isinstance(document, Mapping):
        raise SnapshotError("Snapshot document must be a mapping")

    memory = MemoryRegion(_to_bytes(document.get("memory") or "", "memory"))

    storage_section = _section(document, "storage")
    slots = {
        _to_int(slot, "storage slot"): _to_word_value(word, f"storage slot {slot}")
        for slot, word in storage_section.items()
    }
    families = {
        _to_int(base, "family base"): _to_int(start, f"family of {base}")
        for base, start in _section(document, "families").items()
    }
    storage = StorageRegion(slots, derive_family=families.__getitem__)

    declarations = DeclarationRegistry(
        {
            _to_int(declaration_id, "declaration id"): _members(members, declaration_id)
            for declaration_id, members in _section(document, "declarations").items()
        }
    )

    return DecodeState(
        memory=memory,
        storage=storage,
        declarations=declarations,
        logger=logger if logger is not None else DecodeLogger(),
    )


def _section(document: Mapping[str, Any], key: str) -> Mapping[Any, Any]:
    section = document.get(key) or {}
    if not isinstance(section, Mapping):
        raise SnapshotError(f"Snapshot section {key!r} must be a mapping")
    return section


def _members(members: Any, declaration_id: Any) -> list[Member]:
    if not isinstance(members, list):
        raise SnapshotError(f"Declaration {declaration_id} must list its members")
    result = []
    for entry in members:
        if not isinstance(entry, Mapping) or "name" not in entry or "type" not in entry:
            raise SnapshotError(
                f"Declaration {declaration_id} member needs 'name' and 'type': {entry!r}"
            )
        try:
            member_type = parse_type_identifier(str(entry["type"]))
        except TypeIdentifierError as exc:
            raise SnapshotError(
                f"Declaration {declaration_id} member {entry['name']!r}: {exc}"
            ) from exc
        result.append(Member(str(entry["name"]), member_type))
    return result


def _to_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise SnapshotError(f"Invalid {what}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError as exc:
            raise SnapshotError(f"Invalid {what}: {value!r}") from exc
    raise SnapshotError(f"Invalid {what}: {value!r}")


def _to_bytes(value: Any, what: str) -> bytes:
    if not isinstance(value, str):
        raise SnapshotError(f"Invalid {what}: expected hex string, got {value!r}")
    digits = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(digits)
    except ValueError as exc:
        raise SnapshotError(f"Invalid {what}: {exc}") from exc


def _to_word_value(value: Any, what: str) -> bytes | int:
    # Hex strings keep their byte layout, integers are numeric values
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        return _to_bytes(value, what)
    return _to_int(value, what)
