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

"""Typed value decoder for word-oriented memory and storage regions.

This package reconstructs language-level values (booleans, integers,
addresses, strings, arrays and structs) from the raw bytes of a linear
memory region or a slot-addressed storage region, given each value's
declared type.

Package Structure
-----------------

Subpackages:
    decoders
        The dispatcher and the value, memory and storage resolvers

    models
        Region snapshots, type descriptors and the struct declaration registry

    utils
        Numeric conversion, payload slicing and logging helpers

    tests
        pytest suite

Modules:
    config
        Central configuration constants (word size, address width, limits)

    decode_types
        Type aliases and the Outcome soft results (ABSENT, UNRECOGNIZED)

    locations
        Tagged location tokens (Bytes, Pointer, Slot, SlotFamily)

    exceptions
        Custom exception hierarchy for decode failures

    snapshot
        YAML snapshot loading into a DecodeState

    cli
        ``datadecode`` command line entry point

Quick Start
-----------
Decode a memory string::

    from datadecode import DecodeState, MemoryRegion, Pointer, decode
    from datadecode import parse_type_identifier

    memory = MemoryRegion.from_words({0x80: 5, 0xA0: b"alice"})
    state = DecodeState(memory=memory)
    decode(parse_type_identifier("t_string_memory_ptr"), Pointer(0x80), state)
    # 'alice'

From the shell::

    datadecode snapshot.yaml t_string_storage --slot 0
"""

from datadecode.config import WORD_SIZE
from datadecode.decode_types import DecodedValue, Outcome
from datadecode.decoders import DecodeState, decode
from datadecode.exceptions import DecodeError, MalformedInputError
from datadecode.locations import Bytes, Pointer, Slot, SlotFamily
from datadecode.models import (
    DeclarationRegistry,
    MemoryRegion,
    StorageRegion,
    TypeDescriptor,
    parse_type_identifier,
)

__all__ = [
    "WORD_SIZE",
    "DecodedValue",
    "Outcome",
    "DecodeState",
    "decode",
    "DecodeError",
    "MalformedInputError",
    "Bytes",
    "Pointer",
    "Slot",
    "SlotFamily",
    "DeclarationRegistry",
    "MemoryRegion",
    "StorageRegion",
    "TypeDescriptor",
    "parse_type_identifier",
]
