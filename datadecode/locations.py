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

"""Location tokens handed to the dispatcher.

Locations
=========

A value is found either in a flat byte pool (value types), at a pointer into
the linear memory region, or at a slot of the storage region. Payloads too
large to live inline in storage are read from the slot family anchored at a
base slot.

    Bytes(data)        value types, decoded straight from the bytes
    Pointer(offset)    memory references
    Slot(slot)         storage references, and inline storage payloads
    SlotFamily(base)   out-of-line storage payloads

Each variant is a frozen dataclass so the dispatcher can match on the
variant instead of guessing what a bare integer means.
"""

from dataclasses import dataclass
from typing import TypeAlias, Union

from datadecode.decode_types import MemoryOffset, SlotKey
from datadecode.exceptions import RegionAccessError


@dataclass(frozen=True)
class Bytes:
    """Raw byte pool for value decoding."""

    data: bytes

    def __post_init__(self) -> None:
        # Accept bytearray/memoryview from region reads
        object.__setattr__(self, "data", bytes(self.data))


@dataclass(frozen=True)
class Pointer:
    """Byte offset into the linear memory region."""

    offset: MemoryOffset

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise RegionAccessError(f"Memory pointer must be >= 0, got {self.offset}")


@dataclass(frozen=True)
class Slot:
    """Single storage slot."""

    slot: SlotKey

    def __post_init__(self) -> None:
        if self.slot < 0:
            raise RegionAccessError(f"Storage slot must be >= 0, got {self.slot}")


@dataclass(frozen=True)
class SlotFamily:
    """Derived slot family anchored at a base slot.

    The first slot of the family is computed by the storage region's
    injected derivation; consecutive slots follow it.
    """

    base: SlotKey

    def __post_init__(self) -> None:
        if self.base < 0:
            raise RegionAccessError(f"Slot family base must be >= 0, got {self.base}")


Location: TypeAlias = Union[Bytes, Pointer, Slot]
"""Argument accepted by the dispatcher."""

StorageLocation: TypeAlias = Union[Slot, SlotFamily]
"""Argument accepted by StorageRegion.read_bytes."""
