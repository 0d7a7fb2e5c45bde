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

"""Type aliases and custom types for the decoder.

Types
=====

This module defines type aliases and NewTypes for better type safety and
code clarity throughout the decoder, along with the closed set of soft
outcomes a decode may return instead of a value.
"""

from enum import Enum
from typing import NewType, TypeAlias, Union

# Region-related types
Word = NewType("Word", bytes)
"""Exactly WORD_SIZE raw bytes read from a region."""

MemoryOffset = NewType("MemoryOffset", int)
"""Byte offset into the linear memory region."""

SlotKey = NewType("SlotKey", int)
"""Key of one slot in the storage region (0 to 2^256-1)."""

# Declaration-related types
DeclarationId = NewType("DeclarationId", int)
"""Identifier of a struct declaration in the declaration registry."""

AddressString = NewType("AddressString", str)
"""Canonical ``0x``-prefixed hex rendering of an address."""


class Outcome(Enum):
    """Soft decode outcomes that are not errors.

    ABSENT: the region had no data at the queried location (never written).
    UNRECOGNIZED: the type class is not handled at this call site.
    """

    ABSENT = "absent"
    UNRECOGNIZED = "unrecognized"

    def __repr__(self) -> str:
        return f"Outcome.{self.name}"


DecodedValue: TypeAlias = Union[
    bool,
    int,
    str,
    list["DecodedValue"],
    dict[str, "DecodedValue"],
    Outcome,
]
"""Result of a decode: a language-level value or a soft outcome."""
