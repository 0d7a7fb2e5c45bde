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

"""Models of the collaborators the decoders read from.

This package contains read-only models of the two addressable regions, the
type descriptor model and the struct declaration registry. The decoders
consume them through a small read-only surface and never write back.

Modules
-------
memory_model
    Linear memory region:
    - Word reads at arbitrary byte offsets (absent beyond the snapshot)
    - Zero-filled byte range reads

storage_model
    Slot-addressed storage region:
    - Sparse slot map, absent slots reported as None
    - Multi-slot reads from a slot or a derived slot family

type_model
    Type descriptors:
    - Closed TypeClass and DataLocation enums
    - Functional relocation with ``with_location``
    - Compiler type identifier parsing and rendering

declarations
    Struct declaration registry:
    - Ordered (name, type) members per declaration id

Usage
-----
::

    from datadecode.models import MemoryRegion, parse_type_identifier

    memory = MemoryRegion(snapshot_bytes)
    string_type = parse_type_identifier("t_string_memory_ptr")
"""

from datadecode.models.declarations import DeclarationRegistry, Member
from datadecode.models.memory_model import MemoryRegion
from datadecode.models.storage_model import StorageRegion
from datadecode.models.type_model import (
    DataLocation,
    TypeClass,
    TypeDescriptor,
    parse_type_identifier,
)

__all__ = [
    "DeclarationRegistry",
    "Member",
    "MemoryRegion",
    "StorageRegion",
    "DataLocation",
    "TypeClass",
    "TypeDescriptor",
    "parse_type_identifier",
]
