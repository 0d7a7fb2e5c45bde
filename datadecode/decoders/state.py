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

"""Read-only handle passed through every recursive decode call."""

from collections.abc import Callable
from dataclasses import dataclass, field

from datadecode.models.declarations import DeclarationRegistry
from datadecode.models.memory_model import MemoryRegion
from datadecode.models.storage_model import StorageRegion
from datadecode.utils.decode_logger import DecodeLogger


@dataclass(frozen=True)
class DecodeState:
    """Regions, declarations and tracing sink for one decode.

    The decoders only issue read queries against the regions and registry,
    so a single state may be shared by concurrent decodes of the same
    snapshot.

    Attributes:
        memory: Linear memory region snapshot
        storage: Storage region snapshot
        declarations: Struct declaration registry
        logger: Tracing sink for decoder events
        address_formatter: Optional canonicalizing transform for addresses
            (e.g. checksum casing); None keeps lowercase hex
        max_payload_length: Optional cap in bytes on any payload read through
            a length header; None accepts every header that fits the
            address space
    """

    memory: MemoryRegion = field(default_factory=MemoryRegion)
    storage: StorageRegion = field(default_factory=StorageRegion)
    declarations: DeclarationRegistry = field(default_factory=DeclarationRegistry)
    logger: DecodeLogger = field(default_factory=DecodeLogger)
    address_formatter: Callable[[str], str] | None = None
    max_payload_length: int | None = None
