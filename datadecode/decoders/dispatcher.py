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

"""Single entry point routing a type and location to the right resolver.

Dispatcher
==========

    value type               Bytes     -> value_decoder.decode_value
    memory reference         Pointer   -> memory_decoder.decode_memory_reference
    storage reference        Slot      -> storage_decoder.decode_storage_reference
    reference in a byte pool Bytes     -> Outcome.UNRECOGNIZED
    other reference category           -> Outcome.UNRECOGNIZED

Array elements and struct members recurse through ``decode`` so nested
types are routed the same way as top-level ones.
"""

from datadecode.decode_types import DecodedValue, Outcome
from datadecode.decoders.memory_decoder import decode_memory_reference
from datadecode.decoders.state import DecodeState
from datadecode.decoders.storage_decoder import decode_storage_reference
from datadecode.decoders.value_decoder import decode_value
from datadecode.exceptions import LocationMismatchError
from datadecode.locations import Bytes, Location, Pointer, Slot
from datadecode.models.type_model import DataLocation, TypeDescriptor


def decode(
    type_: TypeDescriptor, location: Location, state: DecodeState | None = None
) -> DecodedValue:
    """Decode the value of ``type_`` found at ``location``.

    Args:
        type_: Declared type of the value
        location: Bytes for value types, Pointer for memory references,
            Slot for storage references
        state: Decode state (default: empty regions and registry)

    Returns:
        The decoded value or a soft Outcome (ABSENT, UNRECOGNIZED)

    Raises:
        LocationMismatchError: If the location variant does not fit the type
        MalformedInputError: If raw bytes or length headers are malformed
    """
    if state is None:
        state = DecodeState()
    type_identifier = type_.type_identifier

    if not type_.is_reference:
        if not isinstance(location, Bytes):
            raise LocationMismatchError(
                f"value type {type_identifier} needs a byte pool, got {location!r}",
                type_identifier=type_identifier,
                location=location,
            )
        state.logger.log_dispatch("value", type_identifier, location)
        return decode_value(type_, location.data, state)

    if isinstance(location, Bytes):
        # A reference element sliced out of an array payload as raw bytes
        state.logger.log_unrecognized("reference element", type_identifier)
        return Outcome.UNRECOGNIZED

    category = type_.reference_category
    if category is DataLocation.MEMORY:
        if not isinstance(location, Pointer):
            raise LocationMismatchError(
                f"memory reference {type_identifier} needs a pointer, got {location!r}",
                type_identifier=type_identifier,
                location=location,
            )
        state.logger.log_dispatch("memory", type_identifier, location)
        return decode_memory_reference(type_, location.offset, state)

    if category is DataLocation.STORAGE:
        if not isinstance(location, Slot):
            raise LocationMismatchError(
                f"storage reference {type_identifier} needs a slot, got {location!r}",
                type_identifier=type_identifier,
                location=location,
            )
        state.logger.log_dispatch("storage", type_identifier, location)
        return decode_storage_reference(type_, location.slot, state)

    state.logger.log_unrecognized("reference category", type_identifier)
    return Outcome.UNRECOGNIZED
