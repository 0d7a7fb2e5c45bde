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

"""Resolver for reference types living in the storage region.

Storage Decoder
===============

Storage packs short payloads into the value's own slot and spills longer
ones to the slot family anchored at it.

Dynamic arrays:
    slot          element count
    family[0..]   count * 32 bytes of elements

Strings (the parity of the last byte decides the layout):
    ┌───────────────────────────────────────────────────────────────┐
    │ last byte even: inline                                        │
    │   slot = [ payload (length bytes) ... 0 | length * 2 ]        │
    │ last byte odd: out-of-line                                    │
    │   slot = length * 2 + 1                                       │
    │   family[0..] = payload                                       │
    └───────────────────────────────────────────────────────────────┘
"""

from datadecode.config import INLINE_STRING_MAX_LENGTH, WORD_SIZE
from datadecode.decode_types import DecodedValue, Outcome, SlotKey
from datadecode.decoders.state import DecodeState
from datadecode.decoders.value_decoder import decode_value
from datadecode.exceptions import MalformedInputError
from datadecode.locations import Slot, SlotFamily
from datadecode.models.type_model import TypeClass, TypeDescriptor
from datadecode.utils.conversion_utils import to_unsigned
from datadecode.utils.memory_utils import ensure_length_within, is_inline_string


def decode_storage_reference(
    type_: TypeDescriptor, slot: SlotKey, state: DecodeState
) -> DecodedValue:
    """Decode a dynamic array or string stored at a slot.

    Args:
        type_: Descriptor of the storage reference type
        slot: Slot holding the length word (and inline payload)
        state: Decode state holding the storage region

    Returns:
        The decoded value, Outcome.ABSENT if the slot was never written, or
        Outcome.UNRECOGNIZED for unhandled type classes

    Raises:
        MalformedInputError: If a length header is out of bounds
        RegionAccessError: If the slot family cannot be derived
    """
    type_class = type_.type_class
    if type_class not in (TypeClass.ARRAY, TypeClass.STRING):
        state.logger.log_unrecognized("storage reference", type_.type_identifier)
        return Outcome.UNRECOGNIZED

    word = state.storage.read_word(slot)
    if word is None:
        state.logger.log_absent(type_.type_identifier, slot)
        return Outcome.ABSENT

    if type_class is TypeClass.ARRAY:
        count = to_unsigned(word)
        length = ensure_length_within(
            count * WORD_SIZE, "storage array", limit=state.max_payload_length
        )
        state.logger.log_storage_packing(type_.type_identifier, slot, False, length)
        data = state.storage.read_bytes(SlotFamily(slot), length)
        return decode_value(type_, data, state)

    # Parity must be checked before the word is read as a length
    if is_inline_string(word):
        length = word[WORD_SIZE - 1] // 2
        if length > INLINE_STRING_MAX_LENGTH:
            raise MalformedInputError(
                f"inline storage string at slot 0x{slot:x} claims {length} bytes",
                length=length,
                limit=INLINE_STRING_MAX_LENGTH,
            )
        ensure_length_within(
            length, "inline storage string", limit=state.max_payload_length
        )
        state.logger.log_storage_packing(type_.type_identifier, slot, True, length)
        data = state.storage.read_bytes(Slot(slot), length)
    else:
        length = ensure_length_within(
            (to_unsigned(word) - 1) // 2,
            "storage string",
            limit=state.max_payload_length,
        )
        state.logger.log_storage_packing(type_.type_identifier, slot, False, length)
        data = state.storage.read_bytes(SlotFamily(slot), length)
    return decode_value(type_, data, state)
