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

"""Resolver for reference types living in the linear memory region.

Memory Decoder
==============

A memory reference is a pointer to a header word followed by its payload:

    pointer          header  (string: byte length, array: element count)
    pointer + 32     payload (string bytes, or count * 32 array element words)

Structs have no header. Member ``i`` is the word at ``pointer + i * 32``,
holding either the member's value (value types) or a pointer to it
(reference types):

    pointer + 0      member 0
    pointer + 32     member 1
    ...
"""

from datadecode.config import WORD_SIZE, ZERO_WORD
from datadecode.decode_types import DecodedValue, MemoryOffset, Outcome
from datadecode.decoders.state import DecodeState
from datadecode.decoders.value_decoder import decode_value
from datadecode.locations import Bytes, Location, Pointer
from datadecode.models.type_model import DataLocation, TypeClass, TypeDescriptor
from datadecode.utils.conversion_utils import to_unsigned
from datadecode.utils.memory_utils import ensure_length_within


def decode_memory_reference(
    type_: TypeDescriptor, pointer: MemoryOffset, state: DecodeState
) -> DecodedValue:
    """Decode a string, array or struct reached through a memory pointer.

    Args:
        type_: Descriptor of the memory reference type
        pointer: Byte offset of the value in the memory region
        state: Decode state holding the regions and declarations

    Returns:
        The decoded value, or Outcome.UNRECOGNIZED for unhandled type classes

    Raises:
        MalformedInputError: If a length header is out of bounds
        UnknownDeclarationError: If a struct's declaration is not registered
    """
    # Uninitialized memory reads as zero
    header_word = state.memory.read_word(pointer)
    header = to_unsigned(header_word) if header_word is not None else 0
    type_class = type_.type_class

    if type_class is TypeClass.STRING:
        length = ensure_length_within(
            header,
            "memory string",
            start=pointer + WORD_SIZE,
            limit=state.max_payload_length,
        )
        state.logger.log_memory_payload(type_.type_identifier, pointer, header, length)
        data = state.memory.read_bytes(pointer + WORD_SIZE, length)
        return decode_value(type_, data, state)

    if type_class is TypeClass.ARRAY:
        length = ensure_length_within(
            header * WORD_SIZE,
            "memory array",
            start=pointer + WORD_SIZE,
            limit=state.max_payload_length,
        )
        state.logger.log_memory_payload(type_.type_identifier, pointer, header, length)
        data = state.memory.read_bytes(pointer + WORD_SIZE, length)
        return decode_value(type_, data, state)

    if type_class is TypeClass.STRUCT:
        return _decode_memory_struct(type_, pointer, state)

    state.logger.log_unrecognized("memory reference", type_.type_identifier)
    return Outcome.UNRECOGNIZED


def _decode_memory_struct(
    type_: TypeDescriptor, pointer: MemoryOffset, state: DecodeState
) -> dict[str, DecodedValue]:
    # Deferred: the dispatcher imports this module
    from datadecode.decoders.dispatcher import decode

    members = state.declarations.members_of(type_.declaration_id)
    result: dict[str, DecodedValue] = {}
    for index, member in enumerate(members):
        word = state.memory.read_word(pointer + index * WORD_SIZE) or ZERO_WORD

        member_type = member.type
        relocated = member_type.location is DataLocation.STORAGE
        if relocated:
            # Read out of a memory struct, so the member is memory-resident
            member_type = member_type.with_location(DataLocation.MEMORY)
        state.logger.log_struct_member(
            index, member.name, member_type.type_identifier, relocated
        )

        location: Location
        if member_type.is_reference:
            location = Pointer(MemoryOffset(to_unsigned(word)))
        else:
            location = Bytes(word)
        result[member.name] = decode(member_type, location, state)
    return result
