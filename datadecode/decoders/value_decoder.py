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

"""Scalar value decoder for raw byte pools.

Value Decoder
=============

Turns a byte sequence plus a type descriptor into a primitive or flat array
value. No region reads happen here; the bytes are whatever the caller (or
a reference resolver) sliced out.

    bool      False iff every byte is zero
    uint      big-endian unsigned, width = len(data)
    int       big-endian two's complement, width = len(data)
    address   0x + 40 hex digits, optionally canonicalized
    string    one character per byte (latin-1 style, not UTF-8)
    array     WORD_SIZE chunks, each dispatched with the element type
    other     Outcome.UNRECOGNIZED
"""

from datadecode.config import ADDRESS_SIZE, WORD_SIZE
from datadecode.decode_types import DecodedValue, Outcome
from datadecode.decoders.state import DecodeState
from datadecode.locations import Bytes
from datadecode.models.type_model import TypeClass, TypeDescriptor
from datadecode.utils.conversion_utils import to_hex_string, to_signed, to_unsigned
from datadecode.utils.memory_utils import chunk


def decode_value(
    type_: TypeDescriptor, data: bytes, state: DecodeState | None = None
) -> DecodedValue:
    """Decode a value type (or a flat array payload) from raw bytes.

    Args:
        type_: Descriptor of the value
        data: Raw bytes holding the value
        state: Decode state; needed for array elements and address
            formatting (default: empty state)

    Returns:
        The decoded value, or Outcome.UNRECOGNIZED for unhandled type classes

    Raises:
        MalformedInputError: If an array payload is not a whole number of words
    """
    if state is None:
        state = DecodeState()
    type_class = type_.type_class

    if type_class is TypeClass.BOOL:
        return any(data)

    if type_class is TypeClass.UINT:
        return to_unsigned(data)

    if type_class is TypeClass.INT:
        return to_signed(data)

    if type_class is TypeClass.ADDRESS:
        return to_hex_string(data, ADDRESS_SIZE, state.address_formatter)

    if type_class is TypeClass.STRING:
        # Byte-for-byte mapping, kept for compatibility with existing output
        return bytes(data).decode("latin-1")

    if type_class is TypeClass.ARRAY and type_.element_type is not None:
        # Deferred: the dispatcher imports this module
        from datadecode.decoders.dispatcher import decode

        element_type = type_.element_type
        state.logger.log_dispatch("array", type_.type_identifier, f"{len(data)} bytes")
        return [
            decode(element_type, Bytes(element), state)
            for element in chunk(data, WORD_SIZE)
        ]

    state.logger.log_unrecognized("value", type_.type_identifier)
    return Outcome.UNRECOGNIZED
