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

"""Tests for memory strings, arrays and structs."""

from dataclasses import replace

import pytest

from datadecode.config import ADDRESS_SPACE, WORD_SIZE
from datadecode.decode_types import Outcome
from datadecode.decoders import dispatcher
from datadecode.decoders.memory_decoder import decode_memory_reference
from datadecode.exceptions import MalformedInputError, UnknownDeclarationError
from datadecode.locations import Pointer
from datadecode.models.type_model import DataLocation


def test_string_reads_header_length_after_pointer(builder, types) -> None:
    state = builder.memory_string(0x80, b"alice").build()

    assert decode_memory_reference(types("t_string_memory_ptr"), 0x80, state) == "alice"


def test_string_longer_than_one_word(builder, types) -> None:
    text = b"the quick brown fox jumps over the lazy dog"
    state = builder.memory_string(0x80, text).build()

    assert decode_memory_reference(types("t_string_memory_ptr"), 0x80, state) == text.decode()


def test_string_stops_at_header_length(builder, types) -> None:
    state = builder.memory_word(0x80, 3).memory_word(0xA0, b"abcdef").build()

    assert decode_memory_reference(types("t_string_memory_ptr"), 0x80, state) == "abc"


def test_uninitialized_pointer_reads_as_empty(builder, types) -> None:
    state = builder.memory_string(0x80, b"x").build()

    assert decode_memory_reference(types("t_string_memory_ptr"), 0x1000, state) == ""
    assert decode_memory_reference(types("t_array$_t_uint256_$dyn_memory_ptr"), 0x1000, state) == []


def test_array_reads_count_words_after_header(builder, types) -> None:
    state = builder.memory_array(0x80, [1, 2, 2**256 - 1]).build()

    result = decode_memory_reference(types("t_array$_t_uint256_$dyn_memory_ptr"), 0x80, state)

    assert result == [1, 2, 2**256 - 1]


def test_array_of_signed_elements(builder, types) -> None:
    state = builder.memory_array(0x40, [2**256 - 1, 5]).build()

    result = decode_memory_reference(types("t_array$_t_int256_$dyn_memory_ptr"), 0x40, state)

    assert result == [-1, 5]


def test_array_header_running_past_address_space_is_malformed(builder, types) -> None:
    # (2^256 / 32) elements starting after the header at 0x80 cannot fit
    state = builder.memory_word(0x80, ADDRESS_SPACE // WORD_SIZE).build()

    with pytest.raises(MalformedInputError):
        decode_memory_reference(types("t_array$_t_uint256_$dyn_memory_ptr"), 0x80, state)


def test_payload_cap_on_state_rejects_long_string(builder, types) -> None:
    state = replace(builder.memory_string(0x80, b"x" * 40).build(), max_payload_length=32)

    with pytest.raises(MalformedInputError) as excinfo:
        decode_memory_reference(types("t_string_memory_ptr"), 0x80, state)

    assert excinfo.value.limit == 32


def test_payload_cap_applies_to_array_bytes(builder, types) -> None:
    state = replace(builder.memory_array(0x80, [1, 2]).build(), max_payload_length=64)

    result = decode_memory_reference(types("t_array$_t_uint256_$dyn_memory_ptr"), 0x80, state)

    assert result == [1, 2]
    with pytest.raises(MalformedInputError):
        decode_memory_reference(
            types("t_array$_t_uint256_$dyn_memory_ptr"),
            0x80,
            replace(state, max_payload_length=63),
        )


def test_string_longer_than_sixteen_mebibytes(builder, types) -> None:
    length = (1 << 24) + 1
    state = builder.memory_word(0x80, length).memory_word(0xA0, b"head").build()

    result = decode_memory_reference(types("t_string_memory_ptr"), 0x80, state)

    assert len(result) == length
    assert result.startswith("head\x00")


def test_string_header_of_max_word_is_malformed(builder, types) -> None:
    state = builder.memory_word(0x80, 2**256 - 1).build()

    with pytest.raises(MalformedInputError):
        decode_memory_reference(types("t_string_memory_ptr"), 0x80, state)


def test_struct_members_are_consecutive_words(builder, types) -> None:
    # struct Point { uint256 x; string label; } at 0x80, label at 0x100
    state = (
        builder.declare_struct(
            12, [("x", types("t_uint256")), ("label", types("t_string_memory_ptr"))]
        )
        .memory_word(0x80, 42)
        .memory_word(0xA0, 0x100)
        .memory_string(0x100, b"origin")
        .build()
    )

    result = decode_memory_reference(types("t_struct$_Point_$12_memory_ptr"), 0x80, state)

    assert result == {"x": 42, "label": "origin"}
    assert list(result) == ["x", "label"]


def test_struct_storage_members_are_relocated_to_memory(builder, types, monkeypatch) -> None:
    state = (
        builder.declare_struct(
            7, [("x", types("t_uint256")), ("y", types("t_string_storage"))]
        )
        .memory_word(0x80, 9)
        .memory_word(0xA0, 0x100)
        .memory_string(0x100, b"moved")
        .build()
    )
    seen = []
    original = dispatcher.decode

    def recording_decode(type_, location, state=None):
        seen.append((type_, location))
        return original(type_, location, state)

    monkeypatch.setattr(dispatcher, "decode", recording_decode)

    result = decode_memory_reference(types("t_struct$_S_$7_memory_ptr"), 0x80, state)

    assert result == {"x": 9, "y": "moved"}
    (x_type, _), (y_type, y_location) = seen
    assert x_type == types("t_uint256")
    assert y_type.location is DataLocation.MEMORY
    assert y_type.type_identifier == "t_string_memory_ptr"
    assert y_location == Pointer(0x100)


def test_nested_struct_member_is_followed(builder, types) -> None:
    state = (
        builder.declare_struct(1, [("a", types("t_uint8")), ("b", types("t_bool"))])
        .declare_struct(
            2, [("inner", types("t_struct$_Inner_$1_storage_ptr")), ("n", types("t_int256"))]
        )
        .memory_word(0x80, 0x200)
        .memory_word(0xA0, 2**256 - 3)
        .memory_word(0x200, 0xFF)
        .memory_word(0x220, 1)
        .build()
    )

    result = decode_memory_reference(types("t_struct$_Outer_$2_memory_ptr"), 0x80, state)

    assert result == {"inner": {"a": 0xFF, "b": True}, "n": -3}


def test_struct_member_past_end_of_memory_reads_as_zero(builder, types) -> None:
    state = (
        builder.declare_struct(3, [("a", types("t_uint256")), ("b", types("t_bool"))])
        .memory_word(0x80, 1)
        .build()
    )

    result = decode_memory_reference(types("t_struct$_P_$3_memory_ptr"), 0x80, state)

    assert result == {"a": 1, "b": False}


def test_struct_with_array_member(builder, types) -> None:
    state = (
        builder.declare_struct(
            4, [("values", types("t_array$_t_uint256_$dyn_storage"))]
        )
        .memory_word(0x80, 0xC0)
        .memory_array(0xC0, [3, 4])
        .build()
    )

    result = decode_memory_reference(types("t_struct$_Bag_$4_memory_ptr"), 0x80, state)

    assert result == {"values": [3, 4]}


def test_struct_without_declaration_raises(builder, types) -> None:
    state = builder.build()

    with pytest.raises(UnknownDeclarationError) as excinfo:
        decode_memory_reference(types("t_struct$_Missing_$99_memory_ptr"), 0x80, state)

    assert excinfo.value.declaration_id == 99


def test_dynamic_bytes_are_unrecognized(builder, types) -> None:
    state = builder.memory_string(0x80, b"\x01\x02").build()

    assert decode_memory_reference(types("t_bytes_memory_ptr"), 0x80, state) is Outcome.UNRECOGNIZED


def test_array_of_strings_elements_are_unrecognized(builder, types) -> None:
    # Elements are pointers, but the payload is decoded as flat words
    state = builder.memory_array(0x80, [0x200, 0x240]).build()

    result = decode_memory_reference(
        types("t_array$_t_string_memory_ptr_$dyn_memory_ptr"), 0x80, state
    )

    assert result == [Outcome.UNRECOGNIZED, Outcome.UNRECOGNIZED]


def test_memory_words_are_not_word_aligned(builder, types) -> None:
    state = builder.memory_string(0x81, b"odd").build()

    assert decode_memory_reference(types("t_string_memory_ptr"), 0x81, state) == "odd"
