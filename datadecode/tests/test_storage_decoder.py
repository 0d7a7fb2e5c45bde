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

"""Tests for storage strings (inline and spilled) and dynamic arrays."""

from dataclasses import replace

import pytest

from datadecode.decode_types import Outcome
from datadecode.decoders.state import DecodeState
from datadecode.decoders.storage_decoder import decode_storage_reference
from datadecode.exceptions import MalformedInputError, RegionAccessError
from datadecode.models.storage_model import StorageRegion
from datadecode.tests.state_builder import family_slot, pad_word

STRING = "t_string_storage"
UINT_ARRAY = "t_array$_t_uint256_$dyn_storage"


def test_even_last_byte_reads_inline_from_same_slot(builder, types) -> None:
    # last byte 10 -> 5 characters in the slot itself
    word = b"hello".ljust(31, b"\x00") + bytes([10])
    state = builder.storage_word(3, word).storage_word(family_slot(3), pad_word(b"WRONG")).build()

    assert decode_storage_reference(types(STRING), 3, state) == "hello"


def test_odd_value_reads_from_slot_family(builder, types) -> None:
    # value 11 -> (11 - 1) / 2 = 5 characters from the family, not the base slot
    state = builder.storage_word(3, 11).storage_word(family_slot(3), pad_word(b"world")).build()

    assert decode_storage_reference(types(STRING), 3, state) == "world"


def test_long_string_spans_family_slots(builder, types) -> None:
    text = b"a string long enough to need more than one storage slot of room"
    state = builder.storage_string(0, text).build()

    assert decode_storage_reference(types(STRING), 0, state) == text.decode()


def test_thirty_one_bytes_stay_inline(builder, types) -> None:
    text = b"x" * 31
    state = builder.storage_string(5, text).build()

    assert state.storage.read_word(5)[-1] == 62
    assert decode_storage_reference(types(STRING), 5, state) == text.decode()


def test_declared_empty_string_is_backed_by_zero_word(builder, types) -> None:
    state = builder.storage_word(1, 0).build()

    assert decode_storage_reference(types(STRING), 1, state) == ""


def test_inline_length_longer_than_slot_is_malformed(builder, types) -> None:
    state = builder.storage_word(0, bytes(31) + bytes([100])).build()

    with pytest.raises(MalformedInputError) as excinfo:
        decode_storage_reference(types(STRING), 0, state)

    assert excinfo.value.length == 50


def test_array_reads_count_words_from_family(builder, types) -> None:
    state = builder.storage_array(2, [10, 20, 2**256 - 1]).build()

    assert decode_storage_reference(types(UINT_ARRAY), 2, state) == [10, 20, 2**256 - 1]


def test_array_of_bools(builder, types) -> None:
    state = builder.storage_array(2, [0, 1]).build()

    result = decode_storage_reference(types("t_array$_t_bool_$dyn_storage"), 2, state)

    assert result == [False, True]


def test_array_elements_never_written_read_as_zero(builder, types) -> None:
    state = builder.storage_word(4, 2).build()

    assert decode_storage_reference(types(UINT_ARRAY), 4, state) == [0, 0]


def test_empty_array_needs_no_family(types) -> None:
    state = DecodeState(storage=StorageRegion({0: 0}))

    assert decode_storage_reference(types(UINT_ARRAY), 0, state) == []


@pytest.mark.parametrize("identifier", [STRING, UINT_ARRAY])
def test_never_written_slot_is_absent(builder, types, identifier: str) -> None:
    state = builder.storage_string(0, b"elsewhere").build()

    assert decode_storage_reference(types(identifier), 9, state) is Outcome.ABSENT


def test_spilled_string_without_family_derivation_raises(types) -> None:
    state = DecodeState(storage=StorageRegion({0: 11}))

    with pytest.raises(RegionAccessError):
        decode_storage_reference(types(STRING), 0, state)


def test_array_count_overflowing_address_space_is_malformed(builder, types) -> None:
    state = builder.storage_word(0, 2**255).build()

    with pytest.raises(MalformedInputError):
        decode_storage_reference(types(UINT_ARRAY), 0, state)


def test_array_larger_than_sixteen_mebibytes_decodes(builder, types) -> None:
    # 600,000 words = 19,200,000 payload bytes; only the last one is written
    state = builder.storage_word(0, 600_000).storage_word(family_slot(0, 599_999), 7).build()

    result = decode_storage_reference(types(UINT_ARRAY), 0, state)

    assert len(result) == 600_000
    assert result[0] == 0
    assert result[-1] == 7


def test_payload_cap_on_state_rejects_long_payloads(builder, types) -> None:
    state = replace(
        builder.storage_array(0, [1, 2, 3]).storage_string(1, b"y" * 40).build(),
        max_payload_length=64,
    )

    with pytest.raises(MalformedInputError) as excinfo:
        decode_storage_reference(types(UINT_ARRAY), 0, state)
    assert excinfo.value.limit == 64
    assert decode_storage_reference(types(STRING), 1, state) == "y" * 40
    with pytest.raises(MalformedInputError):
        decode_storage_reference(types(STRING), 1, replace(state, max_payload_length=39))


@pytest.mark.parametrize(
    "identifier",
    [
        "t_mapping$_t_address_$_t_uint256_$",
        "t_struct$_Point_$12_storage",
        "t_bytes_storage",
    ],
)
def test_unhandled_storage_types_are_unrecognized(builder, types, identifier: str) -> None:
    state = builder.storage_word(0, 1).build()

    assert decode_storage_reference(types(identifier), 0, state) is Outcome.UNRECOGNIZED
