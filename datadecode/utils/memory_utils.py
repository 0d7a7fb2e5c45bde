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

"""Byte slicing utilities and payload length checks.

Memory Utils
============

This module provides utilities for carving region payloads into words:
- Word counting for slot-addressed reads
- Chunking of payloads into fixed-width element slices
- Length header validation before a payload is read
- Storage string layout detection from a slot's last byte
"""

from datadecode.config import ADDRESS_SPACE, WORD_SIZE
from datadecode.exceptions import MalformedInputError


def words_spanned(length: int) -> int:
    """Return how many whole words are needed to hold ``length`` bytes.

    Examples:
        >>> words_spanned(0)
        0
        >>> words_spanned(33)
        2
    """
    return -(-length // WORD_SIZE)


def chunk(data: bytes, size: int = WORD_SIZE) -> list[bytes]:
    """Split bytes into consecutive fixed-size chunks.

    Args:
        data: Payload to split
        size: Chunk width in bytes (default: WORD_SIZE)

    Returns:
        List of ``len(data) // size`` chunks, each exactly ``size`` bytes

    Raises:
        MalformedInputError: If ``len(data)`` is not a multiple of ``size``

    Examples:
        >>> chunk(bytes(64))
        [b'\\x00...', b'\\x00...']  # doctest: +SKIP
        >>> chunk(bytes(33))  # doctest: +SKIP
        Traceback: MalformedInputError
    """
    if len(data) % size != 0:
        raise MalformedInputError(
            f"payload of {len(data)} bytes is not a multiple of {size}-byte elements",
            length=len(data),
            expected_multiple=size,
        )
    return [data[start : start + size] for start in range(0, len(data), size)]


def ensure_length_within(
    length: int, what: str, *, start: int = 0, limit: int | None = None
) -> int:
    """Ensure a length header describes a payload that can be read.

    A header is malformed when it is negative or when the payload it
    describes would run past the end of the 2^256 address space. Callers
    that want to bound large traversals pass ``limit``.

    Args:
        length: Byte length derived from a header word
        what: Description of the payload for the error message
        start: Address of the first payload byte
        limit: Optional maximum accepted length in bytes (None: no cap)

    Returns:
        The length (unchanged) if it is within bounds

    Raises:
        MalformedInputError: If the length is negative, overflows the
            address space, or exceeds ``limit``

    Examples:
        >>> ensure_length_within(19_200_000, "storage array")
        19200000
        >>> ensure_length_within(64, "memory string", limit=32)  # doctest: +SKIP
        Traceback: MalformedInputError
    """
    if length < 0 or start + length > ADDRESS_SPACE:
        raise MalformedInputError(
            f"{what} length {length} at 0x{start:x} overflows the address space",
            length=length,
            limit=max(ADDRESS_SPACE - start, 0),
        )
    if limit is not None and length > limit:
        raise MalformedInputError(
            f"{what} length {length} exceeds the {limit}-byte cap",
            length=length,
            limit=limit,
        )
    return length


def is_inline_string(word: bytes) -> bool:
    """Check whether a storage string word holds its payload inline.

    Storage strings short enough to fit in one slot store ``length * 2`` in
    the last byte (always even). Longer strings store ``length * 2 + 1``
    across the whole word (always odd) and spill the payload to the slot
    family.

    Examples:
        >>> is_inline_string(bytes(31) + bytes([10]))
        True
        >>> is_inline_string(bytes(31) + bytes([11]))
        False
    """
    return word[WORD_SIZE - 1] % 2 == 0
