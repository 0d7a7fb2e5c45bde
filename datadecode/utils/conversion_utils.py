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

"""Byte-to-number conversion utilities for sign extension and hex rendering.

CONVERSION UTILS
================

This module provides the numeric helpers the decoders rely on:
- Big-endian unsigned interpretation of arbitrary-width byte sequences
- Two's-complement signed interpretation via sign extension
- Fixed-width hexadecimal rendering of addresses

Constants like WORD_SIZE, ADDRESS_SIZE, etc. should be imported from config.
"""

from collections.abc import Callable

from datadecode.config import ADDRESS_MASK, ADDRESS_SIZE
from datadecode.decode_types import AddressString

__all__ = ["sign_extend", "to_unsigned", "to_signed", "to_hex_string"]


def sign_extend(val: int, bits: int) -> int:
    """Sign extend a value to a specified length in bits.

    Args:
        val: Value to sign-extend
        bits: Number of bits in the original value

    Returns:
        Sign-extended value as a Python int (unbounded)

    Example:
        >>> sign_extend(0xFF, 8)  # Extend 8-bit -1 to full width
        -1
        >>> sign_extend(0x7F, 8)  # Extend 8-bit +127 to full width
        127
    """
    if bits == 0:
        return 0
    sign = 1 << (bits - 1)
    return (val & (sign - 1)) - (val & sign)


def to_unsigned(data: bytes) -> int:
    """Interpret bytes as a big-endian unsigned integer.

    Args:
        data: Byte sequence of any width (empty decodes to 0)

    Returns:
        Unsigned integer value
    """
    return int.from_bytes(data, "big", signed=False)


def to_signed(data: bytes) -> int:
    """Interpret bytes as a big-endian two's-complement signed integer.

    The width of the integer is the length of ``data``, so the high bit of
    the first byte is the sign bit.

    Args:
        data: Byte sequence of any width (empty decodes to 0)

    Returns:
        Signed integer value (negative if the high bit is set)
    """
    return sign_extend(to_unsigned(data), len(data) * 8)


def to_hex_string(
    data: bytes,
    width: int = ADDRESS_SIZE,
    formatter: Callable[[str], str] | None = None,
) -> AddressString:
    """Render bytes as a fixed-width, 0x-prefixed, lowercase hex string.

    The value is taken as an unsigned integer and truncated to its low
    ``width`` bytes, so a full 32-byte word holding an address renders as
    the 20-byte address.

    Args:
        data: Bytes holding the value
        width: Output width in bytes (default: ADDRESS_SIZE)
        formatter: Optional canonicalizing transform (checksum casing)
            applied to the lowercase string

    Returns:
        Hex string with exactly ``2 * width`` digits after the prefix

    Example:
        >>> to_hex_string(bytes.fromhex("ff"), width=2)
        '0x00ff'
    """
    mask = ADDRESS_MASK if width == ADDRESS_SIZE else (1 << (width * 8)) - 1
    rendered = f"0x{to_unsigned(data) & mask:0{width * 2}x}"
    if formatter is not None:
        rendered = formatter(rendered)
    return AddressString(rendered)
