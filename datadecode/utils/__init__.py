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

"""Utility functions for the decoder.

This package provides helper functions used throughout the decoder for
numeric conversion, payload slicing, and logging.

Modules
-------
conversion_utils
    Byte-to-number conversions:
    - Big-endian unsigned and two's-complement signed decoding
    - Sign extension for arbitrary bit widths
    - Fixed-width hex rendering for addresses

memory_utils
    Payload slicing helpers:
    - Chunking payloads into word-sized elements
    - Length header bounds checking
    - Storage string layout detection

decode_logger
    Structured logging for decoder tracing:
    - Logger hierarchy and handler setup
    - DecodeLogger helpers for dispatch, packing and struct member events

Usage
-----
Import utilities as needed::

    from datadecode.utils.conversion_utils import to_signed
    from datadecode.utils.memory_utils import chunk

    value = to_signed(bytes.fromhex("ff" * 32))  # -1
    words = chunk(payload)
"""

from datadecode.utils.conversion_utils import (
    sign_extend,
    to_hex_string,
    to_signed,
    to_unsigned,
)
from datadecode.utils.memory_utils import chunk

__all__ = [
    "sign_extend",
    "to_hex_string",
    "to_signed",
    "to_unsigned",
    "chunk",
]
