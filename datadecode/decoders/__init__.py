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

"""Typed value decoders.

This package reconstructs language-level values from raw region bytes.

Modules
-------
dispatcher
    The single entry point ``decode``: routes value types to the value
    decoder and references to the memory or storage resolver

value_decoder
    Value types from a byte pool (bool, uint, int, address, string, arrays
    of word-sized elements)

memory_decoder
    Strings, arrays and structs behind a memory pointer

storage_decoder
    Strings (inline and out-of-line) and dynamic arrays at a storage slot

state
    DecodeState: regions, declarations and tracing sink

Usage
-----
::

    from datadecode.decoders import DecodeState, decode
    from datadecode.locations import Pointer

    value = decode(string_type, Pointer(0x80), state)
"""

from datadecode.decoders.dispatcher import decode
from datadecode.decoders.memory_decoder import decode_memory_reference
from datadecode.decoders.state import DecodeState
from datadecode.decoders.storage_decoder import decode_storage_reference
from datadecode.decoders.value_decoder import decode_value

__all__ = [
    "decode",
    "decode_memory_reference",
    "decode_storage_reference",
    "decode_value",
    "DecodeState",
]
