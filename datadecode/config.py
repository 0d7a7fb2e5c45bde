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

"""Central configuration constants for the decoder.

Config
======

Word geometry, address width and overflow bounds shared by the region models
and the decoders. Runtime behaviour (logging sink, address formatting,
payload size cap) is injected through ``DecodeState`` rather than configured
here.
"""

# Word geometry
WORD_SIZE = 32
"""Width in bytes of one addressable word in either region."""

WORD_BITS = WORD_SIZE * 8
MASK256 = (1 << WORD_BITS) - 1
ZERO_WORD = bytes(WORD_SIZE)

# Address rendering
ADDRESS_SIZE = 20
"""Width in bytes of an account address (rendered as 40 hex digits)."""

ADDRESS_MASK = (1 << (ADDRESS_SIZE * 8)) - 1

# Storage string packing: the low bit of the last byte selects the layout
INLINE_STRING_MAX_LENGTH = WORD_SIZE - 1

# A payload described by a length header must end inside the 2^256 address
# space; anything past it is an overflowing header.
ADDRESS_SPACE = 1 << WORD_BITS

# Logging
LOGGER_NAME = "datadecode"
