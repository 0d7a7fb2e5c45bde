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

"""Read-only model of the linear, word-addressed memory region.

Memory Model
============

This module provides a software model of the scratch memory region a
decoder reads reference payloads from. It holds a snapshot of the region's
bytes, allowing the decoders to:

    1. Read a 32-byte header or member word at any byte offset
    2. Slice an arbitrary byte range for string and array payloads

Key Features:
    - Byte-addressable, big-endian words (no alignment requirement)
    - Reads past the end of the snapshot are zero-filled
    - A word whose offset lies entirely beyond the snapshot is absent
    - Immutable once built (no write path)

Usage:
    The region is built once per snapshot and shared by every decode call:

        memory = MemoryRegion(bytes.fromhex(trace_step["memory"]))
        header = memory.read_word(0x80)
        payload = memory.read_bytes(0xA0, 5)
"""

from collections.abc import Mapping

from datadecode.config import MASK256, WORD_SIZE
from datadecode.decode_types import MemoryOffset, Word
from datadecode.exceptions import RegionAccessError


class MemoryRegion:
    """Snapshot of the linear memory region.

    Attributes:
        contents: Raw bytes of the region, starting at offset 0
    """

    def __init__(self, contents: bytes = b"") -> None:
        """Initialize the memory region from a byte snapshot.

        Args:
            contents: Region bytes starting at offset 0
        """
        self.contents: bytes = bytes(contents)

    @classmethod
    def from_words(cls, words: Mapping[int, bytes | int]) -> "MemoryRegion":
        """Build a region from word-sized writes at given byte offsets.

        Integer values are encoded big-endian into one word; byte values are
        placed as-is. Gaps between writes are zero.

        Args:
            words: Mapping of byte offset to a word value or raw bytes

        Returns:
            New MemoryRegion holding the assembled snapshot
        """
        buffer = bytearray()
        for offset, value in sorted(words.items()):
            if offset < 0:
                raise RegionAccessError(f"Memory offset must be >= 0, got {offset}")
            if isinstance(value, int):
                raw = (value & MASK256).to_bytes(WORD_SIZE, "big")
            else:
                raw = bytes(value)
            end = offset + len(raw)
            if end > len(buffer):
                buffer.extend(bytes(end - len(buffer)))
            buffer[offset:end] = raw
        return cls(bytes(buffer))

    def __len__(self) -> int:
        return len(self.contents)

    def read_word(self, offset: MemoryOffset) -> Word | None:
        """Read a full 32-byte word at a byte offset.

        Args:
            offset: Byte offset of the word's first byte

        Returns:
            The word (zero-filled where it runs past the snapshot), or None if
            the offset lies entirely beyond the snapshot
        """
        if offset < 0:
            raise RegionAccessError(f"Memory offset must be >= 0, got {offset}")
        if offset >= len(self.contents):
            return None
        return Word(self.read_bytes(offset, WORD_SIZE))

    def read_bytes(self, offset: MemoryOffset, length: int) -> bytes:
        """Read ``length`` bytes starting at a byte offset.

        Args:
            offset: Byte offset of the first byte
            length: Number of bytes to read

        Returns:
            Exactly ``length`` bytes; bytes past the snapshot read as zero
        """
        if offset < 0 or length < 0:
            raise RegionAccessError(
                f"Invalid memory read: offset={offset}, length={length}"
            )
        data = self.contents[offset : offset + length]
        return data + bytes(length - len(data))
