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

"""Read-only model of the persistent, slot-addressed storage region.

Storage Model
=============

Storage is a sparse map from 256-bit slot keys to 32-byte words. Payloads
too large for a single slot live in a *slot family*: a run of consecutive
slots whose first slot is derived from a base slot. The derivation (a hash
of the base slot on the real system) is injected, so this model never
implements it.

Key Features:
    - Sparse slot map (dict) with absent slots reported as None
    - Multi-slot reads walk consecutive slots, wrapping at 2^256
    - Slot family derivation supplied by the caller
"""

from collections.abc import Callable, Mapping

from datadecode.config import MASK256, WORD_SIZE, ZERO_WORD
from datadecode.decode_types import SlotKey, Word
from datadecode.exceptions import RegionAccessError
from datadecode.locations import Slot, SlotFamily, StorageLocation
from datadecode.utils.memory_utils import words_spanned

FamilyDerivation = Callable[[SlotKey], int]
"""Maps a base slot to the first slot of its derived family."""


def _normalize_word(value: bytes | int) -> Word:
    if isinstance(value, int):
        return Word((value & MASK256).to_bytes(WORD_SIZE, "big"))
    raw = bytes(value)
    if len(raw) > WORD_SIZE:
        raise RegionAccessError(f"Storage word wider than {WORD_SIZE} bytes: {len(raw)}")
    # Short values are right-aligned like any big-endian number
    return Word(raw.rjust(WORD_SIZE, b"\x00"))


class StorageRegion:
    """Snapshot of the storage region.

    Attributes:
        slots: Mapping of slot key to its 32-byte word
        derive_family: Injected base-slot to first-family-slot derivation
    """

    def __init__(
        self,
        slots: Mapping[int, bytes | int] | None = None,
        derive_family: FamilyDerivation | None = None,
    ) -> None:
        """Initialize the storage region.

        Args:
            slots: Initial slot contents (ints are encoded big-endian)
            derive_family: Derivation used for out-of-line payloads. Without
                one, any read through a SlotFamily raises RegionAccessError.
        """
        self.slots: dict[SlotKey, Word] = {
            SlotKey(slot & MASK256): _normalize_word(value)
            for slot, value in (slots or {}).items()
        }
        self.derive_family = derive_family

    def read_word(self, slot: SlotKey) -> Word | None:
        """Read the word stored at a slot.

        Args:
            slot: Slot key

        Returns:
            The 32-byte word, or None if the slot was never written
        """
        if slot < 0:
            raise RegionAccessError(f"Storage slot must be >= 0, got {slot}")
        return self.slots.get(slot & MASK256)

    def family_start(self, base: SlotKey) -> SlotKey:
        """Return the first slot of the family anchored at ``base``.

        Raises:
            RegionAccessError: If no derivation is configured or it fails
        """
        if self.derive_family is None:
            raise RegionAccessError(
                f"No slot family derivation configured (base slot 0x{base:x})"
            )
        try:
            start = self.derive_family(base)
        except LookupError as exc:
            raise RegionAccessError(
                f"Cannot derive slot family for base slot 0x{base:x}"
            ) from exc
        return SlotKey(start & MASK256)

    def read_bytes(self, location: StorageLocation, length: int) -> bytes:
        """Read ``length`` bytes starting at a slot or slot family.

        Consecutive slots are concatenated; never-written slots read as zero.

        Args:
            location: Slot (read in place) or SlotFamily (derived start)
            length: Number of bytes to read

        Returns:
            Exactly ``length`` bytes
        """
        if length < 0:
            raise RegionAccessError(f"Storage read length must be >= 0, got {length}")
        if length == 0:
            return b""
        if isinstance(location, SlotFamily):
            start = self.family_start(location.base)
        elif isinstance(location, Slot):
            start = location.slot & MASK256
        else:
            raise RegionAccessError(f"Not a storage location: {location!r}")

        words = (
            self.slots.get((start + index) & MASK256, ZERO_WORD)
            for index in range(words_spanned(length))
        )
        return b"".join(words)[:length]
