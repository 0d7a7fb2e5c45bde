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

"""Custom exceptions for decoding failures.

Exceptions
==========

This module defines a hierarchy of exception types for the decode failures
that are terminal for the immediate caller. Soft outcomes (a location that
was never written, a type class the decoder does not handle) are not
exceptions; they are returned as ``Outcome`` values.
"""

from typing import Any


class DecodeError(Exception):
    """Base exception for all decode-related failures.

    All decoder-specific exceptions inherit from this base class,
    allowing callers to catch all decode errors with a single handler.
    """

    pass


class MalformedInputError(DecodeError):
    """Raw bytes or a length header that cannot be decoded faithfully.

    Raised when:
    - An array payload is not a whole multiple of the element width
    - A length header exceeds the configured maximum payload length
    - An inline storage string claims to be longer than one word
    """

    def __init__(
        self,
        message: str,
        length: int | None = None,
        expected_multiple: int | None = None,
        limit: int | None = None,
    ):
        """Initialize malformed input error with context.

        Args:
            message: Error description
            length: Offending byte length or length header
            expected_multiple: Width the length should have been a multiple of
            limit: Maximum length that was exceeded
        """
        super().__init__(message)
        self.length = length
        self.expected_multiple = expected_multiple
        self.limit = limit


class LocationMismatchError(DecodeError):
    """Location variant does not fit the type being decoded.

    Raised when a value type is handed a pointer or slot, or when a memory
    reference is handed a storage slot (and vice versa).
    """

    def __init__(
        self,
        message: str,
        type_identifier: str | None = None,
        location: Any = None,
    ):
        """Initialize location mismatch error with context.

        Args:
            message: Error description
            type_identifier: Identifier of the type being decoded
            location: The location token that was rejected
        """
        super().__init__(message)
        self.type_identifier = type_identifier
        self.location = location


class RegionAccessError(DecodeError):
    """Invalid region access attempt.

    Raised for negative offsets or slots, and when the storage region cannot
    derive the slot family anchored at a base slot.
    """

    pass


class UnknownDeclarationError(DecodeError):
    """Struct declaration id not present in the declaration registry."""

    def __init__(self, message: str, declaration_id: int | None = None):
        super().__init__(message)
        self.declaration_id = declaration_id


class TypeIdentifierError(DecodeError):
    """Type identifier string that cannot be parsed into a descriptor."""

    pass


class SnapshotError(DecodeError):
    """Snapshot document that cannot be turned into a decode state."""

    pass
