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

"""Type descriptors and compiler type identifier parsing.

Type Model
==========

A ``TypeDescriptor`` describes the declared type of a value: its type class,
where a reference type lives (memory, storage, calldata), the element type
of arrays and the declaration id of structs. Descriptors are immutable; a
member read out of a memory-resident struct is redescribed with
``with_location`` rather than by editing its identifier string.

Type Identifiers:
    Compilers describe types with identifiers such as::

        t_uint256
        t_address_payable
        t_string_memory_ptr
        t_string_storage
        t_array$_t_uint256_$dyn_memory_ptr
        t_array$_t_string_memory_ptr_$3_storage
        t_struct$_Point_$12_memory_ptr
        t_mapping$_t_address_$_t_uint256_$

    ``parse_type_identifier`` turns these into descriptors and
    ``TypeDescriptor.type_identifier`` renders them back.

Classification:
    ┌──────────────┬──────────────────────────────────────────────┐
    │ value types  │ bool, uint, int, address, fixed_bytes, enum, │
    │              │ contract                                     │
    │ reference    │ string, bytes, array, struct, mapping        │
    └──────────────┴──────────────────────────────────────────────┘
"""

import re
from dataclasses import dataclass, replace
from enum import Enum

from datadecode.decode_types import DeclarationId
from datadecode.exceptions import TypeIdentifierError


class TypeClass(Enum):
    """Closed set of type classes a descriptor can carry."""

    BOOL = "bool"
    UINT = "uint"
    INT = "int"
    ADDRESS = "address"
    FIXED_BYTES = "fixed_bytes"
    ENUM = "enum"
    CONTRACT = "contract"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    STRUCT = "struct"
    MAPPING = "mapping"


class DataLocation(Enum):
    """Region a reference type lives in."""

    MEMORY = "memory"
    STORAGE = "storage"
    CALLDATA = "calldata"


REFERENCE_CLASSES = frozenset(
    {
        TypeClass.STRING,
        TypeClass.BYTES,
        TypeClass.ARRAY,
        TypeClass.STRUCT,
        TypeClass.MAPPING,
    }
)


@dataclass(frozen=True)
class TypeDescriptor:
    """Declared type of a value.

    Attributes:
        type_class: Classification of the type
        location: Region of a reference type (None for value types)
        element_type: Element descriptor for arrays, value descriptor for mappings
        key_type: Key descriptor for mappings
        declaration_id: Declaration id for structs, enums and contracts
        name: Declared name for structs, enums and contracts
        bits: Width in bits for uint/int, width in bytes for fixed_bytes
        length: Static length of a fixed-size array (None when dynamic)
        pointer: True if the reference is a pointer (``_ptr`` suffix)
        payable: True for ``address payable``
    """

    type_class: TypeClass
    location: DataLocation | None = None
    element_type: "TypeDescriptor | None" = None
    key_type: "TypeDescriptor | None" = None
    declaration_id: DeclarationId | None = None
    name: str = ""
    bits: int | None = None
    length: int | None = None
    pointer: bool = True
    payable: bool = False

    @property
    def is_reference(self) -> bool:
        """True if the value is reached through a pointer or slot."""
        return self.type_class in REFERENCE_CLASSES

    @property
    def reference_category(self) -> DataLocation | None:
        """Region of a reference type; None for value types."""
        return self.location if self.is_reference else None

    def with_location(self, location: DataLocation) -> "TypeDescriptor":
        """Return a copy of this descriptor relocated to another region.

        The copy keeps every other field, including the declared name and
        declaration id. Storage state variables (no ``_ptr``) become
        pointers, since a relocated value is always reached by reference.
        """
        return replace(self, location=location, pointer=True)

    @property
    def type_identifier(self) -> str:
        """Compiler-style identifier for this descriptor."""
        return _render(self)

    def __str__(self) -> str:
        return self.type_identifier


# Class words recognized after the ``t_`` prefix
_VALUE_WORDS = {
    "bool": TypeClass.BOOL,
    "uint": TypeClass.UINT,
    "int": TypeClass.INT,
    "address": TypeClass.ADDRESS,
    "string": TypeClass.STRING,
}

_DECLARED_WORDS = {
    "struct": TypeClass.STRUCT,
    "enum": TypeClass.ENUM,
    "contract": TypeClass.CONTRACT,
}

# Longest suffixes first so "_storage_ptr" is not read as "_storage"
_LOCATION_SUFFIXES = (
    ("_memory_ptr", DataLocation.MEMORY, True),
    ("_storage_ptr", DataLocation.STORAGE, True),
    ("_calldata_ptr", DataLocation.CALLDATA, True),
    ("_memory", DataLocation.MEMORY, False),
    ("_storage", DataLocation.STORAGE, False),
    ("_calldata", DataLocation.CALLDATA, False),
)

_WORD_RE = re.compile(r"t_([a-z]+)(\d*)")
_DIGITS_RE = re.compile(r"\d+")


def parse_type_identifier(identifier: str) -> TypeDescriptor:
    """Parse a compiler type identifier into a descriptor.

    Args:
        identifier: Identifier such as ``t_array$_t_uint256_$dyn_memory_ptr``

    Returns:
        Descriptor equivalent to the identifier

    Raises:
        TypeIdentifierError: If the identifier is malformed or names a type
            class the model does not know

    Example:
        >>> parse_type_identifier("t_string_storage_ptr").location
        <DataLocation.STORAGE: 'storage'>
    """
    descriptor, end = _parse(identifier, 0)
    if end != len(identifier):
        raise TypeIdentifierError(
            f"Trailing characters in type identifier {identifier!r} at {end}"
        )
    return descriptor


def _expect(text: str, pos: int, token: str) -> int:
    if not text.startswith(token, pos):
        raise TypeIdentifierError(f"Expected {token!r} at {pos} in {text!r}")
    return pos + len(token)


def _parse_location(text: str, pos: int) -> tuple[DataLocation | None, bool, int]:
    for suffix, location, pointer in _LOCATION_SUFFIXES:
        if text.startswith(suffix, pos):
            return location, pointer, pos + len(suffix)
    return None, True, pos


def _parse(text: str, pos: int) -> tuple[TypeDescriptor, int]:
    match = _WORD_RE.match(text, pos)
    if match is None:
        raise TypeIdentifierError(f"Expected type at {pos} in {text!r}")
    word, width = match.group(1), match.group(2)
    pos = match.end()

    if word in ("uint", "int"):
        return TypeDescriptor(_VALUE_WORDS[word], bits=int(width or 256)), pos

    if word == "bytes":
        if width:
            return TypeDescriptor(TypeClass.FIXED_BYTES, bits=int(width)), pos
        location, pointer, pos = _parse_location(text, pos)
        return TypeDescriptor(TypeClass.BYTES, location=location, pointer=pointer), pos

    if width:
        raise TypeIdentifierError(f"Unexpected width on {word!r} in {text!r}")

    if word == "address":
        if text.startswith("_payable", pos):
            return TypeDescriptor(TypeClass.ADDRESS, payable=True), pos + len("_payable")
        return TypeDescriptor(TypeClass.ADDRESS), pos

    if word == "bool":
        return TypeDescriptor(TypeClass.BOOL), pos

    if word == "string":
        location, pointer, pos = _parse_location(text, pos)
        return TypeDescriptor(TypeClass.STRING, location=location, pointer=pointer), pos

    if word == "array":
        pos = _expect(text, pos, "$_")
        element, pos = _parse(text, pos)
        pos = _expect(text, pos, "_$")
        if text.startswith("dyn", pos):
            length, pos = None, pos + len("dyn")
        else:
            digits = _DIGITS_RE.match(text, pos)
            if digits is None:
                raise TypeIdentifierError(f"Expected array length at {pos} in {text!r}")
            length, pos = int(digits.group()), digits.end()
        location, pointer, pos = _parse_location(text, pos)
        descriptor = TypeDescriptor(
            TypeClass.ARRAY,
            location=location,
            element_type=element,
            length=length,
            pointer=pointer,
        )
        return descriptor, pos

    if word in _DECLARED_WORDS:
        pos = _expect(text, pos, "$_")
        name_end = text.find("_$", pos)
        if name_end <= pos:
            raise TypeIdentifierError(f"Expected declared name at {pos} in {text!r}")
        name = text[pos:name_end]
        digits = _DIGITS_RE.match(text, name_end + 2)
        if digits is None:
            raise TypeIdentifierError(f"Expected declaration id after {name!r} in {text!r}")
        pos = digits.end()
        type_class = _DECLARED_WORDS[word]
        location, pointer = None, True
        if type_class is TypeClass.STRUCT:
            location, pointer, pos = _parse_location(text, pos)
        descriptor = TypeDescriptor(
            type_class,
            location=location,
            declaration_id=DeclarationId(int(digits.group())),
            name=name,
            pointer=pointer,
        )
        return descriptor, pos

    if word == "mapping":
        pos = _expect(text, pos, "$_")
        key, pos = _parse(text, pos)
        pos = _expect(text, pos, "_$_")
        value, pos = _parse(text, pos)
        pos = _expect(text, pos, "_$")
        # Mappings only ever live in storage
        descriptor = TypeDescriptor(
            TypeClass.MAPPING,
            location=DataLocation.STORAGE,
            key_type=key,
            element_type=value,
            pointer=False,
        )
        return descriptor, pos

    raise TypeIdentifierError(f"Unknown type class {word!r} in {text!r}")


def _render_location(descriptor: TypeDescriptor) -> str:
    if descriptor.location is None:
        return ""
    suffix = f"_{descriptor.location.value}"
    return f"{suffix}_ptr" if descriptor.pointer else suffix


def _render(descriptor: TypeDescriptor) -> str:
    type_class = descriptor.type_class
    if type_class in (TypeClass.UINT, TypeClass.INT):
        return f"t_{type_class.value}{descriptor.bits or 256}"
    if type_class is TypeClass.FIXED_BYTES:
        return f"t_bytes{descriptor.bits or 32}"
    if type_class is TypeClass.ADDRESS:
        return "t_address_payable" if descriptor.payable else "t_address"
    if type_class is TypeClass.BOOL:
        return "t_bool"
    if type_class in (TypeClass.STRING, TypeClass.BYTES):
        return f"t_{type_class.value}{_render_location(descriptor)}"
    if type_class is TypeClass.ARRAY:
        element = _render(descriptor.element_type) if descriptor.element_type else "t_unknown"
        length = "dyn" if descriptor.length is None else str(descriptor.length)
        return f"t_array$_{element}_${length}{_render_location(descriptor)}"
    if type_class is TypeClass.MAPPING:
        key = _render(descriptor.key_type) if descriptor.key_type else "t_unknown"
        value = _render(descriptor.element_type) if descriptor.element_type else "t_unknown"
        return f"t_mapping$_{key}_$_{value}_$"
    # struct, enum, contract
    rendered = f"t_{type_class.value}$_{descriptor.name}_${descriptor.declaration_id}"
    if type_class is TypeClass.STRUCT:
        rendered += _render_location(descriptor)
    return rendered
