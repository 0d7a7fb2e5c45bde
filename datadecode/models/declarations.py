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

"""Registry of struct declarations and their ordered members.

Declarations
============

Struct decoding needs the declared member list of a struct: names, member
types and, crucially, their order, since member ``i`` of a memory struct is
the word at ``pointer + i * WORD_SIZE``.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from datadecode.decode_types import DeclarationId
from datadecode.exceptions import UnknownDeclarationError
from datadecode.models.type_model import TypeDescriptor, parse_type_identifier


@dataclass(frozen=True)
class Member:
    """One named member of a struct declaration."""

    name: str
    type: TypeDescriptor


class DeclarationRegistry:
    """Lookup from struct declaration id to its ordered members.

    Attributes:
        declarations: Mapping of declaration id to member tuple
    """

    def __init__(
        self,
        declarations: Mapping[int, Iterable[Member | tuple[str, TypeDescriptor | str]]]
        | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            declarations: Mapping of declaration id to members, given either
                as Member objects or ``(name, type)`` pairs where the type may
                be a descriptor or a type identifier string
        """
        self.declarations: dict[DeclarationId, tuple[Member, ...]] = {
            DeclarationId(int(declaration_id)): tuple(
                _as_member(member) for member in members
            )
            for declaration_id, members in (declarations or {}).items()
        }

    def __contains__(self, declaration_id: object) -> bool:
        return declaration_id in self.declarations

    def members_of(self, declaration_id: DeclarationId | None) -> tuple[Member, ...]:
        """Return the ordered members of a struct declaration.

        Raises:
            UnknownDeclarationError: If the id is not registered
        """
        if declaration_id is None or declaration_id not in self:
            raise UnknownDeclarationError(
                f"No struct declaration registered for id {declaration_id}",
                declaration_id=declaration_id,
            )
        return self.declarations[declaration_id]


def _as_member(member: Member | tuple[str, TypeDescriptor | str]) -> Member:
    if isinstance(member, Member):
        return member
    name, member_type = member
    if isinstance(member_type, str):
        member_type = parse_type_identifier(member_type)
    return Member(name, member_type)
