"""
Reference resolver for service method inputs and outputs.

Resolves `<message|enum>.<Name>` references to the entities built in
the same compilation.
"""

from __future__ import annotations

from collections.abc import Iterable

from ...utils import to_pascal_case
from ..errors import SchemaTypeError, ViolationKind
from ..schema_ast.nodes import EntityKind, RefNode
from .ir_nodes import EntityRef, EnumDef, MessageDef


class ReferenceResolver:
    """Resolves RefNodes against built messages and enums."""

    def __init__(self, messages: Iterable[MessageDef], enums: Iterable[EnumDef]):
        """
        Initialize the resolver.

        Args:
            messages: All messages of the compilation
            enums: All enums of the compilation
        """
        self._names: dict[EntityKind, set[str]] = {
            EntityKind.MESSAGE: {message.name for message in messages},
            EntityKind.ENUM: {enum.name for enum in enums},
        }

    def resolve(self, ref_node: RefNode) -> EntityRef:
        """
        Resolve a reference to its target.

        The referenced name is normalized to PascalCase first, then matched
        exactly (case-sensitively) against the normalized entity names.

        Args:
            ref_node: The RefNode to resolve

        Returns:
            EntityRef naming the resolved entity

        Raises:
            SchemaTypeError: If no entity of that kind has the name
        """
        target_name = to_pascal_case(ref_node.name)
        if target_name not in self._names[ref_node.kind]:
            raise SchemaTypeError(
                ViolationKind.UNRESOLVED_REFERENCE,
                f"{ref_node.kind.value} not found: {ref_node.name!r}",
                ref_node.source_path,
            )
        return EntityRef(kind=ref_node.kind, name=target_name)
