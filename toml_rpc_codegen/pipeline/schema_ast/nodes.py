"""
Schema AST node definitions.

These nodes represent the shape-validated TOML schema before any name
normalization or reference resolution. Names are kept exactly as they
appear in the schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntityKind(str, Enum):
    """Kind of entity a service method can reference."""

    MESSAGE = "message"
    ENUM = "enum"


@dataclass
class SchemaNode:
    """Base class for all schema AST nodes."""

    # Dotted location in the schema, used in error messages
    source_path: str = ""


@dataclass
class FieldNode(SchemaNode):
    """A message field: `"<tag>" = ["<name>", "<type>"]`."""

    tag: int = 0
    name: str = ""
    type_name: str = ""


@dataclass
class MessageNode(SchemaNode):
    """A `[message.<Name>]` table."""

    name: str = ""
    fields: list[FieldNode] = field(default_factory=list)


@dataclass
class VariantNode(SchemaNode):
    """An enum variant: `<name> = <uint>`."""

    name: str = ""
    value: int = 0


@dataclass
class EnumNode(SchemaNode):
    """An `[enum.<Name>]` table."""

    name: str = ""
    variants: list[VariantNode] = field(default_factory=list)


@dataclass
class RefNode(SchemaNode):
    """An unresolved `<message|enum>.<Name>` reference."""

    kind: EntityKind = EntityKind.MESSAGE
    name: str = ""


@dataclass
class MethodNode(SchemaNode):
    """A service method: `<name> = ["<input ref>", "<output ref>"]`."""

    name: str = ""
    input: RefNode = field(default_factory=RefNode)
    output: RefNode = field(default_factory=RefNode)


@dataclass
class ServiceNode(SchemaNode):
    """An `[rpc.<Name>]` table."""

    name: str = ""
    methods: list[MethodNode] = field(default_factory=list)


@dataclass
class SchemaAST:
    """The complete parsed schema."""

    messages: list[MessageNode] = field(default_factory=list)
    enums: list[EnumNode] = field(default_factory=list)
    services: list[ServiceNode] = field(default_factory=list)
