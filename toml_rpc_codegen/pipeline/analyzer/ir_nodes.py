"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed schema, ready for code generation.
Names are normalized and every service reference points at an entity
built in the same compilation. IR nodes are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..schema_ast.nodes import EntityKind


@dataclass(frozen=True)
class FieldDef:
    """A message field."""

    tag: int
    name: str  # snake_case
    type_name: str  # Schema type name, mapped by the backend
    original_name: str = ""


@dataclass(frozen=True)
class MessageDef:
    """A message, generated as a record."""

    name: str  # PascalCase
    fields: tuple[FieldDef, ...] = ()
    original_name: str = ""


@dataclass(frozen=True)
class VariantDef:
    """An enum variant with its explicit discriminant."""

    name: str  # PascalCase
    value: int
    original_name: str = ""


@dataclass(frozen=True)
class EnumDef:
    """An enum, generated as a 32-bit discriminated enumeration."""

    name: str  # PascalCase
    variants: tuple[VariantDef, ...] = ()
    original_name: str = ""


@dataclass(frozen=True)
class EntityRef:
    """A resolved reference to a message or enum."""

    kind: EntityKind
    name: str  # Normalized name of the target entity


@dataclass(frozen=True)
class MethodDef:
    """A service method taking one entity and returning another."""

    name: str  # snake_case
    input: EntityRef
    output: EntityRef
    original_name: str = ""


@dataclass(frozen=True)
class ServiceDef:
    """A service, generated as an interface of async methods."""

    name: str  # PascalCase
    methods: tuple[MethodDef, ...] = ()
    original_name: str = ""


@dataclass(frozen=True)
class IR:
    """The complete Intermediate Representation of one compilation."""

    messages: tuple[MessageDef, ...] = ()
    enums: tuple[EnumDef, ...] = ()
    services: tuple[ServiceDef, ...] = ()

    # Schema file name, empty for in-memory schemas
    source_name: str = ""
