"""
Mapping from schema field type names to language-neutral primitive types.

Backends translate the primitive types into their own type names. The
table is injectable through ``CodeGeneratorConfig.extra_types``.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from ..config import CodeGeneratorConfig, UnknownTypePolicy
from ..errors import ConfigError, SchemaTypeError, ViolationKind


class PrimitiveType(str, Enum):
    """Primitive field types known to every backend."""

    U32 = "u32"  # Unsigned 32-bit integer
    TEXT = "text"  # String
    UNKNOWN = "unknown"  # Placeholder for unmapped schema type names


DEFAULT_SCHEMA_TYPES: dict[str, PrimitiveType] = {
    "u32": PrimitiveType.U32,
    "String": PrimitiveType.TEXT,
}


class TypeMapping:
    """Maps schema type names to primitive types."""

    def __init__(
        self,
        schema_types: Mapping[str, PrimitiveType] | None = None,
        policy: UnknownTypePolicy = UnknownTypePolicy.PLACEHOLDER,
    ):
        self.schema_types = dict(DEFAULT_SCHEMA_TYPES if schema_types is None else schema_types)
        self.policy = policy

    @classmethod
    def from_config(cls, config: CodeGeneratorConfig) -> TypeMapping:
        """Build the default table extended with ``config.extra_types``.

        Raises:
            ConfigError: If an extra type maps onto an unknown primitive
        """
        schema_types = dict(DEFAULT_SCHEMA_TYPES)
        for type_name, primitive in config.extra_types.items():
            try:
                schema_types[type_name] = PrimitiveType(primitive)
            except ValueError:
                choices = ", ".join(p.value for p in PrimitiveType if p != PrimitiveType.UNKNOWN)
                raise ConfigError(f"extra_types: {type_name!r} maps to {primitive!r}, expected one of {choices}") from None
        return cls(schema_types, config.unknown_type_policy)

    def resolve(self, type_name: str, path: str = "") -> PrimitiveType:
        """
        Map a schema type name.

        Args:
            type_name: Type name as written in the schema (case-sensitive)
            path: Schema location, for error messages

        Returns:
            The primitive type, or PrimitiveType.UNKNOWN under the placeholder policy

        Raises:
            SchemaTypeError: If the name is unknown and the policy is ERROR
        """
        primitive = self.schema_types.get(type_name)
        if primitive is not None:
            return primitive
        if self.policy == UnknownTypePolicy.ERROR:
            known = ", ".join(sorted(self.schema_types))
            raise SchemaTypeError(
                ViolationKind.UNKNOWN_FIELD_TYPE,
                f"unknown field type {type_name!r} (known types: {known})",
                path,
            )
        return PrimitiveType.UNKNOWN
