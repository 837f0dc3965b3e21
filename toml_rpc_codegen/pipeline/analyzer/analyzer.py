"""
Schema analyzer - builds the IR from the schema AST.

Phase 2 of the pipeline. Messages and enums are built first and
independently of each other; services are built last because their
methods reference the other two.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ...utils import to_pascal_case, to_snake_case
from ..config import CodeGeneratorConfig, FieldOrder, VariantOrder
from ..errors import SchemaTypeError, ViolationKind
from ..schema_ast.nodes import EnumNode, MessageNode, SchemaAST, ServiceNode
from .ir_nodes import IR, EnumDef, FieldDef, MessageDef, MethodDef, ServiceDef, VariantDef
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


def _normalize(casing: Callable[[str], str], name: str, path: str, what: str) -> str:
    """Apply a casing function and check that the result is an identifier."""
    normalized = casing(name)
    if not normalized.isidentifier():
        raise SchemaTypeError(
            ViolationKind.INVALID_NAME,
            f"{what} name {name!r} does not normalize to a valid identifier (got {normalized!r})",
            path,
        )
    return normalized


class _NameRegistry:
    """Detects names that collide once normalized."""

    def __init__(self, what: str):
        self.what = what
        self._seen: dict[str, str] = {}

    def claim(self, name: str, path: str) -> None:
        previous = self._seen.setdefault(name, path)
        if previous != path:
            raise SchemaTypeError(
                ViolationKind.DUPLICATE_NAME,
                f"{self.what} collides with {previous} (both named {name!r})",
                path,
            )


class SchemaAnalyzer:
    """Builds the IR from a parsed schema."""

    def __init__(self, config: CodeGeneratorConfig | None = None):
        self.config = config or CodeGeneratorConfig()

    def analyze(self, ast: SchemaAST, source_name: str = "") -> IR:
        """
        Build the complete IR.

        Args:
            ast: The parsed schema
            source_name: Name of the schema file, if any

        Returns:
            The IR for this compilation

        Raises:
            SchemaTypeError: On the first naming or reference violation
        """
        messages = self.build_messages(ast.messages)
        enums = self.build_enums(ast.enums)

        # Messages and enums share the generated namespace
        types = _NameRegistry("type")
        for message in messages:
            types.claim(message.name, f"message.{message.original_name}")
        for enum in enums:
            types.claim(enum.name, f"enum.{enum.original_name}")

        services = self.build_services(ast.services, messages, enums)
        for service in services:
            types.claim(service.name, f"rpc.{service.original_name}")

        logger.debug(
            "Analyzed %d messages, %d enums, %d services",
            len(messages),
            len(enums),
            len(services),
        )
        return IR(messages=messages, enums=enums, services=services, source_name=source_name)

    def build_messages(self, nodes: Iterable[MessageNode]) -> tuple[MessageDef, ...]:
        """Build message definitions."""
        return tuple(self._build_message(node) for node in nodes)

    def build_enums(self, nodes: Iterable[EnumNode]) -> tuple[EnumDef, ...]:
        """Build enum definitions."""
        return tuple(self._build_enum(node) for node in nodes)

    def build_services(
        self,
        nodes: Iterable[ServiceNode],
        messages: Iterable[MessageDef],
        enums: Iterable[EnumDef],
    ) -> tuple[ServiceDef, ...]:
        """Build service definitions, resolving method references."""
        resolver = ReferenceResolver(messages, enums)
        return tuple(self._build_service(node, resolver) for node in nodes)

    def _build_message(self, node: MessageNode) -> MessageDef:
        message_name = _normalize(to_pascal_case, node.name, node.source_path, "message")
        names = _NameRegistry("field")
        tags: dict[int, str] = {}
        fields = []
        for field_node in node.fields:
            name = _normalize(to_snake_case, field_node.name, field_node.source_path, "field")
            names.claim(name, field_node.source_path)
            if field_node.tag in tags:
                logger.warning(
                    "%s: tag %d is used by both %r and %r",
                    node.source_path,
                    field_node.tag,
                    tags[field_node.tag],
                    field_node.name,
                )
            tags.setdefault(field_node.tag, field_node.name)
            fields.append(
                FieldDef(
                    tag=field_node.tag,
                    name=name,
                    type_name=field_node.type_name,
                    original_name=field_node.name,
                )
            )

        if self.config.field_order == FieldOrder.TAG:
            fields.sort(key=lambda f: f.tag)

        return MessageDef(name=message_name, fields=tuple(fields), original_name=node.name)

    def _build_enum(self, node: EnumNode) -> EnumDef:
        enum_name = _normalize(to_pascal_case, node.name, node.source_path, "enum")
        names = _NameRegistry("variant")
        values: dict[int, str] = {}
        variants = []
        for variant_node in node.variants:
            name = _normalize(to_pascal_case, variant_node.name, variant_node.source_path, "variant")
            names.claim(name, variant_node.source_path)
            if variant_node.value in values:
                logger.warning(
                    "%s: value %d is used by both %r and %r",
                    node.source_path,
                    variant_node.value,
                    values[variant_node.value],
                    variant_node.name,
                )
            values.setdefault(variant_node.value, variant_node.name)
            variants.append(VariantDef(name=name, value=variant_node.value, original_name=variant_node.name))

        if self.config.variant_order == VariantOrder.VALUE:
            variants.sort(key=lambda v: v.value)

        return EnumDef(name=enum_name, variants=tuple(variants), original_name=node.name)

    def _build_service(self, node: ServiceNode, resolver: ReferenceResolver) -> ServiceDef:
        service_name = _normalize(to_pascal_case, node.name, node.source_path, "service")
        names = _NameRegistry("method")
        methods = []
        for method_node in node.methods:
            name = _normalize(to_snake_case, method_node.name, method_node.source_path, "method")
            names.claim(name, method_node.source_path)
            methods.append(
                MethodDef(
                    name=name,
                    input=resolver.resolve(method_node.input),
                    output=resolver.resolve(method_node.output),
                    original_name=method_node.name,
                )
            )
        return ServiceDef(name=service_name, methods=tuple(methods), original_name=node.name)
