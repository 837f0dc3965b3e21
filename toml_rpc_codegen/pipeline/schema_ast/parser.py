"""
Schema parser that builds an AST.

Phase 1 of the pipeline: check the shape of the decoded TOML tables and
convert them into typed schema AST nodes. Every structural check lives
here, so later phases only deal with names and references.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..errors import SchemaTypeError, ViolationKind
from .nodes import (
    EntityKind,
    EnumNode,
    FieldNode,
    MessageNode,
    MethodNode,
    RefNode,
    SchemaAST,
    ServiceNode,
    VariantNode,
)

logger = logging.getLogger(__name__)

U32_MAX = 2**32 - 1

# Accepted tag syntax: ASCII digits with an optional leading plus sign
_TAG_PATTERN = re.compile(r"\+?[0-9]+")


class SchemaParser:
    """Parses decoded TOML tables into a SchemaAST."""

    # Top-level sections understood by the generator
    SECTIONS = ("message", "enum", "rpc")

    def parse(self, schema: Mapping[str, Any]) -> SchemaAST:
        """
        Parse a decoded schema into an AST.

        Args:
            schema: The decoded TOML document

        Returns:
            SchemaAST with messages, enums and services in document order

        Raises:
            SchemaTypeError: On the first structural violation
        """
        for key in schema:
            if key not in self.SECTIONS:
                logger.debug("Ignoring unknown top-level key %r", key)

        return SchemaAST(
            messages=self.parse_messages(self._section(schema, "message")),
            enums=self.parse_enums(self._section(schema, "enum")),
            services=self.parse_services(self._section(schema, "rpc")),
        )

    def parse_messages(self, messages: Mapping[str, Any]) -> list[MessageNode]:
        """Parse the `message` section."""
        nodes = []
        for name, fields in messages.items():
            path = f"message.{name}"
            table = self._expect_table(fields, path, "message")
            node = MessageNode(name=name, source_path=path)
            for tag, value in table.items():
                node.fields.append(self._parse_field(tag, value, f"{path}.{tag}"))
            nodes.append(node)
        return nodes

    def parse_enums(self, enums: Mapping[str, Any]) -> list[EnumNode]:
        """Parse the `enum` section."""
        nodes = []
        for name, variants in enums.items():
            path = f"enum.{name}"
            table = self._expect_table(variants, path, "enum")
            node = EnumNode(name=name, source_path=path)
            for variant, value in table.items():
                node.variants.append(self._parse_variant(variant, value, f"{path}.{variant}"))
            nodes.append(node)
        return nodes

    def parse_services(self, services: Mapping[str, Any]) -> list[ServiceNode]:
        """Parse the `rpc` section."""
        nodes = []
        for name, methods in services.items():
            path = f"rpc.{name}"
            table = self._expect_table(methods, path, "service")
            node = ServiceNode(name=name, source_path=path)
            for method, value in table.items():
                node.methods.append(self._parse_method(method, value, f"{path}.{method}"))
            nodes.append(node)
        return nodes

    def _section(self, schema: Mapping[str, Any], key: str) -> Mapping[str, Any]:
        """Get a top-level section; a missing section is empty."""
        if key not in schema:
            return {}
        return self._expect_table(schema[key], key, "section")

    def _expect_table(self, value: Any, path: str, what: str) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise SchemaTypeError(ViolationKind.NOT_A_TABLE, f"{what} is not a table", path)
        return value

    def _expect_pair(self, value: Any, path: str, what: str) -> tuple[str, str]:
        """Check that a value is a two-element array of strings."""
        if not isinstance(value, list):
            raise SchemaTypeError(ViolationKind.NOT_AN_ARRAY, f"{what} value is not an array", path)
        if len(value) != 2:
            raise SchemaTypeError(ViolationKind.NOT_A_PAIR, f"{what} value must be a two-element array", path)
        first, second = value
        if not isinstance(first, str) or not isinstance(second, str):
            raise SchemaTypeError(ViolationKind.NOT_A_STRING, f"{what} value elements must be strings", path)
        return first, second

    def _parse_field(self, tag: str, value: Any, path: str) -> FieldNode:
        if not _TAG_PATTERN.fullmatch(tag) or int(tag) > U32_MAX:
            raise SchemaTypeError(ViolationKind.TAG_NOT_A_NUMBER, f"tag {tag!r} is not a number", path)
        name, type_name = self._expect_pair(value, path, "field")
        return FieldNode(tag=int(tag), name=name, type_name=type_name, source_path=path)

    def _parse_variant(self, name: str, value: Any, path: str) -> VariantNode:
        # bool is an int subclass but TOML booleans are not integers
        if isinstance(value, bool) or not isinstance(value, int):
            raise SchemaTypeError(ViolationKind.VALUE_NOT_AN_INTEGER, "enum variant value is not an integer", path)
        if not 0 <= value <= U32_MAX:
            raise SchemaTypeError(ViolationKind.VALUE_NOT_U32, f"enum variant value must be a u32, got {value}", path)
        return VariantNode(name=name, value=value, source_path=path)

    def _parse_method(self, name: str, value: Any, path: str) -> MethodNode:
        input_ref, output_ref = self._expect_pair(value, path, "method")
        return MethodNode(
            name=name,
            input=self._parse_ref(input_ref, "input", path),
            output=self._parse_ref(output_ref, "output", path),
            source_path=path,
        )

    def _parse_ref(self, ref: str, role: str, path: str) -> RefNode:
        """Parse a `<message|enum>.<Name>` reference string."""
        kind, sep, name = ref.partition(".")
        if not sep:
            raise SchemaTypeError(
                ViolationKind.MALFORMED_REFERENCE,
                f"method {role} must be in the form <message|enum>.name, got {ref!r}",
                path,
            )
        try:
            entity_kind = EntityKind(kind)
        except ValueError:
            raise SchemaTypeError(ViolationKind.UNKNOWN_REFERENCE_KIND, f"unknown {role} type {kind!r}", path) from None
        return RefNode(kind=entity_kind, name=name, source_path=path)
