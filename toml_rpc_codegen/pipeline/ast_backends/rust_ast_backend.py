"""
Rust AST-based code generation backend.

Generates Rust structs, `#[repr(u32)]` enums and async traits from IR
using custom AST nodes.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import IR, EnumDef, MessageDef, ServiceDef
from ..config import CodeGeneratorConfig
from .base import AstBackend
from .rust_ast_nodes import (
    RustAttribute,
    RustEnum,
    RustField,
    RustFile,
    RustParameter,
    RustStruct,
    RustTrait,
    RustTraitMethod,
    RustVariant,
)
from .rust_serializer import RustSerializer
from .type_mapping import PrimitiveType

# Strict and reserved Rust keywords (2021 edition)
RUST_KEYWORDS = {
    "abstract", "as", "async", "await", "become", "box", "break", "const", "continue",
    "do", "dyn", "else", "enum", "extern", "false", "final", "fn", "for", "if", "impl",
    "in", "let", "loop", "macro", "match", "mod", "move", "mut", "override", "priv",
    "pub", "ref", "return", "static", "struct", "trait", "true", "try", "type",
    "typeof", "unsafe", "unsized", "use", "virtual", "where", "while", "yield",
}  # fmt: skip

# Keywords that cannot be written as raw identifiers
RUST_NON_RAW_KEYWORDS = {"crate", "self", "Self", "super"}


class RustAstBackend(AstBackend):
    """Rust code generation backend using custom AST."""

    TEMPLATE_LANG = "rust"

    FILE_EXTENSION = "rs"

    COMMENT_PREFIX = "//"

    TYPE_MAP = {
        PrimitiveType.U32: "u32",
        PrimitiveType.TEXT: "String",
        PrimitiveType.UNKNOWN: "Unknown",
    }

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.serializer = RustSerializer()

    def generate(self, ir: IR, generation_comment: str = "") -> str:
        """Generate Rust code from IR using AST."""
        return self.serializer.serialize(self.build_file(ir, generation_comment))

    def build_file(self, ir: IR, generation_comment: str = "") -> RustFile:
        """Build the Rust AST: all messages, then all enums, then all services."""
        file = RustFile(generation_comment=self.render_prefix(generation_comment, ir.source_name))
        file.items.extend(self._generate_struct(message) for message in ir.messages)
        file.items.extend(self._generate_enum(enum) for enum in ir.enums)
        file.items.extend(self._generate_trait(service) for service in ir.services)
        return file

    def escape_identifier(self, name: str) -> str:
        """Escape Rust keywords as raw identifiers (`r#type`)."""
        if name in RUST_NON_RAW_KEYWORDS:
            return f"{name}_"
        if name in RUST_KEYWORDS:
            return f"r#{name}"
        return name

    def _derive_attributes(self) -> list[RustAttribute]:
        if not self.config.rust_derives:
            return []
        return [RustAttribute(path="derive", arguments=list(self.config.rust_derives))]

    def _generate_struct(self, message: MessageDef) -> RustStruct:
        struct = RustStruct(name=self.escape_identifier(message.name), attributes=self._derive_attributes())
        for field in message.fields:
            struct.fields.append(
                RustField(
                    name=self.escape_identifier(field.name),
                    type_name=self.translate_type(field, message),
                )
            )
        return struct

    def _generate_enum(self, enum: EnumDef) -> RustEnum:
        node = RustEnum(name=self.escape_identifier(enum.name), attributes=self._derive_attributes())
        # repr(u32) is rejected by rustc on zero-variant enums
        if enum.variants:
            node.attributes.insert(0, RustAttribute(path="repr", arguments=["u32"]))
        for variant in enum.variants:
            node.variants.append(
                RustVariant(
                    name=self.escape_identifier(variant.name),
                    discriminant=f"{variant.value}u32",
                )
            )
        return node

    def _generate_trait(self, service: ServiceDef) -> RustTrait:
        trait = RustTrait(name=self.escape_identifier(service.name))
        for method in service.methods:
            trait.methods.append(
                RustTraitMethod(
                    name=self.escape_identifier(method.name),
                    parameters=[RustParameter(name="input", type_name=self.escape_identifier(method.input.name))],
                    return_type=self.escape_identifier(method.output.name),
                    is_async=True,
                )
            )
        return trait
