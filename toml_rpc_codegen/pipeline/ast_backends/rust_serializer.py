"""
Rust AST Serializer.

Converts Rust AST nodes to formatted Rust source code, following the
layout of the prettyplease/rustfmt defaults:
- 4-space indentation
- Attributes on separate lines above declarations
- Trailing comma after every field and variant
- Empty bodies written as `{}`
- No blank lines between items
"""

from __future__ import annotations

from .rust_ast_nodes import (
    RustAttribute,
    RustEnum,
    RustFile,
    RustStruct,
    RustTrait,
    RustTraitMethod,
)


class RustSerializer:
    """Serializes Rust AST nodes to source code."""

    INDENT = "    "  # 4 spaces

    def serialize(self, file: RustFile) -> str:
        """Serialize a complete Rust file to source code."""
        lines: list[str] = []

        for item in file.items:
            if isinstance(item, RustStruct):
                lines.extend(self._serialize_struct(item))
            elif isinstance(item, RustEnum):
                lines.extend(self._serialize_enum(item))
            elif isinstance(item, RustTrait):
                lines.extend(self._serialize_trait(item))
            else:
                raise TypeError(f"Cannot serialize Rust item {item!r}")

        body = "\n".join(lines) + "\n" if lines else ""
        return file.generation_comment + body

    def _serialize_attributes(self, attributes: list[RustAttribute]) -> list[str]:
        return [attr.to_string() for attr in attributes]

    def _serialize_block(self, header: str, members: list[str]) -> list[str]:
        """Serialize `header { members }`, collapsing an empty body to `{}`."""
        if not members:
            return [f"{header} {{}}"]
        return [f"{header} {{", *(f"{self.INDENT}{member}" for member in members), "}"]

    def _serialize_struct(self, struct: RustStruct) -> list[str]:
        members = [f"{field.visibility} {field.name}: {field.type_name}," for field in struct.fields]
        lines = self._serialize_attributes(struct.attributes)
        lines.extend(self._serialize_block(f"{struct.visibility} struct {struct.name}", members))
        return lines

    def _serialize_enum(self, enum: RustEnum) -> list[str]:
        members = []
        for variant in enum.variants:
            if variant.discriminant is None:
                members.append(f"{variant.name},")
            else:
                members.append(f"{variant.name} = {variant.discriminant},")
        lines = self._serialize_attributes(enum.attributes)
        lines.extend(self._serialize_block(f"{enum.visibility} enum {enum.name}", members))
        return lines

    def _serialize_trait(self, trait: RustTrait) -> list[str]:
        members = [self._serialize_method(method) for method in trait.methods]
        lines = self._serialize_attributes(trait.attributes)
        lines.extend(self._serialize_block(f"{trait.visibility} trait {trait.name}", members))
        return lines

    def _serialize_method(self, method: RustTraitMethod) -> str:
        params = [method.receiver] if method.receiver else []
        params.extend(f"{param.name}: {param.type_name}" for param in method.parameters)
        signature = f"fn {method.name}({', '.join(params)})"
        if method.is_async:
            signature = f"async {signature}"
        if method.return_type:
            signature += f" -> {method.return_type}"
        return f"{signature};"
