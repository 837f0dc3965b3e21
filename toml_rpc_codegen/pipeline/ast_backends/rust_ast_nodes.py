"""
Rust AST node definitions.

These nodes represent the subset of Rust items the generator emits:
structs, fieldless enums with explicit discriminants, and traits with
async method signatures. They are serialized by RustSerializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RustNode:
    """Base class for all Rust AST nodes."""

    pass


@dataclass
class RustAttribute(RustNode):
    """Represents an outer attribute (e.g., #[repr(u32)])."""

    path: str = ""
    arguments: list[str] = field(default_factory=list)

    def to_string(self) -> str:
        """Convert to attribute string."""
        if self.arguments:
            return f"#[{self.path}({', '.join(self.arguments)})]"
        return f"#[{self.path}]"


@dataclass
class RustField(RustNode):
    """Represents a named struct field."""

    name: str = ""
    type_name: str = ""
    visibility: str = "pub"


@dataclass
class RustStruct(RustNode):
    """Represents a struct with named fields."""

    name: str = ""
    visibility: str = "pub"
    attributes: list[RustAttribute] = field(default_factory=list)
    fields: list[RustField] = field(default_factory=list)


@dataclass
class RustVariant(RustNode):
    """Represents a unit enum variant with an optional discriminant expression."""

    name: str = ""
    discriminant: str | None = None


@dataclass
class RustEnum(RustNode):
    """Represents an enum declaration."""

    name: str = ""
    visibility: str = "pub"
    attributes: list[RustAttribute] = field(default_factory=list)
    variants: list[RustVariant] = field(default_factory=list)


@dataclass
class RustParameter(RustNode):
    """Represents a typed function parameter."""

    name: str = ""
    type_name: str = ""


@dataclass
class RustTraitMethod(RustNode):
    """Represents a trait method signature without a body."""

    name: str = ""
    receiver: str = "&self"
    parameters: list[RustParameter] = field(default_factory=list)
    return_type: str | None = None
    is_async: bool = False


@dataclass
class RustTrait(RustNode):
    """Represents a trait declaration."""

    name: str = ""
    visibility: str = "pub"
    attributes: list[RustAttribute] = field(default_factory=list)
    methods: list[RustTraitMethod] = field(default_factory=list)


@dataclass
class RustFile(RustNode):
    """Represents a complete Rust source file."""

    generation_comment: str = ""
    items: list[RustStruct | RustEnum | RustTrait] = field(default_factory=list)
