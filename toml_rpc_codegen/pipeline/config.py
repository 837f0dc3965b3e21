"""
Configuration for the code generator pipeline.

Configuration files are plain JSON objects whose keys match the
dataclass fields below; nested ``formatter`` and ``output`` objects map
onto ``FormatterConfig`` and ``OutputConfig``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from .errors import ConfigError


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Raise error if file exists
    FORCE = "force"  # Default: overwrite, the artifact is regenerated on every build


class FieldOrder(str, Enum):
    """Order of message fields in the generated record."""

    TAG = "tag"  # Ascending numeric tag
    SCHEMA = "schema"  # Document order


class VariantOrder(str, Enum):
    """Order of enum variants in the generated enumeration."""

    SCHEMA = "schema"  # Document order
    VALUE = "value"  # Ascending discriminant


class UnknownTypePolicy(str, Enum):
    """What to do with a field type name missing from the type mapping."""

    PLACEHOLDER = "placeholder"  # Emit the explicit `Unknown` placeholder type
    ERROR = "error"  # Reject the schema


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = False

    # Python formatter: "ruff" or "black" (Rust always uses rustfmt)
    python_tool: str = "ruff"

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Rust edition passed to rustfmt
    rust_edition: str = "2021"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Order of message fields
    field_order: FieldOrder = FieldOrder.TAG

    # Order of enum variants
    variant_order: VariantOrder = VariantOrder.SCHEMA

    # Handling of field types that are not in the type mapping
    unknown_type_policy: UnknownTypePolicy = UnknownTypePolicy.PLACEHOLDER

    # Additional schema type names, mapped onto "u32" or "text"
    extra_types: dict[str, str] = field(default_factory=dict)

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Derive macros added to generated Rust structs and enums
    rust_derives: list[str] = field(default_factory=list)

    # Generate frozen dataclasses for Python records
    frozen_dataclasses: bool = False

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary.

        Unknown top-level keys are ignored.

        Raises:
            ConfigError: If a value has the wrong shape or an unknown enum value
        """
        if not isinstance(d, dict):
            raise ConfigError(f"Invalid configuration: expected an object, got {type(d).__name__}")
        config = CodeGeneratorConfig()
        known = {f.name for f in fields(config)}
        try:
            for k, v in d.items():
                if k == "formatter":
                    config.formatter = FormatterConfig(**v)
                elif k == "output":
                    config.output = OutputConfig(**v)
                    config.output.mode = OutputMode(config.output.mode)
                elif k == "field_order":
                    config.field_order = FieldOrder(v)
                elif k == "variant_order":
                    config.variant_order = VariantOrder(v)
                elif k == "extra_types":
                    config.extra_types = dict(v)
                elif k == "unknown_type_policy":
                    config.unknown_type_policy = UnknownTypePolicy(v)
                elif k in known:
                    setattr(config, k, v)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "field_order": self.field_order.value,
            "variant_order": self.variant_order.value,
            "unknown_type_policy": self.unknown_type_policy.value,
            "extra_types": dict(self.extra_types),
            "add_generation_comment": self.add_generation_comment,
            "rust_derives": list(self.rust_derives),
            "frozen_dataclasses": self.frozen_dataclasses,
            "formatter": {
                "enabled": self.formatter.enabled,
                "python_tool": self.formatter.python_tool,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "rust_edition": self.formatter.rust_edition,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
            },
        }
