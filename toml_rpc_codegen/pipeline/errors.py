"""
Error types raised by the code generator pipeline.

Every phase raises one of these immediately; there is no partial-success
mode, so the first violation ends the compilation.
"""

from __future__ import annotations

from enum import Enum


class CodegenError(Exception):
    """Base class for all code generation failures."""

    pass


class CodegenIOError(CodegenError):
    """Raised when the schema cannot be read or the artifact cannot be written."""

    pass


class SchemaSyntaxError(CodegenError):
    """Raised when the schema text is not valid TOML."""

    pass


class OutputPathError(CodegenError):
    """Raised when the destination artifact path cannot be derived."""

    pass


class GeneratedCodeError(CodegenError):
    """Raised when rendered code fails validation before it is written."""

    pass


class ConfigError(CodegenError, ValueError):
    """Raised when the generator configuration is invalid."""

    pass


class ViolationKind(str, Enum):
    """Kind of structural or semantic schema violation."""

    NOT_A_TABLE = "not_a_table"
    NOT_AN_ARRAY = "not_an_array"
    NOT_A_PAIR = "not_a_pair"
    NOT_A_STRING = "not_a_string"
    TAG_NOT_A_NUMBER = "tag_not_a_number"
    VALUE_NOT_AN_INTEGER = "value_not_an_integer"
    VALUE_NOT_U32 = "value_not_u32"
    MALFORMED_REFERENCE = "malformed_reference"
    UNKNOWN_REFERENCE_KIND = "unknown_reference_kind"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    INVALID_NAME = "invalid_name"
    DUPLICATE_NAME = "duplicate_name"
    UNKNOWN_FIELD_TYPE = "unknown_field_type"


class SchemaTypeError(CodegenError, TypeError):
    """A schema violates the expected structure or references.

    Attributes:
        kind: Which rule was violated
        message: Human readable description of the violation
        path: Dotted location in the schema (e.g. "rpc.MyService.my_call")
    """

    def __init__(self, kind: ViolationKind, message: str, path: str = ""):
        self.kind = kind
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
