"""
Pipeline - AST-based TOML RPC schema to code generator.

This module provides a multi-phase architecture for generating
declarations from TOML RPC schemas:

1. Phase 1 (Loader/Parser): Decode the TOML and validate its shape into a Schema AST
2. Phase 2 (Analyzer): Normalize names, build messages and enums, resolve service references into the IR
3. Phase 3 (AST Backend): Generate a language-native AST from the IR
4. Phase 4 (Serializer): Convert the AST to source code
5. Phase 5 (Formatter): Optional post-processing (rustfmt, ruff, black)
6. Phase 6 (Writer): Atomic write of the complete artifact
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .config import (
    CodeGeneratorConfig,
    FieldOrder,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    UnknownTypePolicy,
    VariantOrder,
)
from .errors import (
    CodegenError,
    CodegenIOError,
    ConfigError,
    GeneratedCodeError,
    OutputPathError,
    SchemaSyntaxError,
    SchemaTypeError,
    ViolationKind,
)
from .generator import PipelineGenerator, compile_to_out_dir, compile_to_stream, output_path_for

__all__ = [
    "PipelineGenerator",
    "compile_to_out_dir",
    "compile_to_stream",
    "output_path_for",
    "CodeGeneratorConfig",
    "FieldOrder",
    "VariantOrder",
    "UnknownTypePolicy",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "CodegenError",
    "CodegenIOError",
    "ConfigError",
    "SchemaSyntaxError",
    "SchemaTypeError",
    "ViolationKind",
    "OutputPathError",
    "GeneratedCodeError",
]
