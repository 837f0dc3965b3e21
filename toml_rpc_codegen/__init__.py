"""TOML RPC Code Generator

A Python package for compiling TOML RPC interface definitions (messages,
enums, services) into Rust or Python declarations, with an AST-based
pipeline, optional formatting and atomic output.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    CodegenError,
    CodeGeneratorConfig,
    FormatterConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    SchemaTypeError,
    compile_to_out_dir,
    compile_to_stream,
)

__all__ = [
    "PipelineGenerator",
    "compile_to_out_dir",
    "compile_to_stream",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "CodegenError",
    "SchemaTypeError",
    "AtomicWriter",
]
