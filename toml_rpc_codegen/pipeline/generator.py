"""
Pipeline generator and compile entry points.

``PipelineGenerator`` is a pure function of its inputs: it holds the
decoded schema and configuration, never mutates them, and returns the
same text on every call. The ``compile_*`` functions add file I/O around
it, writing only once the complete artifact has been rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

from .. import __version__
from .analyzer import IR, SchemaAnalyzer
from .ast_backends import get_backend, get_backend_class
from .atomic_writer import AtomicWriter
from .config import CodeGeneratorConfig, OutputMode
from .errors import CodegenIOError, OutputPathError
from .formatters import get_formatter
from .schema_ast import SchemaParser, load_schema

logger = logging.getLogger(__name__)


def _generation_comment(command_line: str | None) -> str:
    """Build the tool/command line comment for the generated file header."""
    return f"Generated by toml_rpc_codegen v{__version__} : {command_line or 'toml_rpc_codegen'}"


class PipelineGenerator:
    """Compiles one decoded schema into source code for a target language."""

    def __init__(
        self,
        schema: Mapping[str, Any],
        config: CodeGeneratorConfig | None = None,
        language: str = "rust",
        source_name: str = "",
        command_line: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            schema: Decoded TOML schema (`message`, `enum`, `rpc` tables)
            config: Code generation configuration
            language: Target language, "rust" or "python"
            source_name: Schema file name shown in the header comment
            command_line: Invocation shown in the header comment, defaults to the tool name
        """
        self.schema = schema
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.source_name = source_name
        self.command_line = command_line
        self.backend = get_backend(language, self.config)

    def analyze(self) -> IR:
        """Run the parse and analysis phases."""
        ast = SchemaParser().parse(self.schema)
        return SchemaAnalyzer(self.config).analyze(ast, self.source_name)

    def generate(self) -> str:
        """
        Generate the complete source text.

        Raises:
            SchemaTypeError: On the first schema violation
        """
        ir = self.analyze()
        comment = _generation_comment(self.command_line) if self.config.add_generation_comment else ""
        code = self.backend.generate(ir, comment)

        if self.config.formatter.enabled:
            code = get_formatter(self.language, self.config.formatter).format(code, self.config.formatter)

        logger.debug("Generated %d bytes of %s code", len(code), self.language)
        return code


def _generate_from_file(
    schema_path: Path,
    config: CodeGeneratorConfig | None,
    language: str,
    command_line: str | None,
) -> PipelineGenerator:
    schema = load_schema(schema_path)
    return PipelineGenerator(schema, config, language, source_name=schema_path.name, command_line=command_line)


def compile_to_stream(
    schema_path: str | Path,
    writer: TextIO,
    config: CodeGeneratorConfig | None = None,
    language: str = "rust",
    command_line: str | None = None,
) -> None:
    """
    Compile a schema file and write the generated code to a text stream.

    The stream receives one complete payload, or nothing if compilation fails.

    Raises:
        CodegenError: On any failure
    """
    code = _generate_from_file(Path(schema_path), config, language, command_line).generate()
    try:
        writer.write(code)
    except OSError as e:
        raise CodegenIOError(f"Cannot write generated code: {e}") from e


def output_path_for(schema_path: str | Path, out_dir: str | Path, language: str = "rust") -> Path:
    """
    Derive the artifact path: the schema's stem with the language's extension, inside out_dir.

    Raises:
        OutputPathError: If the schema path has no file name or out_dir is not a directory
    """
    extension = get_backend_class(language).FILE_EXTENSION
    schema_path = Path(schema_path)
    if schema_path.name in ("", ".", ".."):
        raise OutputPathError(f"Schema path has no file name: {str(schema_path)!r}")
    out_dir = Path(out_dir)
    if not out_dir.is_dir():
        raise OutputPathError(f"Invalid out dir path: {str(out_dir)!r} is not a directory")
    return out_dir / Path(schema_path.name).with_suffix(f".{extension}")


def compile_to_out_dir(
    schema_path: str | Path,
    out_dir: str | Path,
    config: CodeGeneratorConfig | None = None,
    language: str = "rust",
    command_line: str | None = None,
) -> Path:
    """
    Compile a schema file into `<out_dir>/<schema stem>.<rs|py>`.

    Returns:
        Path of the written artifact

    Raises:
        OutputPathError: If the artifact path cannot be derived
        CodegenError: On any other failure; no artifact is written
    """
    config = config or CodeGeneratorConfig()
    schema_path = Path(schema_path)
    out_path = output_path_for(schema_path, out_dir, language)

    code = _generate_from_file(schema_path, config, language, command_line).generate()

    writer = AtomicWriter()
    try:
        if config.output.mode == OutputMode.ERROR_IF_EXISTS:
            writer.write_if_not_exists(out_path, code, language, config.output.validate_before_write)
        else:
            writer.write(out_path, code, language, config.output.validate_before_write)
    except OSError as e:
        raise CodegenIOError(f"Cannot write {out_path}: {e}") from e

    logger.info("Compiled %s -> %s", schema_path, out_path)
    return out_path
