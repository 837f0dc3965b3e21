"""
Base class for AST-based code generation backends.

Defines the interface that all language-specific AST backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.ir_nodes import IR, FieldDef, MessageDef
from ..config import CodeGeneratorConfig
from .type_mapping import PrimitiveType, TypeMapping


class AstBackend(ABC):
    """Abstract base class for AST-based code generation backends."""

    # Type mapping from primitive types to language types
    TYPE_MAP: dict[PrimitiveType, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment prefix
    COMMENT_PREFIX: str = "//"

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self.type_mapping = TypeMapping.from_config(config)
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, ir: IR, generation_comment: str = "") -> str:
        """
        Generate code from IR.

        Args:
            ir: The intermediate representation
            generation_comment: Text of the header comment, empty for none

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def escape_identifier(self, name: str) -> str:
        """
        Make a name usable as an identifier in the target language.

        Args:
            name: Normalized entity, field or method name

        Returns:
            The name, escaped if it is a reserved word
        """

    def translate_type(self, field: FieldDef, message: MessageDef) -> str:
        """
        Translate a field's schema type to a language-specific type string.

        Args:
            field: The field
            message: The message that owns the field

        Returns:
            Language-specific type string
        """
        primitive = self.type_mapping.resolve(field.type_name, f"message.{message.original_name}.{field.tag}")
        return self.TYPE_MAP[primitive]

    def render_prefix(self, generation_comment: str, source_name: str = "") -> str:
        """Render the file header comment, or an empty string."""
        if not generation_comment:
            return ""
        return self.prefix_template.render(
            comment_prefix=self.COMMENT_PREFIX,
            generation_comment=generation_comment,
            source_name=source_name,
        )
