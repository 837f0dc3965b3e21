"""
Atomic file writer for safe code generation.

Ensures that the generated artifact is either written completely or
not at all.
"""

from __future__ import annotations

import ast
import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import GeneratedCodeError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    An interrupted or failed write never leaves the target file in an
    incomplete state.
    """

    def __init__(
        self,
        validate_python: Callable[[str], None] | None = None,
        validate_rust: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
            validate_rust: Optional validation function for Rust code
        """
        self._validate_python = validate_python or self._default_validate_python
        self._validate_rust = validate_rust or self._default_validate_rust

    def write(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path, its directory must exist
            content: Content to write
            language: Language for validation ("python" or "rust")
            validate: Whether to validate before finalizing

        Raises:
            GeneratedCodeError: If validation fails
            OSError: If file operations fail
        """
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            if validate:
                self._validate_content(content, language)

            temp_path.replace(path)
            logger.debug("Wrote %s (%d bytes)", path, len(content))
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            GeneratedCodeError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, language, validate)

    def _validate_content(self, content: str, language: str) -> None:
        """Validate content based on language.

        Raises:
            GeneratedCodeError: If validation fails
        """
        if language == "python":
            self._validate_python(content)
        elif language == "rust":
            self._validate_rust(content)

    def _default_validate_python(self, content: str) -> None:
        """Check that the generated Python parses."""
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GeneratedCodeError(f"Generated Python code is not valid: {e}") from e

    def _default_validate_rust(self, content: str) -> None:
        """Basic structural checks (no Rust parser available)."""
        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            raise GeneratedCodeError(f"Generated Rust code has unbalanced braces: {open_braces} open, {close_braces} close")
