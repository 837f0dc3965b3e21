"""
Schema loader.

Reads a schema file and decodes it into nested tables. This is a thin
wrapper around ``tomllib``; all structural checks happen in the parser.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from ..errors import CodegenIOError, SchemaSyntaxError

logger = logging.getLogger(__name__)


def loads_schema(text: str) -> dict[str, Any]:
    """Decode schema text into nested tables.

    Raises:
        SchemaSyntaxError: If the text is not valid TOML
    """
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise SchemaSyntaxError(f"Invalid schema: {e}") from e


def load_schema(path: str | Path) -> dict[str, Any]:
    """Read and decode a schema file.

    Raises:
        CodegenIOError: If the file cannot be read
        SchemaSyntaxError: If the file is not valid TOML
    """
    path = Path(path)
    logger.debug("Loading schema %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CodegenIOError(f"Cannot read schema {path}: {e}") from e
    return loads_schema(text)
