"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from ..config import FormatterConfig
from ..errors import ConfigError
from .base import Formatter, SubprocessFormatter
from .black_formatter import BlackFormatter
from .ruff_formatter import RuffFormatter
from .rustfmt_formatter import RustfmtFormatter

PYTHON_FORMATTERS: dict[str, type[Formatter]] = {
    "ruff": RuffFormatter,
    "black": BlackFormatter,
}


def get_formatter(language: str, config: FormatterConfig) -> Formatter:
    """Pick the formatter for a target language."""
    if language == "rust":
        return RustfmtFormatter()
    if config.python_tool not in PYTHON_FORMATTERS:
        raise ConfigError(f"Unknown Python formatter: {config.python_tool} (choose from {', '.join(PYTHON_FORMATTERS)})")
    return PYTHON_FORMATTERS[config.python_tool]()


__all__ = [
    "Formatter",
    "SubprocessFormatter",
    "BlackFormatter",
    "RuffFormatter",
    "RustfmtFormatter",
    "get_formatter",
]
