"""
rustfmt formatter for Rust code.
"""

from __future__ import annotations

from ..config import FormatterConfig
from .base import SubprocessFormatter


class RustfmtFormatter(SubprocessFormatter):
    """Formatter piping Rust code through rustfmt."""

    TOOL = "rustfmt"

    def command(self, config: FormatterConfig) -> list[str]:
        cmd = ["rustfmt", "--emit", "stdout", "--edition", config.rust_edition]
        if config.line_length:
            cmd.extend(["--config", f"max_width={config.line_length}"])
        return cmd
