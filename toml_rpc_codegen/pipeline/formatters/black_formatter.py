"""
Black formatter for Python code.
"""

from __future__ import annotations

import logging

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class BlackFormatter(Formatter):
    """Formatter calling black in process."""

    TOOL = "black"

    def __init__(self):
        super().__init__()
        self._black = None

    def is_available(self) -> bool:
        """Check if black is importable."""
        if self._available is None:
            try:
                import black

                self._black = black
                self._available = True
            except ImportError:
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        if not self.is_available():
            return self._unavailable(code)

        black = self._black
        target = getattr(black.TargetVersion, config.target_version.upper(), None)
        mode = black.Mode(
            target_versions={target} if target is not None else set(),
            line_length=config.line_length,
        )

        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            logger.warning("black could not parse generated code: %s", e)
            return code
