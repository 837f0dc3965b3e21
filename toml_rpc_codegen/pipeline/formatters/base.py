"""
Base class for code formatters.

Formatting is best effort: a formatter that is missing or fails logs a
warning and hands back the code it was given.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod

from ..config import FormatterConfig

logger = logging.getLogger(__name__)


class Formatter(ABC):
    """Abstract base class for code formatters."""

    # Name of the tool, used in log messages
    TOOL: str = ""

    def __init__(self):
        self._available: bool | None = None

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the input unchanged if the tool is missing or fails
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the formatter is available (dependencies installed).

        Returns:
            True if the formatter can be used
        """

    def _unavailable(self, code: str) -> str:
        logger.warning("%s is not installed, leaving generated code unformatted", self.TOOL)
        return code


class SubprocessFormatter(Formatter):
    """Formatter running an external tool that reads stdin and writes stdout."""

    def is_available(self) -> bool:
        """Check if the tool is on the PATH."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [self.TOOL, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    @abstractmethod
    def command(self, config: FormatterConfig) -> list[str]:
        """Build the tool's command line."""

    def format(self, code: str, config: FormatterConfig) -> str:
        if not self.is_available():
            return self._unavailable(code)

        try:
            result = subprocess.run(
                self.command(config),
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as e:
            logger.warning("%s failed: %s", self.TOOL, e)
            return code

        if result.returncode != 0:
            logger.warning("%s failed: %s", self.TOOL, result.stderr.strip())
            return code
        return result.stdout
