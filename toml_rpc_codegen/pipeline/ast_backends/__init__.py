"""
AST-based code generation backends.

These backends turn the IR into a language-native AST and serialize it
to source code.
"""

from __future__ import annotations

from ..config import CodeGeneratorConfig
from .base import AstBackend
from .python_ast_backend import PythonAstBackend
from .rust_ast_backend import RustAstBackend
from .type_mapping import PrimitiveType, TypeMapping

BACKENDS: dict[str, type[AstBackend]] = {
    "rust": RustAstBackend,
    "python": PythonAstBackend,
}


def get_backend_class(language: str) -> type[AstBackend]:
    """Look up the backend class for a target language."""
    if language not in BACKENDS:
        raise ValueError(f"Language not supported: {language} (choose from {', '.join(BACKENDS)})")
    return BACKENDS[language]


def get_backend(language: str, config: CodeGeneratorConfig) -> AstBackend:
    """Instantiate the backend for a target language."""
    return get_backend_class(language)(config)


__all__ = [
    "AstBackend",
    "RustAstBackend",
    "PythonAstBackend",
    "PrimitiveType",
    "TypeMapping",
    "BACKENDS",
    "get_backend",
    "get_backend_class",
]
