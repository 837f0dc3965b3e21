"""
Schema AST (Abstract Syntax Tree) module.

Contains the schema loader, the AST node definitions and the parser
for TOML RPC schemas.
"""

from __future__ import annotations

from .loader import load_schema, loads_schema
from .nodes import (
    EntityKind,
    EnumNode,
    FieldNode,
    MessageNode,
    MethodNode,
    RefNode,
    SchemaAST,
    SchemaNode,
    ServiceNode,
    VariantNode,
)
from .parser import SchemaParser

__all__ = [
    "EntityKind",
    "SchemaNode",
    "FieldNode",
    "MessageNode",
    "VariantNode",
    "EnumNode",
    "RefNode",
    "MethodNode",
    "ServiceNode",
    "SchemaAST",
    "SchemaParser",
    "load_schema",
    "loads_schema",
]
