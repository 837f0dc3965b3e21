"""
Analyzer module.

Contains name normalization, reference resolution, and IR building.
"""

from __future__ import annotations

from .analyzer import SchemaAnalyzer
from .ir_nodes import (
    IR,
    EntityRef,
    EnumDef,
    FieldDef,
    MessageDef,
    MethodDef,
    ServiceDef,
    VariantDef,
)
from .reference_resolver import ReferenceResolver

__all__ = [
    "IR",
    "FieldDef",
    "MessageDef",
    "VariantDef",
    "EnumDef",
    "EntityRef",
    "MethodDef",
    "ServiceDef",
    "ReferenceResolver",
    "SchemaAnalyzer",
]
