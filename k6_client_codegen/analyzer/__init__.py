"""
Analyzer - rewrites the parsed model graph for the renderer.
"""

from __future__ import annotations

from .discriminator import DiscriminatorPropagator
from .import_builder import ImportSetBuilder
from .name_resolver import NameResolver
from .operations import OperationPostProcessor
from .union_rewriter import UnionRewriter

__all__ = [
    "DiscriminatorPropagator",
    "ImportSetBuilder",
    "NameResolver",
    "OperationPostProcessor",
    "UnionRewriter",
]
