"""
Model graph shared by the parser, the post processor and the renderer.
"""

from __future__ import annotations

from .nodes import (
    UNION_SEPARATOR,
    Discriminator,
    Entity,
    ImportDescriptor,
    MappedModel,
    MediaType,
    ModelGraph,
    Operation,
    OperationImport,
    OperationsBundle,
    Parameter,
    ParameterLocation,
    Property,
    TypeKind,
    TypeRef,
)

__all__ = [
    "UNION_SEPARATOR",
    "Discriminator",
    "Entity",
    "ImportDescriptor",
    "MappedModel",
    "MediaType",
    "ModelGraph",
    "Operation",
    "OperationImport",
    "OperationsBundle",
    "Parameter",
    "ParameterLocation",
    "Property",
    "TypeKind",
    "TypeRef",
]
