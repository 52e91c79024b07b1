"""
Tagged union rewriter.

Without tagged unions a child model extends its parent and imports it. With
tagged unions every child is a self-contained variant carrying a flattened
copy of the inherited properties, and the parent becomes the union of its
children. This module rewrites the import graph accordingly.
"""

from __future__ import annotations

import logging

from ..model.nodes import Entity, ModelGraph
from .discriminator import DiscriminatorPropagator
from .import_builder import ImportSetBuilder

logger = logging.getLogger(__name__)


class UnionRewriter:
    """Rewrites discriminated inheritance into tagged unions."""

    def __init__(self, import_builder: ImportSetBuilder, propagator: DiscriminatorPropagator | None = None):
        self.import_builder = import_builder
        self.propagator = propagator or DiscriminatorPropagator()

    def rewrite(self, graph: ModelGraph, enabled: bool) -> None:
        """
        Rewrite the graph in place.

        Args:
            graph: The model graph
            enabled: Whether tagged union mode is on; nothing happens otherwise
        """
        if not enabled:
            return

        # Parents first: every mapping is complete before any child is stamped
        for entity in graph.entities:
            if entity.discriminator is not None and entity.children:
                self._link_variants(entity)

        for entity in graph.entities:
            if entity.parent is not None:
                self._detach_from_parent(entity)

    def _link_variants(self, parent: Entity) -> None:
        for child in parent.children:
            parent.add_import(child.name)
            self.propagator.propagate(parent, child)
        logger.debug("%s is a union of %s", parent.name, ", ".join(c.name for c in parent.children))

    def _detach_from_parent(self, entity: Entity) -> None:
        entity.remove_import(entity.parent)

        # A flattened property may refer back to the parent or to the entity
        # itself, so imports are collected again from the properties.
        for prop in entity.properties:
            for name in self.import_builder.imports_for_property(prop):
                entity.add_import(name)
        self.remove_self_reference_imports(entity)

    @staticmethod
    def remove_self_reference_imports(entity: Entity) -> None:
        entity.remove_import(entity.name)
