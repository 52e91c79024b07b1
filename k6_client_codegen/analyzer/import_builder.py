"""
Import set builder.

Turns the raw import names of an entity into the import descriptors the
model template renders. The parser records a property typed as a union of
models as a single "A | B | C" entry; those are split into one import per
model.
"""

from __future__ import annotations

from ..model.nodes import UNION_SEPARATOR, Entity, ImportDescriptor, Property
from .name_resolver import NameResolver


class ImportSetBuilder:
    """Builds de-duplicated, ordered import descriptors for entities."""

    def __init__(self, name_resolver: NameResolver):
        self.name_resolver = name_resolver

    @staticmethod
    def parse_imports(entity: Entity) -> list[str]:
        """Distinct model names imported by an entity, union strings split."""
        names: list[str] = []
        for raw in entity.imports:
            parts = raw.split(UNION_SEPARATOR) if UNION_SEPARATOR in raw else [raw]
            for part in parts:
                part = part.strip()
                if part and part not in names:
                    names.append(part)
        return names

    @staticmethod
    def imports_for_property(prop: Property) -> list[str]:
        """Model names a property's declared type needs imported."""
        return prop.type_ref.referenced_models()

    def build(self, entity: Entity) -> list[ImportDescriptor]:
        """
        Build the import descriptors of an entity.

        The entity itself is never part of the result, so a generated module
        never imports itself.

        Args:
            entity: The entity whose raw imports are resolved

        Returns:
            Descriptors in first-occurrence order
        """
        return [
            ImportDescriptor(classname=name, filename=self.name_resolver.to_model_filename(name))
            for name in self.parse_imports(entity)
            if name != entity.name
        ]
