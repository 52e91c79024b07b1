"""
Discriminator value propagation for tagged union variants.
"""

from __future__ import annotations

import logging

from ..model.nodes import Entity

logger = logging.getLogger(__name__)


class DiscriminatorPropagator:
    """Stamps the tag literal of a variant on its discriminator property."""

    def propagate(self, parent: Entity, child: Entity) -> None:
        """
        Copy the mapping literal registered for ``child`` in the parent's
        discriminator onto the child's own discriminator property.

        Children carrying an explicit discriminator value are left alone.
        A missing property or mapping entry leaves the child unstamped and
        is only reported as a warning.

        Args:
            parent: Entity declaring the discriminator
            child: One of the parent's children, modified in place
        """
        if parent.discriminator is None:
            return
        if child.discriminator_value_override is not None:
            logger.debug("Keeping explicit discriminator value %r on %s", child.discriminator_value_override, child.name)
            return

        property_name = parent.discriminator.property_name
        prop = child.find_property(property_name)
        if prop is None:
            logger.warning(
                "Variant %s of %s has no discriminator property '%s', union tag left unset",
                child.name,
                parent.name,
                property_name,
            )
            return

        value = parent.discriminator.lookup(child.name)
        if value is None:
            logger.warning(
                "Discriminator mapping of %s has no entry for %s, union tag left unset",
                parent.name,
                child.name,
            )
            return

        prop.discriminator_value = value
        logger.debug("Stamped %s.%s = %r", child.name, property_name, value)
