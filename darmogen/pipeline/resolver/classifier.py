"""
Entity classification.

Decides whether a class declaration is an entity, using the single
identification rule of the configuration.
"""

from __future__ import annotations

from ..config import EntityIdentifier
from ..errors import ConfigurationError
from .ir_nodes import EntityClass


class EntityClassifier:
    """Applies the configured identification rule to classes."""

    def __init__(self, identifier: EntityIdentifier):
        """
        Initialize the classifier.

        Args:
            identifier: Identification rule, exactly one attribute set

        Raises:
            ConfigurationError: If no rule or several rules are configured
        """
        rules = identifier.active_rules()
        if not rules:
            raise ConfigurationError("No source entity identifier specified")
        if len(rules) > 1:
            names = ", ".join(rule for rule, _ in rules)
            raise ConfigurationError(f"Only one source entity identifier may be specified, got: {names}")

        self.rule, self.value = rules[0]

    def is_entity(self, entity_class: EntityClass) -> bool:
        if self.rule == "decorator":
            return self.value in entity_class.decorators
        if self.rule == "extends":
            return self.value in entity_class.extends
        return self.value in entity_class.implements
