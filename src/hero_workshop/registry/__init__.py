"""Definition Registry of power and modifier metadata.

Exports:
    DefinitionRegistry: Immutable lookup by XMLID.
    PowerDefinition: Power metadata.
    PowerOption: Option-specific power costs.
    ModifierDefinition: Advantage/limitation metadata.
    default_registry: Shared HERO 6E registry.
"""

from __future__ import annotations

from hero_workshop.registry.definitions import (
    DefinitionRegistry,
    ModifierDefinition,
    PowerDefinition,
    PowerOption,
    default_registry,
)


__all__ = [
    "DefinitionRegistry",
    "ModifierDefinition",
    "PowerDefinition",
    "PowerOption",
    "default_registry",
]
