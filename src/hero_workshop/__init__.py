"""HERO Workshop - HERO System 6E character file rules engine.

Reads ``.hdc`` character documents into a typed, fully priced model,
keeps container and list costs consistent as entries change, and writes
the model back to a document the same engine reads identically.

Example:
    >>> from hero_workshop import parse_hdc, serialize_hdc, cost_breakdown
    >>>
    >>> character = parse_hdc(Path("nighthawk.hdc").read_bytes())
    >>> blast = character.powers[0]
    >>> blast.active_cost, blast.real_cost, blast.end_cost
    (45, 36, 5)
    >>> cost_breakdown(character).total
    312
    >>> text = serialize_hdc(character)

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic domain model of a character.
    registry: Power and modifier definitions keyed by XMLID.
    engine: Attribute access, cost engine, parsers, aggregation and
        serialization.
"""

from __future__ import annotations

# Core
from hero_workshop.core.config import Settings, get_settings
from hero_workshop.core.exceptions import HeroWorkshopError, MalformedDocumentError
from hero_workshop.core.logging import configure_logging, get_logger

# Engine
from hero_workshop.engine import (
    CostBreakdown,
    CostContext,
    aggregate,
    available_points,
    cost_breakdown,
    parse_hdc,
    remove_entity,
    serialize_hdc,
)

# Models
from hero_workshop.models import (
    Character,
    Characteristic,
    Disadvantage,
    Equipment,
    MartialManeuver,
    Perk,
    Power,
    Skill,
    Talent,
)

# Registry
from hero_workshop.registry import DefinitionRegistry, default_registry


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "HeroWorkshopError",
    "MalformedDocumentError",
    "configure_logging",
    "get_logger",
    # Engine
    "parse_hdc",
    "serialize_hdc",
    "aggregate",
    "remove_entity",
    "CostContext",
    "CostBreakdown",
    "cost_breakdown",
    "available_points",
    # Models
    "Character",
    "Characteristic",
    "Skill",
    "Perk",
    "Talent",
    "MartialManeuver",
    "Power",
    "Equipment",
    "Disadvantage",
    # Registry
    "DefinitionRegistry",
    "default_registry",
]
