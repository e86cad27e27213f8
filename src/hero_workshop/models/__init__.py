"""Pydantic domain model for HERO System 6E characters.

Exports:
    Character: Root aggregate.
    Characteristic, Skill, Perk, Talent, MartialManeuver, Power,
    Equipment, Disadvantage: Cost-bearing entities.
    Modifier, Adder: Cost components.
    BasicConfiguration, CharacterInfo, CharacterImage, Rules: Sections.
"""

from __future__ import annotations

from hero_workshop.models.entities import (
    CATEGORY_FIELDS,
    Adder,
    BasicConfiguration,
    Character,
    CharacterImage,
    CharacterInfo,
    Characteristic,
    CostedEntity,
    Disadvantage,
    Equipment,
    MartialManeuver,
    Modifier,
    Perk,
    Power,
    Rules,
    Skill,
    Talent,
    new_id,
)
from hero_workshop.models.enums import (
    CharacteristicType,
    CostRounding,
    PerkType,
    SkillEnhancerType,
)


__all__ = [
    # Enums
    "CharacteristicType",
    "CostRounding",
    "PerkType",
    "SkillEnhancerType",
    # Components
    "Adder",
    "Modifier",
    # Entities
    "CostedEntity",
    "Characteristic",
    "Skill",
    "Perk",
    "Talent",
    "MartialManeuver",
    "Power",
    "Equipment",
    "Disadvantage",
    # Sections
    "BasicConfiguration",
    "CharacterInfo",
    "CharacterImage",
    "Rules",
    "CATEGORY_FIELDS",
    "Character",
    "new_id",
]
