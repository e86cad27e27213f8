"""Point totals for a parsed character.

Containers already carry the sum of their children, so only top-level
entries are counted: entities without a parent, entities whose parent is
missing, and entities whose parent does not roll up (such as compound
children detached from a removed list).
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from hero_workshop.engine.pricing import rolls_up
from hero_workshop.models.entities import Character, CostedEntity


SPENT_CATEGORIES = (
    "characteristics",
    "skills",
    "perks",
    "talents",
    "martial_arts",
    "powers",
)
"""Categories charged against the character's points.

Equipment is reported separately; in most campaigns it is bought with
money rather than character points.
"""


class CostBreakdown(BaseModel):
    """Real points spent per category."""

    characteristics: int = Field(default=0, description="Characteristic points")
    skills: int = Field(default=0, description="Skill points")
    perks: int = Field(default=0, description="Perk points")
    talents: int = Field(default=0, description="Talent points")
    martial_arts: int = Field(default=0, description="Martial arts points")
    powers: int = Field(default=0, description="Power points")
    equipment: int = Field(default=0, description="Equipment points, not in total")

    @property
    def total(self) -> int:
        """Points spent across every category except equipment."""
        return sum(getattr(self, name) for name in SPENT_CATEGORIES)


def top_level(entities: Sequence[CostedEntity]) -> list[CostedEntity]:
    """Entities whose cost is not already included in a container's."""
    by_id = {entity.id: entity for entity in entities}
    result = []
    for entity in entities:
        parent = by_id.get(entity.parent_id) if entity.parent_id else None
        if parent is None or not rolls_up(parent):
            result.append(entity)
    return result


def category_total(entities: Sequence[CostedEntity]) -> int:
    """Real cost of a category, counting each entity once."""
    return sum(entity.real_cost for entity in top_level(entities))


def cost_breakdown(character: Character) -> CostBreakdown:
    """Summarise the real points spent by a character.

    Args:
        character: An aggregated character.

    Returns:
        Per-category totals.
    """
    return CostBreakdown(
        **{name: category_total(character.category(name)) for name in SPENT_CATEGORIES},
        equipment=category_total(character.equipment),
    )


def disadvantage_total(character: Character) -> int:
    """Points granted by all complications."""
    return sum(disad.points for disad in top_level(character.disadvantages))


def available_points(character: Character) -> int:
    """Points left to spend.

    Complication points count only up to the configured maximum.

    Example:
        >>> available_points(character)  # 175 base, 100 disads, 250 spent
        25
    """
    config = character.basic_configuration
    disads = min(disadvantage_total(character), config.disad_points)
    return config.base_points + config.experience + disads - cost_breakdown(character).total


__all__ = [
    "SPENT_CATEGORIES",
    "CostBreakdown",
    "top_level",
    "category_total",
    "cost_breakdown",
    "disadvantage_total",
    "available_points",
]
