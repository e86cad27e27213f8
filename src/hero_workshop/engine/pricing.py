"""Standalone repricing of parsed entities.

Parsers compute each entity's ``base_cost`` from its recorded inputs.
The functions here derive ``active_cost``, ``real_cost`` and ``end_cost``
from that base, the entity's own modifiers and any modifiers inherited
from an enclosing list. They are safe to run repeatedly: every call starts
again from the stored inputs.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hero_workshop.core.constants import ACTIVE_POINTS_PER_END
from hero_workshop.core.logging import get_logger
from hero_workshop.engine.costs import (
    CostContext,
    advantage_total,
    apply_limitations,
    hero_ceil,
    hero_round,
    limitation_total,
    price,
)
from hero_workshop.models.entities import (
    Characteristic,
    CostedEntity,
    Disadvantage,
    Equipment,
    MartialManeuver,
    Perk,
    Power,
    Skill,
    Talent,
)


logger = get_logger(__name__)


Repricer = Callable[[Any, CostContext, float, float], None]


def rolls_up(entity: CostedEntity) -> bool:
    """Whether an entity's costs are the sum of its children's."""
    return entity.is_group or entity.is_container


def resolve_end_cost(power: Power, active: int, context: CostContext) -> int | None:
    """Determine END per use for a power.

    A recorded END cost wins. Otherwise powers whose definition uses END
    pay one END per 10 active points; unknown powers have no END cost.

    Args:
        power: The power being priced.
        active: Its active cost.
        context: Cost context with the definition registry.

    Returns:
        END per use, or None.
    """
    if power.end_cost_override is not None:
        return power.end_cost_override
    definition = context.registry.lookup_power(power.type)
    if definition is not None and definition.uses_end:
        return hero_ceil(active / ACTIVE_POINTS_PER_END)
    return None


def price_characteristic(
    entity: CostedEntity,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    entity.real_cost = hero_ceil(entity.base_cost)


def price_skill(
    entity: Skill,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    """Price a skill; only limitations affect skills."""
    if entity.everyman or entity.native_tongue:
        entity.real_cost = 0
        return
    if entity.is_enhancer:
        entity.real_cost = hero_ceil(entity.base_cost)
        return
    limitations = limitation_total(entity.modifiers) + list_limitation
    entity.real_cost = apply_limitations(entity.base_cost, limitations, context.rounding)


def price_flat(
    entity: CostedEntity,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    """Price entries whose real cost is their base cost."""
    entity.real_cost = hero_ceil(entity.base_cost)


def price_disadvantage(
    entity: Disadvantage,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    entity.real_cost = entity.points


def price_power(
    entity: Power,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    """Price a power from its true base cost.

    ``active = round(base * (1 + advantages))`` and
    ``real = round(active / (1 + limitations))``, where both totals combine
    the power's own modifiers with those inherited from its list.
    """
    advantages = advantage_total(entity.modifiers) + list_advantage
    limitations = limitation_total(entity.modifiers) + list_limitation
    active, real = price(entity.base_cost, advantages, limitations, context.rounding)
    entity.active_cost = active
    entity.real_cost = real
    entity.end_cost = resolve_end_cost(entity, active, context)


def price_equipment(
    entity: Equipment,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    """Price equipment including its owned sub-powers.

    With sub-powers, the item costs its own base plus the sub-powers'
    active costs, and the sub-powers' real costs. Without them (or when
    they are all free) the item is priced as a plain power.
    """
    for sub_power in entity.sub_powers:
        price_power(sub_power, context)

    sub_active = sum(sub.active_cost or 0 for sub in entity.sub_powers)
    sub_real = sum(sub.real_cost for sub in entity.sub_powers)

    if sub_real > 0:
        active = hero_round(entity.base_cost, context.rounding) + sub_active
        real = sub_real
    else:
        advantages = advantage_total(entity.modifiers) + list_advantage
        limitations = limitation_total(entity.modifiers) + list_limitation
        active, real = price(entity.base_cost, advantages, limitations, context.rounding)

    entity.active_cost = active
    entity.real_cost = real
    end_cost = hero_ceil(active / ACTIVE_POINTS_PER_END)
    entity.end_cost = end_cost if end_cost > 0 else None


REPRICERS: dict[type[CostedEntity], Repricer] = {
    Characteristic: price_characteristic,
    Skill: price_skill,
    Perk: price_flat,
    Talent: price_flat,
    MartialManeuver: price_flat,
    Equipment: price_equipment,
    Power: price_power,
    Disadvantage: price_disadvantage,
}
"""Standalone repricer per entity class; subclasses resolve through the MRO."""


def price_entity(
    entity: CostedEntity,
    context: CostContext,
    list_advantage: float = 0,
    list_limitation: float = 0,
) -> None:
    """Reprice one entity in place.

    Containers are skipped; their costs come from their children.

    Args:
        entity: Entity to price.
        context: Cost context.
        list_advantage: Advantage total inherited from an enclosing list.
        list_limitation: Limitation total inherited from an enclosing list.
    """
    if rolls_up(entity):
        return
    for cls in type(entity).__mro__:
        repricer = REPRICERS.get(cls)
        if repricer is not None:
            repricer(entity, context, list_advantage, list_limitation)
            return
    logger.debug("No repricer for entity", entity_type=type(entity).__name__, id=entity.id)


__all__ = [
    "REPRICERS",
    "rolls_up",
    "resolve_end_cost",
    "price_characteristic",
    "price_skill",
    "price_flat",
    "price_disadvantage",
    "price_power",
    "price_equipment",
    "price_entity",
]
