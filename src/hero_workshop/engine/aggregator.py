"""Container and list cost aggregation.

Runs after a category has been parsed (children may appear before or
after their parent in the file) and again whenever an entity changes:

1. Every leaf entity is repriced from its stored inputs. A child of a list
   combines the list's advantages and limitations with its own, then
   takes the list's flat discount: ``real = max(0, real + discount)``.
2. Groups, power lists and compound powers take the sum of their direct
   children's base, active and real costs, depth-first.

Both steps start from stored inputs only, so aggregation is idempotent.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from hero_workshop.core.constants import SKILL_ENHANCER_DISCOUNT
from hero_workshop.core.logging import get_logger
from hero_workshop.engine.costs import (
    CostContext,
    adder_cost,
    advantage_total,
    hero_round,
    limitation_total,
)
from hero_workshop.engine.pricing import price_entity, rolls_up
from hero_workshop.models.entities import CostedEntity, Power


logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=CostedEntity)


# =============================================================================
# List Effects
# =============================================================================


def list_discount(parent: CostedEntity) -> float:
    """Flat per-child discount granted by a list-kind parent.

    Skill Enhancers grant -1. Power lists use their first negative adder;
    other groups use the total of their adders.

    Args:
        parent: A group, power list or enhancer.

    Returns:
        Signed discount added to each child's real cost (0 for none).
    """
    if parent.is_enhancer:
        return SKILL_ENHANCER_DISCOUNT
    if isinstance(parent, Power) and parent.is_container:
        return next((adder.base_cost for adder in parent.adders if adder.base_cost < 0), 0)
    return adder_cost(parent.adders)


def passes_list_effects(parent: CostedEntity) -> bool:
    """Whether children of ``parent`` inherit its modifiers and discount.

    Compound powers are rigid bundles: their children are priced alone.
    """
    if isinstance(parent, Power) and parent.type == "COMPOUNDPOWER":
        return False
    return parent.is_list_kind


def _apply_list_effects(entity: CostedEntity, parent: CostedEntity, context: CostContext) -> None:
    price_entity(
        entity,
        context,
        list_advantage=advantage_total(parent.modifiers),
        list_limitation=limitation_total(parent.modifiers),
    )
    discount = list_discount(parent)
    if discount:
        entity.real_cost = max(0, hero_round(entity.real_cost + discount, context.rounding))


# =============================================================================
# Aggregation
# =============================================================================


def children_of(entities: Sequence[EntityT], parent_id: str) -> list[EntityT]:
    """Get the direct children of an entity, in list order."""
    return [entity for entity in entities if entity.parent_id == parent_id]


def _roll_up(
    entity: CostedEntity,
    entities: Sequence[CostedEntity],
    visiting: set[str],
) -> None:
    if entity.id in visiting:
        logger.warning("Container cycle detected, skipping rollup", id=entity.id)
        return
    visiting.add(entity.id)

    children = children_of(entities, entity.id)
    for child in children:
        if rolls_up(child):
            _roll_up(child, entities, visiting)

    entity.base_cost = sum(child.base_cost for child in children)
    entity.real_cost = sum(child.real_cost for child in children)
    if any(child.active_cost is not None for child in children) or isinstance(entity, Power):
        entity.active_cost = sum(child.active_cost or 0 for child in children)

    visiting.discard(entity.id)


def aggregate(entities: Sequence[EntityT], context: CostContext) -> list[EntityT]:
    """Reprice a category's entities and roll up container costs.

    Args:
        entities: Flat entity list of one category (mutated in place).
        context: Cost context.

    Returns:
        The same entities, for chaining.
    """
    by_id = {entity.id: entity for entity in entities}

    for entity in entities:
        if rolls_up(entity):
            continue
        parent = by_id.get(entity.parent_id) if entity.parent_id else None
        if entity.parent_id and parent is None:
            logger.warning(
                "Entity references a missing parent",
                id=entity.id,
                parent_id=entity.parent_id,
            )
        if parent is not None and passes_list_effects(parent):
            _apply_list_effects(entity, parent, context)
        else:
            price_entity(entity, context)

    for entity in entities:
        if rolls_up(entity):
            _roll_up(entity, entities, set())

    return list(entities)


def _detach(entities: list[EntityT], target: EntityT) -> list[EntityT]:
    removed = [target]
    owns_children = isinstance(target, Power) and target.type == "COMPOUNDPOWER"
    for child in children_of(entities, target.id):
        if owns_children:
            removed.extend(_detach(entities, child))
        else:
            child.parent_id = None
    entities[:] = [entity for entity in entities if entity is not target]
    return removed


def remove_entity(
    entities: list[EntityT],
    entity_id: str,
    context: CostContext,
) -> list[EntityT]:
    """Remove an entity from its category list.

    Children owned by a compound power are deleted with it, recursively;
    children of any other container are unparented and kept.

    Args:
        entities: Category list (mutated in place).
        entity_id: Id of the entity to remove.
        context: Cost context used to re-aggregate the remaining list.

    Returns:
        The removed entities; empty if the id was not found.
    """
    target = next((entity for entity in entities if entity.id == entity_id), None)
    if target is None:
        return []

    removed = _detach(entities, target)
    aggregate(entities, context)
    logger.debug("Removed entity", id=entity_id, removed=len(removed))
    return removed


__all__ = [
    "list_discount",
    "passes_list_effects",
    "children_of",
    "aggregate",
    "remove_entity",
]
