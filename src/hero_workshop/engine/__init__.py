"""Rules engine: attribute access, cost math, parsing and serialization.

Exports:
    Documents:
        parse_hdc: Parse a character document into a priced Character.
        serialize_hdc: Write a Character back to document text.

    Costs:
        CostContext: Registry and rounding used while pricing.
        hero_round: HERO rounding (exact halves round down).
        price: Active and real cost from base, advantages and limitations.

    Aggregation:
        aggregate: Reprice a category and roll up container costs.
        remove_entity: Remove an entity and re-aggregate its category.

    Summary:
        cost_breakdown: Real points spent per category.
        available_points: Points left to spend.
"""

from __future__ import annotations

from hero_workshop.engine.aggregator import aggregate, remove_entity
from hero_workshop.engine.attributes import AttributeNode
from hero_workshop.engine.costs import CostContext, hero_round, price
from hero_workshop.engine.document import parse_hdc, serialize_hdc
from hero_workshop.engine.parsers import rebuild_costs
from hero_workshop.engine.summary import (
    CostBreakdown,
    available_points,
    cost_breakdown,
    disadvantage_total,
)


__all__ = [
    # Documents
    "parse_hdc",
    "serialize_hdc",
    # Tree access
    "AttributeNode",
    # Costs
    "CostContext",
    "hero_round",
    "price",
    "rebuild_costs",
    # Aggregation
    "aggregate",
    "remove_entity",
    # Summary
    "CostBreakdown",
    "available_points",
    "cost_breakdown",
    "disadvantage_total",
]
