"""Modifier and adder cost engine.

This module turns the cost components of a tree node into numbers:

* Adders contribute ``base_cost + levels * lvl_cost`` when selected.
* Modifiers contribute a signed value; leveled modifiers and Area of
  Effect recompute that value from their levels.
* Advantages raise active cost, limitations divide it into real cost,
  and every fractional result goes through the HERO rounding rule.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from hero_workshop.core.config import Settings, get_settings
from hero_workshop.core.constants import (
    AOE_METERS_PER_STEP,
    AOE_SHAPE_MULTIPLIERS,
    AOE_VALUE_PER_STEP,
)
from hero_workshop.core.logging import get_logger
from hero_workshop.engine.attributes import AttributeNode
from hero_workshop.models.entities import Adder, Modifier, new_id
from hero_workshop.models.enums import CostRounding
from hero_workshop.registry.definitions import DefinitionRegistry, default_registry


logger = get_logger(__name__)


EPSILON = 1e-9
"""Tolerance absorbing binary floating-point noise in cost arithmetic."""


# =============================================================================
# Cost Context
# =============================================================================


@dataclass(frozen=True)
class CostContext:
    """Everything a parser or repricer needs besides the node itself.

    Attributes:
        registry: Power and modifier definitions.
        rounding: Tie-break rule for fractional costs.
        default_base_points: Base points for documents that omit them.
        default_disad_points: Complication points for documents that omit them.
    """

    registry: DefinitionRegistry = field(default_factory=default_registry)
    rounding: CostRounding = CostRounding.HERO
    default_base_points: int = 175
    default_disad_points: int = 100

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        registry: DefinitionRegistry | None = None,
    ) -> CostContext:
        """Build a context from engine settings.

        Args:
            settings: Engine settings; the cached settings when None.
            registry: Definition registry; the shared registry when None.

        Returns:
            A new CostContext.
        """
        settings = settings or get_settings()
        return cls(
            registry=registry or default_registry(),
            rounding=CostRounding(settings.cost.rounding),
            default_base_points=settings.cost.default_base_points,
            default_disad_points=settings.cost.default_disad_points,
        )


# =============================================================================
# Rounding
# =============================================================================


def hero_round(value: float, rounding: CostRounding = CostRounding.HERO) -> int:
    """Round a cost to a whole number of points.

    Costs round to the nearest integer. An exact half rounds down under the
    HERO rule (in the character's favour) and up under ``half_up``.

    Args:
        value: Fractional cost.
        rounding: Tie-break rule.

    Returns:
        Whole points.

    Example:
        >>> hero_round(22.5)
        22
        >>> hero_round(22.5, CostRounding.HALF_UP)
        23
        >>> hero_round(22.6)
        23
    """
    lower = math.floor(value + EPSILON)
    fraction = value - lower
    if abs(fraction - 0.5) < EPSILON:
        return lower + 1 if rounding == CostRounding.HALF_UP else lower
    return lower + 1 if fraction > 0.5 else lower


def hero_ceil(value: float) -> int:
    """Round a cost up, ignoring floating-point noise above an integer."""
    return math.ceil(value - EPSILON)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero toward positive infinity.

    Unit conversions use this instead of ``round`` so that 4.45 kg and
    similar midpoints do not flip with banker's rounding.
    """
    scale = 10**digits
    return math.floor(value * scale + 0.5 + EPSILON) / scale


# =============================================================================
# Adders
# =============================================================================


def parse_adders(node: AttributeNode, preserve_hierarchy: bool = False) -> list[Adder]:
    """Parse the adders of a node.

    Unselected adders (``SELECTED="NO"``) are dropped unless the hierarchy
    is preserved. Nested adders are flattened after their parent, or kept
    under it when ``preserve_hierarchy`` is set.

    Args:
        node: Node owning ADDER children.
        preserve_hierarchy: Keep nesting and unselected adders for editing.

    Returns:
        Parsed adders.
    """
    adders: list[Adder] = []
    for adder_node in node.collection("ADDER"):
        selected = adder_node.get_string("SELECTED", "YES").upper() != "NO"
        nested = parse_adders(adder_node, preserve_hierarchy)

        if selected or preserve_hierarchy:
            lvl_val = adder_node.get_number("LVLVAL", 1)
            if lvl_val <= 0:
                lvl_val = 1
            raw_levels = adder_node.get_number("LEVELS", 0)
            levels = math.floor(raw_levels / lvl_val) if lvl_val > 1 else int(raw_levels)
            alias = adder_node.get_string("ALIAS") or None
            adders.append(
                Adder(
                    id=adder_node.get_string("ID") or new_id(),
                    xml_id=adder_node.get_string("XMLID"),
                    name=alias or adder_node.get_string("NAME"),
                    alias=alias,
                    base_cost=adder_node.get_number("BASECOST", 0),
                    levels=levels,
                    lvl_cost=adder_node.get_number("LVLCOST", 0),
                    lvl_val=lvl_val,
                    adders=nested if preserve_hierarchy else [],
                    selected=selected,
                    include_in_base=adder_node.get_string("INCLUDEINBASE", "No").upper() == "YES",
                    option_alias=adder_node.get_string("OPTION_ALIAS") or None,
                    notes=adder_node.get_string("NOTES") or None,
                )
            )

        if not preserve_hierarchy:
            adders.extend(nested)
    return adders


def adder_cost(adders: Iterable[Adder]) -> float:
    """Total cost of selected adders, recursing into nested adders.

    Args:
        adders: Flat or hierarchical adders.

    Returns:
        ``sum(base_cost + levels * lvl_cost)`` over selected adders.
    """
    total = 0.0
    for adder in adders:
        if adder.selected:
            total += adder.own_cost
        total += adder_cost(adder.adders)
    return total


def flatten_adders(adders: Iterable[Adder]) -> list[Adder]:
    """Flatten hierarchical adders into selected adders, parents first."""
    flat: list[Adder] = []
    for adder in adders:
        if adder.selected:
            flat.append(adder.model_copy(update={"adders": []}))
        flat.extend(flatten_adders(adder.adders))
    return flat


# =============================================================================
# Modifiers
# =============================================================================


def aoe_value(levels: int, shape: str | None) -> float:
    """Value of an Area of Effect advantage.

    Args:
        levels: Area size in meters.
        shape: RADIUS, CONE, LINE or SURFACE; anything else counts as RADIUS.

    Returns:
        +1/4 per 4m of effective radius, rounded up to a whole step.

    Example:
        >>> aoe_value(8, "RADIUS")
        0.5
        >>> aoe_value(16, "LINE")
        0.25
    """
    multiplier = AOE_SHAPE_MULTIPLIERS.get(shape or "", 1)
    effective_radius = levels / multiplier
    return hero_ceil(effective_radius / AOE_METERS_PER_STEP) * AOE_VALUE_PER_STEP


def modifier_value(
    xml_id: str,
    base_value: float,
    levels: int,
    option_id: str | None,
    adders: Iterable[Adder],
    registry: DefinitionRegistry,
) -> float:
    """Compute a modifier's signed value.

    Args:
        xml_id: Modifier type code.
        base_value: BASECOST recorded on the modifier.
        levels: Purchased levels.
        option_id: Selected option (AOE shape).
        adders: The modifier's selected adders.
        registry: Definition lookup.

    Returns:
        The modifier value including adder contributions.
    """
    value = base_value
    definition = registry.lookup_modifier(xml_id)
    if definition is not None and definition.has_levels and levels > 0:
        value = definition.leveled_value(levels)
    if xml_id == "AOE" and levels > 0:
        value = aoe_value(levels, option_id)
    return value + sum(adder.base_cost for adder in adders if adder.selected)


def parse_modifiers(node: AttributeNode, registry: DefinitionRegistry) -> list[Modifier]:
    """Parse the modifiers of a node.

    Args:
        node: Node owning MODIFIER children.
        registry: Definition lookup for leveled modifiers.

    Returns:
        Parsed modifiers, each classified as advantage or limitation.
    """
    modifiers: list[Modifier] = []
    for mod_node in node.collection("MODIFIER"):
        xml_id = mod_node.get_string("XMLID")
        levels = mod_node.get_int("LEVELS", 0)
        option_id = mod_node.get_string("OPTIONID") or None
        adders = parse_adders(mod_node)

        if xml_id and registry.lookup_modifier(xml_id) is None:
            logger.debug("Unknown modifier, using recorded value", xml_id=xml_id)

        value = modifier_value(
            xml_id,
            mod_node.get_number("BASECOST", 0),
            levels,
            option_id,
            adders,
            registry,
        )

        explicit = mod_node.get_string("ISLIMITATION")
        if explicit:
            is_limitation = explicit.upper() == "YES"
            is_advantage = not is_limitation
        else:
            is_advantage = value > 0
            is_limitation = value < 0

        alias = mod_node.get_string("ALIAS")
        option_alias = mod_node.get_string("OPTION_ALIAS") or None
        name = f"{alias} ({option_alias})" if alias and option_alias else alias
        modifiers.append(
            Modifier(
                id=mod_node.get_string("ID") or new_id(),
                xml_id=xml_id,
                name=name or mod_node.get_string("NAME"),
                alias=alias or None,
                value=value,
                is_advantage=is_advantage,
                is_limitation=is_limitation,
                levels=levels,
                adders=adders,
                input=mod_node.get_string("INPUT") or None,
                option_id=option_id,
                option_alias=option_alias,
                notes=mod_node.get_string("NOTES") or mod_node.get_string("COMMENTS") or None,
            )
        )
    return modifiers


def advantage_total(modifiers: Iterable[Modifier]) -> float:
    """Sum of positive modifier values."""
    return sum(m.value for m in modifiers if m.value > 0)


def limitation_total(modifiers: Iterable[Modifier]) -> float:
    """Sum of the magnitudes of negative modifier values."""
    return sum(-m.value for m in modifiers if m.value < 0)


# =============================================================================
# Pricing
# =============================================================================


def apply_limitations(
    active: float,
    limitations: float,
    rounding: CostRounding = CostRounding.HERO,
) -> int:
    """Divide an active cost by its limitations.

    Args:
        active: Active cost.
        limitations: Total limitation magnitude.
        rounding: Tie-break rule.

    Returns:
        Real cost; the active cost rounded when there are no limitations.
    """
    if limitations > 0:
        return hero_round(active / (1 + limitations), rounding)
    return hero_round(active, rounding)


def price(
    base: float,
    advantages: float,
    limitations: float,
    rounding: CostRounding = CostRounding.HERO,
) -> tuple[int, int]:
    """Price a true base cost under advantages and limitations.

    Args:
        base: True base cost.
        advantages: Total advantage value.
        limitations: Total limitation magnitude.
        rounding: Tie-break rule.

    Returns:
        ``(active_cost, real_cost)``.

    Example:
        >>> price(30, 0.5, 0.25)
        (45, 36)
    """
    active = hero_round(base * (1 + advantages), rounding)
    return active, apply_limitations(active, limitations, rounding)


__all__ = [
    "EPSILON",
    "CostContext",
    "hero_round",
    "hero_ceil",
    "round_half_up",
    "parse_adders",
    "adder_cost",
    "flatten_adders",
    "aoe_value",
    "modifier_value",
    "parse_modifiers",
    "advantage_total",
    "limitation_total",
    "apply_limitations",
    "price",
]
