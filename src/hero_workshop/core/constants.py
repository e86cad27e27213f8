"""HERO System 6th Edition rule tables used by the cost engine.

These are fixed rulebook values: characteristic bases and prices, the
breadth tables for Combat and Skill Levels, Area of Effect shape factors,
complication labels and the imperial/metric conversion factors used by
the character file format.
"""

from __future__ import annotations

# =============================================================================
# Characteristics
# =============================================================================

CHARACTERISTIC_ORDER = (
    "STR", "DEX", "CON", "INT", "EGO", "PRE",
    "OCV", "DCV", "OMCV", "DMCV",
    "SPD", "PD", "ED", "REC", "END", "BODY", "STUN",
    "RUNNING", "SWIMMING", "LEAPING",
)
"""Characteristic element names in character-sheet order."""

CHARACTERISTIC_BASE_VALUES = {
    "STR": 10, "DEX": 10, "CON": 10, "INT": 10, "EGO": 10, "PRE": 10,
    "OCV": 3, "DCV": 3, "OMCV": 3, "DMCV": 3,
    "SPD": 2, "PD": 2, "ED": 2, "REC": 4, "END": 20, "BODY": 10, "STUN": 20,
    "RUNNING": 12, "SWIMMING": 4, "LEAPING": 4,
}
"""Starting value of each characteristic before purchased levels."""

CHARACTERISTIC_COST_PER_LEVEL = {
    "STR": 1, "DEX": 2, "CON": 1, "INT": 1, "EGO": 1, "PRE": 1,
    "OCV": 5, "DCV": 5, "OMCV": 3, "DMCV": 3,
    "SPD": 10, "PD": 1, "ED": 1, "REC": 1, "END": 0.2, "BODY": 1, "STUN": 0.5,
    "RUNNING": 1, "SWIMMING": 1, "LEAPING": 1,
}
"""Character points per +1 of each characteristic."""

CHARACTERISTIC_MAXIMA = {
    "STR": 60, "DEX": 40, "CON": 60, "INT": 40, "EGO": 50, "PRE": 60,
    "OCV": 12, "DCV": 12, "OMCV": 12, "DMCV": 12,
    "SPD": 6, "PD": 60, "ED": 60, "REC": 30, "END": 150, "BODY": 50, "STUN": 100,
    "RUNNING": 60, "SWIMMING": 60, "LEAPING": 60,
}
"""Default campaign maxima for each characteristic."""

CHARACTERISTIC_ROLL_BASE = 9
"""Base of a characteristic roll (9 + value/5)."""

CHARACTERISTIC_ROLL_DENOMINATOR = 5
"""Characteristic points per +1 on a characteristic roll."""

# =============================================================================
# Skills
# =============================================================================

COMBAT_LEVEL_COSTS = {
    "SINGLE": 2,
    "TIGHT": 3,
    "SMALL": 3,
    "HTH": 5,
    "RANGED": 5,
    "BROAD": 5,
    "ALL": 8,
    "DCV": 8,
    "OCV": 8,
}
"""Points per Combat Skill Level keyed by breadth option."""

SKILL_LEVEL_COSTS = {
    "SINGLE": 2,
    "CHARACTERISTIC": 2,
    "THREE": 3,
    "TIGHT": 3,
    "GROUP": 4,
    "BROAD": 4,
    "OVERALL": 6,
    "ALL": 6,
}
"""Points per Skill Level keyed by breadth option."""

DEFAULT_LEVEL_COST = 2
"""Points per level when a breadth option is not recognised."""

PREFIXED_SKILL_ALIASES = frozenset({"PS", "KS", "AK", "SS", "TF", "WF"})
"""Skills displayed as ``ALIAS: input`` (e.g. ``PS: Jeweler``)."""

SKILL_ENHANCER_DISCOUNT = -1
"""Per-skill discount granted by a Skill Enhancer."""

SKILL_ENHANCER_BASE_COST = 3
"""Default price of a Skill Enhancer."""

# =============================================================================
# Modifiers
# =============================================================================

AOE_SHAPE_MULTIPLIERS = {
    "RADIUS": 1,
    "CONE": 2,
    "LINE": 4,
    "SURFACE": 0.5,
}
"""Area of Effect size multiplier per shape; unknown shapes use 1."""

AOE_METERS_PER_STEP = 4
"""Meters of effective radius bought by each +1/4 of Area of Effect."""

AOE_VALUE_PER_STEP = 0.25
"""Advantage value of one Area of Effect step."""

# =============================================================================
# Powers
# =============================================================================

ACTIVE_POINTS_PER_END = 10
"""Active points per point of END cost."""

BARRIER_DEFENSE_COST = 1.5
"""Points per point of Barrier defense (3 points per 2 defense)."""

SHIELD_DCV_COST_PER_LEVEL = 5
"""Points per +1 DCV bought on a piece of equipment."""

# =============================================================================
# Complications
# =============================================================================

DISADVANTAGE_LABELS = {
    "HUNTED": "Hunted",
    "PSYCHOLOGICALLIMITATION": "Psychological Complication",
    "PHYSICALLIMITATION": "Physical Complication",
    "SOCIALLIMITATION": "Social Complication",
    "SUSCEPTIBILITY": "Susceptibility",
    "VULNERABILITY": "Vulnerability",
    "DEPENDENCE": "Dependence",
    "DISTINCTIVE": "Distinctive Features",
    "ENRAGED": "Enraged",
    "DNPC": "DNPC",
    "RIVALORNEMESIS": "Rivalry",
    "REPUTATION": "Negative Reputation",
    "UNLUCK": "Unluck",
    "ACCIDENTALCHANGE": "Accidental Change",
}
"""Display label for each complication XMLID."""

# =============================================================================
# Unit Conversion
# =============================================================================

CM_PER_INCH = 2.54
"""Centimeters per inch (character height)."""

KG_PER_LB = 0.453592
"""Kilograms per pound (character and equipment weight)."""

# =============================================================================
# Point Defaults
# =============================================================================

DEFAULT_VERSION = "6.0"
"""Document version when the root carries none."""

DEFAULT_CHARACTER_NAME = "New Character"
"""Character name when the document carries none."""

GENERIC_TYPE = "GENERIC"
"""Type code of an entity whose element carries no XMLID; never written back."""

RULES_DEFAULT_BASE_POINTS = 200
"""Base points declared by a campaign rules block that omits them."""

RULES_DEFAULT_DISAD_POINTS = 150
"""Complication points declared by a campaign rules block that omits them."""
