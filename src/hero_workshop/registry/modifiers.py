"""HERO System 6E advantage and limitation definitions.

Values are in the file's units: +1/4 is 0.25, -1/2 is -0.5. Leveled
modifiers recompute their value as ``base_cost + levels * lvl_cost``.
"""

from __future__ import annotations

from typing import Any


ADVANTAGES: dict[str, dict[str, Any]] = {
    "AOE": {"display": "Area Of Effect", "lvl_cost": 0.25, "has_levels": True},
    "ARMORPIERCING": {"display": "Armor Piercing", "lvl_cost": 0.25, "has_levels": True},
    "AUTOFIRE": {"display": "Autofire"},
    "AVAD": {"display": "Attack Versus Alternate Defense"},
    "CUMULATIVE": {"display": "Cumulative", "base_cost": 0.5, "lvl_cost": 0.25, "has_levels": True},
    "DAMAGEOVERTIME": {"display": "Damage Over Time", "base_cost": 1},
    "DOESKB": {"display": "Does Knockback", "base_cost": 0.25},
    "DOUBLEKB": {"display": "Double Knockback", "base_cost": 0.5},
    "INDIRECT": {"display": "Indirect"},
    "INVISIBLE": {"display": "Invisible Power Effects"},
    "LOS": {"display": "Line Of Sight", "base_cost": 0.5},
    "MEGASCALE": {"display": "MegaScale", "base_cost": 1, "lvl_cost": 0.25, "has_levels": True},
    "NORANGEMODIFIER": {"display": "No Range Modifier", "base_cost": 0.5},
    "PENETRATING": {"display": "Penetrating", "lvl_cost": 0.5, "has_levels": True},
    "RANGED": {"display": "Ranged", "base_cost": 0.5},
    "REDUCEDEND": {"display": "Reduced Endurance"},
    "STICKY": {"display": "Sticky"},
    "TRANSDIMENSIONAL": {"display": "Transdimensional"},
    "TRIGGER": {"display": "Trigger"},
    "UNCONTROLLED": {"display": "Uncontrolled", "base_cost": 0.5},
    "UOO": {"display": "Usable On Others"},
    "AFFECTSDESOLID": {"display": "Affects Desolidified"},
    "HARDENED": {"display": "Hardened", "lvl_cost": 0.25, "has_levels": True},
    "IMPENETRABLE": {"display": "Impenetrable", "lvl_cost": 0.25, "has_levels": True},
    "CONTINUOUS": {"display": "Continuous", "base_cost": 0.5},
    "PERSISTENT": {"display": "Persistent", "base_cost": 0.25},
    "COSTSENDONLYTOACTIVATE": {"display": "Costs END Only To Activate", "base_cost": 0.25},
    "HALFRANGEMODIFIER": {"display": "Half Range Modifier", "base_cost": 0.25},
    "PERSONALIMMUNITY": {"display": "Personal Immunity", "base_cost": 0.25},
    "INCREASEDMAXRANGE": {"display": "Increased Maximum Range", "lvl_cost": 0.25, "has_levels": True},
    # Negative base, but levels make it an advantage.
    "EXPANDEDEFFECT": {"display": "Expanded Effect", "base_cost": -0.5, "lvl_cost": 0.5, "has_levels": True},
    "VARIABLEEFFECT": {"display": "Variable Effect", "base_cost": 0.5},
}
"""Advantages keyed by XMLID."""

LIMITATIONS: dict[str, dict[str, Any]] = {
    "ALWAYSON": {"display": "Always On", "base_cost": -0.5},
    "CHARGES": {"display": "Charges"},
    "CONCENTRATION": {"display": "Concentration"},
    "EXTRATIME": {"display": "Extra Time"},
    "FOCUS": {"display": "Focus"},
    "GESTURES": {"display": "Gestures", "base_cost": -0.25},
    "INCANTATIONS": {"display": "Incantations", "base_cost": -0.25},
    "LINKED": {"display": "Linked", "base_cost": -0.5},
    "LIMITEDRANGE": {"display": "Limited Range", "base_cost": -0.25},
    "NORANGE": {"display": "No Range", "base_cost": -0.5},
    "REQUIRESASKILLROLL": {"display": "Requires A Roll"},
    "RESTRAINABLE": {"display": "Restrainable", "base_cost": -0.5},
    "SIDEEFFECTS": {"display": "Side Effects"},
    "COSTSEND": {"display": "Costs Endurance", "base_cost": -0.5},
    "INSTANT": {"display": "Instant", "base_cost": -0.5},
    "NONPERSISTENT": {"display": "Nonpersistent", "base_cost": -0.25},
    "NOCONSCIOUSCONTROL": {"display": "No Conscious Control", "base_cost": -2},
    "LOCKOUT": {"display": "Lockout", "base_cost": -0.5},
    "RANGEBASEDONSTR": {"display": "Range Based On STR", "base_cost": -0.25},
}
"""Limitations keyed by XMLID."""

MODIFIER_DEFINITIONS: dict[str, dict[str, Any]] = {
    **{xml_id: {**fields, "is_advantage": True} for xml_id, fields in ADVANTAGES.items()},
    **{xml_id: {**fields, "is_advantage": False} for xml_id, fields in LIMITATIONS.items()},
}
"""All modifier metadata keyed by XMLID."""


__all__ = ["ADVANTAGES", "LIMITATIONS", "MODIFIER_DEFINITIONS"]
