"""HERO System 6E power definitions.

Each entry is keyed by XMLID. Omitted fields take the PowerDefinition
defaults (base 0, 1 point per level, uses END).
"""

from __future__ import annotations

from typing import Any


POWER_DEFINITIONS: dict[str, dict[str, Any]] = {
    # Attack powers
    "ENERGYBLAST": {"display": "Blast", "lvl_cost": 5, "does_damage": True},
    "HANDTOHANDATTACK": {"display": "Hand-To-Hand Attack", "lvl_cost": 5, "does_damage": True},
    "RKA": {"display": "Killing Attack - Ranged", "lvl_cost": 15, "does_damage": True, "is_killing": True},
    "HKA": {"display": "Killing Attack - Hand-To-Hand", "lvl_cost": 15, "does_damage": True, "is_killing": True},
    "DRAIN": {"display": "Drain", "lvl_cost": 10, "does_damage": True},
    "FLASH": {"display": "Flash", "lvl_cost": 5, "does_damage": True},
    "ENTANGLE": {"display": "Entangle", "lvl_cost": 10, "does_damage": True},
    "EGOATTACK": {"display": "Mental Blast", "lvl_cost": 10, "does_damage": True},
    "TRANSFORM": {"display": "Transform", "lvl_cost": 5, "does_damage": True},
    "DISPEL": {"display": "Dispel", "lvl_cost": 3, "does_damage": True},
    # Defenses
    "FORCEFIELD": {"display": "Resistant Protection", "lvl_cost": 3, "lvl_val": 2, "uses_end": False},
    "MENTALDEFENSE": {"display": "Mental Defense", "uses_end": False},
    "POWERDEFENSE": {"display": "Power Defense", "uses_end": False},
    "FLASHDEFENSE": {"display": "Flash Defense", "uses_end": False},
    "KBRESISTANCE": {"display": "Knockback Resistance", "uses_end": False},
    "DAMAGENEGATION": {"display": "Damage Negation", "lvl_cost": 5, "uses_end": False},
    "DAMAGEREDUCTION": {
        "display": "Damage Reduction",
        "base_cost": 10,
        "lvl_cost": 0,
        "uses_end": False,
        "options": (
            {"xml_id": "LVL25NORMAL", "display": "25% Normal", "base_cost": 10},
            {"xml_id": "LVL25RESISTANT", "display": "25% Resistant", "base_cost": 15},
            {"xml_id": "LVL25MENTAL", "display": "25% Mental", "base_cost": 15},
            {"xml_id": "LVL50NORMAL", "display": "50% Normal", "base_cost": 20},
            {"xml_id": "LVL50RESISTANT", "display": "50% Resistant", "base_cost": 30},
            {"xml_id": "LVL50MENTAL", "display": "50% Mental", "base_cost": 30},
            {"xml_id": "LVL75NORMAL", "display": "75% Normal", "base_cost": 40},
            {"xml_id": "LVL75RESISTANT", "display": "75% Resistant", "base_cost": 60},
            {"xml_id": "LVL75MENTAL", "display": "75% Mental", "base_cost": 60},
        ),
    },
    "MISSILEDEFLECTION": {"display": "Deflection", "base_cost": 20, "lvl_cost": 0},
    "FORCEWALL": {"display": "Barrier", "base_cost": 3, "lvl_cost": 3},
    # Movement
    "RUNNING": {"display": "Running"},
    "SWIMMING": {"display": "Swimming"},
    "LEAPING": {"display": "Leaping"},
    "FLIGHT": {"display": "Flight"},
    "TELEPORTATION": {"display": "Teleportation"},
    "TUNNELING": {"display": "Tunneling", "base_cost": 2},
    "SWINGING": {"display": "Swinging"},
    # Body-affecting
    "GROWTH": {
        "display": "Growth",
        "base_cost": 25,
        "lvl_cost": 0,
        "options": (
            {"xml_id": "LARGE", "display": "Large", "base_cost": 25},
            {"xml_id": "ENORMOUS", "display": "Enormous", "base_cost": 50},
            {"xml_id": "HUGE", "display": "Huge", "base_cost": 90},
            {"xml_id": "GIGANTIC", "display": "Gigantic", "base_cost": 120},
            {"xml_id": "GARGANTUAN", "display": "Gargantuan", "base_cost": 150},
            {"xml_id": "COLOSSAL", "display": "Colossal", "base_cost": 215},
        ),
    },
    "SHRINKING": {"display": "Shrinking", "lvl_cost": 6},
    "DENSITYINCREASE": {"display": "Density Increase", "lvl_cost": 4},
    "DESOLIDIFICATION": {"display": "Desolidification", "base_cost": 40, "lvl_cost": 0},
    "STRETCHING": {"display": "Stretching"},
    "EXTRALIMBS": {"display": "Extra Limbs", "base_cost": 5, "lvl_cost": 0, "uses_end": False},
    "MULTIFORM": {"display": "Multiform", "uses_end": False},
    "DUPLICATION": {"display": "Duplication", "uses_end": False},
    "SHAPESHIFT": {"display": "Shape Shift", "lvl_cost": 0},
    # Senses and sense-affecting
    "ENHANCEDSENSES": {"display": "Enhanced Senses", "lvl_cost": 5, "uses_end": False},
    "NIGHTVISION": {"display": "Nightvision", "base_cost": 5, "lvl_cost": 0, "uses_end": False},
    "INFRAREDPERCEPTION": {"display": "Infrared Perception", "base_cost": 5, "lvl_cost": 0, "uses_end": False},
    "ULTRAVIOLETPERCEPTION": {"display": "Ultraviolet Perception", "base_cost": 5, "lvl_cost": 0, "uses_end": False},
    "ULTRASONICPERCEPTION": {"display": "Ultrasonic Perception", "base_cost": 3, "lvl_cost": 0, "uses_end": False},
    "RADAR": {"display": "Radar", "base_cost": 15, "lvl_cost": 0, "uses_end": False},
    "ACTIVESONAR": {"display": "Active Sonar", "base_cost": 15, "lvl_cost": 0, "uses_end": False},
    "SPATIALAWARENESS": {"display": "Spatial Awareness", "base_cost": 32, "lvl_cost": 0, "uses_end": False},
    "MENTALAWARENESS": {"display": "Mental Awareness", "base_cost": 5, "lvl_cost": 0, "uses_end": False},
    "HRRP": {"display": "High Range Radio Perception", "base_cost": 12, "lvl_cost": 0, "uses_end": False},
    "RADIOPERCEPTION": {"display": "Radio Perception", "base_cost": 8, "lvl_cost": 0, "uses_end": False},
    "RADIOPERCEIVETRANSMIT": {"display": "Radio Perception/Transmission", "base_cost": 10, "lvl_cost": 0, "uses_end": False},
    "CLAIRSENTIENCE": {"display": "Clairsentience", "base_cost": 20, "lvl_cost": 0},
    "IMAGES": {"display": "Images", "base_cost": 10, "lvl_cost": 0},
    "INVISIBILITY": {"display": "Invisibility", "base_cost": 20, "lvl_cost": 0},
    "DETECT": {
        "display": "Detect",
        "base_cost": 3,
        "uses_end": False,
        "options": (
            {"xml_id": "SINGLE", "display": "A Single Thing", "base_cost": 3, "lvl_cost": 1},
            {"xml_id": "CLASS", "display": "A Class Of Things", "base_cost": 5, "lvl_cost": 1},
            {"xml_id": "LARGECLASS", "display": "A Large Class Of Things", "base_cost": 8, "lvl_cost": 1},
        ),
    },
    "DARKNESS": {
        "display": "Darkness",
        "lvl_cost": 5,
        "options": (
            {"xml_id": "SIGHTGROUP", "display": "Sight Group", "lvl_cost": 5},
            {"xml_id": "HEARINGGROUP", "display": "Hearing Group", "lvl_cost": 3},
        ),
    },
    # Mental
    "MENTALILLUSIONS": {"display": "Mental Illusions", "lvl_cost": 5},
    "MINDCONTROL": {"display": "Mind Control", "lvl_cost": 5},
    "MINDSCAN": {"display": "Mind Scan", "lvl_cost": 5},
    "TELEPATHY": {"display": "Telepathy", "lvl_cost": 5},
    "MINDLINK": {"display": "Mind Link", "base_cost": 5, "lvl_cost": 0, "uses_end": False},
    # Adjustment and special
    "AID": {"display": "Aid", "lvl_cost": 6},
    "ABSORPTION": {"display": "Absorption", "uses_end": False},
    "HEALING": {"display": "Healing", "lvl_cost": 10},
    "LIFESUPPORT": {"display": "Life Support", "lvl_cost": 0, "uses_end": False},
    "REGENERATION": {
        "display": "Regeneration",
        "lvl_cost": 2,
        "uses_end": False,
        "options": (
            {"xml_id": "WEEK", "display": "1 BODY per Week", "lvl_cost": 2},
            {"xml_id": "DAY", "display": "1 BODY per Day", "lvl_cost": 4},
            {"xml_id": "6HOURS", "display": "1 BODY per 6 Hours", "lvl_cost": 6},
            {"xml_id": "1HOUR", "display": "1 BODY per Hour", "lvl_cost": 8},
            {"xml_id": "20MINUTES", "display": "1 BODY per 20 Minutes", "lvl_cost": 10},
            {"xml_id": "5MINUTES", "display": "1 BODY per 5 Minutes", "lvl_cost": 12},
            {"xml_id": "1MINUTE", "display": "1 BODY per Minute", "lvl_cost": 14},
            {"xml_id": "1TURN", "display": "1 BODY per Turn", "lvl_cost": 16},
        ),
    },
    "TELEKINESIS": {"display": "Telekinesis", "lvl_cost": 3, "does_damage": True},
    "LUCK": {"display": "Luck", "lvl_cost": 5, "uses_end": False},
    "ENDURANCERESERVE": {"display": "Endurance Reserve", "uses_end": False},
    "CLINGING": {"display": "Clinging", "base_cost": 10, "uses_end": False},
    "SUMMON": {"display": "Summon"},
    "CHANGEENVIRONMENT": {"display": "Change Environment", "lvl_cost": 0},
    # Frameworks
    "COMPOUNDPOWER": {"display": "Compound Power", "lvl_cost": 0, "uses_end": False},
    "MULTIPOWER": {"display": "Multipower", "uses_end": False},
}
"""Power metadata keyed by XMLID."""


__all__ = ["POWER_DEFINITIONS"]
