"""Enumeration types for the HERO Workshop rules engine.

Type codes in a character file are open-ended strings (XMLIDs); the enums
here cover the closed vocabularies the engine reasons about directly.
"""

from __future__ import annotations

from enum import StrEnum


class CharacteristicType(StrEnum):
    """HERO 6E characteristics, named as their file elements."""

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    EGO = "EGO"
    PRE = "PRE"
    OCV = "OCV"
    DCV = "DCV"
    OMCV = "OMCV"
    DMCV = "DMCV"
    SPD = "SPD"
    PD = "PD"
    ED = "ED"
    REC = "REC"
    END = "END"
    BODY = "BODY"
    STUN = "STUN"
    RUNNING = "RUNNING"
    SWIMMING = "SWIMMING"
    LEAPING = "LEAPING"

    @classmethod
    def is_characteristic(cls, xml_id: str) -> bool:
        """Check whether an XMLID names a characteristic.

        Args:
            xml_id: Type code from a character file.

        Returns:
            True if the code is a characteristic element name.
        """
        return xml_id in cls._value2member_map_


class PerkType(StrEnum):
    """Perk categories recognised by the engine."""

    ANONYMITY = "ANONYMITY"
    BASE = "BASE"
    COMPUTER_LINK = "COMPUTER_LINK"
    CONTACT = "CONTACT"
    DEEP_COVER = "DEEP_COVER"
    FAVOR = "FAVOR"
    FOLLOWER = "FOLLOWER"
    FRINGE_BENEFIT = "FRINGE_BENEFIT"
    MONEY = "MONEY"
    POSITIVE_REPUTATION = "POSITIVE_REPUTATION"
    REPUTATION = "REPUTATION"
    VEHICLE = "VEHICLE"
    VEHICLE_BASE = "VEHICLE_BASE"
    GENERIC = "GENERIC"

    @classmethod
    def from_xml_id(cls, xml_id: str) -> PerkType:
        """Map a perk XMLID, including legacy spellings, to a PerkType.

        Args:
            xml_id: Perk type code from a character file.

        Returns:
            The matching PerkType, or GENERIC when unrecognised.
        """
        legacy = {
            "COMPUTERLINK": cls.COMPUTER_LINK,
            "DEEPCOVER": cls.DEEP_COVER,
            "FRINGEBENEFIT": cls.FRINGE_BENEFIT,
        }
        if xml_id in legacy:
            return legacy[xml_id]
        try:
            return cls(xml_id)
        except ValueError:
            return cls.GENERIC


class SkillEnhancerType(StrEnum):
    """Skill Enhancers; each discounts the skills bought under it."""

    JACK_OF_ALL_TRADES = "JACK_OF_ALL_TRADES"
    SCHOLAR = "SCHOLAR"
    SCIENTIST = "SCIENTIST"
    LINGUIST = "LINGUIST"
    TRAVELER = "TRAVELER"
    WELL_CONNECTED = "WELL_CONNECTED"

    @property
    def display_name(self) -> str:
        """Get the title-cased display name.

        Returns:
            Display name (e.g., 'Jack Of All Trades').
        """
        return self.value.replace("_", " ").title()


class CostRounding(StrEnum):
    """Tie-break rule for fractional point costs."""

    HERO = "hero"
    HALF_UP = "half_up"


__all__ = [
    "CharacteristicType",
    "PerkType",
    "SkillEnhancerType",
    "CostRounding",
]
