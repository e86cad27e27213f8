"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the HERO Workshop test suite.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from hero_workshop.engine.attributes import AttributeNode
    from hero_workshop.engine.costs import CostContext
    from hero_workshop.models.entities import Character


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from hero_workshop.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "HERO_WORKSHOP_LOG_LEVEL": "DEBUG",
        "HERO_WORKSHOP_JSON_LOGS": "true",
        "HERO_WORKSHOP_COST_ROUNDING": "half_up",
        "HERO_WORKSHOP_COST_DEFAULT_BASE_POINTS": "400",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def context() -> CostContext:
    """Provide a cost context with the shared registry and HERO rounding."""
    from hero_workshop.engine.costs import CostContext

    return CostContext()


@pytest.fixture
def node() -> Callable[[str], AttributeNode]:
    """Provide a factory turning an XML snippet into an AttributeNode."""
    from hero_workshop.engine.attributes import AttributeNode

    def _node(text: str) -> AttributeNode:
        return AttributeNode(ET.fromstring(text))

    return _node


# =============================================================================
# Document Fixtures
# =============================================================================


SAMPLE_HDC = """<?xml version="1.0" encoding="UTF-8"?>
<CHARACTER version="6.0">
  <BASIC_CONFIGURATION BASE_POINTS="175" DISAD_POINTS="75" EXPERIENCE="5"/>
  <CHARACTER_INFO CHARACTER_NAME="Nighthawk" PLAYER_NAME="Sam" HEIGHT="72" WEIGHT="180">
    <BACKGROUND>Raised on the rooftops of the old city.</BACKGROUND>
  </CHARACTER_INFO>
  <CHARACTERISTICS>
    <STR ID="STR1" LEVELS="5"/>
    <DEX ID="DEX1" LEVELS="5"/>
    <CON ID="CON1" LEVELS="-3"/>
  </CHARACTERISTICS>
  <SKILLS>
    <SKILL ID="CSL1" XMLID="COMBAT_LEVELS" ALIAS="Combat Skill Levels" OPTION="ALL" LEVELS="2" POSITION="1"/>
    <SCHOLAR ID="SCH1" POSITION="2"/>
    <SKILL ID="KS1" XMLID="KNOWLEDGE_SKILL" ALIAS="KS" INPUT="Arcana" BASECOST="2" LEVELS="1"
           PARENTID="SCH1" POSITION="3"/>
    <SKILL ID="CLIMB1" XMLID="CLIMBING" ALIAS="Climbing" EVERYMAN="Yes" BASECOST="3" POSITION="4"/>
  </SKILLS>
  <PERKS>
    <PERK ID="PK1" XMLID="CONTACT" ALIAS="Contact" INPUT="Police" LEVELS="3"/>
  </PERKS>
  <TALENTS>
    <TALENT ID="T1" XMLID="COMBAT_LUCK" ALIAS="Combat Luck" BASECOST="6"/>
  </TALENTS>
  <MARTIALARTS>
    <LIST ID="MA1" NAME="Commando Training"/>
    <MANEUVER ID="M1" PARENTID="MA1" ALIAS="Martial Strike" BASECOST="4" OCV="+0" DCV="+2"
              PHASE="1/2" DC="2" EFFECT="[NORMALDC] Strike"/>
    <MANEUVER ID="M2" PARENTID="MA1" ALIAS="Martial Block" BASECOST="4" OCV="+2" DCV="+2"
              PHASE="1/2" EFFECT="Block, Abort"/>
  </MARTIALARTS>
  <POWERS>
    <LIST ID="PL1" NAME="Gadgets">
      <MODIFIER ID="FOCUS1" XMLID="FOCUS" ALIAS="Focus" OPTION_ALIAS="OAF" BASECOST="-0.5"/>
    </LIST>
    <POWER ID="P1" XMLID="ENERGYBLAST" ALIAS="Blast" NAME="Flame Bolt" LEVELS="6">
      <MODIFIER ID="PEN1" XMLID="PENETRATING" ALIAS="Penetrating" LEVELS="1" BASECOST="0.5"/>
      <MODIFIER ID="GES1" XMLID="GESTURES" ALIAS="Gestures" BASECOST="-0.25"/>
    </POWER>
    <POWER ID="P2" XMLID="FLIGHT" ALIAS="Flight" NAME="Jet Boots" LEVELS="20" PARENTID="PL1"/>
    <POWER ID="CP1" XMLID="COMPOUNDPOWER" ALIAS="Compound Power" NAME="Fire Aura">
      <POWER ID="CP1A" XMLID="ENERGYBLAST" ALIAS="Blast" LEVELS="2"/>
      <PD ID="CP1B" LEVELS="5"/>
    </POWER>
  </POWERS>
  <DISADVANTAGES>
    <DISAD ID="D1" XMLID="PSYCHOLOGICALLIMITATION" INPUT="Code vs Killing" BASECOST="0">
      <ADDER ID="D1A" XMLID="SITUATION" BASECOST="10" OPTION_ALIAS="(Common)"/>
      <ADDER ID="D1B" XMLID="INTENSITY" BASECOST="10" OPTION_ALIAS="(Total)"/>
    </DISAD>
    <DISAD ID="D2" XMLID="DISTINCTIVE" INPUT="Bird mask" BASECOST="5"/>
  </DISADVANTAGES>
  <EQUIPMENT>
    <POWER ID="E1" NAME="Buckler" PRICE="50" WEIGHT="10">
      <DCV ID="E1A" LEVELS="1"/>
    </POWER>
  </EQUIPMENT>
</CHARACTER>
"""
"""A small but complete character exercising every section."""


@pytest.fixture
def sample_hdc() -> str:
    """Provide the text of the sample character document."""
    return SAMPLE_HDC


@pytest.fixture
def sample_character(sample_hdc: str) -> Character:
    """Provide the sample document parsed into a Character."""
    from hero_workshop.engine.document import parse_hdc

    return parse_hdc(sample_hdc, source="nighthawk.hdc")
