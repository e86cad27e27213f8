"""Tests for the definition registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hero_workshop.core.exceptions import RegistryError
from hero_workshop.registry import (
    DefinitionRegistry,
    ModifierDefinition,
    PowerDefinition,
    default_registry,
)
from hero_workshop.registry.modifiers import ADVANTAGES, LIMITATIONS


class TestDefaultRegistry:
    """Tests for the shared HERO 6E registry."""

    def test_power_lookup(self) -> None:
        """Test a known power."""
        blast = default_registry().lookup_power("ENERGYBLAST")
        assert blast is not None
        assert blast.lvl_cost == 5
        assert blast.uses_end
        assert blast.does_damage

    def test_defense_uses_no_end(self) -> None:
        """Test defenses are flagged as END-free."""
        definition = default_registry().lookup_power("MENTALDEFENSE")
        assert definition is not None
        assert not definition.uses_end

    @pytest.mark.parametrize("xml_id", ["NOT_A_POWER", "", None])
    def test_power_miss(self, xml_id: str | None) -> None:
        """Test unknown codes return None."""
        assert default_registry().lookup_power(xml_id) is None

    def test_modifier_lookup(self) -> None:
        """Test leveled advantages and limitations."""
        registry = default_registry()
        penetrating = registry.lookup_modifier("PENETRATING")
        focus = registry.lookup_modifier("FOCUS")
        assert penetrating is not None and penetrating.is_advantage
        assert penetrating.leveled_value(2) == 1.0
        assert focus is not None and not focus.is_advantage
        assert registry.lookup_modifier("NOPE") is None

    def test_no_overlap_between_advantages_and_limitations(self) -> None:
        """Test each modifier code is classified once."""
        assert not set(ADVANTAGES) & set(LIMITATIONS)

    def test_option_costs(self) -> None:
        """Test option-specific base costs."""
        growth = default_registry().lookup_power("GROWTH")
        assert growth is not None
        option = growth.option("HUGE")
        assert option is not None
        assert option.base_cost == 90
        assert growth.option("TINY") is None
        assert growth.option(None) is None

    def test_cached(self) -> None:
        """Test the shared registry is built once."""
        assert default_registry() is default_registry()

    def test_read_only(self) -> None:
        """Test the mappings and definitions cannot be changed."""
        registry = default_registry()
        with pytest.raises(TypeError):
            registry.powers["NEW"] = PowerDefinition(xml_id="NEW")  # type: ignore[index]
        with pytest.raises(ValidationError):
            registry.lookup_power("FLIGHT").lvl_cost = 9  # type: ignore[union-attr]


class TestDefinitionRegistry:
    """Tests for building registries."""

    def test_level_cost_for_option(self) -> None:
        """Test option overrides of the cost per level."""
        registry = DefinitionRegistry.from_tables(
            {
                "CUSTOM": {
                    "lvl_cost": 2,
                    "options": ({"xml_id": "CHEAP", "lvl_cost": 1},),
                }
            },
            {},
        )
        definition = registry.lookup_power("CUSTOM")
        assert definition is not None
        assert definition.level_cost_for("CHEAP") == 1
        assert definition.level_cost_for("OTHER") == 2
        assert definition.level_cost_for(None) == 2

    def test_duplicate_power(self) -> None:
        """Test duplicate XMLIDs are rejected."""
        with pytest.raises(RegistryError, match="Duplicate power definition"):
            DefinitionRegistry(
                powers=[PowerDefinition(xml_id="A"), PowerDefinition(xml_id="A")],
            )

    def test_duplicate_modifier(self) -> None:
        """Test duplicate modifier XMLIDs are rejected."""
        with pytest.raises(RegistryError):
            DefinitionRegistry(
                modifiers=[ModifierDefinition(xml_id="M"), ModifierDefinition(xml_id="M")],
            )

    def test_invalid_table(self) -> None:
        """Test bad table entries raise RegistryError."""
        with pytest.raises(RegistryError, match="Invalid definition table"):
            DefinitionRegistry.from_tables({"BAD": {"lvl_cost": "lots"}}, {})

    def test_unknown_field(self) -> None:
        """Test unknown definition fields are rejected."""
        with pytest.raises(RegistryError):
            DefinitionRegistry.from_tables({}, {"BAD": {"colour": "red"}})

    def test_repr(self) -> None:
        """Test the repr shows table sizes."""
        registry = DefinitionRegistry([PowerDefinition(xml_id="A")])
        assert repr(registry) == "DefinitionRegistry(powers=1, modifiers=0)"
