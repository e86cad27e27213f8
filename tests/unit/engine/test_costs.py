"""Tests for the modifier and adder cost engine."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from hero_workshop.core.config import CostSettings, Settings
from hero_workshop.engine.attributes import AttributeNode
from hero_workshop.engine.costs import (
    CostContext,
    adder_cost,
    advantage_total,
    aoe_value,
    apply_limitations,
    flatten_adders,
    hero_ceil,
    hero_round,
    limitation_total,
    modifier_value,
    parse_adders,
    parse_modifiers,
    price,
    round_half_up,
)
from hero_workshop.models.entities import Adder, Modifier
from hero_workshop.models.enums import CostRounding
from hero_workshop.registry.definitions import default_registry


NodeFactory = Callable[[str], AttributeNode]


class TestRounding:
    """Tests for cost rounding helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(22.5, 22), (22.6, 23), (22.4, 22), (36.0, 36), (0.5, 0), (13.333, 13)],
    )
    def test_hero_round(self, value: float, expected: int) -> None:
        """Test nearest-integer rounding with halves rounding down."""
        assert hero_round(value) == expected

    def test_half_up(self) -> None:
        """Test the alternative tie-break rule."""
        assert hero_round(22.5, CostRounding.HALF_UP) == 23
        assert hero_round(22.4, CostRounding.HALF_UP) == 22

    def test_float_noise_is_absorbed(self) -> None:
        """Test values a hair off a half still count as the half."""
        assert hero_round(0.1 + 0.2 + 22.2) == 22

    def test_hero_ceil(self) -> None:
        """Test ceiling that ignores noise above an integer."""
        assert hero_ceil(5 * 0.2) == 1
        assert hero_ceil(4.5) == 5
        assert hero_ceil(1.0000000001) == 1

    def test_round_half_up(self) -> None:
        """Test decimal rounding of unit conversions."""
        assert round_half_up(4.53592, 1) == 4.5
        assert round_half_up(182.88) == 183
        assert round_half_up(2.25, 1) == 2.3


class TestAdders:
    """Tests for adder parsing and costing."""

    def test_unselected_adders_dropped(self, node: NodeFactory) -> None:
        """Test SELECTED=No adders are ignored by default."""
        adders = parse_adders(
            node(
                "<POWER>"
                '<ADDER XMLID="A" BASECOST="5"/>'
                '<ADDER XMLID="B" BASECOST="3" SELECTED="NO"/>'
                "</POWER>"
            )
        )
        assert [a.xml_id for a in adders] == ["A"]
        assert adder_cost(adders) == 5

    def test_levels_divided_by_level_value(self, node: NodeFactory) -> None:
        """Test raw LEVELS are converted to effective levels."""
        (adder,) = parse_adders(node('<P><ADDER LEVELS="6" LVLVAL="2" LVLCOST="1.5" BASECOST="1"/></P>'))
        assert adder.levels == 3
        assert adder_cost([adder]) == 5.5

    def test_nested_adders_flattened(self, node: NodeFactory) -> None:
        """Test nested adders follow their parent in flat mode."""
        adders = parse_adders(
            node('<P><ADDER XMLID="CAT" BASECOST="0"><ADDER XMLID="SWORD" BASECOST="1"/></ADDER></P>')
        )
        assert [a.xml_id for a in adders] == ["CAT", "SWORD"]
        assert adders[0].adders == []

    def test_hierarchy_preserved(self, node: NodeFactory) -> None:
        """Test hierarchy mode keeps nesting and unselected adders."""
        adders = parse_adders(
            node(
                '<P><ADDER XMLID="CAT" BASECOST="0">'
                '<ADDER XMLID="SWORD" BASECOST="1"/>'
                '<ADDER XMLID="AXE" BASECOST="1" SELECTED="No"/>'
                "</ADDER></P>"
            ),
            preserve_hierarchy=True,
        )
        assert len(adders) == 1
        assert [a.xml_id for a in adders[0].adders] == ["SWORD", "AXE"]
        assert adder_cost(adders) == 1
        assert [a.xml_id for a in flatten_adders(adders)] == ["CAT", "SWORD"]

    def test_name_prefers_alias(self, node: NodeFactory) -> None:
        """Test adder naming."""
        adders = parse_adders(node('<P><ADDER ALIAS="Sword" NAME="x"/><ADDER/></P>'))
        assert [a.name for a in adders] == ["Sword", ""]


class TestAreaOfEffect:
    """Tests for the Area of Effect formula."""

    @pytest.mark.parametrize(
        ("levels", "shape", "expected"),
        [
            (8, "RADIUS", 0.5),
            (5, "RADIUS", 0.5),
            (4, "RADIUS", 0.25),
            (8, "CONE", 0.25),
            (16, "LINE", 0.25),
            (17, "LINE", 0.5),
            (4, "SURFACE", 0.5),
            (8, None, 0.5),
            (8, "BLOB", 0.5),
        ],
    )
    def test_aoe_value(self, levels: int, shape: str | None, expected: float) -> None:
        """Test +1/4 per 4m of effective radius."""
        assert aoe_value(levels, shape) == expected


class TestModifiers:
    """Tests for modifier parsing and classification."""

    def test_leveled_modifier_recomputed(self) -> None:
        """Test leveled modifiers take their value from levels."""
        assert modifier_value("PENETRATING", 0, 2, None, [], default_registry()) == 1.0

    def test_unknown_modifier_uses_recorded_value(self) -> None:
        """Test unknown modifiers keep BASECOST."""
        assert modifier_value("HOMEBREW", 0.75, 0, None, [], default_registry()) == 0.75

    def test_aoe_modifier(self) -> None:
        """Test AOE recomputes from levels and shape."""
        assert modifier_value("AOE", 0, 16, "CONE", [], default_registry()) == 0.5

    def test_adders_contribute(self) -> None:
        """Test selected adders add their base cost."""
        adders = [Adder(base_cost=0.25), Adder(base_cost=0.5, selected=False)]
        assert modifier_value("CHARGES", -1, 0, None, adders, default_registry()) == -0.75

    def test_classification_by_sign(self, node: NodeFactory) -> None:
        """Test sign-based advantage and limitation flags."""
        modifiers = parse_modifiers(
            node(
                "<POWER>"
                '<MODIFIER XMLID="RANGED" BASECOST="0.5"/>'
                '<MODIFIER XMLID="FOCUS" ALIAS="Focus" OPTION_ALIAS="OAF" BASECOST="-1"/>'
                '<MODIFIER XMLID="NOTE" BASECOST="0"/>'
                "</POWER>"
            ),
            default_registry(),
        )
        advantage, focus, neutral = modifiers
        assert advantage.is_advantage and not advantage.is_limitation
        assert focus.is_limitation and not focus.is_advantage
        assert focus.name == "Focus (OAF)"
        assert not neutral.is_advantage and not neutral.is_limitation

    def test_explicit_classification(self, node: NodeFactory) -> None:
        """Test ISLIMITATION overrides the sign."""
        (modifier,) = parse_modifiers(
            node('<P><MODIFIER XMLID="ODD" BASECOST="0.25" ISLIMITATION="Yes"/></P>'),
            default_registry(),
        )
        assert modifier.is_limitation is True
        assert modifier.is_advantage is False

    def test_unnamed_modifier(self, node: NodeFactory) -> None:
        """Test a modifier without ALIAS or NAME keeps an empty name."""
        (modifier,) = parse_modifiers(node('<P><MODIFIER XMLID="ODD" BASECOST="-0.25"/></P>'), default_registry())
        assert modifier.name == ""

    def test_wrapped_modifiers(self, node: NodeFactory) -> None:
        """Test a MODIFIERS wrapper is accepted."""
        modifiers = parse_modifiers(
            node('<P><MODIFIERS><MODIFIER XMLID="GESTURES" BASECOST="-0.25"/></MODIFIERS></P>'),
            default_registry(),
        )
        assert len(modifiers) == 1

    def test_totals(self) -> None:
        """Test advantage and limitation totals use value signs."""
        modifiers = [Modifier(value=0.5), Modifier(value=0.25), Modifier(value=-0.5), Modifier(value=0)]
        assert advantage_total(modifiers) == 0.75
        assert limitation_total(modifiers) == 0.5

    def test_both_flags_rejected(self) -> None:
        """Test a modifier cannot be both advantage and limitation."""
        with pytest.raises(ValueError):
            Modifier(value=0.5, is_advantage=True, is_limitation=True)


class TestPrice:
    """Tests for active and real cost."""

    def test_blast_with_modifiers(self) -> None:
        """Test the Active and Real Cost of a modified power."""
        assert price(30, 0.5, 0) == (45, 45)
        assert price(30, 0.5, 0.25) == (45, 36)
        assert price(30, 0, 0.25) == (30, 24)

    def test_rounding_tie(self) -> None:
        """Test exact halves follow the configured rule."""
        assert price(15, 0.5, 0) == (22, 22)
        assert price(15, 0.5, 0, CostRounding.HALF_UP) == (23, 23)

    def test_apply_limitations(self) -> None:
        """Test real cost division."""
        assert apply_limitations(20, 0.5) == 13
        assert apply_limitations(20, 0) == 20
        assert apply_limitations(10.6, 0) == 11


class TestCostContext:
    """Tests for building a cost context."""

    def test_defaults(self) -> None:
        """Test the default context."""
        context = CostContext()
        assert context.rounding == CostRounding.HERO
        assert context.registry is default_registry()
        assert context.default_base_points == 175

    def test_from_settings(self) -> None:
        """Test settings select rounding and point defaults."""
        settings = Settings(cost=CostSettings(rounding="half_up", default_base_points=250))
        context = CostContext.from_settings(settings)
        assert context.rounding == CostRounding.HALF_UP
        assert context.default_base_points == 250
        assert context.default_disad_points == 100
