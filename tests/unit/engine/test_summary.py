"""Tests for character point totals."""

from __future__ import annotations

from hero_workshop.engine.aggregator import aggregate
from hero_workshop.engine.costs import CostContext
from hero_workshop.engine.summary import (
    CostBreakdown,
    available_points,
    category_total,
    cost_breakdown,
    disadvantage_total,
    top_level,
)
from hero_workshop.models.entities import (
    BasicConfiguration,
    Character,
    Disadvantage,
    Power,
    Skill,
)


class TestTopLevel:
    """Tests for selecting entries counted once."""

    def test_children_of_rollups_excluded(self) -> None:
        """Test children of groups are counted through the group."""
        entities = [Skill(id="G", is_group=True), Skill(id="A", parent_id="G"), Skill(id="B")]
        assert [e.id for e in top_level(entities)] == ["G", "B"]

    def test_orphans_included(self) -> None:
        """Test children of a missing parent are counted directly."""
        entities = [Skill(id="A", parent_id="GONE")]
        assert top_level(entities) == entities

    def test_enhancer_children_included(self) -> None:
        """Test enhancers do not roll up, so their children count alone."""
        entities = [Skill(id="E", is_enhancer=True, real_cost=3), Skill(id="K", parent_id="E", real_cost=2)]
        assert category_total(entities) == 5


class TestSampleCharacter:
    """Totals for the shared sample character."""

    def test_breakdown(self, sample_character: Character) -> None:
        """Test per-category totals."""
        breakdown = cost_breakdown(sample_character)
        assert breakdown.characteristics == 15
        assert breakdown.skills == 21
        assert breakdown.perks == 3
        assert breakdown.talents == 6
        assert breakdown.martial_arts == 8
        assert breakdown.powers == 64
        assert breakdown.equipment == 5

    def test_total_excludes_equipment(self, sample_character: Character) -> None:
        """Test the spent total leaves equipment out."""
        assert cost_breakdown(sample_character).total == 117

    def test_disadvantages(self, sample_character: Character) -> None:
        """Test complication points."""
        assert disadvantage_total(sample_character) == 25

    def test_available(self, sample_character: Character) -> None:
        """Test points left to spend."""
        assert available_points(sample_character) == 88


class TestAvailablePoints:
    """Tests for the point budget."""

    def test_complications_capped(self, context: CostContext) -> None:
        """Test complication points count only up to the configured maximum."""
        disads = [
            Disadvantage(id="D1", points=60),
            Disadvantage(id="D2", points=60),
        ]
        powers = [Power(id="P", type="FLIGHT", base_cost=50)]
        aggregate(disads, context)
        aggregate(powers, context)
        character = Character(
            basic_configuration=BasicConfiguration(base_points=175, disad_points=100),
            disadvantages=disads,
            powers=powers,
        )
        assert disadvantage_total(character) == 120
        assert available_points(character) == 175 + 100 - 50

    def test_empty_character(self) -> None:
        """Test a new character has its whole budget."""
        character = Character()
        assert cost_breakdown(character) == CostBreakdown()
        assert available_points(character) == 175

    def test_experience_adds(self) -> None:
        """Test experience adds to the budget."""
        character = Character(basic_configuration=BasicConfiguration(experience=12))
        assert available_points(character) == 187
