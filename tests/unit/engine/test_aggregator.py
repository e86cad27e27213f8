"""Tests for container and list cost aggregation."""

from __future__ import annotations

from hero_workshop.engine.aggregator import (
    aggregate,
    children_of,
    list_discount,
    passes_list_effects,
    remove_entity,
)
from hero_workshop.engine.costs import CostContext
from hero_workshop.models.entities import Adder, MartialManeuver, Modifier, Power, Skill


def power_list(**kwargs: object) -> Power:
    return Power(type="LIST", source_element="LIST", is_group=True, is_container=True, **kwargs)


class TestListEffects:
    """Tests for what a list passes to its children."""

    def test_enhancer_discount(self) -> None:
        """Test Skill Enhancers discount each child by 1."""
        assert list_discount(Skill(is_enhancer=True)) == -1

    def test_power_list_uses_first_negative_adder(self) -> None:
        """Test power lists use their first negative adder."""
        parent = power_list(adders=[Adder(base_cost=2), Adder(base_cost=-1), Adder(base_cost=-3)])
        assert list_discount(parent) == -1

    def test_group_uses_adder_total(self) -> None:
        """Test other groups use the total of their adders."""
        parent = Skill(is_group=True, adders=[Adder(base_cost=-1), Adder(base_cost=-1)])
        assert list_discount(parent) == -2

    def test_compound_power_passes_nothing(self) -> None:
        """Test compound powers are not list-like for their children."""
        assert not passes_list_effects(Power(type="COMPOUNDPOWER", is_container=True))
        assert passes_list_effects(power_list())
        assert not passes_list_effects(Skill())


class TestAggregate:
    """Tests for repricing and rollup of a category."""

    def test_enhancer_child_discounted(self, context: CostContext) -> None:
        """Test a 3 point skill under an enhancer costs 2."""
        enhancer = Skill(id="E", is_enhancer=True, base_cost=3)
        child = Skill(id="K", parent_id="E", base_cost=3)
        aggregate([enhancer, child], context)
        assert enhancer.real_cost == 3
        assert child.real_cost == 2

    def test_discount_never_negative(self, context: CostContext) -> None:
        """Test a discounted child never costs less than 0."""
        enhancer = Skill(id="E", is_enhancer=True, base_cost=3)
        child = Skill(id="K", parent_id="E", base_cost=1, real_cost=1)
        other = Skill(id="F", parent_id="E", base_cost=0)
        aggregate([enhancer, child, other], context)
        assert child.real_cost == 0
        assert other.real_cost == 0

    def test_list_limitation_inherited(self, context: CostContext) -> None:
        """Test list limitations reach each child, and the list rolls up."""
        parent = power_list(id="L", modifiers=[Modifier(value=-0.5)])
        child = Power(id="P", type="FLIGHT", parent_id="L", base_cost=20)
        aggregate([parent, child], context)
        assert (child.active_cost, child.real_cost, child.end_cost) == (20, 13, 2)
        assert (parent.base_cost, parent.active_cost, parent.real_cost) == (20, 20, 13)

    def test_list_advantage_inherited(self, context: CostContext) -> None:
        """Test list advantages raise each child's active cost."""
        parent = power_list(id="L", modifiers=[Modifier(value=0.5)])
        child = Power(id="P", type="ENERGYBLAST", parent_id="L", base_cost=30)
        aggregate([parent, child], context)
        assert child.active_cost == 45

    def test_power_list_adder_discount(self, context: CostContext) -> None:
        """Test a power list's negative adder comes off each child."""
        parent = power_list(id="L", adders=[Adder(base_cost=-1)])
        child = Power(id="P", type="ENERGYBLAST", parent_id="L", base_cost=10)
        aggregate([parent, child], context)
        assert child.real_cost == 9
        assert parent.real_cost == 9

    def test_compound_ignores_own_modifiers(self, context: CostContext) -> None:
        """Test compound powers are the pure sum of their children."""
        compound = Power(id="C", type="COMPOUNDPOWER", is_container=True, modifiers=[Modifier(value=-1)])
        blast = Power(id="A", type="ENERGYBLAST", parent_id="C", base_cost=10)
        pd = Power(id="B", type="PD", parent_id="C", base_cost=5)
        aggregate([compound, blast, pd], context)
        assert blast.real_cost == 10
        assert (compound.base_cost, compound.active_cost, compound.real_cost) == (15, 15, 15)

    def test_nested_groups(self, context: CostContext) -> None:
        """Test groups inside groups roll up depth-first."""
        outer = MartialManeuver(id="O", is_group=True)
        inner = MartialManeuver(id="I", is_group=True, parent_id="O")
        strike = MartialManeuver(id="S", parent_id="I", base_cost=4)
        block = MartialManeuver(id="B", parent_id="O", base_cost=4)
        aggregate([outer, inner, strike, block], context)
        assert inner.real_cost == 4
        assert outer.real_cost == 8
        assert outer.active_cost is None

    def test_children_listed_before_parent(self, context: CostContext) -> None:
        """Test list order does not matter."""
        child = Skill(id="K", parent_id="G", base_cost=5)
        group = Skill(id="G", is_group=True)
        aggregate([child, group], context)
        assert group.real_cost == 5

    def test_idempotent(self, context: CostContext) -> None:
        """Test aggregating twice changes nothing."""
        parent = power_list(id="L", modifiers=[Modifier(value=-0.5)], adders=[Adder(base_cost=-1)])
        child = Power(id="P", type="FLIGHT", parent_id="L", base_cost=20)
        entities = [parent, child]
        aggregate(entities, context)
        first = [(e.base_cost, e.active_cost, e.real_cost) for e in entities]
        aggregate(entities, context)
        assert [(e.base_cost, e.active_cost, e.real_cost) for e in entities] == first

    def test_orphan_priced_alone(self, context: CostContext) -> None:
        """Test a child whose parent is missing is priced without list effects."""
        orphan = Skill(id="K", parent_id="GONE", base_cost=3)
        aggregate([orphan], context)
        assert orphan.real_cost == 3

    def test_cycle_does_not_recurse_forever(self, context: CostContext) -> None:
        """Test a parent cycle is broken."""
        first = Skill(id="A", is_group=True, parent_id="B")
        second = Skill(id="B", is_group=True, parent_id="A")
        aggregate([first, second], context)
        assert first.real_cost == 0

    def test_children_of(self) -> None:
        """Test direct children in list order."""
        entities = [Skill(id="G", is_group=True), Skill(id="A", parent_id="G"), Skill(id="B", parent_id="G")]
        assert [e.id for e in children_of(entities, "G")] == ["A", "B"]


class TestRemoveEntity:
    """Tests for removal semantics."""

    def test_removing_list_unparents_children(self, context: CostContext) -> None:
        """Test list children survive removal, priced alone."""
        parent = power_list(id="L", modifiers=[Modifier(value=-0.5)])
        child = Power(id="P", type="FLIGHT", parent_id="L", base_cost=20)
        entities = [parent, child]
        aggregate(entities, context)

        removed = remove_entity(entities, "L", context)

        assert removed == [parent]
        assert entities == [child]
        assert child.parent_id is None
        assert child.real_cost == 20

    def test_removing_compound_removes_children(self, context: CostContext) -> None:
        """Test compound children are deleted with their container, recursively."""
        compound = Power(id="C", type="COMPOUNDPOWER", is_container=True)
        inner = Power(id="C2", type="COMPOUNDPOWER", is_container=True, parent_id="C")
        leaf = Power(id="A", type="ENERGYBLAST", parent_id="C2", base_cost=10)
        other = Power(id="X", type="FLIGHT", base_cost=10)
        entities = [compound, inner, leaf, other]

        removed = remove_entity(entities, "C", context)

        assert {e.id for e in removed} == {"C", "C2", "A"}
        assert entities == [other]

    def test_removing_child_updates_container(self, context: CostContext) -> None:
        """Test the container total drops when a child is removed."""
        group = Skill(id="G", is_group=True)
        first = Skill(id="A", parent_id="G", base_cost=3)
        second = Skill(id="B", parent_id="G", base_cost=2)
        entities = [group, first, second]
        aggregate(entities, context)
        assert group.real_cost == 5

        remove_entity(entities, "A", context)

        assert group.real_cost == 2

    def test_unknown_id(self, context: CostContext) -> None:
        """Test removing a missing id is a no-op."""
        entities = [Skill(id="A")]
        assert remove_entity(entities, "Z", context) == []
        assert len(entities) == 1
