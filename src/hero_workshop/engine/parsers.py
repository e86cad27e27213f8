"""Entity parsers for every character-file section.

Each parser turns one tree node into one typed entity: it reads the
identity and input fields, computes ``base_cost`` from the category's cost
formula and prices the result. Section parsers walk a whole section and
return the flat entity list for that category; nesting is kept through
``parent_id``.

Cost formulas are looked up by XMLID in per-category tables, falling back
to one default formula per category:

    >>> SKILL_COST_TABLES["COMBAT_LEVELS"]["ALL"]
    8
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hero_workshop.core.constants import (
    BARRIER_DEFENSE_COST,
    CHARACTERISTIC_BASE_VALUES,
    CHARACTERISTIC_COST_PER_LEVEL,
    CHARACTERISTIC_MAXIMA,
    CHARACTERISTIC_ORDER,
    CM_PER_INCH,
    COMBAT_LEVEL_COSTS,
    DEFAULT_CHARACTER_NAME,
    DEFAULT_LEVEL_COST,
    DISADVANTAGE_LABELS,
    GENERIC_TYPE,
    KG_PER_LB,
    PREFIXED_SKILL_ALIASES,
    RULES_DEFAULT_BASE_POINTS,
    RULES_DEFAULT_DISAD_POINTS,
    SHIELD_DCV_COST_PER_LEVEL,
    SKILL_ENHANCER_BASE_COST,
    SKILL_LEVEL_COSTS,
)
from hero_workshop.core.logging import get_logger
from hero_workshop.engine.attributes import AttributeNode
from hero_workshop.engine.costs import (
    CostContext,
    adder_cost,
    hero_ceil,
    parse_adders,
    parse_modifiers,
    round_half_up,
)
from hero_workshop.engine.pricing import price_entity
from hero_workshop.models.entities import (
    Adder,
    BasicConfiguration,
    CharacterImage,
    CharacterInfo,
    Characteristic,
    CostedEntity,
    Disadvantage,
    Equipment,
    MartialManeuver,
    Perk,
    Power,
    Rules,
    Skill,
    Talent,
    new_id,
)
from hero_workshop.models.enums import CharacteristicType, PerkType, SkillEnhancerType


logger = get_logger(__name__)


BaseCostFormula = Callable[[Any], float]


# =============================================================================
# Shared Field Readers
# =============================================================================


def _entity_id(node: AttributeNode) -> str:
    return node.get_string("ID") or new_id()


def _optional(node: AttributeNode, name: str) -> str | None:
    return node.get_string(name) or None


def _common_fields(node: AttributeNode) -> dict[str, Any]:
    """Read the identity fields every cost-bearing entity shares."""
    return {
        "id": _entity_id(node),
        "alias": _optional(node, "ALIAS"),
        "label": _optional(node, "NAME"),
        "input": _optional(node, "INPUT"),
        "notes": _optional(node, "NOTES"),
        "position": node.get_int("POSITION", 0),
        "levels": node.get_int("LEVELS", 0),
        "raw_base_cost": node.get_number("BASECOST", 0),
        "parent_id": _optional(node, "PARENTID"),
    }


def _group_fields(
    node: AttributeNode,
    context: CostContext,
    default_name: str,
    *,
    alias_first: bool,
) -> dict[str, Any]:
    """Read a LIST element as a display group."""
    alias = node.get_string("ALIAS")
    label = node.get_string("NAME")
    name = (alias or label) if alias_first else (label or alias)
    return {
        "id": _entity_id(node),
        "name": name or default_name,
        "alias": alias or None,
        "label": label or None,
        "notes": _optional(node, "NOTES"),
        "position": node.get_int("POSITION", 0),
        "modifiers": parse_modifiers(node, context.registry),
        "adders": parse_adders(node),
        "parent_id": _optional(node, "PARENTID"),
        "is_group": True,
    }


# =============================================================================
# Cost Formulas
# =============================================================================


SKILL_COST_TABLES: dict[str, dict[str, int]] = {
    "COMBAT_LEVELS": COMBAT_LEVEL_COSTS,
    "SKILL_LEVELS": SKILL_LEVEL_COSTS,
}
"""Points-per-level tables keyed by skill XMLID, then by breadth option."""


def characteristic_cost(entity: Characteristic) -> float:
    """``ceil(levels * cost per level)``; penalties cost nothing."""
    if entity.levels < 0:
        return 0
    return hero_ceil(entity.levels * CHARACTERISTIC_COST_PER_LEVEL.get(entity.type, 1))


def skill_cost(entity: Skill) -> float:
    """Base cost of a skill, enhancer or skill group."""
    if entity.is_group:
        return 0
    if entity.is_enhancer:
        return entity.raw_base_cost
    if entity.everyman or entity.native_tongue:
        return 0

    table = SKILL_COST_TABLES.get(entity.xml_id or "")
    if table is not None:
        cost = entity.levels * table.get(entity.option or "", DEFAULT_LEVEL_COST)
    else:
        cost = hero_ceil(entity.raw_base_cost + entity.levels + adder_cost(entity.adders))

    if entity.familiarity and cost == 0:
        return 1
    return cost


def _vehicle_base_cost(perk: Perk) -> float:
    return hero_ceil(perk.base_points / 5)


def _contact_cost(perk: Perk) -> float:
    return max(perk.levels, 1)


def _reputation_cost(perk: Perk) -> float:
    # LEVELS is the reaction bonus, not a cost input
    return hero_ceil(abs(perk.raw_base_cost) + adder_cost(perk.adders))


PERK_COST_FORMULAS: dict[str, Callable[[Perk], float]] = {
    "VEHICLE_BASE": _vehicle_base_cost,
    "CONTACT": _contact_cost,
    "REPUTATION": _reputation_cost,
    "POSITIVE_REPUTATION": _reputation_cost,
}
"""Perk cost formulas keyed by XMLID."""


def perk_cost(entity: Perk) -> float:
    """Base cost of a perk; unmapped XMLIDs use ``ceil(|base + adders + levels|)``."""
    if entity.is_group:
        return 0
    formula = PERK_COST_FORMULAS.get(entity.xml_id or "")
    if formula is not None:
        return formula(entity)
    return hero_ceil(abs(entity.raw_base_cost + adder_cost(entity.adders) + entity.levels))


TALENT_COST_FORMULAS: dict[str, Callable[[Talent], float]] = {
    "CUSTOMTALENT": lambda talent: talent.levels,
}
"""Talent cost formulas keyed by XMLID."""


def talent_cost(entity: Talent) -> float:
    """Base cost of a talent; unmapped XMLIDs use ``ceil(base + levels + adders)``."""
    if entity.is_group:
        return 0
    formula = TALENT_COST_FORMULAS.get(entity.type)
    if formula is not None:
        return formula(entity)
    return hero_ceil(entity.raw_base_cost + entity.levels + adder_cost(entity.adders))


def maneuver_cost(entity: MartialManeuver) -> float:
    """Maneuvers cost their recorded BASECOST; weapon elements their selected adders."""
    if entity.is_group:
        return 0
    if entity.is_weapon_element:
        return adder_cost(entity.adders)
    return entity.raw_base_cost


def _barrier_cost(power: Power) -> float:
    """Barrier: 3 per 2 DEF, 1 per +1m length/height or +0.5m thickness, 1 per BODY."""
    defense = sum(
        value or 0
        for value in (power.pd_levels, power.ed_levels, power.md_levels, power.powd_levels)
    )
    dimensions = (
        ((power.length_levels or 1) - 1)
        + ((power.height_levels or 1) - 1)
        + ((power.width_levels or 0.5) - 0.5) * 2
    )
    return (
        power.raw_base_cost
        + hero_ceil(defense * BARRIER_DEFENSE_COST)
        + dimensions
        + (power.body_levels or 0)
        + adder_cost(power.adders)
    )


POWER_COST_FORMULAS: dict[str, Callable[[Power], float]] = {
    "FORCEWALL": _barrier_cost,
}
"""True-base-cost formulas keyed by power XMLID."""


def power_cost(entity: Power) -> float:
    """True base cost of a power: ``BASECOST + levels * level cost + adders``.

    Characteristic powers with negative levels are penalties and cost 0.
    """
    if entity.is_group or entity.is_container:
        return entity.base_cost
    formula = POWER_COST_FORMULAS.get(entity.type)
    if formula is not None:
        return formula(entity)
    if CharacteristicType.is_characteristic(entity.type) and entity.levels < 0:
        return 0
    return entity.raw_base_cost + entity.levels * entity.level_cost + adder_cost(entity.adders)


def disadvantage_points(entity: CostedEntity) -> int:
    """Points granted by a complication: ``|BASECOST + adders|``."""
    return hero_ceil(abs(entity.raw_base_cost + adder_cost(entity.adders)))


BASE_COST_FORMULAS: dict[type[CostedEntity], BaseCostFormula] = {
    Characteristic: characteristic_cost,
    Skill: skill_cost,
    Perk: perk_cost,
    Talent: talent_cost,
    MartialManeuver: maneuver_cost,
    Power: power_cost,
    Disadvantage: lambda entity: entity.raw_base_cost,
}
"""Base-cost formula per entity class; Equipment resolves to Power."""


def base_cost_of(entity: CostedEntity) -> float:
    """Compute an entity's base cost from its recorded inputs.

    Args:
        entity: Entity whose inputs (levels, BASECOST, adders, option) are set.

    Returns:
        The pre-modifier cost.
    """
    for cls in type(entity).__mro__:
        formula = BASE_COST_FORMULAS.get(cls)
        if formula is not None:
            return formula(entity)
    return entity.raw_base_cost


def rebuild_costs(entity: CostedEntity, context: CostContext) -> None:
    """Recompute an entity's base cost and price it, after its inputs changed.

    Args:
        entity: Entity to rebuild in place.
        context: Cost context.
    """
    if isinstance(entity, Disadvantage):
        entity.points = disadvantage_points(entity)
    if isinstance(entity, Equipment):
        for sub_power in entity.sub_powers:
            sub_power.base_cost = base_cost_of(sub_power)
    entity.base_cost = base_cost_of(entity)
    price_entity(entity, context)


# =============================================================================
# Characteristics
# =============================================================================


def parse_characteristic(
    node: AttributeNode,
    char_type: CharacteristicType,
    context: CostContext,
) -> Characteristic:
    """Parse one characteristic element.

    Args:
        node: Characteristic element (e.g. ``<STR LEVELS="5"/>``).
        char_type: Characteristic type named by the element.
        context: Cost context.

    Returns:
        The priced characteristic.
    """
    fields = _common_fields(node)
    base_value = CHARACTERISTIC_BASE_VALUES.get(char_type, 0)
    characteristic = Characteristic(
        **fields,
        name=fields["alias"] or fields["label"] or char_type.value,
        type=char_type,
        base_value=base_value,
        total_value=base_value + fields["levels"],
        affects_primary=node.get_bool("AFFECTS_PRIMARY", True),
        affects_total=node.get_bool("AFFECTS_TOTAL", True),
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    rebuild_costs(characteristic, context)
    return characteristic


def parse_characteristics(section: AttributeNode | None, context: CostContext) -> list[Characteristic]:
    """Parse the CHARACTERISTICS section in sheet order."""
    if section is None:
        return []
    characteristics: list[Characteristic] = []
    for tag in CHARACTERISTIC_ORDER:
        node = section.child(tag)
        if node is not None:
            characteristics.append(parse_characteristic(node, CharacteristicType(tag), context))
    return characteristics


# =============================================================================
# Skills
# =============================================================================


def skill_display_name(node: AttributeNode) -> str:
    """Build a skill's display name (``PS: Jeweler``, ``Language:  Common``)."""
    xml_id = node.get_string("XMLID")
    alias = node.get_string("ALIAS")
    user_input = node.get_string("INPUT")
    label = node.get_string("NAME")

    name = alias
    if user_input:
        if alias in PREFIXED_SKILL_ALIASES:
            name = f"{alias}: {user_input}"
        elif alias == "Language":
            name = f"Language:  {user_input}"
            option_alias = node.get_string("OPTION_ALIAS")
            if option_alias:
                name += f" ({option_alias})"
            if node.get_bool("NATIVE_TONGUE"):
                name += " [Native]"
        elif user_input != alias:
            name = user_input
    if label and label != alias:
        name = f"{label}: {alias}"
    return name or xml_id or "Unknown Skill"


def parse_skill(node: AttributeNode, context: CostContext) -> Skill:
    """Parse one SKILL element.

    Args:
        node: SKILL element.
        context: Cost context.

    Returns:
        The priced skill, before any list discount.
    """
    skill = Skill(
        **_common_fields(node),
        name=skill_display_name(node),
        xml_id=_optional(node, "XMLID"),
        option=_optional(node, "OPTION"),
        option_alias=_optional(node, "OPTION_ALIAS"),
        characteristic=_optional(node, "CHARACTERISTIC"),
        roll=node.get_int("ROLL") or None,
        proficiency=node.get_bool("PROFICIENCY"),
        familiarity=node.get_bool("FAMILIARITY"),
        everyman=node.get_bool("EVERYMAN"),
        native_tongue=node.get_bool("NATIVE_TONGUE"),
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    rebuild_costs(skill, context)
    return skill


def parse_skill_enhancer(
    node: AttributeNode,
    enhancer_type: SkillEnhancerType,
    context: CostContext,
) -> Skill:
    """Parse a Skill Enhancer (Scholar, Linguist, ...)."""
    fields = _common_fields(node)
    fields["raw_base_cost"] = node.get_number("BASECOST", SKILL_ENHANCER_BASE_COST)
    enhancer = Skill(
        **fields,
        name=fields["alias"] or enhancer_type.display_name,
        xml_id=enhancer_type.value,
        enhancer_type=enhancer_type.value,
        is_enhancer=True,
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    rebuild_costs(enhancer, context)
    return enhancer


def parse_skills(section: AttributeNode | None, context: CostContext) -> list[Skill]:
    """Parse the SKILLS section: groups, enhancers and skills, ordered by position."""
    if section is None:
        return []
    skills: list[Skill] = [
        Skill(**_group_fields(node, context, "Skill Group", alias_first=True))
        for node in section.children("LIST")
    ]
    for enhancer_type in SkillEnhancerType:
        for node in section.children(enhancer_type.value):
            skills.append(parse_skill_enhancer(node, enhancer_type, context))
    for node in section.children("SKILL"):
        skills.append(parse_skill(node, context))
    skills.sort(key=lambda skill: skill.position)
    return skills


# =============================================================================
# Perks & Talents
# =============================================================================


def _find_adder(adders: list[Adder], name: str) -> Adder | None:
    return next((adder for adder in adders if adder.name == name), None)


def perk_display_name(node: AttributeNode, adders: list[Adder]) -> str:
    """Build a perk's display name (``Contact:  Police 11-``)."""
    xml_id = node.get_string("XMLID")
    alias = node.get_string("ALIAS")
    user_input = node.get_string("INPUT")
    label = node.get_string("NAME")
    levels = node.get_int("LEVELS", 0)

    if xml_id == "CONTACT":
        return f"Contact:  {user_input or label or 'Unknown'} {7 + levels}-"

    if xml_id in ("VEHICLE_BASE", "REPUTATION", "POSITIVE_REPUTATION"):
        name = f"{label}:" if label else ""
        name += f" {alias}"
        if xml_id != "VEHICLE_BASE":
            how_wide = _find_adder(adders, "How Widely Known")
            how_well = _find_adder(adders, "How Well Known")
            if how_wide is not None and how_wide.option_alias:
                name += f" ({how_wide.option_alias})"
            if how_well is not None and how_well.option_alias:
                name += f" {how_well.option_alias}"
            if levels > 0:
                name += f", +{levels}/+{levels}d6"
        return name.strip()

    return label or user_input or alias or xml_id or "Unknown Perk"


def parse_perk(node: AttributeNode, context: CostContext) -> Perk:
    """Parse one PERK element."""
    xml_id = node.get_string("XMLID")
    adders = parse_adders(node)
    perk = Perk(
        **_common_fields(node),
        name=perk_display_name(node, adders),
        type=PerkType.from_xml_id(xml_id),
        xml_id=xml_id or None,
        base_points=node.get_number("BASEPOINTS", 0),
        modifiers=parse_modifiers(node, context.registry),
        adders=adders,
    )
    rebuild_costs(perk, context)
    return perk


def parse_perks(section: AttributeNode | None, context: CostContext) -> list[Perk]:
    """Parse the PERKS section: groups first, then perks."""
    if section is None:
        return []
    perks = [
        Perk(**_group_fields(node, context, "Perk Group", alias_first=False))
        for node in section.children("LIST")
    ]
    perks.extend(parse_perk(node, context) for node in section.children("PERK"))
    return perks


def parse_talent(node: AttributeNode, context: CostContext) -> Talent:
    """Parse one TALENT element."""
    fields = _common_fields(node)
    xml_id = node.get_string("XMLID")
    talent = Talent(
        **fields,
        name=fields["alias"] or fields["label"] or xml_id or "Unknown Talent",
        type=xml_id or GENERIC_TYPE,
        characteristic=_optional(node, "CHARACTERISTIC"),
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    rebuild_costs(talent, context)
    return talent


def parse_talents(section: AttributeNode | None, context: CostContext) -> list[Talent]:
    """Parse the TALENTS section: groups first, then talents."""
    if section is None:
        return []
    talents = [
        Talent(**_group_fields(node, context, "Talent Group", alias_first=False))
        for node in section.children("LIST")
    ]
    talents.extend(parse_talent(node, context) for node in section.children("TALENT"))
    return talents


# =============================================================================
# Martial Arts
# =============================================================================


def parse_combat_value(text: str) -> int:
    """Parse a sign-prefixed OCV/DCV string; ``--`` means no modifier.

    Example:
        >>> parse_combat_value("+2"), parse_combat_value("-1"), parse_combat_value("--")
        (2, -1, 0)
    """
    if text.strip() == "--":
        return 0
    try:
        return int(text.replace("+", "").strip())
    except ValueError:
        return 0


def render_maneuver_effect(
    phase: str,
    ocv: str,
    dcv: str,
    template: str,
    dc: int,
) -> str:
    """Render a maneuver's effect line.

    Example:
        >>> render_maneuver_effect("1/2", "+2", "+0", "Weapon [WEAPONDC] Strike", 2)
        '1/2 Phase, +2 OCV, +0 DCV, Weapon +2 DC Strike'
    """
    parts = [f"{phase} Phase"] if phase else []
    parts.append(f"{ocv} OCV")
    parts.append(f"{dcv} DCV")
    description = template.replace("[NORMALDC]", f"{dc} DC", 1).replace("[WEAPONDC]", f"+{dc} DC", 1)
    if description:
        parts.append(description)
    return ", ".join(parts)


def parse_maneuver(node: AttributeNode, context: CostContext) -> MartialManeuver:
    """Parse one MANEUVER element."""
    fields = _common_fields(node)
    ocv_text = node.get_string("OCV", "+0")
    dcv_text = node.get_string("DCV", "+0")
    phase = node.get_string("PHASE", "1")
    dc = node.get_int("DC", 0)
    use_weapon = node.get_bool("USEWEAPON")
    template = node.get_string("EFFECT")
    weapon_effect = node.get_string("WEAPONEFFECT")
    display = node.get_string("DISPLAY")

    maneuver = MartialManeuver(
        **fields,
        name=fields["alias"] or display or fields["label"] or "Maneuver",
        ocv=parse_combat_value(ocv_text),
        dcv=parse_combat_value(dcv_text),
        phase=phase or "1/2",
        dc=dc,
        display=display or None,
        effect=render_maneuver_effect(
            phase, ocv_text, dcv_text, weapon_effect if use_weapon and weapon_effect else template, dc
        ),
        effect_template=template or None,
        weapon_effect=weapon_effect or None,
        use_weapon=use_weapon,
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    rebuild_costs(maneuver, context)
    return maneuver


def parse_weapon_element(node: AttributeNode, context: CostContext) -> MartialManeuver:
    """Parse a WEAPON_ELEMENT, keeping its adder hierarchy for editing."""
    fields = _common_fields(node)
    weapons = [
        adder.name
        for adder in parse_adders(node)
        if adder.name and adder.name != "Common Adder"
    ]
    element = MartialManeuver(
        **fields,
        name=f"{fields['alias'] or ''}: {', '.join(weapons) or 'Weapons'}",
        effect="Weapon Element",
        is_weapon_element=True,
        adders=parse_adders(node, preserve_hierarchy=True),
    )
    rebuild_costs(element, context)
    return element


def parse_martial_arts(section: AttributeNode | None, context: CostContext) -> list[MartialManeuver]:
    """Parse the MARTIALARTS section: styles, maneuvers, then weapon elements."""
    if section is None:
        return []
    entries = [
        MartialManeuver(**_group_fields(node, context, "Martial Arts Style", alias_first=False))
        for node in section.children("LIST")
    ]
    entries.extend(parse_maneuver(node, context) for node in section.children("MANEUVER"))
    entries.extend(parse_weapon_element(node, context) for node in section.children("WEAPON_ELEMENT"))
    return entries


# =============================================================================
# Powers
# =============================================================================


def resolve_level_cost(node: AttributeNode, xml_id: str, option: str | None, context: CostContext) -> float:
    """Resolve a power's points per level.

    Order: the recorded LVLCOST, the registry (honouring option
    overrides), the characteristic price table, then 1.
    """
    recorded = node.get_number("LVLCOST", -1)
    if recorded >= 0:
        return recorded
    definition = context.registry.lookup_power(xml_id)
    if definition is not None:
        return definition.level_cost_for(option)
    if CharacteristicType.is_characteristic(xml_id):
        return CHARACTERISTIC_COST_PER_LEVEL[xml_id]
    if xml_id:
        logger.debug("Unknown power, using generic level cost", xml_id=xml_id)
    return 1


def _power_xml_id(node: AttributeNode) -> str:
    xml_id = node.get_string("XMLID")
    if not xml_id and CharacteristicType.is_characteristic(node.tag):
        return node.tag
    return xml_id


def _barrier_fields(node: AttributeNode) -> dict[str, Any]:
    # The file records levels above the 1m x 1m x 0.5m base
    return {
        "pd_levels": node.get_int("PDLEVELS", 0),
        "ed_levels": node.get_int("EDLEVELS", 0),
        "md_levels": node.get_int("MDLEVELS", 0),
        "powd_levels": node.get_int("POWDLEVELS", 0),
        "body_levels": node.get_int("BODYLEVELS", 0),
        "length_levels": node.get_number("LENGTHLEVELS", 0) + 1,
        "height_levels": node.get_number("HEIGHTLEVELS", 0) + 1,
        "width_levels": node.get_number("WIDTHLEVELS", 0) + 0.5,
    }


def _end_cost_override(node: AttributeNode) -> int | None:
    for name in ("END_COST", "ENDCOST"):
        value = node.get_number(name, -1)
        if value >= 0:
            return int(value)
    return None


def _power_fields(node: AttributeNode, context: CostContext) -> dict[str, Any]:
    """Read the fields shared by powers and equipment."""
    fields = _common_fields(node)
    xml_id = _power_xml_id(node)
    option = _optional(node, "OPTION")
    fields.update(
        type=xml_id or GENERIC_TYPE,
        level_cost=resolve_level_cost(node, xml_id, option, context),
        option=option,
        option_alias=_optional(node, "OPTION_ALIAS"),
        effect_dice=_optional(node, "EFFECT_DICE") or _optional(node, "EFFECTDICE"),
        does_damage=node.get_bool("DOES_DAMAGE") or node.get_bool("DOESDAMAGE"),
        does_knockback=node.get_bool("DOES_KNOCKBACK") or node.get_bool("DOESKB"),
        killing=node.get_bool("KILLING"),
        standard_effect=node.get_bool("STANDARD_EFFECT") or node.get_bool("USESTANDARDEFFECT"),
        affects_primary=node.get_bool("AFFECTS_PRIMARY", True),
        affects_total=node.get_bool("AFFECTS_TOTAL", True),
        source_element=node.tag,
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    if xml_id == "FORCEWALL":
        fields.update(_barrier_fields(node))
    return fields


def parse_power(node: AttributeNode, context: CostContext, parent_id: str | None = None) -> Power:
    """Parse one POWER (or characteristic/skill element inside a compound power).

    Args:
        node: Power element.
        context: Cost context.
        parent_id: Owning compound power, overriding any PARENTID.

    Returns:
        The priced power, before any list effects.
    """
    fields = _power_fields(node, context)
    if parent_id is not None:
        fields["parent_id"] = parent_id
    power = Power(
        **fields,
        name=fields["label"] or fields["alias"] or _power_xml_id(node) or "Unknown Power",
        end_cost_override=_end_cost_override(node),
    )
    if power.type == "COMPOUNDPOWER":
        power.is_container = True
    rebuild_costs(power, context)
    return power


def _compound_child_nodes(node: AttributeNode) -> list[AttributeNode]:
    children = node.children("POWER")
    for tag in CHARACTERISTIC_ORDER:
        children.extend(node.children(tag))
    children.extend(node.children("SKILL"))
    return children


def parse_power_tree(node: AttributeNode, context: CostContext, parent_id: str | None = None) -> list[Power]:
    """Parse a power and, for compound powers, its owned children depth-first."""
    power = parse_power(node, context, parent_id)
    powers = [power]
    if power.is_container:
        for child in _compound_child_nodes(node):
            powers.extend(parse_power_tree(child, context, power.id))
    return powers


def parse_power_list(node: AttributeNode, context: CostContext) -> Power:
    """Parse a power LIST container."""
    return Power(
        **_group_fields(node, context, "Power List", alias_first=False),
        type="LIST",
        source_element="LIST",
        is_container=True,
    )


def parse_powers(section: AttributeNode | None, context: CostContext) -> list[Power]:
    """Parse the POWERS section: LIST containers, then powers with compound children."""
    if section is None:
        return []
    powers = [parse_power_list(node, context) for node in section.children("LIST")]
    for node in section.children("POWER"):
        powers.extend(parse_power_tree(node, context))
    return powers


# =============================================================================
# Disadvantages
# =============================================================================


def disadvantage_display_name(node: AttributeNode) -> str:
    """Build a complication's name from its details and adder options."""
    details = node.get_string("INPUT") or node.get_string("NAME")
    options = [text for adder in node.collection("ADDER") if (text := adder.get_string("OPTION_ALIAS"))]
    name = details
    if options:
        option_text = "; ".join(options).replace("(", "").replace(")", "")
        name = f"{details} ({option_text})" if details else option_text
    return name or node.get_string("ALIAS") or "Unknown"


def parse_disadvantage(node: AttributeNode, context: CostContext) -> Disadvantage:
    """Parse one DISAD element."""
    fields = _common_fields(node)
    xml_id = node.get_string("XMLID")
    fields["alias"] = DISADVANTAGE_LABELS.get(xml_id) or fields["alias"] or xml_id or "Complication"
    disadvantage = Disadvantage(
        **fields,
        name=disadvantage_display_name(node),
        type=xml_id or GENERIC_TYPE,
        category=xml_id or None,
        modifiers=parse_modifiers(node, context.registry),
        adders=parse_adders(node),
    )
    rebuild_costs(disadvantage, context)
    return disadvantage


def parse_disadvantages(section: AttributeNode | None, context: CostContext) -> list[Disadvantage]:
    """Parse the DISADVANTAGES section (child element ``DISAD``)."""
    if section is None:
        return []
    return [parse_disadvantage(node, context) for node in section.children("DISAD")]


# =============================================================================
# Equipment
# =============================================================================


def _parse_sub_powers(node: AttributeNode, context: CostContext, owner_id: str) -> list[Power]:
    sub_powers = [parse_power(child, context, owner_id) for child in node.children("POWER")]
    for tag in CHARACTERISTIC_ORDER:
        if tag == "DCV":
            continue
        sub_powers.extend(parse_power(child, context, owner_id) for child in node.children(tag))
    for child in node.children("DCV"):
        shield = parse_power(child, context, owner_id)
        shield.level_cost = SHIELD_DCV_COST_PER_LEVEL
        rebuild_costs(shield, context)
        sub_powers.append(shield)
    return sub_powers


def parse_equipment_item(node: AttributeNode, context: CostContext) -> Equipment:
    """Parse one equipment POWER with its owned sub-powers.

    Weight is recorded in lbs and exposed in kg to one decimal place.
    """
    fields = _power_fields(node, context)
    weight_lbs = node.get_number("WEIGHT", 0) if node.has("WEIGHT") else None
    item = Equipment(
        **fields,
        name=fields["label"] or fields["alias"] or "Unknown Equipment",
        price=node.get_number("PRICE", 0) or None,
        weight=round_half_up(weight_lbs * KG_PER_LB, 1) if weight_lbs is not None else None,
        weight_lbs=weight_lbs,
        carried=node.get_bool("CARRIED", True),
    )
    item.sub_powers = _parse_sub_powers(node, context, item.id)
    rebuild_costs(item, context)
    return item


def parse_equipment(section: AttributeNode | None, context: CostContext) -> list[Equipment]:
    """Parse the EQUIPMENT section: LIST groups, then items."""
    if section is None:
        return []
    items = [
        Equipment(
            **_group_fields(node, context, "Equipment Group", alias_first=False),
            type="LIST",
            source_element="LIST",
        )
        for node in section.children("LIST")
    ]
    items.extend(parse_equipment_item(node, context) for node in section.children("POWER"))
    return items


# =============================================================================
# Character Sections
# =============================================================================


def parse_basic_configuration(node: AttributeNode | None, context: CostContext) -> BasicConfiguration:
    """Parse BASIC_CONFIGURATION (or a RULES block standing in for it)."""
    if node is None:
        return BasicConfiguration(
            base_points=context.default_base_points,
            disad_points=context.default_disad_points,
        )
    return BasicConfiguration(
        base_points=node.get_int("BASE_POINTS") or node.get_int("BASEPOINTS", context.default_base_points),
        disad_points=node.get_int("DISAD_POINTS") or node.get_int("DISADPOINTS", context.default_disad_points),
        experience=node.get_int("EXPERIENCE", 0),
        export_template=_optional(node, "EXPORT_TEMPLATE"),
    )


_INFO_ATTRIBUTES = {
    "alternate_identities": ("ALTERNATE_IDENTITIES", "ALTERNATEIDS"),
    "player_name": ("PLAYER_NAME", "PLAYERNAME"),
    "hair_color": ("HAIR_COLOR", "HAIRCOLOR"),
    "eye_color": ("EYE_COLOR", "EYECOLOR"),
    "campaign_name": ("CAMPAIGN_NAME", "CAMPAIGNNAME"),
    "genre": ("GENRE",),
    "gm": ("GM", "GAMEMASTER"),
    "background": ("BACKGROUND",),
    "personality": ("PERSONALITY",),
    "quote": ("QUOTE",),
    "tactics": ("TACTICS",),
    "campaign_use": ("CAMPAIGN_USE", "CAMPAIGNUSE"),
    "appearance": ("APPEARANCE",),
    "notes1": ("NOTES1",),
    "notes2": ("NOTES2",),
    "notes3": ("NOTES3",),
    "notes4": ("NOTES4",),
    "notes5": ("NOTES5",),
}
"""CharacterInfo fields and the names they may be recorded under."""


def _first_of(node: AttributeNode, names: tuple[str, ...]) -> str | None:
    for name in names:
        value = node.get_string(name)
        if value:
            return value
    return None


def parse_character_info(node: AttributeNode | None) -> CharacterInfo:
    """Parse CHARACTER_INFO, converting height (in) to cm and weight (lbs) to kg."""
    if node is None:
        return CharacterInfo()
    height_inches = node.get_number("HEIGHT", 0) if node.has("HEIGHT") else None
    weight_lbs = node.get_number("WEIGHT", 0) if node.has("WEIGHT") else None
    return CharacterInfo(
        character_name=_first_of(node, ("CHARACTER_NAME", "CHARACTERNAME")) or DEFAULT_CHARACTER_NAME,
        height=int(round_half_up(height_inches * CM_PER_INCH)) if height_inches is not None else None,
        weight=int(round_half_up(weight_lbs * KG_PER_LB)) if weight_lbs is not None else None,
        height_inches=height_inches,
        weight_lbs=weight_lbs,
        **{field: _first_of(node, names) for field, names in _INFO_ATTRIBUTES.items()},
    )


def parse_image(node: AttributeNode | None) -> CharacterImage | None:
    """Parse the embedded IMAGE element."""
    if node is None:
        return None
    return CharacterImage(
        data=node.text,
        file_name=_optional(node, "FileName"),
        file_path=_optional(node, "FilePath"),
    )


def parse_rules(node: AttributeNode | None) -> Rules | None:
    """Parse a campaign RULES block."""
    if node is None:
        return None
    return Rules(
        name=node.get_string("name", "Default") or "Default",
        base_points=node.get_int("BASEPOINTS", RULES_DEFAULT_BASE_POINTS),
        disad_points=node.get_int("DISADPOINTS", RULES_DEFAULT_DISAD_POINTS),
        ap_per_end=node.get_int("APPEREND", 10),
        str_ap_per_end=node.get_int("STRAPPEREND", 10),
        attack_ap_max_value=node.get_int("ATTACKAPMAXVALUE", 70),
        attack_ap_max_response=node.get_int("ATTACKAPMAXRESPONSE", 0),
        defense_ap_max_value=node.get_int("DEFENSEAPMAXVALUE", 90),
        defense_ap_max_response=node.get_int("DEFENSEAPMAXRESPONSE", 0),
        disad_category_max_value=node.get_int("DISADCATEGORYMAXVALUE", 75),
        disad_category_max_response=node.get_int("DISADCATEGORYMAXRESPONSE", 0),
        characteristic_maxima={
            tag: node.get_int(f"{tag}_MAX", maximum) for tag, maximum in CHARACTERISTIC_MAXIMA.items()
        },
        standard_effect_allowed=node.get_bool("STANDARDEFFECTALLOWED", True),
        multiplier_allowed=node.get_bool("MULTIPLIERALLOWED", False),
        literacy_free=node.get_bool("LITERACYFREE", False),
        native_literacy_free=node.get_bool("NATIVELITERACYFREE", True),
        equipment_allowed=node.get_bool("EQUIPMENTALLOWED", True),
        use_skill_maxima=node.get_bool("USESKILLMAXIMA", False),
        skill_maxima_limit=node.get_int("SKILLMAXIMALIMIT", 13),
        skill_roll_base=node.get_int("SKILLROLLBASE", 9),
        skill_roll_denominator=node.get_int("SKILLROLLDENOMINATOR", 5),
        char_roll_base=node.get_int("CHARROLLBASE", 9),
        char_roll_denominator=node.get_int("CHARROLLDENOMINATOR", 5),
        notes_labels={n: label for n in range(1, 6) if (label := node.get_string(f"NOTES{n}LABEL"))},
        use_notes={n: node.get_bool(f"USENOTES{n}") for n in range(1, 6)},
    )


__all__ = [
    "SKILL_COST_TABLES",
    "PERK_COST_FORMULAS",
    "TALENT_COST_FORMULAS",
    "POWER_COST_FORMULAS",
    "BASE_COST_FORMULAS",
    "base_cost_of",
    "rebuild_costs",
    "characteristic_cost",
    "skill_cost",
    "perk_cost",
    "talent_cost",
    "maneuver_cost",
    "power_cost",
    "disadvantage_points",
    "parse_characteristic",
    "parse_characteristics",
    "skill_display_name",
    "parse_skill",
    "parse_skill_enhancer",
    "parse_skills",
    "perk_display_name",
    "parse_perk",
    "parse_perks",
    "parse_talent",
    "parse_talents",
    "parse_combat_value",
    "render_maneuver_effect",
    "parse_maneuver",
    "parse_weapon_element",
    "parse_martial_arts",
    "resolve_level_cost",
    "parse_power",
    "parse_power_tree",
    "parse_power_list",
    "parse_powers",
    "disadvantage_display_name",
    "parse_disadvantage",
    "parse_disadvantages",
    "parse_equipment_item",
    "parse_equipment",
    "parse_basic_configuration",
    "parse_character_info",
    "parse_image",
    "parse_rules",
]
