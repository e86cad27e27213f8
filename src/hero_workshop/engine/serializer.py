"""Serializer from the domain model back to a character-file tree.

Entity fields map to attributes through a generic rule (snake_case with
underscores removed, upper-cased: ``base_points`` -> ``BASEPOINTS``) plus
an exception table for wire names that are not a mechanical transform.
Modifiers and adders go through dedicated nested builders.

The output is written so that parsing it again reproduces every cost
figure and parent link: BASECOST comes from the recorded base cost,
compound-power children are nested inside their container and list
children stay flat with a PARENTID.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable
from typing import Any

from hero_workshop.core.constants import CM_PER_INCH, GENERIC_TYPE, KG_PER_LB
from hero_workshop.engine.costs import round_half_up
from hero_workshop.models.entities import (
    Adder,
    BasicConfiguration,
    Character,
    CharacterImage,
    CharacterInfo,
    Characteristic,
    CostedEntity,
    Disadvantage,
    Equipment,
    MartialManeuver,
    Modifier,
    Perk,
    Power,
    Rules,
    Skill,
    Talent,
)


TagSelector = Callable[[Any], str]
"""Chooses the element name for an entity within its section."""


# =============================================================================
# Field Mapping
# =============================================================================


FIELD_ATTRIBUTE_EXCEPTIONS = {
    "option_alias": "OPTION_ALIAS",
    "native_tongue": "NATIVE_TONGUE",
    "affects_primary": "AFFECTS_PRIMARY",
    "affects_total": "AFFECTS_TOTAL",
    "parent_id": "PARENTID",
    "label": "NAME",
    "type": "XMLID",
    "raw_base_cost": "BASECOST",
    "level_cost": "LVLCOST",
    "end_cost_override": "END_COST",
    "effect_dice": "EFFECT_DICE",
    "does_damage": "DOES_DAMAGE",
    "does_knockback": "DOES_KNOCKBACK",
    "standard_effect": "STANDARD_EFFECT",
    "effect_template": "EFFECT",
    "weight_lbs": "WEIGHT",
}
"""Wire names that do not follow the generic field-name rule."""

YES_NO_FIELDS = frozenset({
    "affects_primary",
    "affects_total",
    "native_tongue",
    "everyman",
    "familiarity",
    "proficiency",
    "does_damage",
    "does_knockback",
    "killing",
    "standard_effect",
    "use_weapon",
    "carried",
})
"""Boolean fields rendered as ``Yes``/``No`` rather than ``true``/``false``."""

_COMMON_FIELDS = (
    "id",
    "label",
    "alias",
    "input",
    "notes",
    "position",
    "levels",
    "raw_base_cost",
    "parent_id",
)

_GROUP_FIELDS = ("id", "label", "alias", "notes", "position", "parent_id")

_BARRIER_BASE_DIMENSIONS = {
    "length_levels": 1,
    "height_levels": 1,
    "width_levels": 0.5,
}

_POWER_FIELDS = (
    *_COMMON_FIELDS,
    "type",
    "level_cost",
    "option",
    "option_alias",
    "effect_dice",
    "does_damage",
    "does_knockback",
    "killing",
    "standard_effect",
    "affects_primary",
    "affects_total",
    "end_cost_override",
    "pd_levels",
    "ed_levels",
    "md_levels",
    "powd_levels",
    "body_levels",
    *_BARRIER_BASE_DIMENSIONS,
)

SERIALIZED_FIELDS: dict[type[CostedEntity], tuple[str, ...]] = {
    Characteristic: (*_COMMON_FIELDS, "affects_primary", "affects_total"),
    Skill: (
        *_COMMON_FIELDS,
        "xml_id",
        "option",
        "option_alias",
        "characteristic",
        "roll",
        "proficiency",
        "familiarity",
        "everyman",
        "native_tongue",
    ),
    Perk: (*_COMMON_FIELDS, "xml_id", "base_points"),
    Talent: (*_COMMON_FIELDS, "type", "characteristic"),
    MartialManeuver: (
        *_COMMON_FIELDS,
        "phase",
        "dc",
        "display",
        "effect_template",
        "weapon_effect",
        "use_weapon",
    ),
    Equipment: (*_POWER_FIELDS, "price", "weight_lbs", "carried"),
    Power: _POWER_FIELDS,
    Disadvantage: (*_COMMON_FIELDS, "type"),
}
"""Entity fields written as attributes, per entity class."""


def attribute_name(field: str) -> str:
    """Map a field name to its attribute name.

    Example:
        >>> attribute_name("base_points"), attribute_name("option_alias")
        ('BASEPOINTS', 'OPTION_ALIAS')
    """
    return FIELD_ATTRIBUTE_EXCEPTIONS.get(field) or field.replace("_", "").upper()


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(round(value, 6))
    return str(value)


def format_value(field: str, value: Any) -> str | None:
    """Render a field value as attribute text; None and empty values are omitted."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        if field in YES_NO_FIELDS:
            return "Yes" if value else "No"
        return "true" if value else "false"
    if isinstance(value, int | float):
        return format_number(value)
    return str(value)


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _set_attributes(element: ET.Element, attributes: Iterable[tuple[str, Any]]) -> None:
    for field, value in attributes:
        text = format_value(field, value)
        if text is not None:
            element.set(attribute_name(field), text)


def _imperial(metric: float | None, recorded: float | None, factor: float, digits: int) -> float | None:
    """Convert a metric value back to imperial, reusing the recorded value when consistent."""
    if metric is None:
        return None
    if recorded is not None and round_half_up(recorded * factor, digits) == metric:
        return recorded
    return metric / factor


def _field_value(entity: CostedEntity, field: str) -> Any:
    value = getattr(entity, field)
    if field == "type" and value == GENERIC_TYPE:
        return None
    if field in _BARRIER_BASE_DIMENSIONS and value is not None:
        return value - _BARRIER_BASE_DIMENSIONS[field]
    if field == "weight_lbs" and isinstance(entity, Equipment):
        return _imperial(entity.weight, entity.weight_lbs, KG_PER_LB, 1)
    return value


def _fields_for(entity: CostedEntity) -> tuple[str, ...]:
    if entity.is_group or (isinstance(entity, Power) and entity.type == "LIST"):
        return _GROUP_FIELDS
    for cls in type(entity).__mro__:
        fields = SERIALIZED_FIELDS.get(cls)
        if fields is not None:
            return fields
    return _COMMON_FIELDS


# =============================================================================
# Modifiers & Adders
# =============================================================================


def _raw_adder_levels(adder: Adder) -> float | None:
    if not adder.levels:
        return None
    return adder.levels * adder.lvl_val if adder.lvl_val > 1 else adder.levels


def build_adder(adder: Adder) -> ET.Element:
    """Build an ADDER element, nesting child adders."""
    element = ET.Element("ADDER")
    _set_attributes(
        element,
        [
            ("id", adder.id),
            ("xml_id", adder.xml_id),
            ("alias", adder.alias),
            ("label", None if adder.alias else adder.name),
            ("base_cost", adder.base_cost),
            ("levels", _raw_adder_levels(adder)),
            ("lvl_cost", adder.lvl_cost or None),
            ("lvl_val", adder.lvl_val if adder.lvl_val != 1 else None),
            ("option_alias", adder.option_alias),
            ("notes", adder.notes),
        ],
    )
    element.set("SELECTED", _yes_no(adder.selected))
    if adder.include_in_base:
        element.set("INCLUDEINBASE", "Yes")
    element.extend(build_adder(child) for child in adder.adders)
    return element


def build_modifier(modifier: Modifier) -> ET.Element:
    """Build a MODIFIER element.

    BASECOST is written without the adder contributions the parser adds
    back in.
    """
    element = ET.Element("MODIFIER")
    adder_part = sum(adder.base_cost for adder in modifier.adders if adder.selected)
    _set_attributes(
        element,
        [
            ("id", modifier.id),
            ("xml_id", modifier.xml_id),
            ("alias", modifier.alias),
            ("label", None if modifier.alias else modifier.name),
            ("levels", modifier.levels or None),
            ("base_cost", modifier.value - adder_part),
            ("option_id", modifier.option_id),
            ("option_alias", modifier.option_alias),
            ("input", modifier.input),
            ("notes", modifier.notes),
        ],
    )
    if modifier.is_limitation or modifier.is_advantage:
        element.set("ISLIMITATION", _yes_no(modifier.is_limitation))
    element.extend(build_adder(adder) for adder in modifier.adders)
    return element


# =============================================================================
# Entities
# =============================================================================


def build_entity(entity: CostedEntity, tag: str) -> ET.Element:
    """Build the element for one entity.

    Args:
        entity: Entity to serialize.
        tag: Element name (``SKILL``, ``LIST``, ``POWER``, ``STR``, ...).

    Returns:
        Element with attributes, modifiers and adders.
    """
    element = ET.Element(tag)
    fields = _fields_for(entity)
    _set_attributes(element, ((field, _field_value(entity, field)) for field in fields))
    if isinstance(entity, MartialManeuver) and fields is not _GROUP_FIELDS and not entity.is_weapon_element:
        element.set("OCV", f"{entity.ocv:+d}")
        element.set("DCV", f"{entity.dcv:+d}")
    element.extend(build_modifier(modifier) for modifier in entity.modifiers)
    element.extend(build_adder(adder) for adder in entity.adders)
    return element


def _skill_tag(skill: Skill) -> str:
    if skill.is_group:
        return "LIST"
    if skill.is_enhancer and skill.enhancer_type:
        return skill.enhancer_type
    return "SKILL"


def _maneuver_tag(maneuver: MartialManeuver) -> str:
    if maneuver.is_group:
        return "LIST"
    return "WEAPON_ELEMENT" if maneuver.is_weapon_element else "MANEUVER"


def _grouped_tag(entry_tag: str) -> TagSelector:
    return lambda entity: "LIST" if entity.is_group else entry_tag


def build_section(tag: str, entities: Iterable[Any], tag_for: TagSelector) -> ET.Element:
    """Build a flat section element; list children keep their PARENTID."""
    section = ET.Element(tag)
    section.extend(build_entity(entity, tag_for(entity)) for entity in entities)
    return section


def build_characteristics(characteristics: Iterable[Characteristic]) -> ET.Element:
    """Build CHARACTERISTICS with one element per characteristic type."""
    return build_section("CHARACTERISTICS", characteristics, lambda char: str(char.type))


def _build_power(power: Power, powers: list[Power], tag: str) -> ET.Element:
    element = build_entity(power, tag)
    if power.type == "COMPOUNDPOWER":
        for child in powers:
            if child.parent_id == power.id:
                child_element = _build_power(child, powers, child.source_element)
                child_element.attrib.pop("PARENTID", None)
                element.append(child_element)
    return element


def build_powers(powers: list[Power]) -> ET.Element:
    """Build POWERS, nesting compound-power children inside their container."""
    compounds = {power.id for power in powers if power.type == "COMPOUNDPOWER"}
    section = ET.Element("POWERS")
    for power in powers:
        if power.parent_id in compounds:
            continue
        tag = "LIST" if power.type == "LIST" or power.is_group else "POWER"
        section.append(_build_power(power, powers, tag))
    return section


def build_equipment(items: Iterable[Equipment]) -> ET.Element:
    """Build EQUIPMENT, nesting each item's sub-powers by their element name."""
    section = ET.Element("EQUIPMENT")
    for item in items:
        if item.is_group:
            section.append(build_entity(item, "LIST"))
            continue
        element = build_entity(item, "POWER")
        for sub_power in item.sub_powers:
            child = build_entity(sub_power, sub_power.source_element)
            child.attrib.pop("PARENTID", None)
            element.append(child)
        section.append(element)
    return section


# =============================================================================
# Character Sections
# =============================================================================


def build_basic_configuration(config: BasicConfiguration) -> ET.Element:
    element = ET.Element("BASIC_CONFIGURATION")
    element.set("BASE_POINTS", str(config.base_points))
    element.set("DISAD_POINTS", str(config.disad_points))
    element.set("EXPERIENCE", str(config.experience))
    if config.export_template:
        element.set("EXPORT_TEMPLATE", config.export_template)
    return element


_INFO_ATTRIBUTES = (
    ("character_name", "CHARACTER_NAME"),
    ("alternate_identities", "ALTERNATE_IDENTITIES"),
    ("player_name", "PLAYER_NAME"),
    ("hair_color", "HAIR_COLOR"),
    ("eye_color", "EYE_COLOR"),
    ("campaign_name", "CAMPAIGN_NAME"),
    ("genre", "GENRE"),
    ("gm", "GM"),
)

_INFO_TEXT_ELEMENTS = (
    ("background", "BACKGROUND"),
    ("personality", "PERSONALITY"),
    ("quote", "QUOTE"),
    ("tactics", "TACTICS"),
    ("campaign_use", "CAMPAIGN_USE"),
    ("appearance", "APPEARANCE"),
    ("notes1", "NOTES1"),
    ("notes2", "NOTES2"),
    ("notes3", "NOTES3"),
    ("notes4", "NOTES4"),
    ("notes5", "NOTES5"),
)


def build_character_info(info: CharacterInfo) -> ET.Element:
    """Build CHARACTER_INFO, converting height back to inches and weight to lbs."""
    element = ET.Element("CHARACTER_INFO")
    for field, name in _INFO_ATTRIBUTES:
        value = getattr(info, field)
        if value:
            element.set(name, value)

    height = _imperial(info.height, info.height_inches, CM_PER_INCH, 0)
    weight = _imperial(info.weight, info.weight_lbs, KG_PER_LB, 0)
    if height is not None:
        element.set("HEIGHT", format_number(float(height)))
    if weight is not None:
        element.set("WEIGHT", format_number(float(weight)))

    for field, name in _INFO_TEXT_ELEMENTS:
        value = getattr(info, field)
        if value:
            ET.SubElement(element, name).text = value
    return element


def build_image(image: CharacterImage) -> ET.Element:
    element = ET.Element("IMAGE")
    if image.file_name:
        element.set("FileName", image.file_name)
    if image.file_path:
        element.set("FilePath", image.file_path)
    element.text = image.data
    return element


_RULES_NUMBERS = (
    ("base_points", "BASEPOINTS"),
    ("disad_points", "DISADPOINTS"),
    ("ap_per_end", "APPEREND"),
    ("str_ap_per_end", "STRAPPEREND"),
    ("attack_ap_max_value", "ATTACKAPMAXVALUE"),
    ("attack_ap_max_response", "ATTACKAPMAXRESPONSE"),
    ("defense_ap_max_value", "DEFENSEAPMAXVALUE"),
    ("defense_ap_max_response", "DEFENSEAPMAXRESPONSE"),
    ("disad_category_max_value", "DISADCATEGORYMAXVALUE"),
    ("disad_category_max_response", "DISADCATEGORYMAXRESPONSE"),
    ("skill_maxima_limit", "SKILLMAXIMALIMIT"),
    ("skill_roll_base", "SKILLROLLBASE"),
    ("skill_roll_denominator", "SKILLROLLDENOMINATOR"),
    ("char_roll_base", "CHARROLLBASE"),
    ("char_roll_denominator", "CHARROLLDENOMINATOR"),
)

_RULES_FLAGS = (
    ("standard_effect_allowed", "STANDARDEFFECTALLOWED"),
    ("multiplier_allowed", "MULTIPLIERALLOWED"),
    ("literacy_free", "LITERACYFREE"),
    ("native_literacy_free", "NATIVELITERACYFREE"),
    ("equipment_allowed", "EQUIPMENTALLOWED"),
    ("use_skill_maxima", "USESKILLMAXIMA"),
)


def build_rules(rules: Rules) -> ET.Element:
    """Build a RULES block; option flags render as Yes/No."""
    element = ET.Element("RULES")
    element.set("name", rules.name)
    for field, name in _RULES_NUMBERS:
        element.set(name, str(getattr(rules, field)))
    for field, name in _RULES_FLAGS:
        element.set(name, _yes_no(getattr(rules, field)))
    for char_type, maximum in rules.characteristic_maxima.items():
        element.set(f"{char_type}_MAX", str(maximum))
    for number, label in sorted(rules.notes_labels.items()):
        element.set(f"NOTES{number}LABEL", label)
    for number, used in sorted(rules.use_notes.items()):
        element.set(f"USENOTES{number}", _yes_no(used))
    return element


def build_character(character: Character) -> ET.Element:
    """Build the CHARACTER root element for a whole character.

    Args:
        character: Character to serialize.

    Returns:
        Root element; sections with no entries are written empty.
    """
    root = ET.Element("CHARACTER", {"version": character.version})
    root.append(build_basic_configuration(character.basic_configuration))
    root.append(build_character_info(character.character_info))
    root.append(build_characteristics(character.characteristics))
    root.append(build_section("SKILLS", character.skills, _skill_tag))
    root.append(build_section("PERKS", character.perks, _grouped_tag("PERK")))
    root.append(build_section("TALENTS", character.talents, _grouped_tag("TALENT")))
    root.append(build_section("MARTIALARTS", character.martial_arts, _maneuver_tag))
    root.append(build_powers(character.powers))
    root.append(build_section("DISADVANTAGES", character.disadvantages, _grouped_tag("DISAD")))
    root.append(build_equipment(character.equipment))
    if character.image is not None:
        root.append(build_image(character.image))
    if character.rules is not None:
        root.append(build_rules(character.rules))
    return root


__all__ = [
    "FIELD_ATTRIBUTE_EXCEPTIONS",
    "YES_NO_FIELDS",
    "SERIALIZED_FIELDS",
    "attribute_name",
    "format_number",
    "format_value",
    "build_adder",
    "build_modifier",
    "build_entity",
    "build_section",
    "build_characteristics",
    "build_powers",
    "build_equipment",
    "build_basic_configuration",
    "build_character_info",
    "build_image",
    "build_rules",
    "build_character",
]
