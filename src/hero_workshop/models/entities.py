"""Domain model for HERO System 6E character records.

The Character aggregate owns one flat list per category. Nesting (lists,
skill enhancers, compound powers) is expressed through ``parent_id``
back-references rather than owned children, so every entity can be
found, repriced or removed by id.

Costs follow one shape across categories:

* ``base_cost``: cost before modifiers (a power's true base may be fractional).
* ``active_cost``: cost after advantages (powers and equipment).
* ``real_cost``: the figure charged against the character's points.
* ``end_cost``: END per use, when the power uses endurance.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from hero_workshop.core.constants import (
    CHARACTERISTIC_MAXIMA,
    CHARACTERISTIC_ROLL_BASE,
    CHARACTERISTIC_ROLL_DENOMINATOR,
    DEFAULT_CHARACTER_NAME,
    DEFAULT_VERSION,
    GENERIC_TYPE,
    RULES_DEFAULT_BASE_POINTS,
    RULES_DEFAULT_DISAD_POINTS,
)
from hero_workshop.models.enums import CharacteristicType, PerkType


def new_id() -> str:
    """Generate an id for an entity that arrived without one."""
    return uuid4().hex


_ENTITY_CONFIG = ConfigDict(
    validate_assignment=True,
    extra="ignore",
    use_enum_values=True,
)


# =============================================================================
# Cost Components
# =============================================================================


class Adder(BaseModel):
    """A fixed or leveled cost component.

    Adders may nest (weapon-element categories containing weapons). Only
    selected adders count toward cost.

    Attributes:
        xml_id: Type code of the adder.
        base_cost: Flat cost.
        levels: Effective levels (raw LEVELS divided by ``lvl_val``).
        lvl_cost: Cost per effective level.
        lvl_val: Raw units per effective level.
        adders: Nested adders, kept only in hierarchy-preserving mode.
        selected: Whether the adder is bought.
        include_in_base: Whether the adder is folded into the base cost.
    """

    model_config = _ENTITY_CONFIG

    id: str = Field(default_factory=new_id, description="Adder id")
    xml_id: str = Field(default="", description="Adder type code")
    name: str = Field(default="", description="Display name")
    alias: str | None = Field(default=None, description="File alias")
    base_cost: float = Field(default=0, description="Flat cost")
    levels: int = Field(default=0, description="Effective levels")
    lvl_cost: float = Field(default=0, description="Cost per level")
    lvl_val: float = Field(default=1, gt=0, description="Raw units per level")
    adders: list[Adder] = Field(default_factory=list, description="Nested adders")
    selected: bool = Field(default=True, description="Whether the adder is bought")
    include_in_base: bool = Field(default=False, description="Folded into base cost")
    option_alias: str | None = Field(default=None, description="Selected option label")
    notes: str | None = Field(default=None, description="Free-text notes")

    @property
    def own_cost(self) -> float:
        """Cost of this adder alone, ignoring nested adders."""
        return self.base_cost + self.levels * self.lvl_cost


class Modifier(BaseModel):
    """An advantage or limitation applied to a cost-bearing entity.

    ``value`` carries the sign (advantages positive, limitations negative)
    unless the file supplied an explicit classification.

    Attributes:
        xml_id: Type code of the modifier.
        value: Modifier value including nested adder contributions.
        is_advantage: Modifier raises active cost.
        is_limitation: Modifier lowers real cost.
        levels: Purchased levels for leveled modifiers.
        input: Free-text sub-selection (e.g. the defense for AVAD).
        option_id: Enumerated sub-selection (e.g. AOE shape).
    """

    model_config = _ENTITY_CONFIG

    id: str = Field(default_factory=new_id, description="Modifier id")
    xml_id: str = Field(default="", description="Modifier type code")
    name: str = Field(default="", description="Display name")
    alias: str | None = Field(default=None, description="File alias")
    value: float = Field(default=0, description="Signed modifier value")
    is_advantage: bool = Field(default=False, description="Raises active cost")
    is_limitation: bool = Field(default=False, description="Lowers real cost")
    levels: int = Field(default=0, description="Purchased levels")
    adders: list[Adder] = Field(default_factory=list, description="Nested adders")
    input: str | None = Field(default=None, description="Free-text sub-selection")
    option_id: str | None = Field(default=None, description="Enumerated sub-selection")
    option_alias: str | None = Field(default=None, description="Sub-selection label")
    notes: str | None = Field(default=None, description="Free-text notes")

    @model_validator(mode="after")
    def check_classification(self) -> Modifier:
        """Reject modifiers flagged as both advantage and limitation."""
        if self.is_advantage and self.is_limitation:
            raise ValueError("a modifier cannot be both an advantage and a limitation")
        return self


# =============================================================================
# Cost-Bearing Entities
# =============================================================================


class CostedEntity(BaseModel):
    """Shape shared by every priced entry on a character sheet.

    Attributes:
        id: Unique within the entity's category list.
        name: Display name derived from the file fields.
        label: The raw NAME attribute (a user-supplied title).
        position: Display ordering; not a cost input.
        levels: Signed levels with a category-specific meaning.
        raw_base_cost: BASECOST as recorded in the file.
        base_cost: Pre-modifier cost.
        real_cost: Cost charged against the character's points.
        active_cost: Post-advantage cost (powers and equipment).
        end_cost: END per use, when applicable.
        parent_id: Owning group, list, enhancer or compound power.
    """

    model_config = _ENTITY_CONFIG

    id: str = Field(default_factory=new_id, description="Entity id")
    name: str = Field(default="", description="Display name")
    alias: str | None = Field(default=None, description="File alias")
    label: str | None = Field(default=None, description="Raw NAME attribute")
    input: str | None = Field(default=None, description="Free-text input")
    notes: str | None = Field(default=None, description="Free-text notes")
    position: int = Field(default=0, description="Display ordering")
    levels: int = Field(default=0, description="Signed purchased levels")
    raw_base_cost: float = Field(default=0, description="BASECOST as recorded")
    base_cost: float = Field(default=0, description="Pre-modifier cost")
    real_cost: int = Field(default=0, description="Cost charged against points")
    active_cost: int | None = Field(default=None, description="Post-advantage cost")
    end_cost: int | None = Field(default=None, description="END per use")
    modifiers: list[Modifier] = Field(default_factory=list, description="Modifiers")
    adders: list[Adder] = Field(default_factory=list, description="Adders")
    parent_id: str | None = Field(default=None, description="Owning container id")
    is_group: bool = Field(default=False, description="Display group (LIST)")
    is_container: bool = Field(default=False, description="Costs roll up from children")
    is_weapon_element: bool = Field(default=False, description="Martial weapon element")
    is_enhancer: bool = Field(default=False, description="Skill Enhancer")

    @property
    def is_list_kind(self) -> bool:
        """Whether this entity passes modifiers or discounts to its children."""
        return self.is_group or self.is_container or self.is_enhancer


class Characteristic(CostedEntity):
    """A purchased characteristic (STR, DEX, SPD, ...).

    Negative levels are penalties: they lower the total but never refund
    points.
    """

    type: CharacteristicType = Field(description="Characteristic type")
    base_value: int = Field(default=0, description="Value before levels")
    total_value: int = Field(default=0, description="Value after levels")
    affects_primary: bool = Field(default=True, description="Counts toward primary value")
    affects_total: bool = Field(default=True, description="Counts toward total value")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def roll(self) -> int:
        """Characteristic roll (9 + value/5, rounded down)."""
        return CHARACTERISTIC_ROLL_BASE + self.total_value // CHARACTERISTIC_ROLL_DENOMINATOR


class Skill(CostedEntity):
    """A skill, skill group (LIST) or Skill Enhancer."""

    xml_id: str | None = Field(default=None, description="Skill type code")
    option: str | None = Field(default=None, description="Breadth or option code")
    option_alias: str | None = Field(default=None, description="Option label")
    characteristic: str | None = Field(default=None, description="Governing characteristic")
    roll: int | None = Field(default=None, description="Skill roll")
    proficiency: bool = Field(default=False, description="Proficiency only")
    familiarity: bool = Field(default=False, description="Familiarity only")
    everyman: bool = Field(default=False, description="Everyman skill (free)")
    native_tongue: bool = Field(default=False, description="Native language (free)")
    enhancer_type: str | None = Field(default=None, description="Skill Enhancer type")


class Perk(CostedEntity):
    """A perk or perk group."""

    type: PerkType = Field(default=PerkType.GENERIC, description="Perk category")
    xml_id: str | None = Field(default=None, description="Perk type code")
    base_points: float = Field(default=0, description="Points built into a vehicle or base")


class Talent(CostedEntity):
    """A talent or talent group."""

    type: str = Field(default=GENERIC_TYPE, description="Talent type code")
    characteristic: str | None = Field(default=None, description="Governing characteristic")


class MartialManeuver(CostedEntity):
    """A martial maneuver, weapon element or martial arts style (LIST)."""

    ocv: int = Field(default=0, description="OCV modifier")
    dcv: int = Field(default=0, description="DCV modifier")
    phase: str = Field(default="1", description="Phase cost (e.g. '1/2')")
    dc: int = Field(default=0, description="Damage classes added")
    display: str | None = Field(default=None, description="Standard maneuver name")
    effect: str | None = Field(default=None, description="Rendered effect line")
    effect_template: str | None = Field(default=None, description="EFFECT with DC markers")
    weapon_effect: str | None = Field(default=None, description="Effect when using a weapon")
    use_weapon: bool = Field(default=False, description="Maneuver uses a weapon")


class Power(CostedEntity):
    """A power, power list or compound power.

    Barrier dimensions are stored as actual sizes; the file records levels
    above the 1m x 1m x 0.5m base.
    """

    type: str = Field(default=GENERIC_TYPE, description="Power type code (XMLID)")
    level_cost: float = Field(default=1, description="Points per level")
    option: str | None = Field(default=None, description="Option code")
    option_alias: str | None = Field(default=None, description="Option label")
    effect_dice: str | None = Field(default=None, description="Effect dice text")
    does_damage: bool = Field(default=False, description="Power does damage")
    does_knockback: bool = Field(default=False, description="Power does knockback")
    killing: bool = Field(default=False, description="Killing attack")
    standard_effect: bool = Field(default=False, description="Uses standard effect")
    affects_primary: bool = Field(default=True, description="Counts toward primary value")
    affects_total: bool = Field(default=True, description="Counts toward total value")
    source_element: str = Field(default="POWER", description="Element name in the file")
    end_cost_override: int | None = Field(default=None, description="END recorded in the file")
    pd_levels: int | None = Field(default=None, description="Barrier PD")
    ed_levels: int | None = Field(default=None, description="Barrier ED")
    md_levels: int | None = Field(default=None, description="Barrier Mental Defense")
    powd_levels: int | None = Field(default=None, description="Barrier Power Defense")
    body_levels: int | None = Field(default=None, description="Barrier BODY")
    length_levels: float | None = Field(default=None, description="Barrier length (m)")
    height_levels: float | None = Field(default=None, description="Barrier height (m)")
    width_levels: float | None = Field(default=None, description="Barrier thickness (m)")


class Equipment(Power):
    """A piece of equipment, priced as a power with owned sub-powers."""

    price: float | None = Field(default=None, description="Purchase price")
    weight: float | None = Field(default=None, description="Weight in kg")
    weight_lbs: float | None = Field(default=None, description="Weight in lbs as recorded")
    carried: bool = Field(default=True, description="Currently carried")
    sub_powers: list[Power] = Field(default_factory=list, description="Owned sub-powers")


class Disadvantage(CostedEntity):
    """A complication; ``points`` are granted rather than spent."""

    type: str = Field(default=GENERIC_TYPE, description="Complication type code")
    points: int = Field(default=0, description="Points granted")
    category: str | None = Field(default=None, description="Complication category")


# =============================================================================
# Character Sections
# =============================================================================


class BasicConfiguration(BaseModel):
    """Point budget of the character."""

    model_config = _ENTITY_CONFIG

    base_points: int = Field(default=175, description="Base character points")
    disad_points: int = Field(default=100, description="Maximum complication points")
    experience: int = Field(default=0, description="Experience points earned")
    export_template: str | None = Field(default=None, description="Export template path")


class CharacterInfo(BaseModel):
    """Biographical fields; height in cm and weight in kg."""

    model_config = _ENTITY_CONFIG

    character_name: str = Field(default=DEFAULT_CHARACTER_NAME, description="Character name")
    alternate_identities: str | None = None
    player_name: str | None = None
    height: int | None = Field(default=None, description="Height in cm")
    weight: int | None = Field(default=None, description="Weight in kg")
    height_inches: float | None = Field(default=None, description="Height as recorded")
    weight_lbs: float | None = Field(default=None, description="Weight as recorded")
    hair_color: str | None = None
    eye_color: str | None = None
    campaign_name: str | None = None
    genre: str | None = None
    gm: str | None = None
    background: str | None = None
    personality: str | None = None
    quote: str | None = None
    tactics: str | None = None
    campaign_use: str | None = None
    appearance: str | None = None
    notes1: str | None = None
    notes2: str | None = None
    notes3: str | None = None
    notes4: str | None = None
    notes5: str | None = None


class CharacterImage(BaseModel):
    """Portrait embedded in the character file as base64 text."""

    model_config = _ENTITY_CONFIG

    data: str = Field(default="", description="Base64 image data")
    file_name: str | None = None
    file_path: str | None = None


class Rules(BaseModel):
    """Campaign rules: point caps, maxima and option switches."""

    model_config = _ENTITY_CONFIG

    name: str = "Default"
    base_points: int = RULES_DEFAULT_BASE_POINTS
    disad_points: int = RULES_DEFAULT_DISAD_POINTS
    ap_per_end: int = 10
    str_ap_per_end: int = 10
    attack_ap_max_value: int = 70
    attack_ap_max_response: int = 0
    defense_ap_max_value: int = 90
    defense_ap_max_response: int = 0
    disad_category_max_value: int = 75
    disad_category_max_response: int = 0
    characteristic_maxima: dict[str, int] = Field(
        default_factory=lambda: dict(CHARACTERISTIC_MAXIMA),
        description="Campaign maximum per characteristic",
    )
    standard_effect_allowed: bool = True
    multiplier_allowed: bool = False
    literacy_free: bool = False
    native_literacy_free: bool = True
    equipment_allowed: bool = True
    use_skill_maxima: bool = False
    skill_maxima_limit: int = 13
    skill_roll_base: int = 9
    skill_roll_denominator: int = 5
    char_roll_base: int = 9
    char_roll_denominator: int = 5
    notes_labels: dict[int, str] = Field(default_factory=dict, description="NOTESn labels")
    use_notes: dict[int, bool] = Field(default_factory=dict, description="USENOTESn flags")


# =============================================================================
# Character Aggregate
# =============================================================================


CATEGORY_FIELDS = (
    "characteristics",
    "skills",
    "perks",
    "talents",
    "martial_arts",
    "powers",
    "disadvantages",
    "equipment",
)
"""Character fields holding cost-bearing entity lists."""


class Character(BaseModel):
    """Root aggregate of a parsed character record."""

    model_config = _ENTITY_CONFIG

    version: str = Field(default=DEFAULT_VERSION, description="Document version")
    basic_configuration: BasicConfiguration = Field(default_factory=BasicConfiguration)
    character_info: CharacterInfo = Field(default_factory=CharacterInfo)
    characteristics: list[Characteristic] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    perks: list[Perk] = Field(default_factory=list)
    talents: list[Talent] = Field(default_factory=list)
    martial_arts: list[MartialManeuver] = Field(default_factory=list)
    powers: list[Power] = Field(default_factory=list)
    disadvantages: list[Disadvantage] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=list)
    image: CharacterImage | None = None
    rules: Rules | None = None

    def category(self, name: str) -> list[Any]:
        """Return the entity list for a category field name.

        Args:
            name: One of CATEGORY_FIELDS.

        Returns:
            The live list (mutations affect the character).

        Raises:
            KeyError: If the name is not a category field.
        """
        if name not in CATEGORY_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def find(self, entity_id: str) -> CostedEntity | None:
        """Find an entity by id across every category.

        Args:
            entity_id: Id to look up.

        Returns:
            The first matching entity, or None.
        """
        for name in CATEGORY_FIELDS:
            for entity in getattr(self, name):
                if entity.id == entity_id:
                    return entity
        return None


__all__ = [
    "new_id",
    "Adder",
    "Modifier",
    "CostedEntity",
    "Characteristic",
    "Skill",
    "Perk",
    "Talent",
    "MartialManeuver",
    "Power",
    "Equipment",
    "Disadvantage",
    "BasicConfiguration",
    "CharacterInfo",
    "CharacterImage",
    "Rules",
    "CATEGORY_FIELDS",
    "Character",
]
