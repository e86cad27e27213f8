"""Definition Registry: read-only power and modifier metadata.

The registry is built once from immutable tables and shared by reference
across every parse and serialize call. Lookups return None on a miss;
callers apply their own documented fallbacks.

Example:
    >>> from hero_workshop.registry import default_registry
    >>> registry = default_registry()
    >>> registry.lookup_power("ENERGYBLAST").lvl_cost
    5.0
    >>> registry.lookup_power("NOT_A_POWER") is None
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hero_workshop.core.exceptions import RegistryError
from hero_workshop.core.logging import get_logger


logger = get_logger(__name__)


_DEFINITION_CONFIG = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Definitions
# =============================================================================


class PowerOption(BaseModel):
    """An option of a power whose cost depends on the selection.

    Attributes:
        xml_id: Option code (the power's OPTION attribute).
        display: Option label.
        base_cost: Base cost for this option, when it differs.
        lvl_cost: Cost per level for this option, when it differs.
    """

    model_config = _DEFINITION_CONFIG

    xml_id: str
    display: str = ""
    base_cost: float | None = None
    lvl_cost: float | None = None


class PowerDefinition(BaseModel):
    """Metadata for one power type.

    Attributes:
        xml_id: Power type code.
        display: Rulebook name.
        base_cost: Points before levels.
        lvl_cost: Points per level.
        lvl_val: Effect units per level.
        uses_end: Whether the power costs END to use.
        does_damage: Whether the power is an attack.
        is_killing: Whether damage is killing damage.
        options: Option-specific cost overrides.
    """

    model_config = _DEFINITION_CONFIG

    xml_id: str
    display: str = ""
    base_cost: float = 0
    lvl_cost: float = 1
    lvl_val: float = 1
    uses_end: bool = True
    does_damage: bool = False
    is_killing: bool = False
    options: tuple[PowerOption, ...] = Field(default_factory=tuple)

    def option(self, option_id: str | None) -> PowerOption | None:
        """Find an option by code.

        Args:
            option_id: Option code, or None.

        Returns:
            The matching option, or None.
        """
        if not option_id:
            return None
        for option in self.options:
            if option.xml_id == option_id:
                return option
        return None

    def level_cost_for(self, option_id: str | None) -> float:
        """Get the cost per level, honouring an option-specific override.

        Args:
            option_id: Selected option code, or None.

        Returns:
            Points per level.
        """
        option = self.option(option_id)
        if option is not None and option.lvl_cost is not None:
            return option.lvl_cost
        return self.lvl_cost


class ModifierDefinition(BaseModel):
    """Metadata for one advantage or limitation type.

    Attributes:
        xml_id: Modifier type code.
        display: Rulebook name.
        base_cost: Value before levels.
        lvl_cost: Value per level.
        has_levels: Whether the value is recomputed from levels.
        is_advantage: Advantage (True) or limitation (False).
    """

    model_config = _DEFINITION_CONFIG

    xml_id: str
    display: str = ""
    base_cost: float = 0
    lvl_cost: float = 0
    has_levels: bool = False
    is_advantage: bool = True

    def leveled_value(self, levels: int) -> float:
        """Compute the value of a leveled modifier.

        Args:
            levels: Purchased levels.

        Returns:
            ``base_cost + levels * lvl_cost``.
        """
        return self.base_cost + levels * self.lvl_cost


# =============================================================================
# Registry
# =============================================================================


class DefinitionRegistry:
    """Immutable lookup of power and modifier definitions by XMLID.

    Attributes:
        powers: Read-only mapping of power definitions.
        modifiers: Read-only mapping of modifier definitions.
    """

    def __init__(
        self,
        powers: Iterable[PowerDefinition] = (),
        modifiers: Iterable[ModifierDefinition] = (),
    ) -> None:
        """Initialize the registry.

        Args:
            powers: Power definitions; XMLIDs must be unique.
            modifiers: Modifier definitions; XMLIDs must be unique.

        Raises:
            RegistryError: If an XMLID appears twice.
        """
        self.powers: Mapping[str, PowerDefinition] = MappingProxyType(_index(powers, "power"))
        self.modifiers: Mapping[str, ModifierDefinition] = MappingProxyType(
            _index(modifiers, "modifier")
        )

    @classmethod
    def from_tables(
        cls,
        powers: Mapping[str, Mapping[str, Any]],
        modifiers: Mapping[str, Mapping[str, Any]],
    ) -> DefinitionRegistry:
        """Build a registry from plain definition tables keyed by XMLID.

        Args:
            powers: Power fields keyed by XMLID.
            modifiers: Modifier fields keyed by XMLID.

        Returns:
            A new registry.

        Raises:
            RegistryError: If a table entry is invalid.
        """
        try:
            power_defs = [
                PowerDefinition(
                    xml_id=xml_id,
                    **{
                        **fields,
                        "options": tuple(
                            PowerOption(**option) for option in fields.get("options", ())
                        ),
                    },
                )
                for xml_id, fields in powers.items()
            ]
            modifier_defs = [
                ModifierDefinition(xml_id=xml_id, **fields) for xml_id, fields in modifiers.items()
            ]
        except (TypeError, ValueError) as exc:
            raise RegistryError(
                f"Invalid definition table: {exc}",
                details={"original_error": str(exc)},
            ) from exc
        return cls(power_defs, modifier_defs)

    def lookup_power(self, xml_id: str | None) -> PowerDefinition | None:
        """Look up a power definition.

        Args:
            xml_id: Power type code.

        Returns:
            The definition, or None when unknown.
        """
        if not xml_id:
            return None
        return self.powers.get(xml_id)

    def lookup_modifier(self, xml_id: str | None) -> ModifierDefinition | None:
        """Look up a modifier definition.

        Args:
            xml_id: Modifier type code.

        Returns:
            The definition, or None when unknown.
        """
        if not xml_id:
            return None
        return self.modifiers.get(xml_id)

    def __repr__(self) -> str:
        return f"DefinitionRegistry(powers={len(self.powers)}, modifiers={len(self.modifiers)})"


def _index(definitions: Iterable[Any], kind: str) -> dict[str, Any]:
    indexed: dict[str, Any] = {}
    for definition in definitions:
        if definition.xml_id in indexed:
            raise RegistryError(f"Duplicate {kind} definition", xml_id=definition.xml_id)
        indexed[definition.xml_id] = definition
    return indexed


@lru_cache(maxsize=1)
def default_registry() -> DefinitionRegistry:
    """Get the shared registry of HERO 6E definitions.

    Returns:
        The process-wide DefinitionRegistry.
    """
    from hero_workshop.registry.modifiers import MODIFIER_DEFINITIONS
    from hero_workshop.registry.powers import POWER_DEFINITIONS

    registry = DefinitionRegistry.from_tables(POWER_DEFINITIONS, MODIFIER_DEFINITIONS)
    logger.debug(
        "Definition registry built",
        powers=len(registry.powers),
        modifiers=len(registry.modifiers),
    )
    return registry


__all__ = [
    "PowerOption",
    "PowerDefinition",
    "ModifierDefinition",
    "DefinitionRegistry",
    "default_registry",
]
