"""Configuration management for the HERO Workshop rules engine.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. The engine itself is pure; configuration only
selects conventions such as the cost-rounding rule and serializer layout.

Example:
    >>> from hero_workshop.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.cost.rounding
    'hero'

Environment Variables:
    HERO_WORKSHOP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HERO_WORKSHOP_JSON_LOGS: Emit JSON log lines instead of console output
    HERO_WORKSHOP_COST_ROUNDING: Cost rounding rule ('hero' or 'half_up')
    HERO_WORKSHOP_XML_INDENT: Indentation used when serializing documents
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hero_workshop.core.exceptions import ConfigurationError


class CostSettings(BaseSettings):
    """Configuration for point-cost calculation.

    Attributes:
        rounding: Tie-break rule for fractional costs. ``hero`` rounds exact
            halves down (in the character's favour); ``half_up`` rounds them up.
        default_base_points: Base points when a document carries none.
        default_disad_points: Complication points when a document carries none.
    """

    model_config = SettingsConfigDict(
        env_prefix="HERO_WORKSHOP_COST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rounding: Literal["hero", "half_up"] = Field(
        default="hero",
        description="Tie-break rule for fractional costs",
    )
    default_base_points: int = Field(
        default=175,
        ge=0,
        description="Base points used when a document omits them",
    )
    default_disad_points: int = Field(
        default=100,
        ge=0,
        description="Complication points used when a document omits them",
    )


class SerializerSettings(BaseSettings):
    """Configuration for document serialization.

    Attributes:
        indent: Whitespace used for each nesting level.
        xml_declaration: Whether to prefix output with an XML declaration.
    """

    model_config = SettingsConfigDict(
        env_prefix="HERO_WORKSHOP_XML_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    indent: str = Field(
        default="  ",
        description="Indentation per nesting level",
    )
    xml_declaration: bool = Field(
        default=True,
        description="Prefix output with an XML declaration",
    )

    @field_validator("indent", mode="after")
    @classmethod
    def validate_indent(cls, value: str) -> str:
        """Ensure the indent is whitespace only.

        Args:
            value: Configured indent string.

        Returns:
            The validated indent.

        Raises:
            ConfigurationError: If the indent contains non-whitespace characters.
        """
        if value.strip():
            raise ConfigurationError(
                "indent must contain only whitespace",
                config_key="indent",
            )
        return value


class Settings(BaseSettings):
    """Main engine settings aggregating all configuration domains.

    Attributes:
        log_level: Engine logging level.
        json_logs: Emit JSON log lines.
        cost: Cost calculation settings.
        xml: Serializer settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="HERO_WORKSHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    cost: CostSettings = Field(default_factory=CostSettings)
    xml: SerializerSettings = Field(default_factory=SerializerSettings)

    @model_validator(mode="after")
    def validate_point_defaults(self) -> "Settings":
        """Ensure complication points never exceed base points.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the defaults are inconsistent.
        """
        if self.cost.default_disad_points > self.cost.default_base_points:
            raise ConfigurationError(
                f"default_disad_points ({self.cost.default_disad_points}) must not "
                f"exceed default_base_points ({self.cost.default_base_points})",
                config_key="default_disad_points",
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The engine Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "CostSettings",
    "SerializerSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
