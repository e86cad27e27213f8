"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        HeroWorkshopError: Base exception for all engine errors.
        MalformedDocumentError: Unparsable character document.
        RegistryError: Invalid definition registry.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        get_logger: Get a configured logger instance.
        document_context: Tag log lines with a document name.
"""

from __future__ import annotations

from hero_workshop.core.config import (
    CostSettings,
    SerializerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from hero_workshop.core.exceptions import (
    ConfigurationError,
    DocumentError,
    HeroWorkshopError,
    MalformedDocumentError,
    RegistryError,
)
from hero_workshop.core.logging import (
    configure_logging,
    document_context,
    get_logger,
)


__all__ = [
    # Exceptions
    "HeroWorkshopError",
    "DocumentError",
    "MalformedDocumentError",
    "RegistryError",
    "ConfigurationError",
    # Configuration
    "CostSettings",
    "SerializerSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "document_context",
]
