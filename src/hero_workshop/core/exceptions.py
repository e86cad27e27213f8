"""Custom exception hierarchy for the HERO Workshop rules engine.

All exceptions inherit from HeroWorkshopError so callers can handle every
engine failure at one boundary while keeping domain-specific context in
the ``details`` mapping.

Missing or malformed attributes inside a character file are never errors;
they resolve to documented defaults. Only a document that cannot be parsed
at all raises.

Example:
    >>> from hero_workshop.core.exceptions import MalformedDocumentError
    >>> raise MalformedDocumentError("Unclosed tag", source="hero.hdc", line=12)
"""

from __future__ import annotations

from typing import Any


class HeroWorkshopError(Exception):
    """Base exception for all HERO Workshop errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Document Exceptions
# =============================================================================


class DocumentError(HeroWorkshopError):
    """Base exception for character document errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize document error with source context.

        Args:
            message: Human-readable error description.
            source: Name of the document that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


class MalformedDocumentError(DocumentError):
    """Raised when a character document cannot be parsed at all.

    This is the only fatal parse failure: no partial character is
    returned.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        line: int | None = None,
        column: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize malformed document error with position context.

        Args:
            message: Human-readable error description.
            source: Name of the document that caused the error.
            line: Line number reported by the tree parser.
            column: Column number reported by the tree parser.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if line is not None:
            combined_details["line"] = line
        if column is not None:
            combined_details["column"] = column
        super().__init__(message, source=source, details=combined_details)


# =============================================================================
# Registry Exceptions
# =============================================================================


class RegistryError(HeroWorkshopError):
    """Raised when a definition registry cannot be built.

    Lookups never raise; a miss returns None. This covers construction
    problems such as duplicate XMLIDs.
    """

    def __init__(
        self,
        message: str,
        *,
        xml_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize registry error with definition context.

        Args:
            message: Human-readable error description.
            xml_id: The definition identifier involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if xml_id:
            combined_details["xml_id"] = xml_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(HeroWorkshopError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "HeroWorkshopError",
    "DocumentError",
    "MalformedDocumentError",
    "RegistryError",
    "ConfigurationError",
]
