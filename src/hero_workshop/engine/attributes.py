"""Typed attribute access over character-file tree nodes.

Character files encode the same field either as an attribute
(``<POWER LEVELS="6"/>``) or as a child element
(``<POWER><LEVELS>6</LEVELS></POWER>``). AttributeNode reads both forms
and never raises on missing or malformed values: each read carries its
own default.
"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET


_TRUE_LITERALS = frozenset({"true", "1"})


class AttributeNode:
    """Read-only typed view of one tree element.

    Example:
        >>> node = AttributeNode(ET.fromstring('<SKILL LEVELS="2" EVERYMAN="Yes"/>'))
        >>> node.get_int("LEVELS")
        2
        >>> node.get_bool("EVERYMAN")
        True
        >>> node.get_number("BASECOST", 3)
        3
    """

    __slots__ = ("element",)

    def __init__(self, element: ET.Element) -> None:
        self.element = element

    def __repr__(self) -> str:
        return f"AttributeNode(<{self.element.tag}>)"

    @property
    def tag(self) -> str:
        """Element name."""
        return self.element.tag

    @property
    def text(self) -> str:
        """Stripped text content of the element."""
        return (self.element.text or "").strip()

    def _raw(self, name: str) -> str | None:
        value = self.element.get(name)
        if value is not None:
            return value.strip()
        child = self.element.find(name)
        if child is not None:
            return (child.text or "").strip()
        return None

    def has(self, name: str) -> bool:
        """Check whether a non-empty value is present in either form."""
        return bool(self._raw(name))

    def get_string(self, name: str, default: str = "") -> str:
        """Read a string value.

        Args:
            name: Attribute or child element name.
            default: Returned when the field is absent.

        Returns:
            The stripped value, which may be empty if present but blank.
        """
        value = self._raw(name)
        return default if value is None else value

    def get_number(self, name: str, default: float = 0) -> float:
        """Read a numeric value.

        Args:
            name: Attribute or child element name.
            default: Returned when the field is absent, blank or non-numeric.

        Returns:
            The parsed number.
        """
        value = self._raw(name)
        if not value:
            return default
        try:
            number = float(value)
        except ValueError:
            return default
        if not math.isfinite(number):
            return default
        return int(number) if number.is_integer() else number

    def get_int(self, name: str, default: int = 0) -> int:
        """Read an integer value, truncating fractional input.

        Args:
            name: Attribute or child element name.
            default: Returned when the field is absent, blank or non-numeric.

        Returns:
            The parsed integer.
        """
        return int(self.get_number(name, default))

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Read a boolean value.

        Values beginning with ``y``, the literal ``true`` and ``1`` are true
        (case-insensitive); any other present value is false.

        Args:
            name: Attribute or child element name.
            default: Returned when the field is absent or blank.

        Returns:
            The parsed boolean.
        """
        value = self._raw(name)
        if not value:
            return default
        lowered = value.lower()
        return lowered.startswith("y") or lowered in _TRUE_LITERALS

    def children(self, tag: str | None = None) -> list[AttributeNode]:
        """Get direct child nodes, optionally filtered by element name."""
        elements = self.element if tag is None else self.element.findall(tag)
        return [AttributeNode(element) for element in elements]

    def child(self, tag: str) -> AttributeNode | None:
        """Get the first direct child with the given element name."""
        element = self.element.find(tag)
        return None if element is None else AttributeNode(element)

    def collection(self, tag: str) -> list[AttributeNode]:
        """Get ``tag`` children, direct or wrapped in a plural container.

        ``<POWER><MODIFIER/></POWER>`` and
        ``<POWER><MODIFIERS><MODIFIER/></MODIFIERS></POWER>`` both yield the
        MODIFIER node.
        """
        nodes = self.children(tag)
        for wrapper in self.children(f"{tag}S"):
            nodes.extend(wrapper.children(tag))
        return nodes


__all__ = ["AttributeNode"]
