"""Tests for typed attribute access over tree nodes."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from hero_workshop.engine.attributes import AttributeNode


def make(text: str) -> AttributeNode:
    return AttributeNode(ET.fromstring(text))


class TestGetString:
    """Tests for string reads."""

    def test_attribute_form(self) -> None:
        """Test reading an attribute."""
        assert make('<POWER ALIAS=" Blast "/>').get_string("ALIAS") == "Blast"

    def test_child_element_form(self) -> None:
        """Test reading a child element's text."""
        assert make("<POWER><ALIAS>Blast</ALIAS></POWER>").get_string("ALIAS") == "Blast"

    def test_attribute_wins_over_child(self) -> None:
        """Test the attribute form takes precedence."""
        node = make('<POWER ALIAS="Attr"><ALIAS>Child</ALIAS></POWER>')
        assert node.get_string("ALIAS") == "Attr"

    def test_missing_returns_default(self) -> None:
        """Test a missing field returns the default."""
        assert make("<POWER/>").get_string("ALIAS", "Unknown") == "Unknown"

    def test_blank_is_present(self) -> None:
        """Test a blank value is returned rather than the default."""
        node = make('<POWER ALIAS=""/>')
        assert node.get_string("ALIAS", "Unknown") == ""
        assert node.has("ALIAS") is False


class TestGetNumber:
    """Tests for numeric reads."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('<P LEVELS="6"/>', 6),
            ('<P LEVELS="0.25"/>', 0.25),
            ('<P LEVELS="-3"/>', -3),
            ("<P><LEVELS>12</LEVELS></P>", 12),
        ],
    )
    def test_valid_numbers(self, text: str, expected: float) -> None:
        """Test numbers in either form."""
        assert make(text).get_number("LEVELS") == expected

    @pytest.mark.parametrize(
        "text",
        ['<P LEVELS="abc"/>', '<P LEVELS=""/>', '<P LEVELS="nan"/>', '<P LEVELS="inf"/>', "<P/>"],
    )
    def test_invalid_numbers_use_default(self, text: str) -> None:
        """Test absent, blank and non-finite values fall back to the default."""
        assert make(text).get_number("LEVELS", 7) == 7

    def test_whole_floats_become_ints(self) -> None:
        """Test 6.0 reads as the integer 6."""
        value = make('<P LEVELS="6.0"/>').get_number("LEVELS")
        assert value == 6
        assert isinstance(value, int)

    def test_get_int_truncates(self) -> None:
        """Test fractional input is truncated for integer reads."""
        assert make('<P LEVELS="2.9"/>').get_int("LEVELS") == 2


class TestGetBool:
    """Tests for boolean reads."""

    @pytest.mark.parametrize("value", ["Yes", "YES", "y", "true", "TRUE", "1"])
    def test_truthy(self, value: str) -> None:
        """Test accepted true spellings."""
        assert make(f'<S EVERYMAN="{value}"/>').get_bool("EVERYMAN") is True

    @pytest.mark.parametrize("value", ["No", "false", "0", "maybe"])
    def test_present_non_truthy_is_false(self, value: str) -> None:
        """Test any other present value is false, even with a true default."""
        assert make(f'<S EVERYMAN="{value}"/>').get_bool("EVERYMAN", True) is False

    def test_missing_uses_default(self) -> None:
        """Test a missing flag returns the default."""
        assert make("<S/>").get_bool("AFFECTS_TOTAL", True) is True


class TestNavigation:
    """Tests for child and collection access."""

    def test_children_filtered(self) -> None:
        """Test children by tag."""
        node = make("<SKILLS><SKILL/><LIST/><SKILL/></SKILLS>")
        assert len(node.children("SKILL")) == 2
        assert len(node.children()) == 3

    def test_child_missing(self) -> None:
        """Test a missing child returns None."""
        assert make("<CHARACTER/>").child("POWERS") is None

    def test_collection_direct_and_wrapped(self) -> None:
        """Test collection finds direct and plural-wrapped children."""
        node = make(
            "<POWER>"
            '<MODIFIER XMLID="A"/>'
            '<MODIFIERS><MODIFIER XMLID="B"/><MODIFIER XMLID="C"/></MODIFIERS>'
            "</POWER>"
        )
        assert [m.get_string("XMLID") for m in node.collection("MODIFIER")] == ["A", "B", "C"]

    def test_text_and_tag(self) -> None:
        """Test element name and stripped text."""
        node = make("<IMAGE>  abc== </IMAGE>")
        assert node.tag == "IMAGE"
        assert node.text == "abc=="
