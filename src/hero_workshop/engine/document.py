"""Document entry points: whole character files in, whole files out.

``parse_hdc`` turns the text of a ``.hdc`` file into a fully priced
Character; ``serialize_hdc`` writes one back. Everything between the raw
tree and the domain model lives in the parser, aggregator and serializer
modules; this module only decodes the document, locates its sections and
logs what was loaded.

Example:
    >>> character = parse_hdc(Path("hero.hdc").read_bytes(), source="hero.hdc")
    >>> character.character_info.character_name
    'Nighthawk'
    >>> text = serialize_hdc(character)
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from hero_workshop.core.config import Settings, get_settings
from hero_workshop.core.constants import DEFAULT_VERSION
from hero_workshop.core.exceptions import MalformedDocumentError
from hero_workshop.core.logging import document_context, get_logger
from hero_workshop.engine.aggregator import aggregate
from hero_workshop.engine.attributes import AttributeNode
from hero_workshop.engine.costs import CostContext
from hero_workshop.engine.parsers import (
    parse_basic_configuration,
    parse_character_info,
    parse_characteristics,
    parse_disadvantages,
    parse_equipment,
    parse_image,
    parse_martial_arts,
    parse_perks,
    parse_powers,
    parse_rules,
    parse_skills,
    parse_talents,
)
from hero_workshop.engine.serializer import build_character
from hero_workshop.models.entities import CATEGORY_FIELDS, Character
from hero_workshop.registry.definitions import DefinitionRegistry


logger = get_logger(__name__)


ROOT_TAGS = frozenset({"CHARACTER", "HERO"})
"""Root elements that hold the character sections directly."""

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)
_BOM = "\ufeff"


# =============================================================================
# Decoding
# =============================================================================


def _prepare_text(content: str | bytes) -> str | bytes:
    # A str input has already been decoded, so its declared encoding no
    # longer applies and would be rejected by the tree parser.
    if isinstance(content, bytes):
        return content
    return _XML_DECLARATION.sub("", content.lstrip(_BOM), count=1)


def _parse_tree(content: str | bytes, source: str | None) -> ET.Element:
    try:
        return ET.fromstring(_prepare_text(content))
    except ET.ParseError as exc:
        line, column = exc.position
        raise MalformedDocumentError(
            f"Character document is not well-formed: {exc}",
            source=source,
            line=line,
            column=column,
        ) from exc
    except ValueError as exc:
        raise MalformedDocumentError(
            f"Character document could not be decoded: {exc}",
            source=source,
        ) from exc


def _section_root(element: ET.Element) -> AttributeNode:
    """Locate the element that holds the character sections.

    A bare RULES document is wrapped so that the RULES block is found both
    as the campaign rules and as the stand-in basic configuration.
    """
    if element.tag in ROOT_TAGS:
        return AttributeNode(element)
    wrapper = ET.Element("HERO")
    wrapper.append(element)
    return AttributeNode(wrapper)


# =============================================================================
# Entry Points
# =============================================================================


def parse_hdc(
    content: str | bytes,
    *,
    source: str | None = None,
    registry: DefinitionRegistry | None = None,
    settings: Settings | None = None,
) -> Character:
    """Parse a character document into a priced Character.

    Missing sections yield empty lists or defaults; missing attributes
    resolve to per-field defaults. Container costs are rolled up before
    the character is returned.

    Args:
        content: Document text, or raw bytes whose encoding the document
            declares.
        source: Document name used in errors and logs.
        registry: Definition registry; the shared registry when None.
        settings: Engine settings; the cached settings when None.

    Returns:
        The parsed character.

    Raises:
        MalformedDocumentError: If the document cannot be parsed at all.
    """
    element = _parse_tree(content, source)
    root = _section_root(element)
    context = CostContext.from_settings(settings or get_settings(), registry)

    with document_context(source):
        basic = root.child("BASIC_CONFIGURATION") or root.child("RULES")
        character = Character(
            version=element.get("version") or DEFAULT_VERSION,
            basic_configuration=parse_basic_configuration(basic, context),
            character_info=parse_character_info(root.child("CHARACTER_INFO")),
            characteristics=parse_characteristics(root.child("CHARACTERISTICS"), context),
            skills=parse_skills(root.child("SKILLS"), context),
            perks=parse_perks(root.child("PERKS"), context),
            talents=parse_talents(root.child("TALENTS"), context),
            martial_arts=parse_martial_arts(root.child("MARTIALARTS"), context),
            powers=parse_powers(root.child("POWERS"), context),
            disadvantages=parse_disadvantages(root.child("DISADVANTAGES"), context),
            equipment=parse_equipment(root.child("EQUIPMENT"), context),
            image=parse_image(root.child("IMAGE")),
            rules=parse_rules(root.child("RULES")),
        )

        for name in CATEGORY_FIELDS:
            aggregate(character.category(name), context)

        logger.info(
            "Character loaded",
            name=character.character_info.character_name,
            **{name: len(character.category(name)) for name in CATEGORY_FIELDS},
        )
    return character


def serialize_hdc(character: Character, *, settings: Settings | None = None) -> str:
    """Serialize a character to document text.

    Args:
        character: Character to write.
        settings: Engine settings; the cached settings when None.

    Returns:
        The document text, parseable by ``parse_hdc``.
    """
    settings = settings or get_settings()
    root = build_character(character)
    if settings.xml.indent:
        ET.indent(root, space=settings.xml.indent)
    body = ET.tostring(root, encoding="unicode")
    if settings.xml.xml_declaration:
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
    return f"{body}\n"


__all__ = [
    "ROOT_TAGS",
    "parse_hdc",
    "serialize_hdc",
]
