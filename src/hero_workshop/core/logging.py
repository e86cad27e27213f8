"""Structured logging for the HERO Workshop rules engine.

Engine modules log through structlog with keyword context (XMLIDs, entity
ids, counts). Each logger carries the engine module it belongs to, and a
document load can tag every line it emits with the document's name.

Level and renderer come from the engine settings (``HERO_WORKSHOP_LOG_LEVEL``
and ``HERO_WORKSHOP_JSON_LOGS``) unless given explicitly.

Example:
    >>> configure_logging()
    >>> logger = get_logger(__name__)
    >>> with document_context("hero.hdc"):
    ...     logger.info("Character loaded", powers=12, skills=30)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

from hero_workshop.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


PACKAGE = "hero_workshop"


def add_engine_name(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every event with the engine name."""
    event_dict.setdefault("engine", PACKAGE)
    return event_dict


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    settings: Settings | None = None,
) -> None:
    """Configure engine logging.

    Output goes to stderr so that serialized documents written to stdout
    stay clean.

    Args:
        level: Minimum level; ``settings.log_level`` when None.
        json_format: Emit JSON lines; ``settings.json_logs`` when None.
        settings: Engine settings; the cached settings when None.
    """
    settings = settings or get_settings()
    level = (level or settings.log_level).upper()
    json_format = settings.json_logs if json_format is None else json_format

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_engine_name,
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger bound to an engine module.

    Args:
        name: Module name (typically ``__name__``); the package prefix is
            dropped, so ``hero_workshop.engine.costs`` logs as
            ``engine.costs``.

    Returns:
        A structlog logger.
    """
    if not name:
        return structlog.get_logger()
    return structlog.get_logger(module=name.removeprefix(f"{PACKAGE}."))


@contextmanager
def document_context(source: str | None) -> Iterator[None]:
    """Tag log lines emitted inside the block with a document name.

    Args:
        source: Document name; nothing is bound when None.
    """
    if source is None:
        yield
        return
    with structlog.contextvars.bound_contextvars(document=source):
        yield


__all__ = [
    "add_engine_name",
    "configure_logging",
    "get_logger",
    "document_context",
]
