"""Process-wide application state shared by every tool handler."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from magentaa11y.config import Settings
from magentaa11y.engine import ContentEngine
from magentaa11y.logs import configure_logging

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    engine: ContentEngine


async def build_app_state(settings: Settings | None = None) -> AppState:
    """Configure logging, then load and index the content.

    ``LoadError`` propagates to the caller: without content there is nothing
    to serve, so the process owner is expected to exit.
    """
    settings = settings or Settings()
    configure_logging(settings.logging)
    log.info("content_loading", path=settings.content.path)

    engine = ContentEngine(settings.content.path, settings.search)
    await engine.initialize()
    return AppState(settings=settings, engine=engine)
