"""Content store: load content.json into typed models.

The document is produced by the external markdown-to-JSON build. Any problem
reading or validating it raises ``LoadError``; there is no degraded mode.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from magentaa11y.errors import LoadError
from magentaa11y.models.content import ContentStructure, Platform

log = structlog.get_logger()

PLATFORMS: tuple[Platform, ...] = ("web", "native")


def load_content(path: str | Path) -> ContentStructure:
    """Read and validate the content document at ``path``."""
    path = Path(path).expanduser()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        log.error("content_load_failed", path=str(path), reason="missing")
        raise LoadError(f"Content file not found: {path}", path=str(path)) from None
    except OSError as exc:
        log.error("content_load_failed", path=str(path), reason="unreadable", exc_info=True)
        raise LoadError(f"Content file could not be read: {exc}", path=str(path)) from exc
    except json.JSONDecodeError as exc:
        log.error("content_load_failed", path=str(path), reason="malformed")
        raise LoadError(f"Content file is not valid JSON: {exc}", path=str(path)) from exc

    structure = parse_content(raw, source=str(path))
    log.info(
        "content_loaded",
        path=str(path),
        web=count_components(structure, "web"),
        native=count_components(structure, "native"),
    )
    return structure


def parse_content(raw: Any, source: str | None = None) -> ContentStructure:
    """Validate an already-decoded document."""
    if not isinstance(raw, dict):
        raise LoadError("Content document must be a JSON object", path=source)
    try:
        structure = ContentStructure.model_validate(raw)
    except ValidationError as exc:
        log.error("content_load_failed", path=source, reason="invalid", errors=exc.error_count())
        raise LoadError(f"Content document failed validation: {exc}", path=source) from exc

    for platform in PLATFORMS:
        _check_unique_names(structure, platform, source)
    return structure


def count_components(structure: ContentStructure, platform: Platform) -> int:
    return sum(len(category.children) for category in structure.categories(platform))


def _check_unique_names(structure: ContentStructure, platform: Platform, source: str | None) -> None:
    # name → category it was first seen in
    seen: dict[str, str] = {}
    for category in structure.categories(platform):
        for item in category.children:
            first = seen.get(item.name)
            if first is not None:
                log.error(
                    "duplicate_component",
                    platform=platform,
                    component=item.name,
                    categories=[first, category.name],
                )
                raise LoadError(
                    f'Duplicate {platform} component "{item.name}" '
                    f'in categories "{first}" and "{category.name}"',
                    path=source,
                )
            seen[item.name] = category.name
