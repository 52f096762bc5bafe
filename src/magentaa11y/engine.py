"""Query engine over the in-memory content store and search indexes.

The engine is built exactly once. ``initialize()`` may be awaited by any
number of concurrent callers; the first one starts the build task and every
caller awaits that same task, so the content file is read and indexed at most
once per engine. Once ``READY`` the engine holds only immutable data and every
query is a plain synchronous read.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import structlog

from magentaa11y.config import SearchSettings
from magentaa11y.content import PLATFORMS, count_components, load_content
from magentaa11y.errors import (
    A11yError,
    ComponentNotFoundError,
    ErrorCode,
    FormatUnavailableError,
    NotInitializedError,
)
from magentaa11y.index import IndexRecord, SearchIndex, build_index, build_suggestion_index
from magentaa11y.models.content import ContentStructure, Format, Platform
from magentaa11y.models.tools import ComponentDetail, ComponentMetadata, SearchMatch, SearchResult

log = structlog.get_logger()

SNIPPET_LENGTH = 200
SNIPPET_BEFORE = 50
SNIPPET_AFTER = 150


class EngineState(StrEnum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class PlatformIndexes:
    search: SearchIndex
    suggestions: SearchIndex
    by_name: dict[str, IndexRecord]
    categories: tuple[str, ...]


def extract_snippet(text: str, query: str) -> str:
    """Window of ``text`` around the first case-insensitive hit of ``query``.

    Falls back to the start of the field when the query only matched
    approximately.
    """
    query = query.strip()
    index = text.lower().find(query.lower()) if query else -1
    if index == -1:
        return text[:SNIPPET_LENGTH]

    start = max(0, index - SNIPPET_BEFORE)
    end = min(len(text), index + len(query) + SNIPPET_AFTER)
    snippet = text[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet = snippet + "..."
    return snippet


class ContentEngine:
    """Exact lookup, fuzzy search and format extraction for web and native."""

    def __init__(
        self,
        content_path: str | Path,
        settings: SearchSettings | None = None,
        loader: Callable[[str | Path], ContentStructure] = load_content,
    ) -> None:
        self._content_path = content_path
        self._settings = settings or SearchSettings()
        self._loader = loader
        self._state = EngineState.UNINITIALIZED
        self._build: asyncio.Task[None] | None = None
        self._indexes: dict[str, PlatformIndexes] = {}

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is EngineState.READY

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load and index the content. Safe to call repeatedly and concurrently.

        Raises ``LoadError`` (for this and every later call) if the content
        cannot be loaded.
        """
        if self._build is None:
            self._state = EngineState.INITIALIZING
            self._build = asyncio.create_task(self._run_build())
        # A cancelled waiter must not cancel the build other callers share.
        await asyncio.shield(self._build)

    async def _run_build(self) -> None:
        try:
            content = await asyncio.to_thread(self._loader, self._content_path)
            indexes = {platform: self._index_platform(content, platform) for platform in PLATFORMS}
        except Exception:
            self._state = EngineState.FAILED
            raise

        self._indexes = indexes
        self._state = EngineState.READY
        log.info(
            "engine_initialized",
            web=count_components(content, "web"),
            native=count_components(content, "native"),
        )

    def _index_platform(self, content: ContentStructure, platform: Platform) -> PlatformIndexes:
        search = build_index(content, platform, threshold=self._settings.threshold)
        suggestions = build_suggestion_index(
            content, platform, threshold=self._settings.suggestion_threshold
        )
        return PlatformIndexes(
            search=search,
            suggestions=suggestions,
            by_name={record.item.name: record for record in search.records},
            categories=tuple(sorted(category.name for category in content.categories(platform))),
        )

    def _require(self, operation: str, platform: str) -> PlatformIndexes:
        if self._state is not EngineState.READY:
            raise NotInitializedError(operation)
        indexes = self._indexes.get(platform)
        if indexes is None:
            raise A11yError(
                ErrorCode.INVALID_INPUT,
                f"Unknown platform: {platform!r}",
                suggestion="Use 'web' or 'native'.",
            )
        return indexes

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_components(self, platform: Platform, category: str | None = None) -> list[ComponentMetadata]:
        indexes = self._require("list_components", platform)
        components = [
            _metadata(record, platform)
            for record in indexes.search.records
            if category is None or record.category_name == category
        ]
        return sorted(components, key=lambda c: c.name)

    def get_categories(self, platform: Platform) -> list[str]:
        return list(self._require("get_categories", platform).categories)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_component(self, platform: Platform, name: str) -> ComponentDetail:
        record = self._lookup("get_component", platform, name)
        return ComponentDetail(
            **record.item.model_dump(),
            category_name=record.category_name,
            category_label=record.category_label,
        )

    def get_component_content(self, platform: Platform, name: str, format: Format | str) -> str:
        fmt = _coerce_format(format)
        record = self._lookup("get_component_content", platform, name)
        content = record.item.get_format(fmt)
        if content is None:
            raise FormatUnavailableError(
                platform,
                name,
                fmt.value,
                available_formats=[f.value for f in record.item.available_formats()],
            )
        return content

    def get_available_formats(self, platform: Platform, name: str) -> list[Format]:
        """Formats present for ``name``; empty when the component does not exist."""
        indexes = self._require("get_available_formats", platform)
        record = indexes.by_name.get(name)
        if record is None:
            return []
        return record.item.available_formats()

    def _lookup(self, operation: str, platform: Platform, name: str) -> IndexRecord:
        indexes = self._require(operation, platform)
        record = indexes.by_name.get(name)
        if record is None:
            raise ComponentNotFoundError(
                platform, name, suggestions=self.get_similar_components(platform, name)
            )
        return record

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, platform: Platform, query: str, max_results: int | None = None) -> list[SearchResult]:
        indexes = self._require("search", platform)
        limit = self._settings.default_max_results if max_results is None else max_results
        if limit < 1:
            raise A11yError(ErrorCode.INVALID_INPUT, f"max_results must be >= 1, got {limit}")
        limit = min(limit, self._settings.max_results_limit)

        hits = indexes.search.search(query, limit)
        log.debug("search", platform=platform, query=query, hits=len(hits))
        return [
            SearchResult(
                component=hit.record.item.name,
                display_name=hit.record.item.label,
                category=hit.record.category_name,
                category_label=hit.record.category_label,
                matches=[
                    SearchMatch(field=field.key, snippet=extract_snippet(field.text, query))
                    for field in hit.matched
                ],
                relevance=hit.relevance,
            )
            for hit in hits
        ]

    def get_similar_components(self, platform: Platform, name: str, limit: int | None = None) -> list[str]:
        """Best-effort near-miss names for error messages; may be empty."""
        indexes = self._require("get_similar_components", platform)
        limit = self._settings.suggestion_limit if limit is None else limit
        if limit < 1 or not name.strip():
            return []
        return [hit.record.item.name for hit in indexes.suggestions.search(name, limit)]


def _metadata(record: IndexRecord, platform: Platform) -> ComponentMetadata:
    item = record.item
    return ComponentMetadata(
        name=item.name,
        display_name=item.label,
        category=record.category_name,
        platform=platform,
        has_gherkin=item.gherkin is not None,
        has_condensed=item.condensed is not None,
        has_developer_notes=item.developer_notes is not None,
        has_android_notes=item.android_developer_notes is not None,
        has_ios_notes=item.ios_developer_notes is not None,
    )


def _coerce_format(format: Format | str) -> Format:
    try:
        return Format(format)
    except ValueError:
        valid = ", ".join(f.value for f in Format)
        raise A11yError(
            ErrorCode.INVALID_INPUT,
            f"Unknown format: {format!r}",
            suggestion=f"Use one of: {valid}.",
        ) from None
