"""Per-platform search indexes built from the content store.

Each platform's categories are flattened into ``IndexRecord``s in corpus
order. Records are scored against a query field by field; fields whose
normalised distance exceeds the threshold do not match at all, and a record
with no matching field is excluded from results.

Relevance combines matched fields as ``1 - Π(1 - s_f · w_f / w_max)`` where
``s_f = 1 - distance_f``. Only an exact match on a top-weighted field yields
1.0, and a better score on any field never lowers a record's relevance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from magentaa11y.fuzzy import IndexedField, QueryMatcher

if TYPE_CHECKING:
    from magentaa11y.models.content import ContentItem, ContentStructure, Platform

log = structlog.get_logger()

# Identity fields outrank prose so a name hit beats a passing mention.
SEARCH_WEIGHTS: dict[str, float] = {
    "label": 0.3,
    "name": 0.3,
    "generalNotes": 0.1,
    "gherkin": 0.1,
    "condensed": 0.1,
    "developerNotes": 0.1,
}

SUGGESTION_WEIGHTS: dict[str, float] = {
    "name": 1.0,
    "label": 1.0,
}

DEFAULT_THRESHOLD = 0.3
DEFAULT_SUGGESTION_THRESHOLD = 0.5

_FIELD_ATTRS: dict[str, str] = {
    "label": "label",
    "name": "name",
    "generalNotes": "general_notes",
    "gherkin": "gherkin",
    "condensed": "condensed",
    "developerNotes": "developer_notes",
}


@dataclass(frozen=True)
class IndexRecord:
    """A component denormalised with its category, ready for scoring."""

    item: ContentItem
    category_name: str
    category_label: str
    position: int
    fields: tuple[IndexedField, ...]


@dataclass(frozen=True)
class IndexHit:
    record: IndexRecord
    relevance: float
    matched: tuple[IndexedField, ...]


class SearchIndex:
    """Immutable weighted fuzzy index over one platform's components."""

    def __init__(
        self,
        records: list[IndexRecord],
        weights: dict[str, float],
        threshold: float,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be between 0 and 1, got {threshold}")
        self._records = tuple(records)
        self._weights = dict(weights)
        self._max_weight = max(weights.values())
        self.threshold = threshold

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[IndexRecord, ...]:
        return self._records

    def search(self, query: str, limit: int) -> list[IndexHit]:
        """Return at most ``limit`` hits, best first, ties in corpus order."""
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        matcher = QueryMatcher(query)
        if not matcher.terms:
            return []

        hits: list[IndexHit] = []
        for record in self._records:
            hit = self._score(matcher, record)
            if hit is not None:
                hits.append(hit)

        hits.sort(key=lambda h: (-h.relevance, h.record.position))
        return hits[:limit]

    def _score(self, matcher: QueryMatcher, record: IndexRecord) -> IndexHit | None:
        miss = 1.0
        matched: list[IndexedField] = []
        for field in record.fields:
            weight = self._weights.get(field.key)
            if weight is None:
                continue
            distance = matcher.distance(field)
            if distance > self.threshold:
                continue
            matched.append(field)
            miss *= 1.0 - (1.0 - distance) * weight / self._max_weight

        if not matched:
            return None
        relevance = round(min(1.0, max(0.0, 1.0 - miss)), 4)
        if miss > 0.0:
            # Rounding must not promote a near miss to an exact match.
            relevance = min(relevance, 0.9999)
        return IndexHit(record=record, relevance=relevance, matched=tuple(matched))


def build_records(
    structure: ContentStructure,
    platform: Platform,
    keys: tuple[str, ...] = tuple(SEARCH_WEIGHTS),
) -> list[IndexRecord]:
    records: list[IndexRecord] = []
    for category in structure.categories(platform):
        for item in category.children:
            fields = tuple(
                IndexedField.from_text(key, text)
                for key in keys
                if (text := getattr(item, _FIELD_ATTRS[key])) is not None
            )
            records.append(
                IndexRecord(
                    item=item,
                    category_name=category.name,
                    category_label=category.label,
                    position=len(records),
                    fields=fields,
                )
            )
    return records


def build_index(
    structure: ContentStructure,
    platform: Platform,
    threshold: float = DEFAULT_THRESHOLD,
) -> SearchIndex:
    """Build the weighted full-text index for ``platform``."""
    index = SearchIndex(build_records(structure, platform), SEARCH_WEIGHTS, threshold)
    log.info("index_built", platform=platform, kind="search", records=len(index))
    return index


def build_suggestion_index(
    structure: ContentStructure,
    platform: Platform,
    threshold: float = DEFAULT_SUGGESTION_THRESHOLD,
) -> SearchIndex:
    """Build the looser name/label index used for "did you mean" suggestions."""
    records = build_records(structure, platform, keys=tuple(SUGGESTION_WEIGHTS))
    index = SearchIndex(records, SUGGESTION_WEIGHTS, threshold)
    log.debug("index_built", platform=platform, kind="suggestion", records=len(index))
    return index
