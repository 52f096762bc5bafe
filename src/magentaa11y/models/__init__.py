from __future__ import annotations

from magentaa11y.models.content import (
    FORMAT_DESCRIPTIONS,
    ContentCategory,
    ContentItem,
    ContentStructure,
    Format,
    Platform,
)
from magentaa11y.models.tools import (
    ComponentContentInput,
    ComponentContentOutput,
    ComponentDetail,
    ComponentMetadata,
    GetComponentInput,
    ListComponentsInput,
    ListComponentsOutput,
    ListFormatsOutput,
    NativeNotesInput,
    SearchCriteriaInput,
    SearchCriteriaOutput,
    SearchMatch,
    SearchResult,
)

__all__ = [
    # content
    "ContentItem",
    "ContentCategory",
    "ContentStructure",
    "Format",
    "FORMAT_DESCRIPTIONS",
    "Platform",
    # results
    "ComponentMetadata",
    "ComponentDetail",
    "SearchMatch",
    "SearchResult",
    # tools
    "ListComponentsInput",
    "ListComponentsOutput",
    "GetComponentInput",
    "SearchCriteriaInput",
    "SearchCriteriaOutput",
    "ComponentContentInput",
    "ComponentContentOutput",
    "NativeNotesInput",
    "ListFormatsOutput",
]
