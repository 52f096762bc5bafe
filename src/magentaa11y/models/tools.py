from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from magentaa11y.models.content import ContentItem, Format, Platform


class _Output(BaseModel):
    """Tool output; dumped with ``by_alias=True`` for the camelCase wire shape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _validate_component_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("component must not be empty")
    if len(v) > 200:
        raise ValueError("component must not exceed 200 characters")
    return v


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------


class ComponentMetadata(_Output):
    name: str
    display_name: str
    category: str
    platform: Platform
    has_gherkin: bool = False
    has_condensed: bool = False
    has_developer_notes: bool = False
    has_android_notes: bool = False
    has_ios_notes: bool = Field(default=False, alias="hasIOSNotes")


class ComponentDetail(ContentItem):
    """A component record together with the category it belongs to."""

    category_name: str = Field(alias="categoryName")
    category_label: str = Field(alias="categoryLabel")


class SearchMatch(_Output):
    field: str
    snippet: str


class SearchResult(_Output):
    component: str
    display_name: str
    category: str
    category_label: str
    matches: list[SearchMatch]
    relevance: float  # 0.0–1.0, 1.0 = exact


# ---------------------------------------------------------------------------
# Tool inputs
# ---------------------------------------------------------------------------


class ListComponentsInput(BaseModel):
    category: str | None = None

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class GetComponentInput(BaseModel):
    component: str

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _validate_component_name(v)


class SearchCriteriaInput(BaseModel):
    query: str
    max_results: int | None = None

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        if len(v) > 500:
            raise ValueError("query must not exceed 500 characters")
        return v

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_results must be >= 1")
        return v


class ComponentContentInput(BaseModel):
    platform: Platform
    component: str

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _validate_component_name(v)


class NativeNotesInput(BaseModel):
    platform: Literal["ios", "android"]
    component: str

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _validate_component_name(v)


# ---------------------------------------------------------------------------
# Tool outputs
# ---------------------------------------------------------------------------


class ListComponentsOutput(_Output):
    components: list[ComponentMetadata]
    categories: list[str]


class SearchCriteriaOutput(_Output):
    query: str
    results: list[SearchResult]


class ComponentContentOutput(_Output):
    component: str
    platform: str
    format: Format
    content: str


class ListFormatsOutput(_Output):
    component: str
    display_name: str
    platform: Platform
    available_formats: list[Format]
    format_descriptions: dict[str, str]
