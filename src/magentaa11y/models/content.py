from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Platform = Literal["web", "native"]


class Format(StrEnum):
    """Extractable text fields of a component, in presentation order."""

    GHERKIN = "gherkin"
    CONDENSED = "condensed"
    DEVELOPER_NOTES = "developerNotes"
    ANDROID_DEVELOPER_NOTES = "androidDeveloperNotes"
    IOS_DEVELOPER_NOTES = "iosDeveloperNotes"


FORMAT_DESCRIPTIONS: dict[Format, str] = {
    Format.GHERKIN: "Given/When/Then style acceptance criteria for comprehensive testing",
    Format.CONDENSED: "Shortened, focused testing instructions",
    Format.DEVELOPER_NOTES: "Implementation guidance with code examples and WCAG mappings",
    Format.ANDROID_DEVELOPER_NOTES: "Android-specific implementation details",
    Format.IOS_DEVELOPER_NOTES: "iOS-specific implementation details",
}


class ContentItem(BaseModel):
    """One component record from content.json.

    Optional text fields are either a non-blank string or ``None``; empty and
    whitespace-only strings are normalised to ``None`` on load.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    label: str
    type: str | None = None
    general_notes: str | None = Field(default=None, alias="generalNotes")
    gherkin: str | None = None
    condensed: str | None = None
    criteria: str | None = None
    videos: str | None = None
    developer_notes: str | None = Field(default=None, alias="developerNotes")
    android_developer_notes: str | None = Field(default=None, alias="androidDeveloperNotes")
    ios_developer_notes: str | None = Field(default=None, alias="iosDeveloperNotes")

    @field_validator("name", "label")
    @classmethod
    def validate_identity(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator(
        "type",
        "general_notes",
        "gherkin",
        "condensed",
        "criteria",
        "videos",
        "developer_notes",
        "android_developer_notes",
        "ios_developer_notes",
    )
    @classmethod
    def blank_is_absent(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v

    def get_format(self, fmt: Format) -> str | None:
        """Return the text for ``fmt``, or ``None`` when the field is absent."""
        return getattr(self, _FORMAT_ATTRS[fmt])

    def available_formats(self) -> list[Format]:
        return [fmt for fmt in Format if self.get_format(fmt) is not None]


_FORMAT_ATTRS: dict[Format, str] = {
    Format.GHERKIN: "gherkin",
    Format.CONDENSED: "condensed",
    Format.DEVELOPER_NOTES: "developer_notes",
    Format.ANDROID_DEVELOPER_NOTES: "android_developer_notes",
    Format.IOS_DEVELOPER_NOTES: "ios_developer_notes",
}


class ContentCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    children: list[ContentItem] = []


class ContentStructure(BaseModel):
    """Top-level content.json document: platform → ordered categories."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    web: list[ContentCategory]
    native: list[ContentCategory]
    # Auxiliary platform: loaded for completeness, never indexed or searched.
    how_to_test: list[ContentCategory] = Field(default=[], alias="how-to-test")

    def categories(self, platform: Platform) -> list[ContentCategory]:
        return self.web if platform == "web" else self.native
