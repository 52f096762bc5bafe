"""Shared fixtures: a small content corpus written to a temp content.json."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from magentaa11y.config import SearchSettings, Settings
from magentaa11y.engine import ContentEngine
from magentaa11y.state import AppState

if TYPE_CHECKING:
    from pathlib import Path


def make_content() -> dict[str, Any]:
    return {
        "web": [
            {
                "name": "controls",
                "label": "Controls",
                "children": [
                    {
                        "name": "button",
                        "label": "Button",
                        "generalNotes": "Buttons trigger actions on the current page.",
                        "gherkin": "Given a button is on the page\nWhen I press Enter\nThen the action runs",
                        "developerNotes": "Use the semantic button element rather than a div.",
                    },
                    {
                        "name": "checkbox",
                        "label": "Checkbox",
                        "gherkin": "Given a checkbox\nWhen I press Space\nThen it toggles state",
                        "condensed": "Space toggles the checkbox.",
                        "developerNotes": "Use input type checkbox with a visible label.",
                    },
                    {
                        "name": "radio-button",
                        "label": "Radio Button",
                        "condensed": "Arrow keys move between radio options.",
                        "gherkin": "   ",
                    },
                ],
            },
            {
                "name": "forms",
                "label": "Forms",
                "children": [
                    {
                        "name": "text-input",
                        "label": "Text Input",
                        "generalNotes": "A text input is often submitted with a button.",
                        "gherkin": "Given a text input\nWhen I type\nThen characters appear",
                    },
                ],
            },
        ],
        "native": [
            {
                "name": "controls",
                "label": "Controls",
                "children": [
                    {
                        "name": "button",
                        "label": "Button",
                        "gherkin": "Given a native button\nWhen I double tap\nThen the action runs",
                        "androidDeveloperNotes": "Set contentDescription on icon-only buttons.",
                        "iosDeveloperNotes": "Apply the .isButton accessibility trait.",
                    },
                    {
                        "name": "switch",
                        "label": "Switch",
                        "iosDeveloperNotes": "UISwitch announces its on and off value.",
                    },
                ],
            },
        ],
        "how-to-test": [
            {
                "name": "screen-readers",
                "label": "Screen Readers",
                "children": [{"name": "voiceover", "label": "VoiceOver"}],
            },
        ],
    }


def write_content(path: Path, content: Any) -> Path:
    path.write_text(json.dumps(content), encoding="utf-8")
    return path


@pytest.fixture()
def content_doc() -> dict[str, Any]:
    return make_content()


@pytest.fixture()
def content_file(tmp_path: Path, content_doc: dict[str, Any]) -> Path:
    return write_content(tmp_path / "content.json", content_doc)


@pytest.fixture()
async def engine(content_file: Path) -> ContentEngine:
    """Ready engine over the sample corpus."""
    e = ContentEngine(content_file, SearchSettings())
    await e.initialize()
    return e


@pytest.fixture()
def app_state(engine: ContentEngine, content_file: Path) -> AppState:
    return AppState(settings=Settings(content={"path": str(content_file)}), engine=engine)
