"""End-to-end: settings → app state → tool calls against a real content file."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import pytest

from magentaa11y.config import Settings
from magentaa11y.engine import ContentEngine, EngineState
from magentaa11y.errors import ComponentNotFoundError, FormatUnavailableError, LoadError
from magentaa11y.state import build_app_state
from magentaa11y.tools import call_tool

if TYPE_CHECKING:
    from pathlib import Path

MINIMAL_CONTENT = {
    "web": [
        {
            "name": "controls",
            "label": "Controls",
            "children": [{"name": "button", "label": "Button", "gherkin": "Given a button..."}],
        }
    ],
    "native": [],
    "how-to-test": [],
}


@pytest.fixture()
def minimal_settings(tmp_path: Path) -> Settings:
    path = tmp_path / "content.json"
    path.write_text(json.dumps(MINIMAL_CONTENT), encoding="utf-8")
    return Settings(content={"path": str(path)}, logging={"format": "text"})


class TestMinimalCorpus:
    async def test_list_get_and_extract(self, minimal_settings: Settings) -> None:
        state = await build_app_state(minimal_settings)
        engine = state.engine
        assert engine.state is EngineState.READY

        components = [c.model_dump(by_alias=True) for c in engine.list_components("web")]
        assert components == [
            {
                "name": "button",
                "displayName": "Button",
                "category": "controls",
                "platform": "web",
                "hasGherkin": True,
                "hasCondensed": False,
                "hasDeveloperNotes": False,
                "hasAndroidNotes": False,
                "hasIOSNotes": False,
            }
        ]
        assert engine.get_component_content("web", "button", "gherkin") == "Given a button..."
        with pytest.raises(FormatUnavailableError):
            engine.get_component_content("web", "button", "condensed")
        with pytest.raises(ComponentNotFoundError) as exc_info:
            engine.get_component("web", "missing-button")
        assert exc_info.value.details["suggestions"] == ["button"]

    async def test_tool_calls(self, minimal_settings: Settings) -> None:
        state = await build_app_state(minimal_settings)
        output = call_tool(state, "get_component_gherkin", {"platform": "web", "component": "button"})
        assert output.model_dump(by_alias=True)["content"] == "Given a button..."

        listing = call_tool(state, "list_native_components").model_dump(by_alias=True)
        assert listing == {"components": [], "categories": []}

        search = call_tool(state, "search_web_criteria", {"query": "button"}).model_dump(by_alias=True)
        assert search["results"][0]["relevance"] == 1.0
        assert search["results"][0]["matches"][0] == {"field": "label", "snippet": "Button"}


class TestStartupFailure:
    async def test_missing_content_propagates(self, tmp_path: Path) -> None:
        settings = Settings(content={"path": str(tmp_path / "absent.json")}, logging={"format": "text"})
        with pytest.raises(LoadError) as exc_info:
            await build_app_state(settings)
        assert exc_info.value.to_dict()["error"]["code"] == "CONTENT_LOAD_FAILED"


class TestSharedEngine:
    async def test_concurrent_readers_after_ready(self, content_file: Path) -> None:
        engine = ContentEngine(content_file)
        await asyncio.gather(engine.initialize(), engine.initialize())

        def read() -> list[str]:
            return [r.component for r in engine.search("web", "toggle")]

        results = await asyncio.gather(*(asyncio.to_thread(read) for _ in range(8)))
        assert all(r == results[0] for r in results)
        assert results[0][0] == "checkbox"
