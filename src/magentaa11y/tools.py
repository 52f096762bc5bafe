"""Tool handlers: one function per tool name, each mapping to one engine call.

Handlers validate raw tool arguments with the input models, call the engine
and return an output model. Failures surface as ``A11yError``; lookup failures
are enriched with suggestions and the component's available formats so the
caller can recover without another round trip. Serialising results and errors
is left to the transport (``model_dump(by_alias=True)`` / ``to_dict()``).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from magentaa11y.errors import A11yError, ComponentNotFoundError, ErrorCode, FormatUnavailableError
from magentaa11y.models.content import FORMAT_DESCRIPTIONS, Format, Platform
from magentaa11y.models.tools import (
    ComponentContentInput,
    ComponentContentOutput,
    ComponentDetail,
    GetComponentInput,
    ListComponentsInput,
    ListComponentsOutput,
    ListFormatsOutput,
    NativeNotesInput,
    SearchCriteriaInput,
    SearchCriteriaOutput,
)

if TYPE_CHECKING:
    from magentaa11y.state import AppState

log = structlog.get_logger()

_M = TypeVar("_M", bound=BaseModel)

_NATIVE_NOTES_FORMATS: dict[str, Format] = {
    "ios": Format.IOS_DEVELOPER_NOTES,
    "android": Format.ANDROID_DEVELOPER_NOTES,
}


def _parse(model: type[_M], arguments: dict[str, Any] | None) -> _M:
    try:
        return model.model_validate(arguments or {})
    except ValidationError as exc:
        messages = "; ".join(error["msg"] for error in exc.errors())
        raise A11yError(ErrorCode.INVALID_INPUT, messages, recoverable=False) from exc


# ---------------------------------------------------------------------------
# Platform-scoped tools
# ---------------------------------------------------------------------------


def _list_components(state: AppState, platform: Platform, arguments: dict[str, Any] | None) -> ListComponentsOutput:
    args = _parse(ListComponentsInput, arguments)
    engine = state.engine
    return ListComponentsOutput(
        components=engine.list_components(platform, args.category),
        categories=engine.get_categories(platform),
    )


def _get_component(state: AppState, platform: Platform, arguments: dict[str, Any] | None) -> ComponentDetail:
    args = _parse(GetComponentInput, arguments)
    return state.engine.get_component(platform, args.component)


def _search_criteria(state: AppState, platform: Platform, arguments: dict[str, Any] | None) -> SearchCriteriaOutput:
    args = _parse(SearchCriteriaInput, arguments)
    results = state.engine.search(platform, args.query, args.max_results)
    return SearchCriteriaOutput(query=args.query, results=results)


def list_web_components(state: AppState, arguments: dict[str, Any] | None = None) -> ListComponentsOutput:
    return _list_components(state, "web", arguments)


def list_native_components(state: AppState, arguments: dict[str, Any] | None = None) -> ListComponentsOutput:
    return _list_components(state, "native", arguments)


def get_web_component(state: AppState, arguments: dict[str, Any] | None = None) -> ComponentDetail:
    return _get_component(state, "web", arguments)


def get_native_component(state: AppState, arguments: dict[str, Any] | None = None) -> ComponentDetail:
    return _get_component(state, "native", arguments)


def search_web_criteria(state: AppState, arguments: dict[str, Any] | None = None) -> SearchCriteriaOutput:
    return _search_criteria(state, "web", arguments)


def search_native_criteria(state: AppState, arguments: dict[str, Any] | None = None) -> SearchCriteriaOutput:
    return _search_criteria(state, "native", arguments)


# ---------------------------------------------------------------------------
# Format tools
# ---------------------------------------------------------------------------


def _component_content(
    state: AppState,
    platform: Platform,
    component: str,
    fmt: Format,
    reported_platform: str,
) -> ComponentContentOutput:
    engine = state.engine
    try:
        content = engine.get_component_content(platform, component, fmt)
    except (ComponentNotFoundError, FormatUnavailableError) as exc:
        exc.details.setdefault("suggestions", engine.get_similar_components(platform, component))
        exc.details.setdefault(
            "availableFormats", [f.value for f in engine.get_available_formats(platform, component)]
        )
        log.info("component_content_unavailable", code=exc.code, platform=platform, component=component)
        raise
    return ComponentContentOutput(
        component=component,
        platform=reported_platform,
        format=fmt,
        content=content,
    )


def _format_tool(fmt: Format) -> Callable[[AppState, dict[str, Any] | None], ComponentContentOutput]:
    def handler(state: AppState, arguments: dict[str, Any] | None = None) -> ComponentContentOutput:
        args = _parse(ComponentContentInput, arguments)
        return _component_content(state, args.platform, args.component, fmt, args.platform)

    return handler


get_component_gherkin = _format_tool(Format.GHERKIN)
get_component_condensed = _format_tool(Format.CONDENSED)
get_component_developer_notes = _format_tool(Format.DEVELOPER_NOTES)


def get_component_native_notes(state: AppState, arguments: dict[str, Any] | None = None) -> ComponentContentOutput:
    """iOS or Android implementation notes for a native component."""
    args = _parse(NativeNotesInput, arguments)
    fmt = _NATIVE_NOTES_FORMATS[args.platform]
    return _component_content(state, "native", args.component, fmt, args.platform)


def list_component_formats(state: AppState, arguments: dict[str, Any] | None = None) -> ListFormatsOutput:
    args = _parse(ComponentContentInput, arguments)
    component = state.engine.get_component(args.platform, args.component)
    return ListFormatsOutput(
        component=args.component,
        display_name=component.label,
        platform=args.platform,
        available_formats=state.engine.get_available_formats(args.platform, args.component),
        format_descriptions={fmt.value: text for fmt, text in FORMAT_DESCRIPTIONS.items()},
    )


ToolHandler = Callable[["AppState", dict[str, Any] | None], BaseModel]

TOOL_HANDLERS: dict[str, ToolHandler] = {
    "list_web_components": list_web_components,
    "get_web_component": get_web_component,
    "search_web_criteria": search_web_criteria,
    "list_native_components": list_native_components,
    "get_native_component": get_native_component,
    "search_native_criteria": search_native_criteria,
    "get_component_gherkin": get_component_gherkin,
    "get_component_condensed": get_component_condensed,
    "get_component_developer_notes": get_component_developer_notes,
    "get_component_native_notes": get_component_native_notes,
    "list_component_formats": list_component_formats,
}


def call_tool(state: AppState, name: str, arguments: dict[str, Any] | None = None) -> BaseModel:
    """Dispatch a tool call by name."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise A11yError(ErrorCode.INVALID_INPUT, f"Unknown tool: {name}")
    return handler(state, arguments)
