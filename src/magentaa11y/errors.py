"""Error taxonomy shared by the content engine and the tool handlers.

Every failure that can cross the engine boundary is an ``A11yError`` carrying
a machine-readable ``ErrorCode``. Lookup failures attach the attempted key and
any recovery hints (suggestions, available formats) in ``details`` so a
transport can hand the caller something actionable instead of a bare message.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    CONTENT_LOAD_FAILED = "CONTENT_LOAD_FAILED"
    NOT_INITIALIZED = "NOT_INITIALIZED"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    FORMAT_UNAVAILABLE = "FORMAT_UNAVAILABLE"
    INVALID_INPUT = "INVALID_INPUT"


class A11yError(Exception):
    """Base error with a code, a hint for the caller and a recoverable flag."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable
        self.details: dict[str, Any] = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Structured error envelope returned to tool callers."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
                **self.details,
            }
        }


class LoadError(A11yError):
    """The content document could not be loaded. Fatal for the process."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(
            ErrorCode.CONTENT_LOAD_FAILED,
            message,
            suggestion="Check that content.json exists and was produced by the content build.",
            recoverable=False,
            details={"path": path} if path is not None else None,
        )


class NotInitializedError(A11yError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            ErrorCode.NOT_INITIALIZED,
            f"Content engine is not initialized; cannot run {operation!r}",
            suggestion="Await ContentEngine.initialize() before querying.",
            recoverable=True,
        )


class ComponentNotFoundError(A11yError):
    def __init__(
        self,
        platform: str,
        component: str,
        suggestions: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"platform": platform, "component": component}
        if suggestions is not None:
            details["suggestions"] = suggestions
        super().__init__(
            ErrorCode.COMPONENT_NOT_FOUND,
            f'Component "{component}" not found',
            suggestion="Check the suggestions or list the components for this platform.",
            recoverable=True,
            details=details,
        )
        self.platform = platform
        self.component = component


class FormatUnavailableError(A11yError):
    def __init__(
        self,
        platform: str,
        component: str,
        format: str,
        available_formats: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "platform": platform,
            "component": component,
            "format": format,
        }
        if available_formats is not None:
            details["availableFormats"] = available_formats
        super().__init__(
            ErrorCode.FORMAT_UNAVAILABLE,
            f'{format} content not available for component "{component}"',
            suggestion="Request one of the formats this component provides.",
            recoverable=True,
            details=details,
        )
        self.platform = platform
        self.component = component
        self.format = format
