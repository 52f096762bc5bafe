"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (MAGENTAA11Y__CONTENT__PATH=/srv/content.json)
  3. magentaa11y.yaml       (searched in cwd, then the platformdirs user config dir)
  4. Hardcoded defaults

The content path, search limits and log format all have defaults, so the
YAML file is optional.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("magentaa11y")
_DEFAULT_CONTENT_PATH = str(Path(_DEFAULT_DATA_DIR) / "content.json")
_USER_CONFIG_FILE = Path(platformdirs.user_config_dir("magentaa11y")) / "magentaa11y.yaml"


def _find_config_file() -> str | None:
    """First magentaa11y.yaml in the working directory or the user config dir."""
    for path in (Path("magentaa11y.yaml"), _USER_CONFIG_FILE):
        if path.exists():
            return str(path)
    return None


class ContentSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str = _DEFAULT_CONTENT_PATH


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_max_results: int = 10
    max_results_limit: int = 50
    threshold: float = 0.3
    suggestion_threshold: float = 0.5
    suggestion_limit: int = 5

    @model_validator(mode="after")
    def check_ranges(self) -> SearchSettings:
        for name in ("threshold", "suggestion_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.default_max_results < 1 or self.suggestion_limit < 1:
            raise ValueError("result limits must be >= 1")
        if self.default_max_results > self.max_results_limit:
            raise ValueError("default_max_results must not exceed max_results_limit")
        return self


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MAGENTAA11Y__SEARCH__THRESHOLD=0.4
        env_prefix="MAGENTAA11Y__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    content: ContentSettings = ContentSettings()
    search: SearchSettings = SearchSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No .env or secrets-dir support: a deployment sets MAGENTAA11Y__* or ships magentaa11y.yaml.
        return (init_settings, env_settings, YamlConfigSettingsSource(settings_cls))
