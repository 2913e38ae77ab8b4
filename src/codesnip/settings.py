"""
Centralized package settings.

Values come from ``CODESNIP_``-prefixed environment variables and an
optional grouped TOML file; environment variables win over the file.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore[no-redef]

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_suffix(suffix: str) -> str:
    """Lowercase a file suffix and give it a leading dot."""
    key = suffix.strip().lower()
    if not key.startswith("."):
        key = f".{key}"
    return key


class CodesnipSettings(BaseSettings):
    """Settings loaded from env or the TOML config file."""

    model_config = SettingsConfigDict(
        env_prefix="CODESNIP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "INFO"
    queries_dir: Optional[Path] = None
    extension_overrides: Dict[str, str] = {}

    @field_validator("extension_overrides")
    @classmethod
    def _normalize_suffixes(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {normalize_suffix(suffix): language for suffix, language in value.items()}


_CONFIG_ENV_VAR = "CODESNIP_CONFIG_PATH"
_DEFAULT_CONFIG_FILE = Path("codesnip_settings.toml")


def _load_toml_config() -> Dict[str, Any]:
    """Load configuration from the primary TOML file on disk."""
    candidates: List[Path] = []
    config_override = os.getenv(_CONFIG_ENV_VAR)
    if config_override:
        candidates.append(Path(config_override))
    candidates.append(_DEFAULT_CONFIG_FILE)

    for candidate in candidates:
        if candidate.is_file():
            with candidate.open("rb") as handle:
                return tomllib.load(handle)
    return {}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _flatten_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Translate grouped TOML sections into settings keyword arguments."""
    data: Dict[str, Any] = {}

    logging_section = raw.get("logging", {})
    if "level" in logging_section:
        data["log_level"] = logging_section["level"]

    languages = raw.get("languages", {})
    if "queries_dir" in languages:
        data["queries_dir"] = _blank_to_none(languages["queries_dir"])
    extensions = languages.get("extensions", {})
    if extensions:
        data["extension_overrides"] = dict(extensions)

    return data


def _drop_env_overridden(data: Dict[str, Any]) -> Dict[str, Any]:
    # Init kwargs outrank env vars in pydantic-settings; env names match case-insensitively.
    env_names = {name.upper() for name in os.environ}
    return {
        key: value
        for key, value in data.items()
        if f"CODESNIP_{key.upper()}" not in env_names
    }


def load_settings() -> CodesnipSettings:
    raw = _load_toml_config()
    flattened = _flatten_config(raw)
    return CodesnipSettings(**_drop_env_overridden(flattened))


settings = load_settings()
