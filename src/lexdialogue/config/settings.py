"""Settings for lexdialogue.

Sources, from lowest to highest precedence:

1. Field defaults
2. A ``.env`` file in the working directory
3. ``LEXDIALOGUE_*`` environment variables
4. Config files: ``~/.config/lexdialogue/config.*``, then
   ``./lexdialogue.*``, then a file passed with ``--config``
5. Command line options such as ``play --delay``
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lexdialogue.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

CONFIG_SUFFIXES = (".yaml", ".yml", ".toml", ".json")

# Keys people reach for first, mapped to the setting they mean
MISSPELLED_KEYS = {
    "delay": "playback_delay",
    "format": "default_export_format",
    "level": "log_level",
}


class LexDialogueSettings(BaseSettings):
    """Runtime settings for parsing, playback, export and logging."""

    model_config = SettingsConfigDict(
        env_prefix="LEXDIALOGUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Minimum level of emitted log records"
    )
    log_format: Literal["console", "json", "structured"] = Field(
        default="console", description="Rendering of log records"
    )
    log_file: Path | None = Field(
        default=None, description="Also write log records to this file"
    )

    playback_delay: float = Field(
        default=0.5, ge=0.0, description="Pause in seconds between playback steps"
    )
    default_export_format: Literal["json", "yaml", "toml", "pickle"] = Field(
        default="json", description="Format used by 'convert' without --format"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_case_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_format", "default_export_format", mode="before")
    @classmethod
    def lower_case_format(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_log_file(cls, v: Any) -> Any:
        """Expand ``~`` and ``$VARS`` and make the log file path absolute."""
        if isinstance(v, (str, Path)):
            return Path(os.path.expandvars(str(v))).expanduser().resolve()
        return v


def read_config_file(path: Path | str) -> dict[str, Any]:
    """Read one config file into a mapping of setting names to values.

    Args:
        path: YAML, TOML or JSON file

    Returns:
        The settings the file defines

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the format is unsupported, the content is not
            a mapping, or a key is a known misspelling
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in CONFIG_SUFFIXES:
        raise ConfigurationError(
            message=f"Unsupported configuration file format: {suffix or path.name}",
            hint=f"Use one of: {', '.join(CONFIG_SUFFIXES)}",
            details={"file": str(path)},
        )

    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        data = tomllib.loads(text)
    elif suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            message=f"Configuration file must contain a mapping: {path}",
            hint="Write settings as 'name: value' pairs",
            details={"file": str(path), "found": type(data).__name__},
        )

    for wrong, correct in MISSPELLED_KEYS.items():
        if wrong in data:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={"file": str(path), "invalid_key": wrong},
            )
    return data


def discover_config_files() -> list[Path]:
    """Return the user and project config files that exist, in load order."""
    user_dir = Path.home() / ".config" / "lexdialogue"
    candidates = [user_dir / f"config{suffix}" for suffix in CONFIG_SUFFIXES]
    candidates += [Path.cwd() / f"lexdialogue{suffix}" for suffix in CONFIG_SUFFIXES]
    return [path for path in candidates if path.is_file()]


def load_settings(
    config_files: Iterable[Path | str] = (),
    overrides: dict[str, Any] | None = None,
) -> LexDialogueSettings:
    """Build settings from config files and explicit overrides.

    Later files win over earlier ones. Missing files are skipped with a
    warning. Overrides whose value is None are ignored.
    """
    data: dict[str, Any] = {}
    for config_file in config_files:
        try:
            data.update(read_config_file(config_file))
        except FileNotFoundError:
            logger.warning("Config file not found, skipping", path=str(config_file))
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return LexDialogueSettings(**data)


_settings: LexDialogueSettings | None = None


def get_settings() -> LexDialogueSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings(discover_config_files())
    return _settings


def set_settings(settings: LexDialogueSettings) -> None:
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Forget the loaded settings so the next access re-reads every source."""
    global _settings
    _settings = None


def reset_settings() -> None:
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> LexDialogueSettings:
    """Resolve the settings a CLI invocation runs with.

    Args:
        config_file: Explicit config file, layered over the discovered ones
        overrides: Values given as command options; None means "not given"

    Returns:
        Settings with every source applied

    Raises:
        FileNotFoundError: If ``config_file`` does not exist
    """
    if config_file is not None:
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        base = load_settings([*discover_config_files(), config_file])
    else:
        base = get_settings()

    changes = {k: v for k, v in (overrides or {}).items() if v is not None}
    if not changes:
        return base
    return LexDialogueSettings(**{**base.model_dump(), **changes})
