"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      - committed static defaults
  2. ``config/local.toml``        - optional local overrides (gitignored)
  3. ``.env``                     - local secrets and env overrides (gitignored)
  4. Environment variables        - ``SENSOR_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine limits and the external advisor settings live here; CLI commands
receive an ``AppConfig`` instance and never read env vars directly.  The one
exception is the advisor API token (``HF_API_TOKEN``), which is a secret and
is read by ``TextGenerationClient`` itself.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class EngineConfig(BaseModel):
    """Rule engine output limits."""

    model_config = ConfigDict(frozen=True)

    max_advisories: int = 3
    max_plants: int = 8

    @field_validator("max_advisories", "max_plants")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Engine limits must be >= 1, got {v}.")
        return v


class AdvisorConfig(BaseModel):
    """External text-generation advisor settings.

    Sampling defaults match the values the dashboard used with its
    in-browser DialoGPT pipeline.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    base_url: str = "https://api-inference.huggingface.co"
    model: str = "microsoft/DialoGPT-small"
    timeout_s: float = 30.0
    max_new_tokens: int = 200
    temperature: float = 0.3
    top_p: float = 0.9
    repetition_penalty: float = 1.1
    do_sample: bool = True

    @field_validator("max_new_tokens")
    @classmethod
    def validate_max_new_tokens(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_new_tokens must be > 0, got {v}.")
        return v

    @field_validator("temperature", "timeout_s")
    @classmethod
    def validate_strictly_positive(cls, v: float) -> float:
        if v <= 0.0:
            raise ValueError(f"Value must be > 0, got {v}.")
        return v

    @field_validator("top_p")
    @classmethod
    def validate_top_p(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"top_p must be in (0.0, 1.0], got {v}.")
        return v

    @field_validator("repetition_penalty")
    @classmethod
    def validate_repetition_penalty(cls, v: float) -> float:
        if v < 1.0:
            raise ValueError(f"repetition_penalty must be >= 1.0, got {v}.")
        return v


class AppConfig(BaseModel):
    """Complete application configuration - the single source of truth."""

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    engine: EngineConfig = EngineConfig()
    advisor: AdvisorConfig = AdvisorConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file is
            missing the built-in model defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicitly given ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
        config_dir = default_path.parent
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Create it or omit --config to use config/default.toml."
            )
        raw = _read_toml(config_path)
        config_dir = config_path.parent

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_dir / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply SENSOR_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _env_flag(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply SENSOR_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      SENSOR_ADVISOR_LOG_LEVEL         → raw["logging"]["level"]
      SENSOR_ADVISOR_DEBUG             → raw["debug"]
      SENSOR_ADVISOR_ADVISOR_ENABLED   → raw["advisor"]["enabled"]
      SENSOR_ADVISOR_ADVISOR_URL       → raw["advisor"]["base_url"]
      SENSOR_ADVISOR_ADVISOR_MODEL     → raw["advisor"]["model"]
    """
    if log_level := os.environ.get("SENSOR_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("SENSOR_ADVISOR_DEBUG"):
        raw["debug"] = _env_flag(debug)

    if enabled := os.environ.get("SENSOR_ADVISOR_ADVISOR_ENABLED"):
        raw.setdefault("advisor", {})["enabled"] = _env_flag(enabled)

    if base_url := os.environ.get("SENSOR_ADVISOR_ADVISOR_URL"):
        raw.setdefault("advisor", {})["base_url"] = base_url

    if model := os.environ.get("SENSOR_ADVISOR_ADVISOR_MODEL"):
        raw.setdefault("advisor", {})["model"] = model

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    # Flatten top-level keys that may be nested under [project]
    project = raw.pop("project", {})

    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        engine=EngineConfig(**raw.get("engine", {})),
        advisor=AdvisorConfig(**raw.get("advisor", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
