"""Configuration loading: defaults, then config.yaml, then environment."""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .config_models import ChatbotConfig

# env var -> (section, field, caster)
ENV_OVERRIDES = {
    "DATABASE_URL": ("database", "url", str),
    "HOST": ("server", "host", str),
    "PORT": ("server", "port", int),
    "FRONTEND_ORIGIN": ("server", "frontend_origins", lambda v: [o.strip() for o in v.split(",") if o.strip()]),
    "LOG_LEVEL": ("logging", "level", str),
    "LOG_JSON": ("logging", "json", lambda v: v.strip().lower() in {"1", "true", "yes", "on"}),
}


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".chatbot" / "config.yaml",
        Path.home() / "chatbot" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def _env_overrides(environ: dict) -> dict:
    overrides: dict = {}
    for env_var, (section, field, cast) in ENV_OVERRIDES.items():
        raw = environ.get(env_var)
        if raw is None or raw == "":
            continue
        try:
            value = cast(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_var}: {raw!r}") from e
        overrides.setdefault(section, {})[field] = value
    return overrides


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config_model(
    config_path: Optional[Path] = None,
    environ: Optional[dict] = None,
    use_dotenv: bool = True,
) -> ChatbotConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: Invalid YAML, env values or config fields.
    """
    if environ is None:
        if use_dotenv:
            load_dotenv()
        environ = dict(os.environ)

    base_config: dict = {}
    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    merged = _deep_merge(base_config, _env_overrides(environ))
    try:
        return ChatbotConfig.from_dict(merged)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
