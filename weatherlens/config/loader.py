"""YAML config loader with environment overrides."""

import os
from pathlib import Path

import yaml

from weatherlens.config.schema import AppConfig

API_KEY_ENV = "OPENWEATHER_API_KEY"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    With no path the built-in defaults are used. An empty ``api.api_key`` is
    filled from the OPENWEATHER_API_KEY environment variable.
    """
    raw: dict = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}

    config = AppConfig(**raw)
    return apply_env_overrides(config)


def apply_env_overrides(config: AppConfig) -> AppConfig:
    """Return a copy of config with secrets pulled from the environment."""
    env_key = os.environ.get(API_KEY_ENV, "").strip()
    if config.api.api_key or not env_key:
        return config
    return config.model_copy(
        update={"api": config.api.model_copy(update={"api_key": env_key})}
    )
