"""
Configuration for obswalk.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/obswalk/config.toml) if exists
3. Environment variables (OBSWALK_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class TraversalConfig:
    """Tree walking limits."""
    max_depth: int = 10000  # <= 0 means unbounded


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class Config:
    """Root config with all settings."""
    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def max_depth(self) -> int | None:
        """Configured depth bound, or None when unbounded."""
        depth = self.traversal.max_depth
        return depth if depth > 0 else None


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "obswalk" / "config.toml"
    return Path.home() / ".config" / "obswalk" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, ValueError, TypeError):
            pass  # fall back to defaults on unreadable config

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "traversal" in data:
        t = data["traversal"]
        if "max_depth" in t:
            config.traversal.max_depth = int(t["max_depth"])

    if "logging" in data:
        lg = data["logging"]
        if "level" in lg:
            config.logging.level = str(lg["level"]).upper()

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "OBSWALK_MAX_DEPTH": ("traversal", "max_depth", int),
        "OBSWALK_LOG_LEVEL": ("logging", "level", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                converted = val.upper() if conv is str else conv(val)
                setattr(getattr(config, section), attr, converted)

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
