"""Submission config: defaults, env vars, config.yaml and CLI overrides."""

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from indexnow.errors import ConfigError

CONFIG_PATH = Path("config.yaml")
DEFAULT_ENGINE = "api.indexnow.org"

ENV_VARS = {
    "engine": "INDEXNOW_ENGINE",
    "key": "INDEXNOW_KEY",
    "host": "INDEXNOW_HOST",
    "key_path": "INDEXNOW_KEY_PATH",
    "batch_size": "INDEXNOW_BATCH_SIZE",
    "rate_limit_delay": "INDEXNOW_RATE_LIMIT",
    "cache_ttl": "INDEXNOW_CACHE_TTL",
}

_ALIASES = {
    "keyPath": "key_path",
    "batchSize": "batch_size",
    "rateLimitDelay": "rate_limit_delay",
    "rate_limit": "rate_limit_delay",
    "cacheTTL": "cache_ttl",
    "cacheTtl": "cache_ttl",
}

_INT_FIELDS = ("batch_size", "rate_limit_delay", "cache_ttl")


@dataclass(frozen=True)
class Config:
    """Immutable submission settings. Delay is in ms, TTL in seconds."""

    key: str = ""
    host: str = ""
    engine: str = DEFAULT_ENGINE
    key_path: str = ""
    batch_size: int = 100
    rate_limit_delay: int = 1000
    cache_ttl: int = 86400

    def __post_init__(self):
        missing = [name for name in ("key", "host") if not getattr(self, name)]
        problems = []
        if self.batch_size < 1:
            problems.append(f"batch_size must be >= 1, got {self.batch_size}")
        if self.rate_limit_delay < 0:
            problems.append(f"rate_limit_delay must be >= 0, got {self.rate_limit_delay}")
        if self.cache_ttl < 0:
            problems.append(f"cache_ttl must be >= 0, got {self.cache_ttl}")
        if missing or problems:
            raise ConfigError(missing, problems)
        if not self.key_path:
            object.__setattr__(self, "key_path", f"https://{self.host}/{self.key}.txt")

    @property
    def endpoint(self) -> str:
        return f"https://{self.engine}/IndexNow"

    @classmethod
    def from_mapping(cls, data: dict) -> "Config":
        """Build from camelCase or snake_case keys. None values fall back to defaults."""
        known = {f.name for f in fields(cls)}
        values = {}
        problems = []
        for raw_key, value in (data or {}).items():
            name = _ALIASES.get(raw_key, raw_key)
            if name not in known or value is None:
                continue
            if name in _INT_FIELDS:
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    problems.append(f"{name} must be an integer, got {value!r}")
                    continue
            else:
                value = str(value)
            values[name] = value
        if problems:
            missing = [name for name in ("key", "host") if not values.get(name)]
            raise ConfigError(missing, problems)
        return cls(**values)


def _from_env() -> dict:
    from dotenv import load_dotenv, find_dotenv
    load_dotenv(find_dotenv(usecwd=True))
    return {name: os.environ[var] for name, var in ENV_VARS.items() if os.environ.get(var)}


def _from_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(problems=[f"{path}: expected a mapping at top level"])
    section = data.get("indexnow", data)
    return section if isinstance(section, dict) else {}


def load_config(path: str | Path | None = None, overrides: dict | None = None) -> Config:
    """Layer env vars, then config.yaml, then explicit overrides over the defaults.

    A path given explicitly must exist; the default config.yaml is optional.
    """
    if path is not None and not Path(path).exists():
        raise ConfigError(problems=[f"Config file not found: {path}"])
    merged = _from_env()
    for raw_key, value in _from_yaml(Path(path) if path else CONFIG_PATH).items():
        merged[_ALIASES.get(raw_key, raw_key)] = value
    for raw_key, value in (overrides or {}).items():
        if value is not None:
            merged[_ALIASES.get(raw_key, raw_key)] = value
    return Config.from_mapping(merged)
