"""Configuration loading for readmegen (.readmegen.yml plus environment)."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".readmegen.yml"

ENV_LLM_API_KEY_KEYS = ("READMEGEN_LLM_API_KEY", "GROQ_API_KEY")
ENV_LLM_MODEL_KEYS = ("READMEGEN_LLM_MODEL",)
ENV_LLM_BASE_URL_KEYS = ("READMEGEN_LLM_BASE_URL",)
ENV_GITHUB_TOKEN_KEYS = ("READMEGEN_GITHUB_TOKEN", "GITHUB_TOKEN")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Chat-completion settings; fixed for the process, never per request."""

    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.7
    max_tokens: int = 2000
    base_url: str = "https://api.groq.com/openai/v1"
    api_key: Optional[str] = None
    request_timeout: float = 60.0
    system_prompt: str = "You are a README generator. Output only markdown."


@dataclass
class GitHubConfig:
    """Repository host API settings."""

    api_url: str = "https://api.github.com"
    token: Optional[str] = None
    user_agent: str = "README-Generator"
    request_timeout: float = 15.0


@dataclass
class StoreConfig:
    """Lifetimes for session memory and the repository cache."""

    session_ttl_minutes: float = 30.0
    cache_enabled: bool = True
    cache_ttl_minutes: float = 60.0
    sweep_interval_minutes: float = 30.0


@dataclass
class ReadmeGenConfig:
    """Effective settings for a readmegen process."""

    source: Optional[Path] = None
    llm: LLMConfig = field(default_factory=LLMConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    stores: StoreConfig = field(default_factory=StoreConfig)


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ReadmeGenConfig:
    """Load configuration from disk, then apply environment overrides."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)

    config = ReadmeGenConfig()
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{config_file.name} must contain a mapping at the root")
        config = _from_mapping(data)
        config.source = config_file

    _apply_environment(config, env)
    return config


def _from_mapping(data: Dict[str, Any]) -> ReadmeGenConfig:
    config = ReadmeGenConfig()

    llm_data = _as_dict(data.get("llm"))
    llm = config.llm
    llm.model = _as_str(llm_data.get("model")) or llm.model
    llm.temperature = _pick(_as_float(llm_data.get("temperature")), llm.temperature)
    llm.max_tokens = _pick(_as_int(llm_data.get("max_tokens")), llm.max_tokens)
    llm.base_url = (_as_str(llm_data.get("base_url")) or llm.base_url).rstrip("/")
    llm.api_key = _as_str(llm_data.get("api_key"))
    llm.request_timeout = _pick(_as_float(llm_data.get("request_timeout")), llm.request_timeout)
    llm.system_prompt = _as_str(llm_data.get("system_prompt")) or llm.system_prompt

    github_data = _as_dict(data.get("github"))
    github = config.github
    github.api_url = (_as_str(github_data.get("api_url")) or github.api_url).rstrip("/")
    github.token = _as_str(github_data.get("token"))
    github.user_agent = _as_str(github_data.get("user_agent")) or github.user_agent
    github.request_timeout = _pick(
        _as_float(github_data.get("request_timeout")), github.request_timeout
    )

    stores = config.stores
    session_data = _as_dict(data.get("sessions"))
    stores.session_ttl_minutes = _pick(
        _as_float(session_data.get("ttl_minutes")), stores.session_ttl_minutes
    )
    cache_data = _as_dict(data.get("cache"))
    stores.cache_enabled = _pick(_as_bool(cache_data.get("enabled")), stores.cache_enabled)
    stores.cache_ttl_minutes = _pick(
        _as_float(cache_data.get("ttl_minutes")), stores.cache_ttl_minutes
    )
    stores.sweep_interval_minutes = _pick(
        _as_float(data.get("sweep_interval_minutes")), stores.sweep_interval_minutes
    )

    for name, value in (
        ("sessions.ttl_minutes", stores.session_ttl_minutes),
        ("cache.ttl_minutes", stores.cache_ttl_minutes),
        ("sweep_interval_minutes", stores.sweep_interval_minutes),
    ):
        if value <= 0:
            raise ConfigError(f"{name} must be positive")

    return config


def _apply_environment(config: ReadmeGenConfig, env: Mapping[str, str]) -> None:
    api_key = _first_env_value(env, ENV_LLM_API_KEY_KEYS)
    if api_key:
        config.llm.api_key = api_key
    model = _first_env_value(env, ENV_LLM_MODEL_KEYS)
    if model:
        config.llm.model = model
    base_url = _first_env_value(env, ENV_LLM_BASE_URL_KEYS)
    if base_url:
        config.llm.base_url = base_url.rstrip("/")
    token = _first_env_value(env, ENV_GITHUB_TOKEN_KEYS)
    if token:
        config.github.token = token


def _resolve_config_path(config_path: Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / CONFIG_FILENAME).resolve()
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _first_env_value(env: Mapping[str, str], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = env.get(key)
        if value:
            return value
    return None


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GitHubConfig",
    "LLMConfig",
    "ReadmeGenConfig",
    "StoreConfig",
    "load_config",
]
