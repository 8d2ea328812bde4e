"""Tests for readmegen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from readmegen.config import ConfigError, ReadmeGenConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, ReadmeGenConfig)
    assert config.source is None
    assert config.llm.model == "llama-3.3-70b-versatile"
    assert config.llm.temperature == 0.7
    assert config.llm.max_tokens == 2000
    assert config.llm.api_key is None
    assert config.llm.system_prompt == "You are a README generator. Output only markdown."
    assert config.github.token is None
    assert config.github.request_timeout == 15.0
    assert config.stores.session_ttl_minutes == 30.0
    assert config.stores.cache_enabled is True
    assert config.stores.cache_ttl_minutes == 60.0


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".readmegen.yml"
    config_file.write_text(
        """
llm:
  model: "llama-3.1-8b-instant"
  temperature: 0.2
  max_tokens: 512
  base_url: "http://localhost:8080/v1/"
  api_key: "file-key"
  request_timeout: 30
github:
  api_url: "https://github.example.com/api/v3/"
  token: "file-token"
sessions:
  ttl_minutes: 10
cache:
  enabled: false
  ttl_minutes: 5
sweep_interval_minutes: 2
""".strip(),
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={})

    assert config.source == config_file.resolve()
    assert config.llm.model == "llama-3.1-8b-instant"
    assert config.llm.temperature == 0.2
    assert config.llm.max_tokens == 512
    assert config.llm.base_url == "http://localhost:8080/v1"
    assert config.llm.api_key == "file-key"
    assert config.llm.request_timeout == 30.0
    assert config.github.api_url == "https://github.example.com/api/v3"
    assert config.github.token == "file-token"
    assert config.stores.session_ttl_minutes == 10.0
    assert config.stores.cache_enabled is False
    assert config.stores.cache_ttl_minutes == 5.0
    assert config.stores.sweep_interval_minutes == 2.0


def test_load_config_accepts_explicit_file(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("llm:\n  model: other-model\n", encoding="utf-8")

    config = load_config(config_file, environ={})

    assert config.llm.model == "other-model"


def test_environment_overrides_file_values(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text(
        "llm:\n  api_key: file-key\ngithub:\n  token: file-token\n", encoding="utf-8"
    )

    config = load_config(
        tmp_path,
        environ={
            "GROQ_API_KEY": "env-key",
            "GITHUB_TOKEN": "env-token",
            "READMEGEN_LLM_MODEL": "env-model",
        },
    )

    assert config.llm.api_key == "env-key"
    assert config.github.token == "env-token"
    assert config.llm.model == "env-model"


def test_prefixed_environment_keys_win(tmp_path: Path) -> None:
    config = load_config(
        tmp_path,
        environ={"GROQ_API_KEY": "groq", "READMEGEN_LLM_API_KEY": "prefixed"},
    )

    assert config.llm.api_key == "prefixed"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text("   \n", encoding="utf-8")

    config = load_config(tmp_path, environ={})

    assert config.llm.model == "llama-3.3-70b-versatile"


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text("llm: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


def test_non_positive_ttl_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text("sessions:\n  ttl_minutes: 0\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="sessions.ttl_minutes"):
        load_config(tmp_path, environ={})
