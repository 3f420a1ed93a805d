"""Tests for cargo_fund.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from cargo_fund.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    MISSING_TOKEN_HELP,
    FundConfig,
    GithubConfig,
    load_config,
    resolve_settings,
)
from cargo_fund.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, FundConfig)
    assert config.path is None
    assert config.github is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".cargo-fund.yml"
    config_file.write_text(
        """
github:
  api_token: "file-token"
  endpoint: "https://github.example.com/api/graphql"
  timeout: 12
  user_agent: "my-agent/1.0"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.path == config_file.resolve()
    assert isinstance(config.github, GithubConfig)
    assert config.github.api_token == "file-token"
    assert config.github.endpoint == "https://github.example.com/api/graphql"
    assert config.github.timeout == pytest.approx(12.0)
    assert config.github.user_agent == "my-agent/1.0"


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    config_file = tmp_path / ".cargo-fund.yml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping at the root"):
        load_config(config_file)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    config_file = tmp_path / ".cargo-fund.yml"
    config_file.write_text("github: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(config_file)


def test_resolve_settings_requires_a_token(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        resolve_settings(config_path=tmp_path, environ={})
    assert str(excinfo.value) == MISSING_TOKEN_HELP


def test_resolve_settings_prefers_flag_then_env_then_file(tmp_path: Path) -> None:
    (tmp_path / ".cargo-fund.yml").write_text("github:\n  api_token: from-file\n", encoding="utf-8")
    env = {"CARGO_FUND_GITHUB_API_TOKEN": "from-env"}

    assert resolve_settings(token="from-flag", config_path=tmp_path, environ=env).api_token == "from-flag"
    assert resolve_settings(config_path=tmp_path, environ=env).api_token == "from-env"
    assert resolve_settings(config_path=tmp_path, environ={}).api_token == "from-file"


def test_resolve_settings_uses_defaults(tmp_path: Path) -> None:
    settings = resolve_settings(token="t", config_path=tmp_path, environ={})

    assert settings.endpoint == DEFAULT_ENDPOINT
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.user_agent.startswith("cargo-fund/")


def test_resolve_settings_rejects_non_positive_timeout(tmp_path: Path) -> None:
    (tmp_path / ".cargo-fund.yml").write_text("github:\n  timeout: 0\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="timeout"):
        resolve_settings(token="t", config_path=tmp_path, environ={})
