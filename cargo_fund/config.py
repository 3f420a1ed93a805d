"""Configuration loading for cargo-fund (.cargo-fund.yml and environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from . import __version__
from .errors import ConfigError

CONFIG_FILENAME = ".cargo-fund.yml"
TOKEN_ENV_VAR = "CARGO_FUND_GITHUB_API_TOKEN"

DEFAULT_ENDPOINT = "https://api.github.com/graphql"
DEFAULT_TIMEOUT = 5.0
DEFAULT_USER_AGENT = f"cargo-fund/{__version__}"

MISSING_TOKEN_HELP = (
    "Github API token must be provided through the CARGO_FUND_GITHUB_API_TOKEN environment "
    "variable or the --github-api-token flag."
)


@dataclass
class GithubConfig:
    """GitHub settings from .cargo-fund.yml."""

    api_token: Optional[str] = None
    endpoint: Optional[str] = None
    timeout: Optional[float] = None
    user_agent: Optional[str] = None


@dataclass
class FundConfig:
    """Represents the settings defined in .cargo-fund.yml."""

    path: Optional[Path] = None
    github: Optional[GithubConfig] = None


@dataclass(frozen=True)
class ClientSettings:
    """Credential and transport settings, built once before the GraphQL call."""

    api_token: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


def load_config(config_path: Path) -> FundConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return FundConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    github_data = _as_dict(data.get("github"))
    github = None
    if github_data:
        github = GithubConfig(
            api_token=_as_str(github_data.get("api_token")),
            endpoint=_as_str(github_data.get("endpoint")),
            timeout=_as_float(github_data.get("timeout")),
            user_agent=_as_str(github_data.get("user_agent")),
        )
        if not any((github.api_token, github.endpoint, github.user_agent)) and github.timeout is None:
            github = None

    return FundConfig(path=config_file, github=github)


def resolve_settings(
    *,
    token: Optional[str] = None,
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ClientSettings:
    """Combine the CLI flag, environment and config file into client settings.

    The token is taken from the first of ``token``, the
    ``CARGO_FUND_GITHUB_API_TOKEN`` variable and ``github.api_token`` in the
    config file that is set.
    """
    env = os.environ if environ is None else environ
    config = load_config(config_path if config_path is not None else Path.cwd())
    github = config.github or GithubConfig()

    api_token = token or env.get(TOKEN_ENV_VAR) or github.api_token
    if not api_token:
        raise ConfigError(MISSING_TOKEN_HELP)

    timeout = github.timeout if github.timeout is not None else DEFAULT_TIMEOUT
    if timeout <= 0:
        raise ConfigError(f"github.timeout must be positive, got {timeout}")

    return ClientSettings(
        api_token=api_token,
        endpoint=github.endpoint or DEFAULT_ENDPOINT,
        timeout=timeout,
        user_agent=github.user_agent or DEFAULT_USER_AGENT,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


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


__all__ = [
    "ClientSettings",
    "CONFIG_FILENAME",
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "FundConfig",
    "GithubConfig",
    "MISSING_TOKEN_HELP",
    "TOKEN_ENV_VAR",
    "load_config",
    "resolve_settings",
]
