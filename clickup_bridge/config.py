"""Configuration loading from YAML and environment.

Secrets (GitHub token, ClickUp API key) are taken from config, environment
variables, files (Docker secrets) or GitHub Actions inputs. Never put real
tokens in config files committed to the repo.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when a required setting (e.g. a secret) is missing."""

    pass


# Env var naming the YAML config file (optional)
CONFIG_PATH_ENV = "CLICKUP_BRIDGE_CONFIG"

# Injected by load_config for ${VAR} substitution in YAML values
_current_env: dict[str, str] = {}


def _read_secret(env_key: str, file_env_key: str, input_name: str | None = None) -> str | None:
    """Read secret from env var, from file path in env (e.g. Docker secrets)
    or from a GitHub Actions input (INPUT_<NAME>)."""
    env = os.environ
    value = env.get(env_key)
    if value and value.strip():
        return value.strip()
    file_path = env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    if input_name:
        # Runner exposes `with:` inputs as INPUT_<NAME> with the name upper-cased, dashes kept
        upper = input_name.upper()
        for key in (f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}"):
            value = env.get(key)
            if value and value.strip():
                return value.strip()
    return None


def _is_placeholder(value: str | None) -> bool:
    return not value or value.startswith("${")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or Actions token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")


class ClickUpConfig(BaseSettings):
    """ClickUp API settings."""

    model_config = SettingsConfigDict(env_prefix="CLICKUP_", extra="ignore")

    api_key: str | None = Field(default=None, description="Personal API token; use env or secret file")
    api_url: str = Field(default="https://api.clickup.com/api/v2", description="API base URL")


class HttpConfig(BaseSettings):
    """Outbound HTTP settings shared by all adapters."""

    model_config = SettingsConfigDict(env_prefix="HTTP_", extra="ignore")

    timeout: float = Field(default=30, gt=0, description="Per-request timeout in seconds")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    clickup: ClickUpConfig = Field(default_factory=ClickUpConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env, Docker secret file or Actions input."""
        t = self.github.token
        if not _is_placeholder(t):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE", "github-token")

    @property
    def clickup_api_key_resolved(self) -> str | None:
        """Resolve ClickUp API key from config, env, Docker secret file or Actions input."""
        k = self.clickup.api_key
        if not _is_placeholder(k):
            return k
        return _read_secret("CLICKUP_API_KEY", "CLICKUP_API_KEY_FILE", "clickup-api-key")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a top-level YAML section as a mapping (empty if absent)."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(value).__name__}")
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from an optional YAML file and environment.

    The YAML file is read only when given explicitly or via
    CLICKUP_BRIDGE_CONFIG; the working directory is never searched. Without
    it every section is read from env only (GITHUB_*, CLICKUP_*, HTTP_*,
    LOGGING_*). Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE, CLICKUP_API_KEY
    or CLICKUP_API_KEY_FILE, or the Actions inputs github-token /
    clickup-api-key.
    """
    global _current_env
    _current_env = dict(os.environ)

    if config_path is None:
        env_path = _current_env.get(CONFIG_PATH_ENV)
        config_path = Path(env_path) if env_path else None
    if config_path is None:
        return AppConfig()
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**_section(raw, "github")),
        clickup=ClickUpConfig(**_section(raw, "clickup")),
        http=HttpConfig(**_section(raw, "http")),
        logging=LoggingConfig(**_section(raw, "logging")),
    )
