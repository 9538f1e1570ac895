"""Configuration loading from YAML and environment.

Tokens are taken from environment variables or from files (mounted
secrets). Never put real tokens in config files committed to a repo.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("tknpac.yaml")


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from a file path given in env."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so secrets can be read from env/file
_current_env: dict[str, str] = {}


class KubeConfig(BaseSettings):
    """Cluster access settings; empty values fall back to kubeconfig."""

    model_config = SettingsConfigDict(env_prefix="KUBE_", extra="ignore")

    namespace: str = Field(default="", description="Context namespace override")
    api_url: str = Field(default="", description="Kubernetes API server URL")
    token: str | None = Field(default=None, description="Bearer token; use env or secret file")
    token_file: str | None = Field(default=None, description="File holding the bearer token")
    ca_cert: str | None = Field(default=None, description="CA bundle used to verify the API server")
    verify_ssl: bool = Field(default=True, description="Verify the API server certificate")
    timeout: int = Field(default=30, ge=1, le=600, description="Request timeout in seconds")
    kubeconfig: str | None = Field(default=None, description="kubeconfig path (default $KUBECONFIG or ~/.kube/config)")


class DisplayConfig(BaseSettings):
    """Terminal output settings."""

    model_config = SettingsConfigDict(env_prefix="DISPLAY_", extra="ignore")

    no_color: bool = Field(default=False, description="Disable ANSI colors")
    hyperlinks: bool = Field(default=True, description="Link commit SHAs when colors are enabled")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    kube: KubeConfig = Field(default_factory=KubeConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def token_resolved(self) -> str | None:
        """Resolve the API token from config, env or secret file."""
        t = self.kube.token
        if t and not t.startswith("${"):
            return t
        if self.kube.token_file:
            return Path(self.kube.token_file).read_text().strip() or None
        return _read_secret("KUBE_TOKEN", "KUBE_TOKEN_FILE")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file is not an error: defaults plus KUBE_*, DISPLAY_* and
    LOGGING_* env variables apply.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or DEFAULT_CONFIG_PATH
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        kube=KubeConfig(**(raw.get("kube") or {})),
        display=DisplayConfig(**(raw.get("display") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
