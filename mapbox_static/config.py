"""
Configuration for the snapshot client and service.

Defaults live in config.yaml next to this module; environment variables (or a
.env file, via load_config) supply the access token and may override the API
host and timeout. Nothing in the library reads the environment implicitly:
build a Config and pass it to SnapshotClient.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml


class ConfigurationError(Exception):
    """Missing credentials or settings, or snapshot options the API would reject."""


_SETTINGS_FILE = Path(__file__).with_name("config.yaml")


@lru_cache(maxsize=1)
def _yaml_settings() -> dict:
    if not _SETTINGS_FILE.is_file():
        raise ConfigurationError(f"Settings file is missing: {_SETTINGS_FILE}")
    with _SETTINGS_FILE.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_yaml_setting(*keys: str, default: Any = None) -> Any:
    """
    Look up a nested config.yaml value.

    Example: get_yaml_setting("api", "timeout_seconds") -> 30.0
    """
    node: Any = _yaml_settings()
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def _read_env(key: str) -> Optional[str]:
    value = os.environ.get(key, "").strip()
    return value or None


def get_required_env(key: str) -> str:
    """Value of an environment variable that must be set and non-blank."""
    value = _read_env(key)
    if value is None:
        raise ConfigurationError(
            f"Environment variable {key} is not set.\n"
            f"Add {key}=... to your .env file or export it before starting."
        )
    return value


def get_optional_env(key: str) -> Optional[str]:
    """Value of an environment variable, or None when unset or blank."""
    return _read_env(key)


def _timeout_setting() -> float:
    raw = get_optional_env("MAPBOX_TIMEOUT_SECONDS")
    if raw is None:
        return float(get_yaml_setting("api", "timeout_seconds", default=30.0))
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"MAPBOX_TIMEOUT_SECONDS must be a number, got {raw!r}")
    if timeout <= 0:
        raise ConfigurationError(f"MAPBOX_TIMEOUT_SECONDS must be positive, got {raw!r}")
    return timeout


@dataclass(frozen=True)
class Config:
    """Client settings; immutable once built."""

    # None is allowed here; SnapshotClient also accepts an explicit token
    access_token: Optional[str] = None
    api_host: str = "api.mapbox.com"
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """MAPBOX_ACCESS_TOKEN, MAPBOX_API_HOST and MAPBOX_TIMEOUT_SECONDS over config.yaml."""
        return cls(
            access_token=get_optional_env("MAPBOX_ACCESS_TOKEN"),
            api_host=(
                get_optional_env("MAPBOX_API_HOST")
                or get_yaml_setting("api", "host", default="api.mapbox.com")
            ),
            timeout_seconds=_timeout_setting(),
        )


@dataclass(frozen=True)
class ServerConfig:
    """Snapshot service settings. Every value must come from the environment."""

    backend_host: str
    backend_port: int
    cors_origins: list[str]
    client: Config = field(default_factory=Config)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        port = get_required_env("BACKEND_PORT")
        if not port.isdigit():
            raise ConfigurationError(f"BACKEND_PORT must be an integer, got {port!r}")

        origins = [o.strip() for o in get_required_env("CORS_ORIGINS").split(",") if o.strip()]

        # A service without a token could only ever return errors
        get_required_env("MAPBOX_ACCESS_TOKEN")

        return cls(
            backend_host=get_required_env("BACKEND_HOST"),
            backend_port=int(port),
            cors_origins=origins,
            client=Config.from_env(),
        )


def resolve_access_token(access_token: Optional[str], config: Optional[Config]) -> str:
    """
    Pick the access token for a request.

    An explicit token takes precedence over the one in config; if neither is
    set the request must not be built.
    """
    if access_token is not None and access_token.strip():
        return access_token.strip()
    if config is not None and config.access_token:
        return config.access_token
    raise ConfigurationError(
        "A Mapbox access token is required. Go to "
        "<https://www.mapbox.com/studio/account/tokens/>, then pass access_token "
        "to SnapshotClient or set MAPBOX_ACCESS_TOKEN and use load_config()."
    )


def load_config(dotenv_path: Union[str, os.PathLike, None] = None) -> Config:
    """Read .env (if any) into the environment, then build a Config."""
    from dotenv import load_dotenv

    load_dotenv(dotenv_path)
    return Config.from_env()


def load_server_config(dotenv_path: Union[str, os.PathLike, None] = None) -> ServerConfig:
    """Read .env (if any) into the environment, then build a ServerConfig."""
    from dotenv import load_dotenv

    load_dotenv(dotenv_path)
    return ServerConfig.from_env()
