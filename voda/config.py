"""Application configuration read from a YAML file per phase."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from voda.domain.utils import getenv

TYPE_EXT = "yaml"
DEFAULT_PHASE = "dev"

_log = logging.getLogger(__name__)


@dataclass
class DBConfig:
    """Database connection settings."""

    host: str = ""
    port: int = 0
    user: str = ""
    name: str = ""
    password: str = ""


@dataclass
class OAuthConfig:
    """OAuth client settings."""

    client_id: str = ""
    client_secret: str = ""
    redirect_url: str = ""


@dataclass
class KakaoConfig:
    """Kakao login settings."""

    oauth: OAuthConfig = field(default_factory=OAuthConfig)
    base_url: str = ""


@dataclass
class GoogleConfig:
    """Google login settings."""

    oauth: OAuthConfig = field(default_factory=OAuthConfig)


@dataclass
class ClientConfig:
    """Settings of the external login providers."""

    kakao: KakaoConfig = field(default_factory=KakaoConfig)
    google: GoogleConfig = field(default_factory=GoogleConfig)


@dataclass
class Config:
    """The whole application configuration."""

    db_config: DBConfig = field(default_factory=DBConfig)
    client: ClientConfig = field(default_factory=ClientConfig)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"config section '{key}' must be a mapping")
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _oauth(data: dict[str, Any]) -> OAuthConfig:
    return OAuthConfig(
        client_id=_text(data.get("client-id")),
        client_secret=_text(data.get("client-secret")),
        redirect_url=_text(data.get("redirect-url")),
    )


def _db_config(data: dict[str, Any]) -> DBConfig:
    return DBConfig(
        host=_text(data.get("host")),
        port=int(data.get("port") or 0),
        user=_text(data.get("user")),
        name=_text(data.get("name")),
        password=_text(data.get("password")),
    )


def _client(data: dict[str, Any]) -> ClientConfig:
    kakao = _section(data, "kakao")
    google = _section(data, "google")
    return ClientConfig(
        kakao=KakaoConfig(
            oauth=_oauth(_section(kakao, "oauth")),
            base_url=_text(kakao.get("base-url")),
        ),
        google=GoogleConfig(oauth=_oauth(_section(google, "oauth"))),
    )


def load(path: str | os.PathLike[str], phase: str | None = None) -> Config:
    """Read ``<path>/<phase>.yaml``; the phase defaults to $PHASE, then "dev"."""
    phase = phase or getenv("PHASE", DEFAULT_PHASE)
    _log.info("config is loading... phase=%s", phase)
    config_file = Path(path) / f"{phase}.{TYPE_EXT}"
    with config_file.open(encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {config_file} must hold a mapping")
    return Config(
        db_config=_db_config(_section(data, "db-config")),
        client=_client(_section(data, "client")),
    )