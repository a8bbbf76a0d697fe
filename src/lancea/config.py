from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

import dotenv

from lancea.errors import ConfigError

DEV_JWT_SECRET = "dev-secret-key-please-change"


def _csv(v: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if v is None or not v.strip():
        return default
    return tuple(p.strip().lower() for p in v.split(",") if p.strip())


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    providers: Tuple[str, ...] = ("emoji", "apps")
    default_provider: str = "apps"
    provider_timeout_s: float = 2.0
    provider_workers: int = 8
    apps_max_results: int = 25
    apps_dirs: Optional[Tuple[str, ...]] = None
    clipboard: Optional[str] = None
    launch_cmd: str = "gtk-launch"
    jwt_secret: str = DEV_JWT_SECRET
    channel_maxsize: int = 256
    host: str = "127.0.0.1"
    port: int = 8765

    def __post_init__(self):
        if not self.providers:
            raise ConfigError("LANCEA_PROVIDERS must name at least one provider")
        if self.provider_timeout_s <= 0:
            raise ConfigError("LANCEA_PROVIDER_TIMEOUT must be positive")
        if self.provider_workers <= 0:
            raise ConfigError("LANCEA_PROVIDER_WORKERS must be positive")
        if self.apps_max_results <= 0:
            raise ConfigError("LANCEA_APPS_MAX_RESULTS must be positive")
        if self.channel_maxsize <= 0:
            raise ConfigError("LANCEA_CHANNEL_MAXSIZE must be positive")


def load_settings(env: Mapping[str, str] | None = None, dotenv_path: str | None = ".env") -> Settings:
    """Build settings from ``env`` (default: ``.env`` merged under ``os.environ``)."""
    if env is None:
        if dotenv_path:
            dotenv.load_dotenv(dotenv_path)
        env = os.environ
    apps_dirs = env.get("LANCEA_APPS_DIRS")
    return Settings(
        providers=_csv(env.get("LANCEA_PROVIDERS"), Settings.providers),
        default_provider=(env.get("LANCEA_DEFAULT_PROVIDER") or Settings.default_provider).strip().lower(),
        provider_timeout_s=_float(env, "LANCEA_PROVIDER_TIMEOUT", Settings.provider_timeout_s),
        provider_workers=_int(env, "LANCEA_PROVIDER_WORKERS", Settings.provider_workers),
        apps_max_results=_int(env, "LANCEA_APPS_MAX_RESULTS", Settings.apps_max_results),
        apps_dirs=tuple(p for p in apps_dirs.split(os.pathsep) if p) if apps_dirs else None,
        clipboard=env.get("LANCEA_CLIPBOARD") or None,
        launch_cmd=env.get("LANCEA_LAUNCH_CMD") or Settings.launch_cmd,
        jwt_secret=env.get("LANCEA_JWT_SECRET") or DEV_JWT_SECRET,
        channel_maxsize=_int(env, "LANCEA_CHANNEL_MAXSIZE", Settings.channel_maxsize),
        host=env.get("LANCEA_HOST") or Settings.host,
        port=_int(env, "LANCEA_PORT", Settings.port),
    )
