from __future__ import annotations

from pathlib import Path
from typing import Dict

from lancea.config import Settings
from lancea.engine import Engine
from lancea.errors import ConfigError
from lancea.providers.apps import AppsProvider, GtkLauncher
from lancea.providers.base import Provider, guard_provider
from lancea.providers.clipboard import create_clipboard
from lancea.providers.emoji import EmojiProvider
from lancea.registry import CommandRegistry
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)


def create_provider(name: str | None, settings: Settings | None = None, registry: CommandRegistry | None = None) -> Provider:
    settings = settings or Settings()
    registry = registry or CommandRegistry()
    n = (name or "").strip().lower()
    if n in ("emoji", "emojis"):
        return EmojiProvider(
            clipboard=create_clipboard(settings.clipboard),
            aliases=registry.aliases_for("emoji") or ("/emoji", "/em"),
        )
    if n in ("apps", "applications"):
        dirs = [Path(d) for d in settings.apps_dirs] if settings.apps_dirs else None
        return AppsProvider(
            dirs=dirs,
            launcher=GtkLauncher(settings.launch_cmd),
            max_results=settings.apps_max_results,
            aliases=registry.aliases_for("apps") or ("/apps", "/ap"),
        )
    raise ConfigError(f"Unknown provider name: {name}")


def build_providers(settings: Settings, registry: CommandRegistry | None = None) -> Dict[str, Provider]:
    """Construct every configured provider once; any failure aborts startup."""
    providers: Dict[str, Provider] = {}
    for name in settings.providers:
        try:
            p = create_provider(name, settings, registry)
        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(f"provider '{name}' failed to start: {e}") from e
        if p.id in providers:
            logger.warning("provider %s configured twice, keeping the first", p.id)
            continue
        providers[p.id] = guard_provider(p)
        logger.info("registered provider %s", p.id)
    return providers


def build_engine(settings: Settings) -> Engine:
    registry = CommandRegistry()
    providers = build_providers(settings, registry)
    default_id = settings.default_provider
    if default_id not in providers:
        fallback = next(iter(providers))
        logger.warning("default provider %r is not configured, using %s", default_id, fallback)
        default_id = fallback
    return Engine(
        providers,
        default_id,
        registry=registry,
        timeout_s=settings.provider_timeout_s,
        max_workers=settings.provider_workers,
    )
