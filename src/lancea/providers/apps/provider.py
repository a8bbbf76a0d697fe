from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from lancea.errors import ProviderError
from lancea.providers.apps.desktop import AppRecord
from lancea.providers.apps.index import AppIndex
from lancea.providers.base import make_key, split_key
from lancea.schemas.envelope import Preview, ResultItem
from lancea.text import norm, strip_command_prefix
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

PROVIDER_ID = "apps"
ALIASES = ("/apps", "/ap")
DEFAULT_MAX_RESULTS = 25

Launcher = Callable[[AppRecord], None]


class GtkLauncher:
    """Starts an application through ``gtk-launch <desktop-id>`` (or a compatible command)."""

    def __init__(self, command: Sequence[str] | str = "gtk-launch", timeout: float = 10.0):
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.timeout = float(timeout)

    def __call__(self, app: AppRecord) -> None:
        try:
            proc = subprocess.run(
                [*self.command, app.desktop_id],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ProviderError(PROVIDER_ID, f"failed to spawn {self.command[0]}: {e}") from e
        if proc.returncode != 0:
            raise ProviderError(PROVIDER_ID, f"{self.command[0]} exited with status {proc.returncode}")


class AppsProvider:
    """Installed-application provider over an in-memory desktop-entry index.

    The index is scanned eagerly at construction; ``rescan`` swaps in a fresh
    one. Action: ``launch``.
    """

    id = PROVIDER_ID

    def __init__(
        self,
        dirs: List[Path] | None = None,
        launcher: Launcher | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        aliases: Tuple[str, ...] = ALIASES,
        index: AppIndex | None = None,
        lang: str | None = None,
    ):
        self.dirs = dirs
        self.lang = lang
        self.launcher = launcher or GtkLauncher()
        self.max_results = int(max_results)
        self.aliases = tuple(sorted(aliases, key=len, reverse=True))
        self._index = index if index is not None else AppIndex.scan(dirs, lang)

    @property
    def index(self) -> AppIndex:
        return self._index

    def rescan(self) -> int:
        # build aside, then publish with a single reference swap
        fresh = AppIndex.scan(self.dirs, self.lang)
        self._index = fresh
        return len(fresh)

    def _lookup(self, key: str) -> Optional[AppRecord]:
        provider_id, local_id = split_key(key)
        if provider_id and provider_id != PROVIDER_ID:
            return None
        return self._index.get(local_id)

    def _to_item(self, app: AppRecord, score: float) -> ResultItem:
        return ResultItem(
            key=make_key(PROVIDER_ID, app.desktop_id),
            title=app.title,
            provider_id=PROVIDER_ID,
            score=score,
            extras={
                "desktopId": app.desktop_id,
                "iconRef": app.icon,
                "exec": app.exec,
            },
        )

    def search(self, query: str) -> List[ResultItem]:
        q = norm(strip_command_prefix(query or "", self.aliases))
        if not q or q.startswith("/"):
            return []
        scored = self._index.search(q, self.max_results)
        logger.debug("apps search %r -> %s hits", q, len(scored))
        return [self._to_item(app, s) for s, app in scored]

    def preview(self, key: str) -> Optional[Preview]:
        app = self._lookup(key)
        if app is None:
            return None
        return Preview(
            preview_kind="card",
            data={
                "iconRef": app.icon,
                "title": app.name,
                "comment": app.comment,
                "categories": list(app.categories),
                "desktopId": app.desktop_id,
                "path": str(app.desktop_path),
            },
        )

    def execute(self, action: str, key: str) -> bool:
        if action != "launch":
            return False
        app = self._lookup(key)
        if app is None:
            return False
        try:
            self.launcher(app)
        except ProviderError as e:
            logger.warning("launch of %s failed: %s", app.desktop_id, e)
            return False
        logger.info("launched %s", app.desktop_id)
        return True
