import os
from pathlib import Path
from typing import List

import pytest

# tests/conftest.py

DATA_APPS = Path(__file__).parent / "data" / "applications"

# the app module builds its providers at import; point it at the fixture tree
os.environ.setdefault("LANCEA_PROVIDERS", "emoji,apps")
os.environ.setdefault("LANCEA_DEFAULT_PROVIDER", "apps")
os.environ["LANCEA_APPS_DIRS"] = str(DATA_APPS)
os.environ.setdefault("LANCEA_LAUNCH_CMD", "true")

from lancea.engine import Engine  # noqa: E402
from lancea.providers.apps import AppsProvider  # noqa: E402
from lancea.providers.base import guard_provider  # noqa: E402
from lancea.providers.emoji import EmojiProvider  # noqa: E402


class RecordingSink:
    """Captures emitted events in order, standing in for the bus."""

    def __init__(self):
        self.events: List = []

    def __call__(self, evt):
        self.events.append(evt)

    def of_type(self, name: str):
        return [e for e in self.events if e.type == name]

    def batches(self):
        return [e.batch.data for e in self.of_type("ResultsUpdated")]


class RecordingLauncher:
    def __init__(self):
        self.launched: List[str] = []

    def __call__(self, app):
        self.launched.append(app.desktop_id)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def apps_dir() -> Path:
    return DATA_APPS


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def emoji_provider() -> EmojiProvider:
    return EmojiProvider()


@pytest.fixture
def apps_provider(apps_dir, launcher) -> AppsProvider:
    return AppsProvider(dirs=[apps_dir], launcher=launcher, lang="C")


@pytest.fixture
def engine(emoji_provider, apps_provider):
    """Engine over both reference providers, defaulting to apps."""
    providers = {p.id: guard_provider(p) for p in (emoji_provider, apps_provider)}
    eng = Engine(providers, "apps", timeout_s=2.0)
    yield eng
    eng.close()


def write_desktop(dirpath: Path, name: str, body: str) -> Path:
    dirpath.mkdir(parents=True, exist_ok=True)
    p = dirpath / name
    p.write_text(body, encoding="utf-8")
    return p
