from __future__ import annotations

from typing import Callable, Optional

import pyperclip

from lancea.errors import ConfigError, ProviderError
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

ClipboardWriter = Callable[[str], None]

# names accepted by pyperclip.set_clipboard
BACKENDS = ("pbcopy", "pyobjc", "qt", "xclip", "xsel", "wl-clipboard", "klipper", "windows")


class SystemClipboard:
    """Writes copied text to the desktop clipboard through pyperclip.

    ``backend`` pins one of pyperclip's mechanisms (e.g. ``wl-clipboard``);
    without it pyperclip picks one on first use.
    """

    def __init__(self, backend: str | None = None):
        self.backend = backend
        if backend:
            pyperclip.set_clipboard(backend)

    def __call__(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ProviderError("clipboard", f"clipboard write failed: {e}") from e


def create_clipboard(name: Optional[str]) -> Optional[ClipboardWriter]:
    """Clipboard writer for a ``LANCEA_CLIPBOARD`` value.

    ``none`` (or empty) means the client copies the text itself from the
    result extras; ``auto`` lets pyperclip choose; anything else must name a
    pyperclip backend.
    """
    n = (name or "").strip().lower()
    if n in ("", "none", "off"):
        return None
    if n == "auto":
        return SystemClipboard()
    if n not in BACKENDS:
        raise ConfigError(f"unknown clipboard backend {name!r}, expected one of: auto, none, {', '.join(BACKENDS)}")
    logger.debug("clipboard backend: %s", n)
    return SystemClipboard(n)
