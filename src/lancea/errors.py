"""Exception types used inside the engine.

None of these cross the wire: provider faults are converted at the provider
boundary, and configuration faults abort startup.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine exceptions."""


class ProviderError(EngineError):
    """A provider hit an internal fault (I/O, parse, subprocess)."""

    def __init__(self, provider_id: str, message: str):
        super().__init__(f"[{provider_id}] {message}")
        self.provider_id = provider_id


class ConfigError(EngineError):
    """Invalid settings or a provider that could not be constructed."""
