from __future__ import annotations

from typing import Mapping

from lancea.dispatcher import Dispatcher, EventSink
from lancea.orchestrator import CancellationRegistry, SearchOrchestrator
from lancea.providers.base import Provider
from lancea.registry import CommandRegistry
from lancea.schemas.envelope import (
    CancelArgs,
    Envelope,
    ExecuteArgs,
    PreviewArgs,
    ResolveArgs,
    SearchArgs,
    decode_envelope,
)
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)


class Engine:
    """Transport-agnostic engine surface.

    Each method takes the raw envelope text a client sent. Streamed events go
    through the ``emit`` callback before the method returns. Bad input never
    raises; it degrades to the operation's default behaviour.
    """

    def __init__(
        self,
        providers: Mapping[str, Provider],
        default_provider_id: str,
        registry: CommandRegistry | None = None,
        timeout_s: float = 2.0,
        max_workers: int = 8,
    ):
        self.registry = registry or CommandRegistry()
        self.orchestrator = SearchOrchestrator(
            providers,
            default_provider_id,
            timeout_s=timeout_s,
            max_workers=max_workers,
            cancellations=CancellationRegistry(),
        )
        self.dispatcher = Dispatcher(self.orchestrator.providers)

    @property
    def providers(self) -> Mapping[str, Provider]:
        return self.orchestrator.providers

    def resolve_command(self, raw: str | bytes | None) -> str:
        args = decode_envelope(raw, ResolveArgs)
        return Envelope(data=self.registry.resolve(args.data.text)).to_json()

    def search(self, raw: str | bytes | None, emit: EventSink) -> int:
        return self.orchestrator.search(decode_envelope(raw, SearchArgs), emit)

    def cancel(self, raw: str | bytes | None) -> None:
        self.orchestrator.cancel(decode_envelope(raw, CancelArgs))

    def request_preview(self, raw: str | bytes | None, emit: EventSink) -> None:
        self.dispatcher.request_preview(decode_envelope(raw, PreviewArgs), emit)

    def execute(self, raw: str | bytes | None) -> str:
        return self.dispatcher.execute(decode_envelope(raw, ExecuteArgs)).to_json()

    def close(self) -> None:
        self.orchestrator.close()
