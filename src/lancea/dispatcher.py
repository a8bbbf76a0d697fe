from __future__ import annotations

from typing import Callable, Mapping, Optional

from lancea.providers.base import Provider, split_key
from lancea.schemas.envelope import Envelope, ExecuteArgs, Outcome, PreviewArgs
from lancea.schemas.events import BaseEvent, PreviewError, PreviewFailure, PreviewUpdated
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

EventSink = Callable[[BaseEvent], None]


class Dispatcher:
    """Routes preview and execute requests to the provider named by the key prefix."""

    def __init__(self, providers: Mapping[str, Provider]):
        self._providers = providers

    def provider_for(self, key: str) -> tuple[str, Optional[Provider]]:
        provider_id, _ = split_key(key)
        return provider_id, self._providers.get(provider_id)

    def request_preview(self, args: Envelope, emit: EventSink) -> None:
        data: PreviewArgs = args.data
        if not data.key:
            return
        epoch = data.epoch or 0
        provider_id, provider = self.provider_for(data.key)
        if provider is None:
            logger.debug("preview for %s: unknown provider %r", data.key, provider_id)
            emit(PreviewError(
                epoch=epoch,
                provider_id=provider_id,
                error=Envelope(data=PreviewFailure(code="unknown_provider", message=f"unknown provider: {provider_id}", key=data.key)),
            ))
            return
        preview = provider.preview(data.key)
        if preview is None:
            emit(PreviewError(
                epoch=epoch,
                provider_id=provider_id,
                error=Envelope(data=PreviewFailure(code="not_found", message=f"no preview for {data.key}", key=data.key)),
            ))
            return
        emit(PreviewUpdated(epoch=epoch, provider_id=provider_id, key=data.key, preview=Envelope(data=preview)))

    def execute(self, args: Envelope) -> Envelope:
        data: ExecuteArgs = args.data
        if not data.key:
            return Envelope(data=Outcome.error("missing key"))
        provider_id, provider = self.provider_for(data.key)
        if provider is None:
            return Envelope(data=Outcome.error(f"unknown provider: {provider_id}"))
        if provider.execute(data.action, data.key):
            logger.debug("executed %s on %s", data.action, data.key)
            return Envelope(data=Outcome.ok())
        return Envelope(data=Outcome.error(f"action '{data.action}' failed for key '{data.key}'"))
