from __future__ import annotations

from abc import abstractmethod
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .envelope import Envelope


EventType = Literal[
    "ResultsUpdated",
    "PreviewUpdated",
    "PreviewError",
]


class BaseEvent(BaseModel):
    """A signal emitted as a side effect of an engine call.

    ``args`` renders the signal's positional arguments the way the bus
    carries them: scalars first, the payload envelope last as JSON text.
    """

    model_config = ConfigDict(frozen=True)

    type: EventType
    epoch: int = Field(..., ge=0)
    provider_id: str

    @abstractmethod
    def args(self) -> List[Any]:
        """Positional signal arguments; each concrete event defines its own."""

    def to_signal(self) -> dict:
        return {"signal": self.type, "args": self.args()}


class ResultsUpdated(BaseEvent):
    type: Literal["ResultsUpdated"] = "ResultsUpdated"
    token: int = Field(..., ge=0)
    # Envelope[ResultsBatch]
    batch: Envelope

    def args(self) -> List[Any]:
        return [self.epoch, self.provider_id, self.token, self.batch.to_json()]


class PreviewUpdated(BaseEvent):
    type: Literal["PreviewUpdated"] = "PreviewUpdated"
    key: str
    # Envelope[Preview]
    preview: Envelope

    def args(self) -> List[Any]:
        return [self.epoch, self.provider_id, self.key, self.preview.to_json()]


class PreviewFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Literal["unknown_provider", "not_found"]
    message: str
    key: str


class PreviewError(BaseEvent):
    type: Literal["PreviewError"] = "PreviewError"
    # Envelope[PreviewFailure]
    error: Envelope

    def args(self) -> List[Any]:
        return [self.epoch, self.provider_id, self.error.to_json()]
