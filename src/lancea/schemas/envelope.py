from __future__ import annotations

import json
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

API_VERSION = "1.0"

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class WireModel(BaseModel):
    """Base for every payload that crosses the bus.

    Internal names are snake_case; the wire uses the camelCase aliases.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Envelope(BaseModel, Generic[T]):
    """Versioned wrapper around every request, response and event payload."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: str = Field(API_VERSION, alias="v")
    data: T

    @classmethod
    def wrap(cls, data: Any) -> "Envelope":
        return cls(data=data)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResolvedCommand(WireModel):
    matched: bool
    provider_id: Optional[str] = Field(None, alias="providerId")
    command_id: Optional[str] = Field(None, alias="commandId")
    # reserved for natural-language resolution, never set by slash rules
    intent: Optional[str] = None
    reason: Optional[str] = None

    @model_validator(mode="after")
    def _matched_shape(self):
        if self.matched:
            if not self.provider_id or not self.command_id:
                raise ValueError("a matched command requires providerId and commandId")
        elif any(v is not None for v in (self.provider_id, self.command_id, self.intent, self.reason)):
            raise ValueError("an unmatched command carries no optional fields")
        return self

    @classmethod
    def unmatched(cls) -> "ResolvedCommand":
        return cls(matched=False)


class ResultItem(WireModel):
    key: str
    title: str
    provider_id: str = Field(..., alias="providerId")
    score: float = Field(..., ge=0.0, le=1.0)
    extras: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _key_routes_to_provider(self):
        # the dispatcher routes on the key prefix, so it must name the provider
        prefix, sep, local = self.key.partition(":")
        if not sep or not local:
            raise ValueError(f"result key '{self.key}' is not '<providerId>:<localId>'")
        if prefix != self.provider_id:
            raise ValueError(f"result key prefix '{prefix}' does not match providerId '{self.provider_id}'")
        return self


class ResetBatch(WireModel):
    kind: Literal["reset"] = "reset"
    items: List[ResultItem] = Field(default_factory=list)


class InsertBatch(WireModel):
    kind: Literal["insert"] = "insert"
    at: int = Field(..., ge=0)
    items: List[ResultItem] = Field(default_factory=list)


class EndBatch(WireModel):
    kind: Literal["end"] = "end"


ResultsBatch = Annotated[Union[ResetBatch, InsertBatch, EndBatch], Field(discriminator="kind")]


class Preview(WireModel):
    preview_kind: Literal["card"] = Field("card", alias="previewKind")
    data: Dict[str, Any] = Field(default_factory=dict)


class Outcome(WireModel):
    status: Literal["ok", "error"]
    message: Optional[str] = None

    @classmethod
    def ok(cls, message: Optional[str] = None) -> "Outcome":
        return cls(status="ok", message=message)

    @classmethod
    def error(cls, message: str) -> "Outcome":
        return cls(status="error", message=message)


# ---------------------------------------------------------------------------
# request arguments (inner ``data`` of request envelopes)
# every field is optional so a partial request degrades to defaults


class RequestArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class ResolveArgs(RequestArgs):
    text: str = ""

    @field_validator("text", mode="before")
    def _text(cls, v):
        return "" if v is None else v


class SearchArgs(RequestArgs):
    text: str = ""
    provider_ids: List[str] = Field(default_factory=list, alias="providerIds")
    epoch: Optional[int] = Field(None, ge=0, lt=2**64)

    @field_validator("text", mode="before")
    def _text(cls, v):
        return "" if v is None else v

    @field_validator("provider_ids", mode="before")
    def _provider_ids(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class CancelArgs(RequestArgs):
    epoch: Optional[int] = Field(None, ge=0, lt=2**64)
    token: Optional[int] = Field(None, ge=0, lt=2**64)


class PreviewArgs(RequestArgs):
    provider_id: Optional[str] = Field(None, alias="providerId")
    key: str = ""
    epoch: Optional[int] = Field(None, ge=0, lt=2**64)

    @field_validator("key", mode="before")
    def _key(cls, v):
        return "" if v is None else v


class ExecuteArgs(RequestArgs):
    action: str = ""
    key: str = ""
    provider_id: Optional[str] = Field(None, alias="providerId")

    @model_validator(mode="before")
    def _action_alias(cls, data):
        # older clients send ``actionId``
        if isinstance(data, dict) and "action" not in data and "actionId" in data:
            data = {**data, "action": data["actionId"]}
        return data

    @field_validator("action", "key", mode="before")
    def _strs(cls, v):
        return "" if v is None else v


def decode_envelope(raw: str | bytes | None, model: Type[M]) -> Envelope:
    """Decode a request envelope, falling back to ``Envelope(data=model())``.

    Never raises: invalid JSON, a missing ``v``/``data`` pair or a ``data``
    payload that fails validation all yield the empty-data envelope so the
    operation can carry on with its default behaviour.
    """
    fallback = Envelope(data=model())
    if raw is None:
        return fallback
    try:
        doc = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning("undecodable envelope for %s: %s", model.__name__, e)
        return fallback
    if not isinstance(doc, dict) or not isinstance(doc.get("v"), str) or "data" not in doc:
        logger.warning("malformed envelope for %s: %r", model.__name__, doc)
        return fallback
    if doc["v"] != API_VERSION:
        logger.debug("envelope version %s differs from %s", doc["v"], API_VERSION)
    try:
        data = model.model_validate(doc["data"] if doc["data"] is not None else {})
    except ValidationError as e:
        logger.warning("invalid %s payload, using defaults: %s", model.__name__, e.errors())
        return fallback
    return Envelope(version=doc["v"], data=data)
