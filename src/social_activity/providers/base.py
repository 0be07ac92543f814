"""Provider interfaces and the shared per-record conversion loop."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import logging
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from social_activity.errors import SchemaError, TimestampParseError, TransportError
from social_activity.models import ActivityItem

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ProviderBatch:
    items: tuple[ActivityItem, ...]
    dropped: int = 0


class Provider(Protocol):
    name: str

    def fetch(self) -> ProviderBatch:
        """Fetch provider records and convert them to activity items."""


def convert_records(
    provider: str,
    records: Iterable[Any],
    convert: Callable[[Any], ActivityItem],
) -> ProviderBatch:
    """Convert each record independently; a bad record is logged and skipped."""
    items: list[ActivityItem] = []
    dropped = 0
    for index, record in enumerate(records):
        try:
            items.append(convert(record))
        except (SchemaError, TimestampParseError) as exc:
            dropped += 1
            logger.warning("item_dropped provider=%s index=%d reason=%s", provider, index, exc)
    logger.info("provider_converted provider=%s items=%d dropped=%d", provider, len(items), dropped)
    return ProviderBatch(items=tuple(items), dropped=dropped)


def validate_record(model: type[ModelT], raw: Any) -> ModelT:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) or "<root>" for error in exc.errors())
        raise SchemaError(f"{model.__name__} schema mismatch at {fields}") from exc


def expect_list(payload: Any, provider: str) -> list[Any]:
    if not isinstance(payload, list):
        raise TransportError(
            f"{provider} response must be a JSON array, got {type(payload).__name__}."
        )
    return payload
