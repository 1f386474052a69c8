"""Wire representation of persisted records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from src.library.core.validation.schema import EntitySchema

PASSWORD_MASK = "*********"


def shape(schema: EntitySchema, record: BaseModel) -> dict[str, Any]:
    """Serialize a single record, masking the schema's redacted fields."""
    payload = record.model_dump(mode="json")
    for name in schema.redacted:
        if name in payload:
            payload[name] = PASSWORD_MASK
    return payload


def shape_many(schema: EntitySchema, records: Iterable[BaseModel]) -> list[dict[str, Any]]:
    """Serialize records for list responses, omitting redacted fields."""
    return [
        record.model_dump(mode="json", exclude=set(schema.redacted))
        for record in records
    ]
