"""
JSON codec for stored collections.

Collections are stored as a JSON list of objects using camelCase field
names and ISO-8601 timestamps, the layout written by the
existing mobile application.  Decoding validates every item against the
collection's pydantic model; anything that does not fit raises
``DecodeError`` instead of being repaired.
"""

import json
from typing import List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError


ModelT = TypeVar("ModelT", bound=BaseModel)


def _dump(record: BaseModel) -> dict:
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode_collection(records: Sequence[BaseModel]) -> str:
    """Serialise a list of records to the stored text form."""
    return json.dumps([_dump(record) for record in records], ensure_ascii=False)


def decode_collection(key: str, raw: str, model: Type[ModelT]) -> List[ModelT]:
    """Parse the text stored under ``key`` into a list of ``model``."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(key, f"invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise DecodeError(key, f"expected a list, got {type(data).__name__}")
    try:
        return [model.model_validate(item) for item in data]
    except PydanticValidationError as e:
        raise DecodeError(key, str(e)) from e


def encode_record(record: Optional[BaseModel]) -> str:
    """Serialise a single record; ``None`` becomes the JSON ``null`` literal."""
    if record is None:
        return "null"
    return json.dumps(_dump(record), ensure_ascii=False)


def decode_record(key: str, raw: str, model: Type[ModelT]) -> Optional[ModelT]:
    """Parse a single record, returning ``None`` for ``null``."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(key, f"invalid JSON ({e})") from e
    if data is None:
        return None
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise DecodeError(key, str(e)) from e
