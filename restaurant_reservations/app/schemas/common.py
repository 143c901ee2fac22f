"""
Shared pydantic bases for stored records.

Python code uses snake_case attribute names while the stored JSON uses
camelCase (``ownerId``, ``createdAt``).  Both spellings are accepted on
input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Record(CamelModel):
    """Fields every stored entity carries."""

    id: str
    created_at: datetime
    updated_at: datetime
