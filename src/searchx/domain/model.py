"""Document entity stored by the in-memory engine.

Documents are identified by ``id`` and replaced wholesale; there is no partial
field update. Pydantic validates the field map at construction so every stored
value belongs to the JSON value union.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from searchx.domain.values import Value


class Document(BaseModel):
    """A single stored record: a unique id plus a map of dynamic field values."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    fields: dict[str, Value] = Field(default_factory=dict)
