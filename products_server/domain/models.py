# products_server/domain/models.py
from typing import Any, Dict

from pydantic import BaseModel

# Products themselves are schema-less; only the store acknowledgments are typed.
Product = Dict[str, Any]


class InsertAck(BaseModel):
    acknowledged: bool = True
    insertedId: str


class UpdateAck(BaseModel):
    acknowledged: bool = True
    matchedCount: int
    modifiedCount: int
    upsertedCount: int = 0
    upsertedId: str | None = None


class DeleteAck(BaseModel):
    acknowledged: bool = True
    deletedCount: int
