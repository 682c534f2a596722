# products_server/domain/ports.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from bson import ObjectId

from products_server.domain.models import DeleteAck, InsertAck, Product, UpdateAck


class ProductRepoPort(ABC):
    """Kontrak minimal yang dipakai ProductService: satu koleksi, CRUD by _id."""
    @abstractmethod
    async def ping(self) -> None: ...

    @abstractmethod
    async def find_all(self) -> List[Product]: ...

    @abstractmethod
    async def find_by_id(self, oid: ObjectId) -> Optional[Product]: ...

    @abstractmethod
    async def insert_one(self, doc: Product) -> InsertAck: ...

    @abstractmethod
    async def update_one(self, oid: ObjectId, fields: Product) -> UpdateAck: ...

    @abstractmethod
    async def delete_one(self, oid: ObjectId) -> DeleteAck: ...

    async def close(self) -> None:
        return None
