# products_server/infra/repo/mongo_repo.py
from __future__ import annotations

import logging
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from products_server.config import Settings
from products_server.domain.errors import StoreUnavailableError
from products_server.domain.models import DeleteAck, InsertAck, Product, UpdateAck
from products_server.domain.ports import ProductRepoPort

log = logging.getLogger("products.store")


class MongoProductRepo(ProductRepoPort):
    """
    Async repository untuk koleksi `product` (satu koleksi, CRUD by `_id`).

    Satu client dipakai bersama oleh semua request; dibuat sekali di startup
    (lihat `from_settings`) dan ditutup saat shutdown.
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str, coll_name: str) -> None:
        self.client = client
        self.db = self.client[db_name]
        self.coll: AsyncIOMotorCollection = self.db[coll_name]

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoProductRepo":
        client = AsyncIOMotorClient(
            settings.mongo_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=settings.timeout_ms,
        )
        return cls(client, settings.db_name, settings.coll_name)

    # ──────────────────────────────────────────────────────────────
    #  Lifecycle
    # ──────────────────────────────────────────────────────────────
    async def ping(self) -> None:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            raise StoreUnavailableError(f"MongoDB ping failed: {e}") from e
        log.info("Pinged MongoDB deployment. Connection verified.")

    async def close(self) -> None:
        self.client.close()
        log.info("MongoDB client closed")

    # ──────────────────────────────────────────────────────────────
    #  CRUD
    # ──────────────────────────────────────────────────────────────
    async def find_all(self) -> List[Product]:
        cursor = self.coll.find()
        return [doc async for doc in cursor]

    async def find_by_id(self, oid: ObjectId) -> Optional[Product]:
        return await self.coll.find_one({"_id": oid})

    async def insert_one(self, doc: Product) -> InsertAck:
        res = await self.coll.insert_one(doc)
        return InsertAck(acknowledged=res.acknowledged, insertedId=str(res.inserted_id))

    async def update_one(self, oid: ObjectId, fields: Product) -> UpdateAck:
        # $set = merge; field yang tidak dikirim tetap utuh. Tanpa upsert.
        res = await self.coll.update_one({"_id": oid}, {"$set": fields}, upsert=False)
        return UpdateAck(
            acknowledged=res.acknowledged,
            matchedCount=res.matched_count,
            modifiedCount=res.modified_count,
            upsertedCount=1 if res.upserted_id is not None else 0,
            upsertedId=str(res.upserted_id) if res.upserted_id is not None else None,
        )

    async def delete_one(self, oid: ObjectId) -> DeleteAck:
        res = await self.coll.delete_one({"_id": oid})
        return DeleteAck(acknowledged=res.acknowledged, deletedCount=res.deleted_count)
