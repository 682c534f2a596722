# tests/conftest.py
from typing import Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from main import create_app
from products_server.domain.models import DeleteAck, InsertAck, UpdateAck
from products_server.domain.ports import ProductRepoPort


class InMemoryProductRepo(ProductRepoPort):
    """Fake store; mirrors Mongo's $set-merge and no-upsert semantics."""

    def __init__(self, fail: bool = False):
        self.docs: Dict[ObjectId, dict] = {}
        self.calls: List[str] = []
        self.fail = fail

    def _touch(self, name: str):
        self.calls.append(name)
        if self.fail:
            raise RuntimeError("connection reset by peer")

    async def ping(self) -> None:
        self._touch("ping")

    async def find_all(self) -> List[dict]:
        self._touch("find_all")
        return [dict(d) for d in self.docs.values()]

    async def find_by_id(self, oid: ObjectId) -> Optional[dict]:
        self._touch("find_by_id")
        doc = self.docs.get(oid)
        return dict(doc) if doc else None

    async def insert_one(self, doc: dict) -> InsertAck:
        self._touch("insert_one")
        oid = ObjectId()
        self.docs[oid] = {**doc, "_id": oid}
        return InsertAck(insertedId=str(oid))

    async def update_one(self, oid: ObjectId, fields: dict) -> UpdateAck:
        self._touch("update_one")
        doc = self.docs.get(oid)
        if doc is None:
            return UpdateAck(matchedCount=0, modifiedCount=0)
        changed = any(doc.get(k) != v for k, v in fields.items())
        doc.update(fields)
        return UpdateAck(matchedCount=1, modifiedCount=1 if changed else 0)

    async def delete_one(self, oid: ObjectId) -> DeleteAck:
        self._touch("delete_one")
        return DeleteAck(deletedCount=1 if self.docs.pop(oid, None) is not None else 0)


@pytest.fixture
def repo():
    return InMemoryProductRepo()


@pytest.fixture
def client(repo):
    return TestClient(create_app(repo=repo))


@pytest.fixture
def broken_client():
    return TestClient(create_app(repo=InMemoryProductRepo(fail=True)))
