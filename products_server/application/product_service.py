# products_server/application/product_service.py
from __future__ import annotations

from typing import Any, Dict, List

from bson import ObjectId

from products_server.domain.errors import (
    InvalidProductIdError,
    NoProductsFoundError,
    ProductNotFoundError,
)
from products_server.domain.models import InsertAck, Product, UpdateAck
from products_server.domain.ports import ProductRepoPort
from products_server.domain.validators import is_valid_product_id


def _parse_id(product_id: str) -> ObjectId:
    # Validasi sebelum menyentuh store.
    if not is_valid_product_id(product_id):
        raise InvalidProductIdError()
    return ObjectId(product_id)


class ProductService:
    """
    Use case CRUD produk. Tiap operasi = satu panggilan repo.
    Error domain (400/404) dilempar sebagai ProductError; error lain dibiarkan
    naik ke boundary route.
    """

    def __init__(self, repo: ProductRepoPort):
        self.repo = repo

    async def list_products(self) -> List[Product]:
        products = await self.repo.find_all()
        if not products:
            raise NoProductsFoundError()
        return products

    async def get_product(self, product_id: str) -> Product:
        doc = await self.repo.find_by_id(_parse_id(product_id))
        if not doc:
            raise ProductNotFoundError()
        return doc

    async def create_product(self, doc: Dict[str, Any]) -> InsertAck:
        return await self.repo.insert_one(doc)

    async def update_product(self, product_id: str, fields: Dict[str, Any]) -> UpdateAck:
        oid = _parse_id(product_id)
        result = await self.repo.update_one(oid, fields)
        if result.matchedCount == 0:
            raise ProductNotFoundError()
        return result

    async def delete_product(self, product_id: str) -> None:
        oid = _parse_id(product_id)
        result = await self.repo.delete_one(oid)
        if result.deletedCount == 0:
            raise ProductNotFoundError()
