# products_server/presentation/routers.py
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from bson import Binary, Code, DBRef, Decimal128, ObjectId, Regex, Timestamp, json_util
from bson.max_key import MaxKey
from bson.min_key import MinKey
from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from products_server.application.product_service import ProductService
from products_server.container import get_product_service
from products_server.domain.errors import InvalidBodyError, ProductError

# ──────────────────────────────────────────────────────────────────────
# Logging
# ──────────────────────────────────────────────────────────────────────
logger = logging.getLogger("products.api")

INTERNAL_ERROR = {"error": "Internal Server Error"}


def _bson_json(value: Any) -> Any:
    # BSON lain (Decimal128, Binary, ...) → relaxed extended JSON, mis. {"$numberDecimal": "9.99"}
    return json.loads(json_util.dumps(value, json_options=json_util.RELAXED_JSON_OPTIONS))


_ENCODERS = {
    ObjectId: str,
    datetime: lambda d: d.isoformat(),
    Decimal128: _bson_json,
    Binary: _bson_json,
    Regex: _bson_json,
    Timestamp: _bson_json,
    Code: _bson_json,
    DBRef: _bson_json,
    MinKey: _bson_json,
    MaxKey: _bson_json,
}


def _json(content: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    content = jsonable_encoder(content, custom_encoder=_ENCODERS)
    return JSONResponse(status_code=status_code, content=content)


def _server_error(action: str) -> JSONResponse:
    # Detail hanya ke log, tidak ke client.
    logger.exception("Error %s", action)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR)


async def json_body(request: Request) -> Any:
    """
    Body parser ala express.json(): body kosong atau content-type bukan JSON → {}.
    Hanya JSON yang rusak ditolak (400).
    """
    raw = await request.body()
    ctype = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if not raw or not (ctype == "application/json" or ctype.endswith("+json")):
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        logger.info("Rejected malformed JSON on %s %s", request.method, request.url.path)
        raise InvalidBodyError()


router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(svc: ProductService = Depends(get_product_service)):
    try:
        products = await svc.list_products()
        return _json(products)
    except ProductError:
        raise
    except Exception:
        return _server_error("fetching products")


@router.get("/{product_id}")
async def get_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    try:
        product = await svc.get_product(product_id)
        return _json(product)
    except ProductError:
        raise
    except Exception:
        return _server_error("fetching product by ID")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    new_product: Any = Depends(json_body),
    svc: ProductService = Depends(get_product_service),
):
    try:
        result = await svc.create_product(new_product)
        logger.info("product created id=%s", result.insertedId)
        return _json(
            {"message": "Product added successfully", "result": result},
            status_code=status.HTTP_201_CREATED,
        )
    except ProductError:
        raise
    except Exception:
        return _server_error("adding product")


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    updated_product: Any = Depends(json_body),
    svc: ProductService = Depends(get_product_service),
):
    try:
        result = await svc.update_product(product_id, updated_product)
        return _json({"message": "Product updated successfully", "result": result})
    except ProductError:
        raise
    except Exception:
        return _server_error("updating product")


@router.delete("/{product_id}")
async def delete_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    try:
        await svc.delete_product(product_id)
        logger.info("product deleted id=%s", product_id)
        return _json({"message": "Product deleted successfully"})
    except ProductError:
        raise
    except Exception:
        return _server_error("deleting product")
