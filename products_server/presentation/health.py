# products_server/presentation/health.py
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from products_server.container import get_product_repo
from products_server.domain.ports import ProductRepoPort

log = logging.getLogger("products.health")

router = APIRouter(tags=["health"])

@router.get("/healthz")
async def healthz():
    return {"ok": True}

@router.get("/readyz")
async def readyz(repo: ProductRepoPort = Depends(get_product_repo)):
    checks = {}; ok = True
    # Mongo (error detail hanya ke log)
    try:
        await repo.ping()
        checks["mongo"] = True
    except Exception:
        log.exception("readyz: mongo ping failed")
        checks["mongo"] = False; ok = False
    code = status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content={"ok": ok, **checks})
