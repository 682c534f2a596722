# main.py
from dotenv import load_dotenv
load_dotenv()

import os
import sys
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from products_server.config import Settings, parse_origins
from products_server.domain.errors import ConfigError, ProductError, StoreUnavailableError
from products_server.domain.ports import ProductRepoPort
from products_server.infra.repo.mongo_repo import MongoProductRepo
from products_server.presentation.health import router as health_router
from products_server.presentation.routers import router as products_router

# --- logging config HARUS di atas ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# gunakan logger aplikasi sendiri, bukan 'uvicorn.access'
logger = logging.getLogger("products")
app_logger = logging.getLogger("products.request")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: bangun client Mongo sekali + ping. Gagal = proses tidak melayani.
    Repo yang di-inject lewat create_app(repo=...) dipakai apa adanya.
    """
    owned: MongoProductRepo | None = None
    if app.state.repo is None:
        settings = app.state.settings or Settings.from_env()
        owned = MongoProductRepo.from_settings(settings)
        try:
            await owned.ping()
        except StoreUnavailableError:
            logger.exception("Error connecting to MongoDB")
            await owned.close()
            raise
        app.state.repo = owned
        logger.info("Connected to MongoDB successfully! db=%s coll=%s",
                    settings.db_name, settings.coll_name)
    try:
        yield
    finally:
        if owned is not None:
            await owned.close()
            app.state.repo = None


async def _product_error_handler(request: Request, exc: ProductError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(settings: Settings | None = None, repo: ProductRepoPort | None = None) -> FastAPI:
    app = FastAPI(
        title="Products Server",
        version=os.getenv("APP_VERSION", "1.0.0"),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repo = repo

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        app_logger.info(f"Incoming {request.method} {request.url.path}")
        try:
            response = await call_next(request)
            app_logger.info(f"Completed {request.method} {request.url.path} -> {response.status_code}")
            return response
        except Exception:
            app_logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            raise

    # ─────────────────────────────────────────────────────────────
    # CORS (atur via env: CORS_ALLOW_ORIGINS="https://foo.com,https://bar.com")
    # ─────────────────────────────────────────────────────────────
    origins = settings.cors_origins if settings else parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*"))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProductError, _product_error_handler)

    # ─────────────────────────────────────────────────────────────
    # Routes
    # ─────────────────────────────────────────────────────────────
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Products Server is Running"

    app.include_router(health_router)
    app.include_router(products_router)

    return app


app = create_app()


def run() -> None:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logger.error("Error: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.info("Products Server is Running On Port: %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
