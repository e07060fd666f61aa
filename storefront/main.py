# storefront/main.py
from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import get_settings
from storefront.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from storefront.models import user as _user_models  # noqa: F401
from storefront.models import catalog as _catalog_models  # noqa: F401
from storefront.models import cart as _cart_models  # noqa: F401

# Routers
from storefront.routers.cart import router as cart_router
from storefront.routers.catalog import build_catalog_router, format_validation_error
from storefront.routers.users import router as users_router
from storefront.services.catalog_kinds import CATALOG_KINDS

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelope: {"success": false, "message": ...} ---


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": format_validation_error(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Server error"},
    )


# Versioned API prefix, e.g. /api
for kind in CATALOG_KINDS:
    app.include_router(build_catalog_router(kind), prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(users_router, prefix=settings.API_V1_STR)

# Local asset backend: serve the flat upload directory
if settings.ASSET_BACKEND == "local":
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PATH,
        StaticFiles(directory=settings.UPLOAD_DIR),
        name="uploads",
    )


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "storefront-api"}


@app.get(f"{settings.API_V1_STR}/health")
def health():
    return {"success": True, "ok": True}
