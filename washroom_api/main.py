import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Registers the tables on Base.metadata
from . import models  # noqa: F401
from . import schema_upgrade
from .auth import MISSING_TOKEN_DETAIL
from .config import RATE_LIMIT_ENABLED
from .database import Base, engine
from .domain.businesses import router as businesses_router
from .domain.cleaning_logs import router as cleaning_logs_router
from .domain.issues import router as issues_router
from .domain.washrooms import router as washrooms_router
from .routes.cron import router as cron_router
from .routes.email import router as email_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

for noisy in ("httpx", "httpcore"):
    logging.getLogger(noisy).setLevel(logging.WARNING)


def _prepare_database() -> None:
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("🗄️ Tables ready")
    except Exception as e:
        # Another worker process may have won the CREATE race
        if "already exists" in str(e) or "duplicate key" in str(e):
            logger.info("🗄️ Tables already created by another process")
        else:
            logger.error(f"❌ Could not create tables: {e}")

    try:
        added = schema_upgrade.upgrade(engine)
    except Exception as e:
        logger.error(f"❌ Column upgrade failed: {e}")
    else:
        if added:
            logger.info(f"🗄️ Added columns: {', '.join(added)}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Acadia Clean API starting")
    _prepare_database()

    if RATE_LIMIT_ENABLED:
        from .rate_limiter import get_redis_client

        try:
            get_redis_client()
        except Exception as e:
            logger.warning(f"⚠️ Redis unavailable, rate limits are per process: {e}")

    yield
    logger.info("👋 Acadia Clean API stopped")


app = FastAPI(title="Acadia Clean API", version="1.0.0", lifespan=lifespan)


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """exc.errors() with ctx values (which may hold exception objects) turned into strings"""
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        errors.append(error)
    return errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """A missing or malformed Authorization header is an auth failure, not a 422"""
    if any("authorization" in str(err.get("loc", "")).lower() for err in exc.errors()):
        logger.warning(f"🔒 {request.url.path}: no usable Authorization header")
        return JSONResponse(status_code=401, content={"detail": MISSING_TOKEN_DETAIL})

    logger.warning(f"Rejected payload for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"💥 {request.method} {request.url.path} failed: {e}")
        raise


ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS",
        "https://app.acadiacleaniq.ca,http://localhost:8081,http://localhost:3000",
    ).split(",")
    if origin.strip()
]
logger.info(f"CORS origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

for router in (
    washrooms_router,
    cleaning_logs_router,
    businesses_router,
    issues_router,
    cron_router,
    email_router,
):
    app.include_router(router)


@app.get("/")
def root():
    return {"message": "Acadia Clean API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
