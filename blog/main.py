"""FastAPI application entrypoint. No business logic; only wiring, error rendering and startup."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from blog.api import router as api_router
from blog.core.config import settings
from blog.core.database import SessionLocal
from blog.core.errors import AppError
from blog.schemas.common import FieldError, ValidationErrorResponse
from blog.services.seed import seed_roles

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Seed the default roles once before serving requests."""
    if settings.SEED_ROLES_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_roles(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Blog API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_field(loc: tuple) -> str:
    # ("body", "roleId") -> "roleId"; ("body",) -> "body"; ("path", "post_id") -> "post_id"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "body"


def _error_message(error: dict) -> str:
    msg = str(error.get("msg", "Invalid value"))
    return msg.removeprefix("Value error, ")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or missing input: 400 with one entry per failing field."""
    body = ValidationErrorResponse(
        errors=[
            FieldError(field=_error_field(tuple(e.get("loc", ()))), message=_error_message(e))
            for e in exc.errors()
        ]
    )
    logger.info("Validation failed: %s", [e.field for e in body.errors])
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failures are logged with traceback; the client only sees a generic message."""
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


app.include_router(
    api_router,
    prefix=settings.API_PREFIX,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}},
)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Welcome to the Blog API"}
