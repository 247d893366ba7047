"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Body of GET /api/health."""

    status: Literal["ok"] = "ok"
    service: str = "blog-api"
    environment: str = Field(description="APP_ENV (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a trivial query against the configured database",
    )
