"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status; database is reported as disconnected rather than failing the check."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    service: str = Field(description="Service name")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a trivial query against the configured database",
    )
