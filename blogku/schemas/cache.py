from typing import Any

from pydantic import BaseModel, Field


class CacheHealthResponse(BaseModel):
    """Cache health block of the health check."""

    backend: str
    status: str
    statistics: dict[str, Any]
    latency_ms: float | None = None
    error: str | None = None


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(description="API version")
    status: str = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    database: str = Field(description="Database connectivity")
    cache: CacheHealthResponse | None = Field(default=None, description="Cache health information")
