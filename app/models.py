"""Pydantic models documenting the response payloads.

Product records are proxied as-is, so these models describe the shape for the
OpenAPI schema; they are not used to validate upstream data.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    title: str | None = None
    slug: str | None = None
    price: float | None = None
    description: str | None = None
    category: dict[str, Any] | None = None
    images: list[str] | None = None


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable error message")


class HealthResponse(BaseModel):
    status: str
    upstream: str
