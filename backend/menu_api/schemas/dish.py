"""
Menu API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract with the frontend.
How:   DishCreate validates a single candidate dish (the service decides what
       happens to candidates that fail). Response models serialize ORM rows.

Schemas are separate from the SQLAlchemy models so the API contract can
change independently of the table layout.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class DishCreate(BaseModel):
    """
    What:  One candidate dish, from POST /api/dishes (object or array item).

    Fields:
        name:         Required, trimmed, non-empty
        price:        Required, number or numeric string, >= 0, two decimals
        description:  Optional, defaults to ""
        image:        Optional, None means "use the placeholder image"
    """
    name: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(default="")
    image: Optional[str] = Field(default=None, max_length=500)

    model_config = {"extra": "ignore", "str_strip_whitespace": True}

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v):
        return "" if v is None else v

    @field_validator("image", mode="before")
    @classmethod
    def blank_image_is_default(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AdminLoginRequest(BaseModel):
    """Credentials posted to /api/admin-login."""
    email: str = Field(description="Admin email address")
    password: str = Field(description="Admin password")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class DishResponse(BaseModel):
    """
    What:  Full representation of a stored dish.
    Who:   Returned by every /api/dishes endpoint.

    `price` is a Decimal and serializes as a string with two decimals
    ("14.99", "9.00"), matching what NUMERIC(10,2) stores.
    """
    id: uuid.UUID = Field(description="Native identifier (UUID)")
    sequential_id: Optional[int] = Field(
        default=None,
        description="Sequential identifier; null for legacy records",
    )
    name: str
    price: Decimal
    description: str
    image: str
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values; they were stored as UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("price")
    @classmethod
    def two_decimal_places(cls, v: Decimal) -> Decimal:
        return v.quantize(Decimal("0.01"))


class AdminLoginResponse(BaseModel):
    message: str = Field(default="Login successful")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "dish with ID '42' was not found",
            "details": null,
            "request_id": "3f2a9c1e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for container and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
