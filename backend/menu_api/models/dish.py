"""
Menu API — Dish and Sequence Counter Models
=============================================

What:  ORM models for the `dishes` and `sequence_counters` tables.
Who:   Used by DishService for reads/writes and by Alembic for the schema.

Identifiers:
    id             Native identifier. UUID generated on insert, never reused.
    sequential_id  Application-level integer handed out by the dish
                   sequence counter. Unique when present; legacy rows may
                   have none.

The `sequence_counters` table holds one row per named sequence. Its `value`
column is the last number handed out, and it is only ever changed through a
single atomic UPDATE ... RETURNING (see DishService._allocate_sequential_ids).
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Integer, Numeric, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from menu_api.config import DEFAULT_DISH_IMAGE
from menu_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Dish(Base):
    """
    A menu item.

    Lifecycle:
        Created by single or bulk create. Never updated or deleted by the
        service; removal is an out-of-band administrative action.

    Query Patterns:
        - List:  ORDER BY sequential_id ASC NULLS LAST, id ASC
        - Get:   WHERE id = :uuid  or  WHERE sequential_id = :n
    """

    __tablename__ = "dishes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Native identifier assigned on insert",
    )

    sequential_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        unique=True,
        comment="Application-level sequential identifier",
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    image: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default=DEFAULT_DISH_IMAGE,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<Dish(id={self.id}, sequential_id={self.sequential_id}, "
            f"name='{self.name}')>"
        )


class SequenceCounter(Base):
    """Last value handed out for a named sequence (e.g. 'dishes')."""

    __tablename__ = "sequence_counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SequenceCounter(name='{self.name}', value={self.value})>"
