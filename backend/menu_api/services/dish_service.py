"""
Menu API — Dish Service (Repository Operations)
=================================================

What:  List, fetch and create dishes; owns sequential-ID allocation.
How:   Each method receives the request's AsyncSession. Storage failures are
       logged with their cause and re-raised as StorageError. Validation and
       lookup failures raise ValidationError, MalformedIdentifierError or
       NotFoundError before or instead of touching the database.
Who:   Called by route handlers and by the seed command.

Sequential-ID Allocation:
    The 'dishes' row of sequence_counters holds the last ID handed out.
    Reserving n IDs is one statement:

        UPDATE sequence_counters SET value = value + :n
        WHERE name = 'dishes' RETURNING value

    The reserved block is (value - n + 1 .. value). The updated row stays
    locked until the request transaction ends, so concurrent creators queue
    behind each other and never see the same value. A rolled-back request
    also rolls back its reservation.

    The first allocation creates the row inside a savepoint, seeded from the
    highest existing sequential_id. If another creator inserted the row
    first, the savepoint is discarded and the increment is repeated.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from menu_api.config import settings
from menu_api.exceptions import (
    MalformedIdentifierError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from menu_api.models.dish import Dish, SequenceCounter
from menu_api.schemas.dish import DishCreate, DishResponse
from menu_api.services.identifiers import (
    NativeId,
    SequentialId,
    parse_dish_identifier,
)

logger = logging.getLogger(__name__)

DISH_SEQUENCE = "dishes"

# sequential_id is a 32-bit INTEGER column
_SEQUENTIAL_ID_MIN = -(2**31)
_SEQUENTIAL_ID_MAX = 2**31 - 1


def _missing_required_fields(payload: Dict[str, Any]) -> List[str]:
    """Names of required fields that are absent, null or blank."""
    missing = []
    for field in ("name", "price"):
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


class DishService:
    """
    Business logic layer for dish operations.

    Responsibilities:
        - list_dishes():    every dish, ordered by sequential_id
        - get_dish():       lookup by UUID or sequential_id
        - create_dish():    validate, allocate one ID, insert
        - create_dishes():  filter invalid candidates, allocate a block, insert all
    """

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_dishes(self, db: AsyncSession) -> List[DishResponse]:
        """
        Return all dishes ordered by sequential_id ascending.

        Rows without a sequential_id come last; the native id breaks ties
        so the order is stable.
        """
        try:
            result = await db.execute(
                select(Dish).order_by(
                    Dish.sequential_id.asc().nulls_last(),
                    Dish.id.asc(),
                )
            )
            dishes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing dishes: %s", str(e), exc_info=True)
            raise StorageError(
                message="Failed to fetch dishes",
                context={"operation": "list_dishes", "error_type": type(e).__name__},
            )

        return [DishResponse.model_validate(dish) for dish in dishes]

    async def get_dish(self, db: AsyncSession, identifier: str) -> DishResponse:
        """
        Fetch one dish by native UUID or by sequential_id.

        Raises:
            MalformedIdentifierError: identifier is neither form (→ 400)
            NotFoundError: no dish matches (→ 404)
            StorageError: query failed (→ 500)
        """
        parsed = parse_dish_identifier(identifier)

        if isinstance(parsed, SequentialId):
            if not _SEQUENTIAL_ID_MIN <= parsed.value <= _SEQUENTIAL_ID_MAX:
                raise NotFoundError(resource="dish", resource_id=identifier)
            query = select(Dish).where(Dish.sequential_id == parsed.value)
        elif isinstance(parsed, NativeId):
            query = select(Dish).where(Dish.id == parsed.value)
        else:
            raise MalformedIdentifierError(identifier)

        try:
            result = await db.execute(query)
            dish = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching dish %s: %s", identifier, str(e))
            raise StorageError(
                message="Failed to fetch dish",
                context={"operation": "get_dish", "identifier": identifier},
            )

        if dish is None:
            raise NotFoundError(resource="dish", resource_id=identifier)

        return DishResponse.model_validate(dish)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_dish(self, db: AsyncSession, payload: Any) -> DishResponse:
        """
        Validate and persist a single dish.

        Raises:
            ValidationError: name or price missing, or a field is malformed
            StorageError: allocation or insert failed
        """
        candidate = self._validate_candidate(payload)
        dishes = await self._persist(db, [candidate])
        logger.info("Created dish %s (sequential_id=%d)", dishes[0].id, dishes[0].sequential_id)
        return DishResponse.model_validate(dishes[0])

    async def create_dishes(
        self, db: AsyncSession, payloads: Sequence[Any]
    ) -> List[DishResponse]:
        """
        Persist every valid candidate of a bulk request, in input order.

        Invalid candidates are dropped. If none survive the whole request
        fails and nothing is written. Survivors get consecutive
        sequential IDs and are inserted in one transaction.
        """
        candidates: List[DishCreate] = []
        for payload in payloads:
            try:
                candidates.append(self._validate_candidate(payload))
            except ValidationError:
                continue

        dropped = len(payloads) - len(candidates)
        if not candidates:
            raise ValidationError(
                message="No valid dishes found",
                context={"received": len(payloads)},
            )
        if dropped:
            logger.warning("Bulk create dropped %d invalid dish(es) of %d", dropped, len(payloads))

        dishes = await self._persist(db, candidates)
        logger.info(
            "Bulk created %d dish(es) (sequential_id %d..%d)",
            len(dishes),
            dishes[0].sequential_id,
            dishes[-1].sequential_id,
        )
        return [DishResponse.model_validate(dish) for dish in dishes]

    # ── Internals ─────────────────────────────────────────────────────────

    def _validate_candidate(self, payload: Any) -> DishCreate:
        if not isinstance(payload, dict):
            raise ValidationError(
                message="Each dish must be a JSON object",
                context={"received_type": type(payload).__name__},
            )

        missing = _missing_required_fields(payload)
        if missing:
            raise ValidationError(
                message="Name and Price are required",
                context={"missing": missing},
            )

        try:
            return DishCreate.model_validate(payload)
        except PydanticValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                }
                for err in e.errors()
            ]
            raise ValidationError(
                message="Invalid dish fields: " + ", ".join(err["field"] for err in errors),
                context={"errors": errors},
            )

    async def _persist(self, db: AsyncSession, candidates: List[DishCreate]) -> List[Dish]:
        try:
            first_id = await self._allocate_sequential_ids(db, len(candidates))
            dishes = [
                Dish(
                    sequential_id=first_id + offset,
                    name=candidate.name,
                    price=candidate.price,
                    description=candidate.description or "",
                    image=candidate.image or settings.default_dish_image,
                )
                for offset, candidate in enumerate(candidates)
            ]
            db.add_all(dishes)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error saving %d dish(es): %s", len(candidates), str(e), exc_info=True)
            raise StorageError(
                message="Failed to save dish",
                context={"operation": "create", "count": len(candidates), "error_type": type(e).__name__},
            )
        return dishes

    async def _allocate_sequential_ids(self, db: AsyncSession, count: int) -> int:
        """Reserve `count` consecutive sequential IDs; returns the first one."""
        last = await self._increment_counter(db, count)
        if last is None:
            last = await self._create_counter(db, count)
        return last - count + 1

    async def _increment_counter(self, db: AsyncSession, count: int) -> Optional[int]:
        result = await db.execute(
            update(SequenceCounter)
            .where(SequenceCounter.name == DISH_SEQUENCE)
            .values(value=SequenceCounter.value + count)
            .returning(SequenceCounter.value)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    async def _create_counter(self, db: AsyncSession, count: int) -> int:
        result = await db.execute(select(func.max(Dish.sequential_id)))
        current_max = result.scalar() or 0
        last = current_max + count

        try:
            async with db.begin_nested():
                db.add(SequenceCounter(name=DISH_SEQUENCE, value=last))
        except IntegrityError:
            logger.info("Dish sequence counter created concurrently; incrementing instead")
            retried = await self._increment_counter(db, count)
            if retried is None:
                raise StorageError(
                    message="Failed to save dish",
                    context={"operation": "allocate_sequential_ids"},
                )
            return retried

        logger.info("Initialized dish sequence counter at %d", current_max)
        return last


dish_service = DishService()
