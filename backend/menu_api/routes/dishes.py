"""
Menu API — Dish Route Handlers
================================

What:  GET /api/dishes, GET /api/dishes/{dish_id}, POST /api/dishes.
How:   Extracts path/body data, delegates to DishService, returns JSON.
       Routes never catch exceptions; the global handlers in main.py map
       them to error responses.
"""

import logging
from typing import Any, List, Union

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from menu_api.database import get_db_session
from menu_api.schemas.dish import DishResponse, ErrorResponse
from menu_api.services.dish_service import dish_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Dishes"])


@router.get(
    "/dishes",
    response_model=List[DishResponse],
    responses={
        200: {"description": "All dishes ordered by sequential ID"},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="List all dishes",
)
async def list_dishes(
    db: AsyncSession = Depends(get_db_session),
) -> List[DishResponse]:
    return await dish_service.list_dishes(db)


@router.get(
    "/dishes/{dish_id}",
    response_model=DishResponse,
    responses={
        200: {"description": "The dish", "model": DishResponse},
        400: {"description": "Identifier is neither a UUID nor an integer", "model": ErrorResponse},
        404: {"description": "Dish not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get a dish by UUID or sequential ID",
    description=(
        "Accepts either the dish's native UUID or its sequential integer ID, "
        "e.g. /api/dishes/3 or /api/dishes/3f1c2b9e-8a7d-4e6f-9b0a-1c2d3e4f5a6b."
    ),
)
async def get_dish(
    dish_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DishResponse:
    return await dish_service.get_dish(db, dish_id)


@router.post(
    "/dishes",
    status_code=201,
    response_model=Union[DishResponse, List[DishResponse]],
    responses={
        201: {"description": "Created dish, or array of created dishes for a bulk request"},
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Create one dish or many",
    description=(
        "Send a dish object to create one dish, or an array of dish objects to "
        "create several. In a bulk request, entries missing name or price are "
        "skipped; the request fails only if no entry is valid."
    ),
)
async def create_dishes(
    response: Response,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db_session),
) -> Union[DishResponse, List[DishResponse]]:
    if isinstance(payload, list):
        created = await dish_service.create_dishes(db, payload)
        response.headers["X-Total-Count"] = str(len(created))
        return created
    # An empty body is an object with no fields.
    return await dish_service.create_dish(db, {} if payload is None else payload)
