"""
BagPack Backend: Cuboid Route Handlers
=======================================

What:  HTTP surface of the cuboid resource.
How:   Extracts path/query/body data, delegates to CuboidService, returns JSON.

Status mapping (via exception handlers in main.py):
    NotFoundError         → 404, empty body
    CapacityExceededError → 422 {"message": "Insufficient capacity in bag", ...}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bagpack.database import get_db_session
from bagpack.schemas.common import ErrorResponse
from bagpack.schemas.cuboid import (
    CuboidCreate,
    CuboidResponse,
    CuboidUpdate,
    CuboidVolumeResponse,
    CuboidWithBagResponse,
)
from bagpack.services.cuboid_service import cuboid_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Cuboids"])

_NOT_FOUND = {404: {"description": "Cuboid or bag not found (empty body)"}}
_NO_CAPACITY = {422: {"description": "Insufficient capacity in bag", "model": ErrorResponse}}


@router.get(
    "/cuboids",
    response_model=List[CuboidWithBagResponse],
    summary="List cuboids by id",
    description="Returns the cuboids whose ids are given (`?ids=1&ids=2`), each with its bag.",
)
async def list_cuboids(
    ids: List[int] = Query(default=[], description="Cuboid ids to fetch"),
    db: AsyncSession = Depends(get_db_session),
) -> List[CuboidWithBagResponse]:
    return await cuboid_service.list_cuboids(db=db, ids=ids)


@router.get(
    "/cuboids/{cuboid_id}",
    response_model=CuboidVolumeResponse,
    responses=_NOT_FOUND,
    summary="Get the volume of a cuboid",
)
async def get_cuboid(
    cuboid_id: int = Path(description="Cuboid id"),
    db: AsyncSession = Depends(get_db_session),
) -> CuboidVolumeResponse:
    return await cuboid_service.get_volume(db=db, cuboid_id=cuboid_id)


@router.post(
    "/cuboids",
    response_model=CuboidResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_NOT_FOUND, **_NO_CAPACITY},
    summary="Place a new cuboid in a bag",
    description=(
        "Creates the cuboid if the bag's current payload plus the new cuboid's "
        "volume does not exceed the bag's volume."
    ),
)
async def create_cuboid(
    data: CuboidCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CuboidResponse:
    return await cuboid_service.create_cuboid(db=db, data=data)


@router.put(
    "/cuboids/{cuboid_id}",
    response_model=CuboidWithBagResponse,
    responses={**_NOT_FOUND, **_NO_CAPACITY},
    summary="Reshape or move a cuboid",
)
@router.patch(
    "/cuboids/{cuboid_id}",
    response_model=CuboidWithBagResponse,
    responses={**_NOT_FOUND, **_NO_CAPACITY},
    summary="Reshape or move a cuboid",
)
async def update_cuboid(
    data: CuboidUpdate,
    cuboid_id: int = Path(description="Cuboid id"),
    db: AsyncSession = Depends(get_db_session),
) -> CuboidWithBagResponse:
    """
    Both verbs take the full body: the capacity check needs every dimension
    and the target bag. The cuboid's current volume is not counted against
    the bag while its new shape is checked.
    """
    return await cuboid_service.update_cuboid(db=db, cuboid_id=cuboid_id, data=data)


@router.delete(
    "/cuboids/{cuboid_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a cuboid",
)
async def delete_cuboid(
    cuboid_id: int = Path(description="Cuboid id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await cuboid_service.delete_cuboid(db=db, cuboid_id=cuboid_id)
    return Response(status_code=status.HTTP_200_OK)
