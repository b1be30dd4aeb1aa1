"""
BagPack Backend: Bag Route Handlers
====================================

What:  Create a bag; inspect a bag with its cuboids and remaining room.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from bagpack.database import get_db_session
from bagpack.schemas.bag import BagCreate, BagResponse
from bagpack.schemas.cuboid import BagContentsResponse
from bagpack.services.bag_service import bag_service

router = APIRouter(tags=["Bags"])


@router.post(
    "/bags",
    response_model=BagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a bag",
)
async def create_bag(
    data: BagCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BagResponse:
    return await bag_service.create_bag(db=db, data=data)


@router.get(
    "/bags/{bag_id}",
    response_model=BagContentsResponse,
    responses={404: {"description": "Bag not found (empty body)"}},
    summary="Get a bag with its cuboids",
    description=(
        "Returns the bag, its cuboids, the payload volume (sum of cuboid volumes) "
        "and the available volume (bag volume minus payload)."
    ),
)
async def get_bag(
    bag_id: int = Path(description="Bag id"),
    db: AsyncSession = Depends(get_db_session),
) -> BagContentsResponse:
    return await bag_service.get_bag_contents(db=db, bag_id=bag_id)
