"""
BagPack Backend: Bag Service
=============================

What:  Creates bags and reports what is inside them.
Who:   Called by the /bags route handlers.

Payload and available volume are derived from the loaded cuboids on each
call through bagpack.services.capacity; nothing derived is written back.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bagpack.exceptions import DatabaseError, NotFoundError
from bagpack.models import Bag
from bagpack.schemas.bag import BagCreate, BagResponse
from bagpack.schemas.cuboid import BagContentsResponse, CuboidResponse
from bagpack.services.capacity import available_volume, payload_volume

logger = logging.getLogger(__name__)


class BagService:

    async def create_bag(self, db: AsyncSession, data: BagCreate) -> BagResponse:
        bag = Bag(
            title=data.title,
            width=data.width,
            height=data.height,
            depth=data.depth,
        )
        try:
            db.add(bag)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating bag: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the bag. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Bag %s created (volume=%s)", bag.id, bag.volume)
        return BagResponse.model_validate(bag)

    async def get_bag_contents(self, db: AsyncSession, bag_id: int) -> BagContentsResponse:
        """
        Retrieve a bag with its cuboids and capacity figures.

        Raises:
            NotFoundError: no bag with that id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Bag).where(Bag.id == bag_id).options(selectinload(Bag.cuboids))
            )
            bag = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching bag %s: %s", bag_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bag. Please try again.",
                context={"bag_id": bag_id},
            ) from e

        if bag is None:
            raise NotFoundError(resource="bag", resource_id=bag_id)

        return BagContentsResponse(
            **BagResponse.model_validate(bag).model_dump(),
            cuboids=[CuboidResponse.model_validate(c) for c in bag.cuboids],
            payload_volume=payload_volume(bag.cuboids),
            available_volume=available_volume(bag.volume, bag.cuboids),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
bag_service = BagService()
