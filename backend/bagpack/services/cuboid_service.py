"""
BagPack Backend: Cuboid Service (Business Logic)
=================================================

What:  Cuboid CRUD plus the bag admission check that guards create/update.
Who:   Called by the /cuboids route handlers.

Admission Flow (POST /cuboids, PUT/PATCH /cuboids/{id}):
    ┌────────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │ Lock bag   │───▶│ Load cuboids │───▶│ fits_in_bag? │───▶│  Write   │
    │ FOR UPDATE │    │ of the bag   │    │ (+candidate) │    │  cuboid  │
    └────────────┘    └──────────────┘    └──────────────┘    └──────────┘
                                                 │ no
                                                 ▼
                                       CapacityExceededError (422)

    All four steps run in the request's transaction. The bag row lock
    makes a second admission against the same bag wait until the first one
    commits, so two requests cannot both pass the check on a stale set.
    Write methods commit before returning, so a 201/200 is only sent for
    a change that is already durable and a failed commit surfaces as a 500.

    On update, the cuboid being modified is dropped from the loaded set
    before the candidate (its new shape) is added, so its old volume is not
    counted twice.

CuboidService is stateless; the session is passed to every call.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bagpack.exceptions import (
    BagPackError,
    CapacityExceededError,
    DatabaseError,
    NotFoundError,
)
from bagpack.models import Bag, Cuboid
from bagpack.schemas.bag import BagResponse
from bagpack.schemas.cuboid import (
    CuboidCreate,
    CuboidResponse,
    CuboidUpdate,
    CuboidVolumeResponse,
    CuboidWithBagResponse,
)
from bagpack.services.capacity import fits_in_bag, payload_volume

logger = logging.getLogger(__name__)


class CuboidService:
    """
    Business logic layer for cuboid operations.

    Error Handling Strategy:
        Missing rows become NotFoundError, a failed admission becomes
        CapacityExceededError. Both propagate untouched. SQLAlchemy failures
        are logged and wrapped in DatabaseError so no SQL reaches the client.
    """

    async def list_cuboids(
        self, db: AsyncSession, ids: Sequence[int]
    ) -> List[CuboidWithBagResponse]:
        """
        Fetch the cuboids with the given ids, each with its bag.

        Unknown ids are skipped. An empty id list returns an empty list
        without touching the database.
        """
        if not ids:
            return []

        try:
            result = await db.execute(
                select(Cuboid)
                .where(Cuboid.id.in_(set(ids)))
                .options(selectinload(Cuboid.bag))
                .order_by(Cuboid.id)
            )
            cuboids = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing cuboids %s: %s", list(ids), str(e))
            raise DatabaseError(
                message="Could not retrieve cuboids. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [CuboidWithBagResponse.model_validate(cuboid) for cuboid in cuboids]

    async def get_volume(self, db: AsyncSession, cuboid_id: int) -> CuboidVolumeResponse:
        """
        Return `{id, volume}` for one cuboid.

        Raises:
            NotFoundError: no cuboid with that id (→ 404)
        """
        cuboid = await self._get_cuboid(db, cuboid_id)
        return CuboidVolumeResponse(id=cuboid_id, volume=cuboid.volume)

    async def create_cuboid(self, db: AsyncSession, data: CuboidCreate) -> CuboidResponse:
        """
        Place a new cuboid in a bag if it fits.

        Workflow Steps:
            1. Lock the bag row (404 if the bag is missing)
            2. Build the candidate cuboid in memory
            3. Check the bag's cuboids plus the candidate against its volume
            4. Insert the candidate, flush to obtain its id, commit

        Raises:
            NotFoundError: bag does not exist (→ 404)
            CapacityExceededError: the candidate does not fit (→ 422)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            bag = await self._lock_bag(db, data.bag_id)

            candidate = Cuboid(
                width=data.width,
                height=data.height,
                depth=data.depth,
                bag_id=bag.id,
            )
            await self._admit(db, bag, candidate)

            db.add(candidate)
            await db.flush()  # Assigns the id
            await db.commit()
            logger.info(
                "Cuboid %s created in bag %s (volume=%s)",
                candidate.id, bag.id, candidate.volume,
            )
            return CuboidResponse.model_validate(candidate)

        except BagPackError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating cuboid: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the cuboid. Please try again.",
                context={"bag_id": data.bag_id, "error_type": type(e).__name__},
            ) from e

    async def update_cuboid(
        self, db: AsyncSession, cuboid_id: int, data: CuboidUpdate
    ) -> CuboidWithBagResponse:
        """
        Reshape and/or move a cuboid if the result fits its (new) bag.

        The cuboid's own current volume is excluded from the bag's payload
        before the new shape is added.

        Raises:
            NotFoundError: cuboid or bag does not exist (→ 404)
            CapacityExceededError: the new shape does not fit (→ 422)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            cuboid = await self._get_cuboid(db, cuboid_id)
            bag = await self._lock_bag(db, data.bag_id)

            candidate = Cuboid(
                width=data.width,
                height=data.height,
                depth=data.depth,
                bag_id=bag.id,
            )
            await self._admit(db, bag, candidate, exclude_id=cuboid.id)

            cuboid.width = data.width
            cuboid.height = data.height
            cuboid.depth = data.depth
            cuboid.bag_id = bag.id
            await db.flush()
            await db.commit()
            logger.info("Cuboid %s updated in bag %s", cuboid.id, bag.id)

            # Built field by field: Cuboid.bag is never lazy-loaded.
            return CuboidWithBagResponse(
                **CuboidResponse.model_validate(cuboid).model_dump(),
                bag=BagResponse.model_validate(bag),
            )

        except BagPackError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating cuboid %s: %s", cuboid_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the cuboid. Please try again.",
                context={"cuboid_id": cuboid_id, "error_type": type(e).__name__},
            ) from e

    async def delete_cuboid(self, db: AsyncSession, cuboid_id: int) -> None:
        """
        Delete a cuboid. No capacity check: removing a cuboid only frees room.

        The DELETE is executed and committed before this returns, so the
        route's 200 is only sent once the row is gone.

        Raises:
            NotFoundError: no cuboid with that id (→ 404)
        """
        await self._get_cuboid(db, cuboid_id)

        try:
            await db.execute(delete(Cuboid).where(Cuboid.id == cuboid_id))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting cuboid %s: %s", cuboid_id, str(e))
            raise DatabaseError(
                message="Could not delete the cuboid. Please try again.",
                context={"cuboid_id": cuboid_id},
            ) from e
        logger.info("Cuboid %s deleted", cuboid_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get_cuboid(self, db: AsyncSession, cuboid_id: int) -> Cuboid:
        try:
            result = await db.execute(select(Cuboid).where(Cuboid.id == cuboid_id))
            cuboid = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching cuboid %s: %s", cuboid_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the cuboid. Please try again.",
                context={"cuboid_id": cuboid_id},
            ) from e

        if cuboid is None:
            raise NotFoundError(resource="cuboid", resource_id=cuboid_id)
        return cuboid

    async def _lock_bag(self, db: AsyncSession, bag_id: int) -> Bag:
        """Fetch a bag with a row lock held until the request's transaction ends."""
        result = await db.execute(
            select(Bag).where(Bag.id == bag_id).with_for_update()
        )
        bag = result.scalar_one_or_none()
        if bag is None:
            raise NotFoundError(resource="bag", resource_id=bag_id)
        return bag

    async def _admit(
        self,
        db: AsyncSession,
        bag: Bag,
        candidate: Cuboid,
        exclude_id: Optional[int] = None,
    ) -> None:
        """Raise CapacityExceededError unless `candidate` fits in `bag`."""
        result = await db.execute(select(Cuboid).where(Cuboid.bag_id == bag.id))
        working_set = [c for c in result.scalars().all() if c.id != exclude_id]
        working_set.append(candidate)

        if not fits_in_bag(bag.volume, working_set):
            payload = payload_volume(working_set)
            logger.warning(
                "Bag %s rejected cuboid: payload %s exceeds capacity %s",
                bag.id, payload, bag.volume,
            )
            raise CapacityExceededError(
                bag_id=bag.id,
                capacity=bag.volume,
                payload=payload,
            )


# ── Singleton Instance ────────────────────────────────────────────────────
cuboid_service = CuboidService()
