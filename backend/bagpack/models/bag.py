"""
BagPack Backend: Bag SQLAlchemy Model
======================================

What:  ORM model representing the `bags` table.
Who:   Used by BagService and CuboidService, and by Alembic for schema management.

Table Design Rationale:
    - Integer primary key: bags are addressed by small numeric ids in URLs
    - width/height/depth: the bag's capacity is their product (`volume`);
      it is derived on read, never stored, so it cannot drift from the
      dimensions
    - title: optional label for humans; not used by any rule
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bagpack.database import Base
from bagpack.services.capacity import volume

if TYPE_CHECKING:
    from bagpack.models.cuboid import Cuboid


class Bag(Base):
    """
    A container with a volumetric capacity.

    Lifecycle:
        1. Created by POST /bags
        2. Read (row-locked) on every cuboid create/update targeting it
        3. Deleting a bag removes its cuboids (ON DELETE CASCADE)

    The `cuboids` relationship is never lazy-loaded on the async session;
    callers either query cuboids by bag_id or use selectinload(Bag.cuboids).
    """

    __tablename__ = "bags"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Optional human-readable label",
    )

    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    depth: Mapped[float] = mapped_column(Float, nullable=False)

    cuboids: Mapped[List["Cuboid"]] = relationship(
        back_populates="bag",
        passive_deletes=True,
        lazy="raise",
        order_by="Cuboid.id",
    )

    @property
    def volume(self) -> float:
        """Capacity of the bag."""
        return volume(self.width, self.height, self.depth)

    def __repr__(self) -> str:
        return f"<Bag(id={self.id}, volume={self.volume})>"
