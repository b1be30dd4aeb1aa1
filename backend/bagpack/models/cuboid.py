"""
BagPack Backend: Cuboid SQLAlchemy Model
=========================================

What:  ORM model representing the `cuboids` table.
Who:   Used by CuboidService for CRUD operations and by Alembic.

Index on bag_id:
    Every admission check loads all cuboids of one bag
    (SELECT ... WHERE bag_id = :id), so the foreign key is indexed.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bagpack.database import Base
from bagpack.services.capacity import volume

if TYPE_CHECKING:
    from bagpack.models.bag import Bag


class Cuboid(Base):
    """
    A rectangular item placed in exactly one bag.

    Candidates for an admission check are built as transient Cuboid
    instances (never added to the session) so that persisted and candidate
    cuboids share the same `volume` property.
    """

    __tablename__ = "cuboids"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    depth: Mapped[float] = mapped_column(Float, nullable=False)

    bag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("bags.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning bag",
    )

    bag: Mapped["Bag"] = relationship(back_populates="cuboids", lazy="raise")

    __table_args__ = (
        Index("idx_cuboids_bag_id", "bag_id"),
    )

    @property
    def volume(self) -> float:
        return volume(self.width, self.height, self.depth)

    def __repr__(self) -> str:
        return (
            f"<Cuboid(id={self.id}, bag_id={self.bag_id}, "
            f"{self.width}x{self.height}x{self.depth})>"
        )
