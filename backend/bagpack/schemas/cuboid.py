"""
BagPack Backend: Cuboid Request/Response Schemas
=================================================

What:  API contract for the cuboid resource, and the bag contents view
       (a bag together with the cuboids inside it).

Validation:
    Dimensions must be non-negative; bagId must be a positive integer.
    Failures are answered by FastAPI's default 422 before any handler runs.
    Whether the bag exists is a service concern (404), as is capacity (422).
"""

from typing import List

from pydantic import Field

from bagpack.schemas.bag import BagResponse
from bagpack.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CuboidCreate(CamelModel):
    """Body of POST /cuboids."""
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    depth: float = Field(ge=0)
    bag_id: int = Field(ge=1, description="Bag the cuboid is placed in")


class CuboidUpdate(CuboidCreate):
    """
    Body of PUT/PATCH /cuboids/{id}.

    All four fields are required for both verbs: the admission check needs
    the complete new shape and the target bag.
    """


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CuboidResponse(CamelModel):
    """Returned by POST /cuboids (201) and listed inside bag contents."""
    id: int
    width: float
    height: float
    depth: float
    bag_id: int
    volume: float


class CuboidWithBagResponse(CuboidResponse):
    """Returned by GET /cuboids and PUT/PATCH /cuboids/{id}."""
    bag: BagResponse


class CuboidVolumeResponse(CamelModel):
    """Returned by GET /cuboids/{id}."""
    id: int
    volume: float


class BagContentsResponse(BagResponse):
    """
    What:  A bag with its cuboids and the derived capacity figures.
    Who:   Returned by GET /bags/{id}.

    payloadVolume and availableVolume are computed on every request and
    never stored.
    """
    cuboids: List[CuboidResponse] = Field(default_factory=list)
    payload_volume: float = Field(description="Sum of the volumes of the cuboids in the bag")
    available_volume: float = Field(description="volume - payloadVolume")
