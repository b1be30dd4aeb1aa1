"""
BagPack Backend: Bag Request/Response Schemas
==============================================

What:  API contract for the bag resource.
Why separate from the ORM model: `volume` is exposed as a field although the
       table only stores the three dimensions.
"""

from typing import Optional

from pydantic import Field

from bagpack.schemas.common import CamelModel


class BagCreate(CamelModel):
    """Body of POST /bags."""
    title: Optional[str] = Field(default=None, max_length=255, description="Optional label")
    width: float = Field(ge=0, description="Inner width")
    height: float = Field(ge=0, description="Inner height")
    depth: float = Field(ge=0, description="Inner depth")


class BagResponse(CamelModel):
    """
    What:  A bag without its contents.
    Who:   Returned by POST /bags and embedded in cuboid responses.
    """
    id: int
    title: Optional[str] = None
    width: float
    height: float
    depth: float
    volume: float = Field(description="Capacity: width x height x depth")
