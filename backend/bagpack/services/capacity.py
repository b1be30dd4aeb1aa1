"""
BagPack Backend: Volume and Bag Capacity Rules
===============================================

What:  Pure functions behind the bag admission check.
Who:   Used by the ORM models (volume properties) and by CuboidService and
       BagService when deciding whether a placement fits.

Admission rule:
    A bag accepts a working set of cuboids when the sum of their volumes is
    less than or equal to the bag's own volume. Equality fits.

    The working set is built by the caller: every cuboid persisted for the
    bag (minus the cuboid being updated, if any) plus the candidate.

Nothing here touches the database or stores derived values; payload and
available volume are recomputed on every call.
"""

from typing import Iterable, Protocol


class HasVolume(Protocol):
    @property
    def volume(self) -> float: ...


def volume(width: float, height: float, depth: float) -> float:
    """Product of the three dimensions. No bounds checking."""
    return width * height * depth


def payload_volume(items: Iterable[HasVolume]) -> float:
    """Sum of the volumes of `items` (0 for an empty set)."""
    return sum((item.volume for item in items), 0.0)


def available_volume(capacity: float, items: Iterable[HasVolume]) -> float:
    """Room left in a bag of `capacity` once `items` are inside. May be negative."""
    return capacity - payload_volume(items)


def fits_in_bag(capacity: float, items: Iterable[HasVolume]) -> bool:
    """
    True when `items` together fit within `capacity`.

    Plain float comparison with no tolerance. Fractional dimensions whose
    volumes do not sum exactly in binary floating point can therefore be
    rejected from a bag they would fill exactly (a 0.3 x 1 x 1 bag refuses
    0.1 + 0.2). Integer dimensions compare exactly.
    """
    return payload_volume(items) <= capacity
