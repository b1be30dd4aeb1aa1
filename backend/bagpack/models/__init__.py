# Models package init
"""
Importing this package registers every model with Base.metadata, which the
string-based relationships (Bag.cuboids <-> Cuboid.bag) and Alembic rely on.
"""

from bagpack.models.bag import Bag
from bagpack.models.cuboid import Cuboid

__all__ = ["Bag", "Cuboid"]
