"""
BagPack Backend: Bag Service Unit Tests
========================================
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from bagpack.exceptions import DatabaseError, NotFoundError
from bagpack.models import Bag, Cuboid
from bagpack.schemas.bag import BagCreate
from bagpack.services.bag_service import BagService


class TestBagService:

    def setup_method(self):
        self.service = BagService()

    @pytest.mark.asyncio
    async def test_create_bag(self, mock_db_session):
        def assign_id():
            mock_db_session.add.call_args[0][0].id = 1

        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_bag(
            mock_db_session, BagCreate(title="carry-on", width=2, height=3, depth=4)
        )

        assert result.id == 1
        assert result.title == "carry-on"
        assert result.volume == 24
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_bag_commit_failure(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError):
            await self.service.create_bag(
                mock_db_session, BagCreate(width=1, height=1, depth=1)
            )

    @pytest.mark.asyncio
    async def test_contents_report_payload_and_room(self, mock_db_session):
        bag = Bag(id=1, width=2, height=2, depth=2)
        bag.cuboids = [
            Cuboid(id=1, width=1, height=2, depth=2, bag_id=1),
            Cuboid(id=2, width=1, height=1, depth=1, bag_id=1),
        ]
        result_proxy = MagicMock()
        result_proxy.scalar_one_or_none.return_value = bag
        mock_db_session.execute.return_value = result_proxy

        result = await self.service.get_bag_contents(mock_db_session, 1)

        assert result.volume == 8
        assert result.payload_volume == 5
        assert result.available_volume == 3
        assert [c.id for c in result.cuboids] == [1, 2]

    @pytest.mark.asyncio
    async def test_contents_of_missing_bag(self, mock_db_session):
        result_proxy = MagicMock()
        result_proxy.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result_proxy

        with pytest.raises(NotFoundError):
            await self.service.get_bag_contents(mock_db_session, 1)
