"""
BagPack Backend: Cuboid Endpoint Tests
=======================================

What:  End-to-end tests of the /cuboids routes against a real SQLite schema.
How:   HTTPX AsyncClient over ASGITransport (see conftest.test_client).

What we test:
    ✅ Bag 2x2x2: 1x2x2 fits (201), then 1x2x3 is rejected (422), no row written
    ✅ GET returns {id, volume}; missing ids are 404 with an empty body
    ✅ Update re-checks capacity without counting the cuboid twice
    ✅ Delete removes the row before answering
    ✅ Writes are committed before the response starts
    ✅ List embeds each cuboid's bag
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from bagpack.main import app


async def _create_cuboid(client, bag_id, width, height, depth):
    return await client.post(
        "/cuboids",
        json={"width": width, "height": height, "depth": depth, "bagId": bag_id},
    )


def _recording_client(events):
    """Client whose app notes when the response starts going out."""

    async def recording_app(scope, receive, send):
        async def recording_send(message):
            if message["type"] == "http.response.start":
                events.append("response.start")
            await send(message)

        await app(scope, receive, recording_send)

    return AsyncClient(transport=ASGITransport(app=recording_app), base_url="http://test")


def _record_commits(monkeypatch, events):
    original_commit = AsyncSession.commit

    async def recording_commit(self):
        events.append("commit")
        await original_commit(self)

    monkeypatch.setattr(AsyncSession, "commit", recording_commit)


class TestCreateCuboid:

    @pytest.mark.asyncio
    async def test_fill_bag_then_reject(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)

        first = await _create_cuboid(test_client, bag["id"], 1, 2, 2)
        assert first.status_code == 201
        body = first.json()
        assert body["bagId"] == bag["id"]
        assert body["volume"] == 4
        assert {"id", "width", "height", "depth"} <= body.keys()

        second = await _create_cuboid(test_client, bag["id"], 1, 2, 3)
        assert second.status_code == 422
        assert second.json()["message"] == "Insufficient capacity in bag"

        contents = (await test_client.get(f"/bags/{bag['id']}")).json()
        assert [c["id"] for c in contents["cuboids"]] == [body["id"]]
        assert contents["payloadVolume"] == 4

    @pytest.mark.asyncio
    async def test_exactly_full_bag_is_accepted(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)

        assert (await _create_cuboid(test_client, bag["id"], 1, 2, 2)).status_code == 201
        assert (await _create_cuboid(test_client, bag["id"], 1, 2, 2)).status_code == 201
        assert (await _create_cuboid(test_client, bag["id"], 1, 1, 1)).status_code == 422

    @pytest.mark.asyncio
    async def test_capacity_is_per_bag(self, test_client, create_bag):
        small = await create_bag(1, 1, 1)
        large = await create_bag(3, 3, 3)

        assert (await _create_cuboid(test_client, large["id"], 3, 3, 2)).status_code == 201
        assert (await _create_cuboid(test_client, small["id"], 1, 1, 1)).status_code == 201

    @pytest.mark.asyncio
    async def test_missing_bag(self, test_client):
        response = await _create_cuboid(test_client, 999, 1, 1, 1)

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_negative_dimension_rejected_by_schema(self, test_client, create_bag):
        bag = await create_bag()

        response = await _create_cuboid(test_client, bag["id"], -1, 1, 1)

        assert response.status_code == 422
        assert "detail" in response.json()


class TestGetCuboid:

    @pytest.mark.asyncio
    async def test_get_returns_id_and_volume(self, test_client, create_bag):
        bag = await create_bag(5, 5, 5)
        created = (await _create_cuboid(test_client, bag["id"], 2, 3, 4)).json()

        response = await test_client.get(f"/cuboids/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "volume": 24}

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client):
        response = await test_client.get("/cuboids/12345")

        assert response.status_code == 404
        assert response.content == b""
        assert "X-Request-ID" in response.headers


class TestListCuboids:

    @pytest.mark.asyncio
    async def test_list_by_ids_with_bag(self, test_client, create_bag):
        bag = await create_bag(4, 4, 4, title="duffel")
        a = (await _create_cuboid(test_client, bag["id"], 1, 1, 1)).json()
        b = (await _create_cuboid(test_client, bag["id"], 2, 2, 2)).json()
        await _create_cuboid(test_client, bag["id"], 1, 1, 2)

        response = await test_client.get("/cuboids", params={"ids": [a["id"], b["id"], 999]})

        assert response.status_code == 200
        items = response.json()
        assert [item["id"] for item in items] == [a["id"], b["id"]]
        assert all(item["bag"]["id"] == bag["id"] for item in items)
        assert items[0]["bag"]["title"] == "duffel"
        assert items[0]["bag"]["volume"] == 64

    @pytest.mark.asyncio
    async def test_list_without_ids(self, test_client):
        response = await test_client.get("/cuboids")

        assert response.status_code == 200
        assert response.json() == []


class TestUpdateCuboid:

    @pytest.mark.asyncio
    async def test_update_in_full_bag_keeps_own_volume(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)
        cuboid = (await _create_cuboid(test_client, bag["id"], 2, 2, 2)).json()

        response = await test_client.put(
            f"/cuboids/{cuboid['id']}",
            json={"width": 2, "height": 2, "depth": 2, "bagId": bag["id"]},
        )

        assert response.status_code == 200
        assert response.json()["bag"]["id"] == bag["id"]

    @pytest.mark.asyncio
    async def test_shrink_then_grow_past_capacity(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)
        cuboid = (await _create_cuboid(test_client, bag["id"], 1, 2, 2)).json()
        await _create_cuboid(test_client, bag["id"], 1, 1, 2)

        shrink = await test_client.patch(
            f"/cuboids/{cuboid['id']}",
            json={"width": 1, "height": 1, "depth": 1, "bagId": bag["id"]},
        )
        assert shrink.status_code == 200
        assert shrink.json()["volume"] == 1

        grow = await test_client.put(
            f"/cuboids/{cuboid['id']}",
            json={"width": 2, "height": 2, "depth": 2, "bagId": bag["id"]},
        )
        assert grow.status_code == 422
        assert grow.json()["message"] == "Insufficient capacity in bag"

        unchanged = await test_client.get(f"/cuboids/{cuboid['id']}")
        assert unchanged.json()["volume"] == 1

    @pytest.mark.asyncio
    async def test_move_to_another_bag(self, test_client, create_bag):
        origin = await create_bag(2, 2, 2)
        target = await create_bag(3, 3, 3)
        cuboid = (await _create_cuboid(test_client, origin["id"], 2, 2, 2)).json()

        response = await test_client.put(
            f"/cuboids/{cuboid['id']}",
            json={"width": 2, "height": 2, "depth": 2, "bagId": target["id"]},
        )

        assert response.status_code == 200
        assert response.json()["bagId"] == target["id"]
        origin_contents = (await test_client.get(f"/bags/{origin['id']}")).json()
        assert origin_contents["cuboids"] == []
        assert origin_contents["availableVolume"] == 8

    @pytest.mark.asyncio
    async def test_update_missing_cuboid(self, test_client, create_bag):
        bag = await create_bag()

        response = await test_client.put(
            "/cuboids/999",
            json={"width": 1, "height": 1, "depth": 1, "bagId": bag["id"]},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_missing_bag(self, test_client, create_bag):
        bag = await create_bag()
        cuboid = (await _create_cuboid(test_client, bag["id"], 1, 1, 1)).json()

        response = await test_client.put(
            f"/cuboids/{cuboid['id']}",
            json={"width": 1, "height": 1, "depth": 1, "bagId": 999},
        )

        assert response.status_code == 404


class TestDeleteCuboid:

    @pytest.mark.asyncio
    async def test_delete_then_get(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)
        cuboid = (await _create_cuboid(test_client, bag["id"], 2, 2, 2)).json()

        response = await test_client.delete(f"/cuboids/{cuboid['id']}")
        assert response.status_code == 200

        assert (await test_client.get(f"/cuboids/{cuboid['id']}")).status_code == 404
        # The freed room is usable again
        assert (await _create_cuboid(test_client, bag["id"], 2, 2, 2)).status_code == 201

    @pytest.mark.asyncio
    async def test_delete_missing(self, test_client):
        response = await test_client.delete("/cuboids/999")

        assert response.status_code == 404
        assert response.content == b""


class TestCommitBeforeResponse:

    @pytest.mark.asyncio
    async def test_delete_commits_before_responding(self, test_client, create_bag, monkeypatch):
        bag = await create_bag(2, 2, 2)
        cuboid = (await _create_cuboid(test_client, bag["id"], 1, 1, 1)).json()

        events = []
        _record_commits(monkeypatch, events)
        async with _recording_client(events) as client:
            response = await client.delete(f"/cuboids/{cuboid['id']}")

        assert response.status_code == 200
        assert "commit" in events
        assert events.index("commit") < events.index("response.start")

    @pytest.mark.asyncio
    async def test_create_commits_before_responding(self, test_client, create_bag, monkeypatch):
        bag = await create_bag(2, 2, 2)

        events = []
        _record_commits(monkeypatch, events)
        async with _recording_client(events) as client:
            response = await _create_cuboid(client, bag["id"], 1, 1, 1)

        assert response.status_code == 201
        assert events.index("commit") < events.index("response.start")

    @pytest.mark.asyncio
    async def test_failed_commit_is_not_reported_as_created(
        self, test_client, create_bag, monkeypatch
    ):
        bag = await create_bag(2, 2, 2)

        async def failing_commit(self):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = await _create_cuboid(test_client, bag["id"], 1, 1, 1)
        monkeypatch.undo()

        assert response.status_code == 500
        contents = (await test_client.get(f"/bags/{bag['id']}")).json()
        assert contents["cuboids"] == []
