"""
BagPack Backend: Bag and Health Endpoint Tests
===============================================
"""

import pytest


class TestBags:

    @pytest.mark.asyncio
    async def test_create_bag(self, test_client):
        response = await test_client.post(
            "/bags", json={"title": "tote", "width": 2, "height": 3, "depth": 4}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "tote"
        assert body["volume"] == 24

    @pytest.mark.asyncio
    async def test_create_bag_rejects_negative_dimensions(self, test_client):
        response = await test_client.post(
            "/bags", json={"width": 2, "height": -3, "depth": 4}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_bag_contents(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)

        body = (await test_client.get(f"/bags/{bag['id']}")).json()

        assert body["cuboids"] == []
        assert body["payloadVolume"] == 0
        assert body["availableVolume"] == 8

    @pytest.mark.asyncio
    async def test_contents_after_placement(self, test_client, create_bag):
        bag = await create_bag(2, 2, 2)
        await test_client.post(
            "/cuboids", json={"width": 1, "height": 2, "depth": 2, "bagId": bag["id"]}
        )

        body = (await test_client.get(f"/bags/{bag['id']}")).json()

        assert body["payloadVolume"] == 4
        assert body["availableVolume"] == 4
        assert body["cuboids"][0]["bagId"] == bag["id"]

    @pytest.mark.asyncio
    async def test_missing_bag(self, test_client):
        response = await test_client.get("/bags/999")

        assert response.status_code == 404
        assert response.content == b""


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body
