"""
SVGboard Backend — Snapshot API Tests
=======================================

End-to-end through the FastAPI app with an in-memory SQLite database.
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from svgboard.crud import project_crud


def ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def shapes():
    return '{"shapes": [{"type": "circle"}]}'


async def new_project(client, title="Board"):
    response = await client.post("/projects", json={"title": title})
    return response.json()["id"]


async def new_snapshot(client, project_id, shapes_data):
    response = await client.post(
        f"/projects/{project_id}/snapshots", json={"shapesData": shapes_data}
    )
    assert response.status_code == 201
    return response.json()


class TestSnapshotCreate:

    @pytest.mark.asyncio
    async def test_create_snapshot(self, test_client, shapes):
        project_id = await new_project(test_client)

        body = await new_snapshot(test_client, project_id, shapes)

        assert set(body) == {"id", "projectId", "shapesData", "createdAt"}
        assert body["projectId"] == project_id
        assert body["shapesData"] == shapes

    @pytest.mark.asyncio
    async def test_create_updates_last_shapes_data(self, test_client, shapes):
        project_id = await new_project(test_client)
        before = (await test_client.get(f"/projects/{project_id}")).json()

        await new_snapshot(test_client, project_id, '{"shapes":[]}')
        await new_snapshot(test_client, project_id, shapes)

        project = (await test_client.get(f"/projects/{project_id}")).json()
        assert project["lastShapesData"] == shapes
        assert ts(project["updatedAt"]) > ts(before["updatedAt"])

    @pytest.mark.asyncio
    async def test_payload_is_returned_verbatim(self, test_client):
        project_id = await new_project(test_client)
        payload = '{ "shapes" : [ {"type":"rect", "x": 1.50, "label": "café ✏"} ],\n\t"v":  2 }'

        created = await new_snapshot(test_client, project_id, payload)
        fetched = (
            await test_client.get(f"/projects/{project_id}/snapshots/{created['id']}")
        ).json()

        assert created["shapesData"] == payload
        assert fetched["shapesData"] == payload

    @pytest.mark.asyncio
    async def test_payload_is_not_validated_as_json(self, test_client):
        project_id = await new_project(test_client)

        created = await new_snapshot(test_client, project_id, "not json at all {")

        assert created["shapesData"] == "not json at all {"

    @pytest.mark.asyncio
    async def test_create_for_missing_project(self, test_client, shapes):
        response = await test_client.post(
            "/projects/999/snapshots", json={"shapesData": shapes}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_without_shapes_data(self, test_client):
        project_id = await new_project(test_client)

        response = await test_client.post(f"/projects/{project_id}/snapshots", json={})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_with_non_string_shapes_data(self, test_client):
        project_id = await new_project(test_client)

        response = await test_client.post(
            f"/projects/{project_id}/snapshots", json={"shapesData": {"shapes": []}}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_failed_project_update_rolls_back_snapshot(self, test_client):
        project_id = await new_project(test_client)
        await new_snapshot(test_client, project_id, '{"v":1}')

        failing = AsyncMock(side_effect=OperationalError("UPDATE", {}, Exception("disk I/O error")))
        with patch.object(project_crud, "set_last_shapes_data", failing):
            response = await test_client.post(
                f"/projects/{project_id}/snapshots", json={"shapesData": '{"v":2}'}
            )

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

        listed = (await test_client.get(f"/projects/{project_id}/snapshots")).json()
        project = (await test_client.get(f"/projects/{project_id}")).json()
        assert [s["shapesData"] for s in listed] == ['{"v":1}']
        assert project["lastShapesData"] == '{"v":1}'


class TestSnapshotRead:

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client):
        project_id = await new_project(test_client)
        s1 = await new_snapshot(test_client, project_id, '{"n":1}')
        s2 = await new_snapshot(test_client, project_id, '{"n":2}')
        s3 = await new_snapshot(test_client, project_id, '{"n":3}')

        listed = (await test_client.get(f"/projects/{project_id}/snapshots")).json()

        assert [s["id"] for s in listed] == [s3["id"], s2["id"], s1["id"]]
        assert all(s["projectId"] == project_id for s in listed)

    @pytest.mark.asyncio
    async def test_list_only_includes_own_snapshots(self, test_client):
        p = await new_project(test_client, "P")
        q = await new_project(test_client, "Q")
        await new_snapshot(test_client, p, "{}")
        await new_snapshot(test_client, q, "{}")

        listed = (await test_client.get(f"/projects/{p}/snapshots")).json()

        assert len(listed) == 1

    @pytest.mark.asyncio
    async def test_list_for_missing_project(self, test_client):
        response = await test_client.get("/projects/999/snapshots")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_missing_snapshot(self, test_client):
        project_id = await new_project(test_client)

        response = await test_client.get(f"/projects/{project_id}/snapshots/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_snapshot_under_other_project(self, test_client, shapes):
        p = await new_project(test_client, "P")
        q = await new_project(test_client, "Q")
        snapshot = await new_snapshot(test_client, q, shapes)

        response = await test_client.get(f"/projects/{p}/snapshots/{snapshot['id']}")

        assert response.status_code == 404
        assert response.json()["error"] == "snapshot_project_mismatch"


class TestSnapshotDelete:

    @pytest.mark.asyncio
    async def test_delete_all_keeps_last_shapes_data(self, test_client, shapes):
        project_id = await new_project(test_client)
        await new_snapshot(test_client, project_id, '{"shapes":[]}')
        await new_snapshot(test_client, project_id, shapes)

        response = await test_client.delete(f"/projects/{project_id}/snapshots")

        assert response.status_code == 204
        listed = (await test_client.get(f"/projects/{project_id}/snapshots")).json()
        project = (await test_client.get(f"/projects/{project_id}")).json()
        assert listed == []
        assert project["lastShapesData"] == shapes

    @pytest.mark.asyncio
    async def test_delete_all_for_missing_project(self, test_client):
        response = await test_client.delete("/projects/999/snapshots")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_single_snapshot(self, test_client, shapes):
        project_id = await new_project(test_client)
        older = await new_snapshot(test_client, project_id, '{"shapes":[]}')
        newest = await new_snapshot(test_client, project_id, shapes)

        response = await test_client.delete(f"/projects/{project_id}/snapshots/{newest['id']}")

        assert response.status_code == 204
        listed = (await test_client.get(f"/projects/{project_id}/snapshots")).json()
        assert [s["id"] for s in listed] == [older["id"]]
        # The deleted snapshot produced lastShapesData; it is not rolled back
        project = (await test_client.get(f"/projects/{project_id}")).json()
        assert project["lastShapesData"] == shapes

    @pytest.mark.asyncio
    async def test_delete_snapshot_under_other_project(self, test_client, shapes):
        p = await new_project(test_client, "P")
        q = await new_project(test_client, "Q")
        snapshot = await new_snapshot(test_client, q, shapes)

        response = await test_client.delete(f"/projects/{p}/snapshots/{snapshot['id']}")

        assert response.status_code == 404
        still_there = await test_client.get(f"/projects/{q}/snapshots/{snapshot['id']}")
        assert still_there.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_missing_snapshot(self, test_client):
        project_id = await new_project(test_client)

        response = await test_client.delete(f"/projects/{project_id}/snapshots/999")

        assert response.status_code == 404
