"""HTTP contract tests for /api/action-history."""
from datetime import datetime

import pytest

from app.config import settings
from app.models.action_history import ActionHistory
from app.models.task import Task
from tests.helpers import history_rows, reload

BASE = "/api/action-history"


def _payload(item_id, **overrides):
    body = {
        "action_type": "update",
        "action_description": "Changed status",
        "item_type": "task",
        "item_id": item_id,
        "before_data": {"status": "todo"},
        "after_data": {"status": "done"},
        "workspace_id": 7,
    }
    body.update(overrides)
    return body


async def _create(client, headers, item_id, **overrides):
    resp = await client.post(BASE, json=_payload(item_id, **overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

async def test_requires_bearer_token(client):
    resp = await client.get(BASE)
    assert resp.status_code == 401


async def test_rejects_garbage_token(client):
    resp = await client.get(BASE, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"ok": True, "service": "action-history-api"}


# ---------------------------------------------------------------------------
# Record / read
# ---------------------------------------------------------------------------

async def test_create_returns_parsed_snapshots_and_owner(client, auth_headers, task):
    body = await _create(client, auth_headers, task.id)

    assert body["user_id"] == 1
    assert body["before_data"] == {"status": "todo"}
    assert body["after_data"] == {"status": "done"}
    assert body["first_name"] == "Ada"
    assert body["last_name"] == "Lovelace"


async def test_user_id_in_body_is_ignored(client, auth_headers, task):
    body = await _create(client, auth_headers, task.id, user_id=99)
    assert body["user_id"] == 1


async def test_create_rejects_unsupported_type(client, auth_headers, db_session):
    resp = await client.post(BASE, json=_payload(3, item_type="workspace"), headers=auth_headers)

    assert resp.status_code == 422
    assert resp.json()["code"] == "UNSUPPORTED_TYPE"
    assert await history_rows(db_session, 1) == []


async def test_create_rejects_unknown_type(client, auth_headers):
    resp = await client.post(BASE, json=_payload(3, item_type="kanban_card"), headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("item_type, before, after", [
    ("task", {"status": "in_progress"}, {"status": "review"}),
    ("task", {"status": "todo"}, {"status": "cancelled"}),
    ("project", {"status": "active"}, {"status": "completed"}),
])
async def test_create_accepts_workflow_statuses(client, auth_headers, item_type, before, after):
    body = await _create(client, auth_headers, 1, item_type=item_type, before_data=before, after_data=after)
    assert body["after_data"] == after


async def test_create_rejects_bad_snapshot_column(client, auth_headers, task):
    resp = await client.post(
        BASE,
        json=_payload(task.id, after_data={"statuz": "done"}),
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json()["detail"]["errors"][0]["loc"] == ["statuz"]


async def test_list_newest_first_with_limit_and_workspace(client, auth_headers, task):
    first = await _create(client, auth_headers, task.id)
    second = await _create(client, auth_headers, task.id, workspace_id=8)
    third = await _create(client, auth_headers, task.id)

    resp = await client.get(BASE, headers=auth_headers)
    assert [a["id"] for a in resp.json()] == [third["id"], second["id"], first["id"]]

    resp = await client.get(BASE, params={"limit": 1}, headers=auth_headers)
    assert [a["id"] for a in resp.json()] == [third["id"]]

    resp = await client.get(BASE, params={"workspace_id": 7}, headers=auth_headers)
    assert [a["id"] for a in resp.json()] == [third["id"], first["id"]]


async def test_list_limit_is_bounded(client, auth_headers):
    resp = await client.get(BASE, params={"limit": settings.ACTION_HISTORY_MAX_LIMIT + 1}, headers=auth_headers)
    assert resp.status_code == 422


async def test_get_single_and_cross_user(client, auth_headers, other_auth_headers, task):
    created = await _create(client, auth_headers, task.id)

    resp = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]

    resp = await client.get(f"{BASE}/{created['id']}", headers=other_auth_headers)
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOT_FOUND"

    resp = await client.get(f"{BASE}/{created['id'] + 1000}", headers=auth_headers)
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Undo / redo
# ---------------------------------------------------------------------------

async def test_undo_and_redo(client, auth_headers, db_session, task):
    created = await _create(client, auth_headers, task.id)

    resp = await client.post(f"{BASE}/{created['id']}/undo", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Action undone successfully"
    assert resp.json()["action"]["id"] == created["id"]
    assert resp.json()["action"]["first_name"] == "Ada"
    assert (await reload(db_session, Task, task.id)).status == "todo"

    resp = await client.post(f"{BASE}/{created['id']}/redo", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Action redone successfully"
    assert resp.json()["action"]["last_name"] == "Lovelace"
    assert (await reload(db_session, Task, task.id)).status == "done"


async def test_undo_other_users_action_is_404(client, auth_headers, other_auth_headers, db_session, task):
    created = await _create(client, auth_headers, task.id)

    resp = await client.post(f"{BASE}/{created['id']}/undo", headers=other_auth_headers)
    assert resp.status_code == 404
    assert (await reload(db_session, Task, task.id)).status == "todo"


async def test_undo_without_before_state_is_400(client, auth_headers, task):
    created = await _create(client, auth_headers, task.id, before_data=None)

    resp = await client.post(f"{BASE}/{created['id']}/undo", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "NO_SNAPSHOT_AVAILABLE"

    resp = await client.post(f"{BASE}/{created['id']}/redo", headers=auth_headers)
    assert resp.status_code == 200


async def test_redo_without_after_state_is_400(client, auth_headers, task):
    created = await _create(client, auth_headers, task.id, after_data=None)

    resp = await client.post(f"{BASE}/{created['id']}/redo", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "NO_AFTER_SNAPSHOT_AVAILABLE"


async def test_undo_of_deleted_target_is_500_without_cause(client, auth_headers, db_session, task):
    created = await _create(client, auth_headers, task.id)
    await db_session.delete(task)
    await db_session.commit()

    resp = await client.post(f"{BASE}/{created['id']}/undo", headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json() == {
        "code": "UNDO_FAILED",
        "message": "Failed to perform undo operation",
        "detail": None,
    }

    resp = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200


async def test_replay_failure_cause_exposed_when_enabled(client, auth_headers, db_session, task, monkeypatch):
    monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAIL", True)
    created = await _create(client, auth_headers, task.id)
    await db_session.delete(task)
    await db_session.commit()

    resp = await client.post(f"{BASE}/{created['id']}/redo", headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json()["code"] == "REDO_FAILED"
    assert "TargetNotFound" in resp.json()["detail"]["cause"]


# ---------------------------------------------------------------------------
# Clear
# ---------------------------------------------------------------------------

async def test_clear_removes_only_callers_history(client, auth_headers, other_auth_headers, db_session, task):
    await _create(client, auth_headers, task.id)
    await _create(client, auth_headers, task.id)
    await _create(client, other_auth_headers, task.id)

    resp = await client.delete(BASE, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Action history cleared successfully", "deleted": 2}

    assert await history_rows(db_session, 1) == []
    assert len(await history_rows(db_session, 2)) == 1


async def test_clear_older_than_keeps_recent(client, auth_headers, db_session, task):
    fresh = await _create(client, auth_headers, task.id)
    db_session.add(ActionHistory(
        user_id=1,
        action_type="update",
        action_description="last year",
        item_type="task",
        item_id=task.id,
        created_at=datetime(2020, 1, 1),
    ))
    await db_session.commit()

    resp = await client.delete(BASE, params={"olderThan": 30}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["deleted"] == 1
    assert [r.id for r in await history_rows(db_session, 1)] == [fresh["id"]]
