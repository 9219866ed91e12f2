# tests/test_enforcement.py

"""
Tests for HTTP enforcement: 401 / 403 bodies, instance-level checks, 500 masking.
"""

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from unittest.mock import patch, Mock

from models.principal import Principal
from core.permission_helpers import requires_any_ability, requires_all_abilities


def _select_returning(mock_client, rows):
    mock_query = Mock()
    mock_query.eq.return_value = mock_query
    mock_query.limit.return_value = mock_query
    mock_query.execute.return_value = Mock(data=rows)
    mock_client.table.return_value.select.return_value = mock_query
    return mock_query


def test_missing_token_is_401(client: TestClient):
    """Test that a request without a bearer token gets the 401 body."""
    response = client.get("/contents")

    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "unauthorized"
    assert body["message"]


def test_invalid_token_is_401(client: TestClient, mock_supabase_client):
    """Test that a token Supabase rejects gets the 401 body."""
    mock_supabase_client.auth.get_user.side_effect = Exception("bad jwt")

    with patch("dependencies.auth.get_supabase_client", return_value=mock_supabase_client):
        response = client.get("/contents", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"


def test_denied_principal_gets_403_body(client: TestClient, login_as, partner_admin):
    """Test the exact 403 body for a type-level denial."""
    login_as(partner_admin)

    response = client.delete("/contents/c-1")

    assert response.status_code == 403
    assert response.json() == {
        "error": "forbidden",
        "reason": "insufficient_permissions",
        "message": "delete Content",
        "required": {"action": "delete", "subject": "Content"},
    }


def test_gated_principal_is_forbidden(client: TestClient, login_as):
    """Test that a gated principal is refused with 403, not 401."""
    login_as(Principal(gated=True))

    response = client.get("/contents")

    assert response.status_code == 403
    assert response.json()["required"] == {"action": "read", "subject": "Content"}


def test_list_returns_readable_rows(client: TestClient, login_as, partner_editor, mock_supabase_client):
    """Test listing content as a partner editor."""
    login_as(partner_editor)
    _select_returning(mock_supabase_client, [
        {"id": "1", "title": "ours", "organization_id": "org-1"},
        {"id": "2", "title": "theirs", "organization_id": "org-2"},
    ])

    with patch("routers.contents.get_supabase_client", return_value=mock_supabase_client):
        response = client.get("/contents")

    assert response.status_code == 200
    # partner editors read every content row; read is not org-scoped
    assert len(response.json()["data"]) == 2


def test_create_for_own_org(client: TestClient, login_as, internal_editor, mock_supabase_client):
    """Test that create defaults organization_id to the caller's org."""
    login_as(internal_editor)
    mock_supabase_client.table.return_value.insert.return_value.execute.return_value = Mock(
        data=[{"id": "c-9", "title": "Hello", "organization_id": "Y", "status": "draft"}]
    )

    with patch("routers.contents.get_supabase_client", return_value=mock_supabase_client):
        response = client.post("/contents", json={"title": "Hello"})

    assert response.status_code == 200
    inserted = mock_supabase_client.table.return_value.insert.call_args[0][0]
    assert inserted["organization_id"] == "Y"
    assert response.json()["id"] == "c-9"


def test_create_for_other_org_is_403(client: TestClient, login_as, internal_editor, mock_supabase_client):
    """Test that the instance-level check blocks another org's content."""
    login_as(internal_editor)

    with patch("routers.contents.get_supabase_client", return_value=mock_supabase_client):
        response = client.post("/contents", json={"title": "Hello", "organization_id": "Z"})

    assert response.status_code == 403
    assert response.json()["message"] == "create Content"
    mock_supabase_client.table.return_value.insert.assert_not_called()


def test_partner_admin_cannot_publish(client: TestClient, login_as, partner_admin):
    """Partner admins never publish."""
    login_as(partner_admin)

    response = client.post("/contents/c-1/publish")

    assert response.status_code == 403
    assert response.json()["required"]["action"] == "publish"


def test_internal_editor_publishes(client: TestClient, login_as, internal_editor, mock_supabase_client):
    """Test publishing as an internal editor."""
    login_as(internal_editor)
    row = {"id": "c-1", "title": "t", "organization_id": "Z", "status": "draft"}
    _select_returning(mock_supabase_client, [row])
    mock_supabase_client.table.return_value.update.return_value.eq.return_value.execute.return_value = Mock(
        data=[{**row, "status": "published"}]
    )

    with patch("routers.contents.get_supabase_client", return_value=mock_supabase_client):
        response = client.post("/contents/c-1/publish")

    assert response.status_code == 200
    assert response.json()["status"] == "published"


def test_unexpected_error_is_500_without_details(app, login_as, internal_admin):
    """Test that unhandled errors are masked as a generic 500."""
    login_as(internal_admin)

    with patch("routers.contents.get_supabase_client", side_effect=RuntimeError("rule table exploded")):
        with TestClient(app, raise_server_exceptions=False) as raw_client:
            response = raw_client.get("/contents")

    assert response.status_code == 500
    assert response.json() == {"error": "internal_error", "message": "Internal server error"}
    assert "rule" not in response.text


def test_policies_export_requires_manage_all(client: TestClient, login_as, partner_editor, internal_admin):
    """Test that only manage-all principals can export policies."""
    login_as(partner_editor)
    assert client.get("/policies").status_code == 403

    login_as(internal_admin)
    response = client.get("/policies")
    assert response.status_code == 200
    assert response.json()["metadata"]["rolesCount"] == 4


@pytest.fixture
def guarded_client(app):
    """Client for an app with routes behind the any/all dependencies."""
    any_review = requires_any_ability([("update", "Content"), ("approve", "Service")])
    all_review = requires_all_abilities([("read", "Content"), ("approve", "Content")])

    @app.get("/review/any", dependencies=[Depends(any_review)])
    def review_any():
        return {"ok": True}

    @app.get("/review/all", dependencies=[Depends(all_review)])
    def review_all():
        return {"ok": True}

    with TestClient(app) as test_client:
        yield test_client


def test_any_ability_passes_on_one_match(guarded_client: TestClient, login_as, internal_editor):
    """Test that one allowed pair is enough."""
    login_as(internal_editor)

    response = guarded_client.get("/review/any")

    assert response.status_code == 200


def test_any_ability_403_lists_every_pair(guarded_client: TestClient, login_as, internal_viewer):
    """Test that the 403 body reports all pairs the route accepts."""
    login_as(internal_viewer)

    response = guarded_client.get("/review/any")

    assert response.status_code == 403
    assert response.json() == {
        "error": "forbidden",
        "reason": "insufficient_permissions",
        "message": "Insufficient permissions for this operation",
        "required": [
            {"action": "update", "subject": "Content"},
            {"action": "approve", "subject": "Service"},
        ],
    }


def test_all_abilities_passes_when_every_pair_allowed(guarded_client: TestClient, login_as, internal_admin):
    """Test the all-of dependency for an internal admin."""
    login_as(internal_admin)

    response = guarded_client.get("/review/all")

    assert response.status_code == 200


def test_all_abilities_403_names_first_failing_pair(guarded_client: TestClient, login_as, internal_editor):
    """Test that editors fail on approve after passing read."""
    login_as(internal_editor)

    response = guarded_client.get("/review/all")

    assert response.status_code == 403
    assert response.json()["required"] == {"action": "approve", "subject": "Content"}


@pytest.mark.parametrize("factory", [requires_any_ability, requires_all_abilities])
def test_empty_pair_list_is_rejected_at_declaration(factory):
    """Test that a route cannot be declared with no permissions."""
    with pytest.raises(ValueError):
        factory([])


def test_unknown_pair_is_rejected_at_declaration():
    """Unknown vocabulary in a declaration is a programmer error."""
    with pytest.raises(ValueError):
        requires_any_ability([("read", "Content"), ("unpublish", "Content")])
