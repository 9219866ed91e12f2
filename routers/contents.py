# routers/contents.py

from fastapi import APIRouter, Depends, HTTPException, Query

from core.permission_helpers import requires_ability, enforce
from core.ability import can
from core.supabase_client import get_supabase_client
from core.errors import handle_supabase_error
from core.utils import sanitize
from models.ability import Ability
from models.content import ContentCreate, ContentRead


router = APIRouter(
    prefix="/contents",
    tags=["Contents"],
)


def _client():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def _fetch_content(client, content_id: str) -> dict:
    try:
        res = (
            client.table("contents")
            .select("*")
            .eq("id", content_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch content")

    if not res.data:
        raise HTTPException(404, "Content not found")
    return res.data[0]


# ============================================================
# LIST CONTENTS
# ============================================================
@router.get(
    "",
    summary="List Contents",
    description="""
    **Permissions:** Requires `read Content`.
    Rows the caller may not read at instance level are filtered out.
    """,
)
def list_contents(
    limit: int = Query(100, ge=1, le=1000),
    ability: Ability = Depends(requires_ability("read", "Content")),
):
    client = _client()

    try:
        res = client.table("contents").select("*").limit(limit).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch contents")

    rows = [row for row in (res.data or []) if can(ability, "read", "Content", row)]
    return {"success": True, "data": rows}


# ============================================================
# CREATE CONTENT
# ============================================================
@router.post(
    "",
    response_model=ContentRead,
    summary="Create Content",
    description="**Permissions:** Requires `create Content` for the target organization.",
)
def create_content(
    payload: ContentCreate,
    ability: Ability = Depends(requires_ability("create", "Content")),
):
    data = sanitize(payload.model_dump())
    if data.get("organization_id") is None:
        data["organization_id"] = ability.principal.organization_id

    enforce(ability, "create", "Content", data)

    data["status"] = "draft"
    client = _client()

    try:
        res = client.table("contents").insert(data).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create content")

    if not res.data:
        raise HTTPException(500, "Failed to create content")
    return res.data[0]


# ============================================================
# PUBLISH / UNPUBLISH CONTENT
# ============================================================
@router.post(
    "/{content_id}/publish",
    response_model=ContentRead,
    summary="Publish Content",
    description="**Permissions:** Requires `publish Content` on this record.",
)
def publish_content(
    content_id: str,
    published: bool = Query(True, description="False unpublishes"),
    ability: Ability = Depends(requires_ability("publish", "Content")),
):
    client = _client()
    row = _fetch_content(client, content_id)

    enforce(ability, "publish", "Content", row)

    status = "published" if published else "draft"
    try:
        res = (
            client.table("contents")
            .update({"status": status})
            .eq("id", content_id)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to publish content")

    return res.data[0] if res.data else {**row, "status": status}


# ============================================================
# DELETE CONTENT
# ============================================================
@router.delete(
    "/{content_id}",
    summary="Delete Content",
    description="**Permissions:** Requires `delete Content` on this record.",
)
def delete_content(
    content_id: str,
    ability: Ability = Depends(requires_ability("delete", "Content")),
):
    client = _client()
    row = _fetch_content(client, content_id)

    enforce(ability, "delete", "Content", row)

    try:
        client.table("contents").delete().eq("id", content_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete content")

    return {"success": True, "id": content_id}
