# models/content.py

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, field_validator


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class ContentBase(BaseModel):
    title: str
    body: Optional[str] = None
    organization_id: Optional[str] = None


# -------------------------------------------------
# Create
# -------------------------------------------------
class ContentCreate(ContentBase):
    """
    Used when creating a content item in Supabase.
    organization_id defaults to the caller's own organization.
    """
    pass


# -------------------------------------------------
# Read (Supabase → API response)
# -------------------------------------------------
class ContentRead(ContentBase):
    id: str
    status: str = "draft"
    created_at: Optional[datetime] = None

    # Normalize UUID → str always
    @field_validator("id", "organization_id", mode="before")
    @classmethod
    def normalize_ids(cls, v):
        if isinstance(v, UUID):
            return str(v)
        return v

    # Parse trailing Z timestamps
    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v
