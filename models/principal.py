# models/principal.py

from typing import Optional
from pydantic import BaseModel, ConfigDict

from models.enums import Role, Segment, GateReason


# ===============================================================
# PRINCIPAL — validated identity attributes
# ===============================================================

class Principal(BaseModel):
    """
    The only input the authorization engine needs.

    Built fresh per request/render by core.claims and never mutated.
    Two principals with equal fields are interchangeable.
    A gated principal compiles to a deny-everything ability; its role
    and organization are ignored downstream.
    """
    model_config = ConfigDict(frozen=True)

    role: Role = Role.unauthorized
    segment: Optional[Segment] = None
    organization_id: Optional[str] = None
    user_id: Optional[str] = None

    gated: bool = False
    gate_reason: Optional[GateReason] = None
    raw_segment: Optional[str] = None  # offending claim value, for messages only
