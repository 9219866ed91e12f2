# routers/policies.py

from fastapi import APIRouter, Depends

from core.permission_helpers import requires_ability
from core.policy import describe_policies


router = APIRouter(
    prefix="/policies",
    tags=["Policies"],
)


# -----------------------------------------------------
# GET /policies
# Role → Segment → rule matrix for audit
# -----------------------------------------------------
@router.get(
    "",
    summary="Export authorization policy matrix",
    dependencies=[Depends(requires_ability("manage", "all"))],
)
def export_policies():
    return describe_policies()
