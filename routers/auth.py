from fastapi import APIRouter, Depends

from dependencies.auth import get_current_principal
from core.claims import access_denied_message
from core.policy import build_ability
from core.permission_helpers import capability_matrix, can_access_module, MODULE_SUBJECTS
from models.principal import Principal


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# CURRENT CAPABILITIES (optimistic UI gating)
# ============================================================
@router.get("/abilities", summary="Capabilities of the current user")
def my_abilities(principal: Principal = Depends(get_current_principal)):
    """
    Everything the dashboard needs to hide/show affordances.
    The same policy table backs server-side enforcement, so these
    answers match what the API will enforce.
    """
    ability = build_ability(principal)

    return {
        "principal": {
            "role": principal.role.value,
            "segment": principal.segment.value if principal.segment else None,
            "organization_id": principal.organization_id,
            "user_id": principal.user_id,
            "gated": principal.gated,
        },
        "access_denied": access_denied_message(principal),
        "modules": {name: can_access_module(ability, name) for name in MODULE_SUBJECTS},
        "capabilities": capability_matrix(ability),
    }
