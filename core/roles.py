# ============================================
# CENTRALIZED ROLE ALIAS MAP
# ============================================
from models.enums import Role
from core.logging_config import logger


ROLE_ALIASES = {

    # =====================================================
    # ADMIN — full administrative control
    # =====================================================
    "admin": Role.admin,
    "administrator": Role.admin,
    "superadmin": Role.admin,
    "super_admin": Role.admin,

    # =====================================================
    # EDITOR — legacy creator / contributor roles
    # =====================================================
    "editor": Role.editor,
    "creator": Role.editor,
    "contributor": Role.editor,
    "author": Role.editor,

    # =====================================================
    # APPROVER — workflow validation
    # =====================================================
    "approver": Role.approver,
    "manager": Role.approver,
    "reviewer": Role.approver,
    "moderator": Role.approver,

    # =====================================================
    # VIEWER — read-only
    # =====================================================
    "viewer": Role.viewer,
    "reader": Role.viewer,
    "member": Role.viewer,
    "guest": Role.viewer,
}


def normalize_role(raw) -> Role:
    """
    Map a raw role claim onto one of the canonical roles.
    Anything unmapped (including non-strings) becomes Role.unauthorized.
    """
    if isinstance(raw, Role):
        return raw
    if not isinstance(raw, str):
        return Role.unauthorized

    key = raw.strip().lower()
    role = ROLE_ALIASES.get(key, Role.unauthorized)

    if role is not Role.unauthorized and role.value != key:
        logger.debug(f"Role normalized: '{raw}' → '{role}'")

    return role
