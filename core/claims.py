# core/claims.py

"""
Principal normalizer.

Turns loosely-typed identity claims into a validated Principal, once, at
the boundary. Two entry points exist because the two hosts receive claims
in different shapes:

  • principal_from_claims   — browser-side identity claims (ID token
                              payload / user metadata), segment allow-list
                              internal, partner, customer, advisor
  • principal_from_context  — server-side RBAC context, where a
                              customerType string is mapped to
                              internal / partner

Both are total: any input, however malformed, yields a Principal.
A bad or missing segment yields a gated Principal, never an exception.
"""

from typing import Any, Mapping, Optional

from models.enums import Role, Segment, GateReason
from models.principal import Principal
from core.roles import normalize_role
from core.logging_config import logger


# -----------------------------------------------------
# Claim key variants, first present wins
# -----------------------------------------------------
ROLE_CLAIM_KEYS = (
    "User Role",
    "UserRole",
    "userRole",
    "extension_Role",
    "extension_role",
    "role",
    "Role",
    "user_role",
)

SEGMENT_CLAIM_KEYS = (
    "user_segment",
    "userSegment",
    "customerType",
    "CustomerType",
    "extension_CustomerType",
    "extension_customerType",
    "customer_type",
    "user_type",
    "userType",
    "UserType",
)

ORGANIZATION_CLAIM_KEYS = (
    "organization_id",
    "organizationId",
    "organisationId",
    "extension_OrganizationId",
    "org_id",
    "orgId",
    "tenant_id",
    "tenantId",
)

USER_ID_CLAIM_KEYS = ("sub", "oid", "user_id", "userId", "id")


# Browser-side allow-list
UI_SEGMENTS = {
    "internal": Segment.internal,
    "partner": Segment.partner,
    "customer": Segment.customer,
    "advisor": Segment.advisor,
}

# Server-side customerType → segment
CUSTOMER_TYPE_SEGMENTS = {
    "staff": Segment.internal,
    "admin": Segment.internal,
    "internal": Segment.internal,
    "partner": Segment.partner,
}


def _first_claim(claims: Mapping, keys) -> Any:
    for key in keys:
        value = claims.get(key)
        if value is not None and value != "":
            return value
    return None


def _clean_id(value) -> Optional[str]:
    """Identifiers must be non-empty strings (ints are accepted and stringified)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _resolve_segment(raw, table: Mapping[str, Segment]) -> Principal:
    """Return a segment-only Principal: either resolved or gated."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Principal(gated=True, gate_reason=GateReason.missing_segment)

    if not isinstance(raw, str):
        return Principal(
            gated=True,
            gate_reason=GateReason.invalid_segment,
            raw_segment=repr(raw),
        )

    segment = table.get(raw.strip().lower())
    if segment is None:
        return Principal(
            gated=True,
            gate_reason=GateReason.invalid_segment,
            raw_segment=raw.strip(),
        )

    return Principal(segment=segment)


def _build(role_raw, segment_raw, org_raw, user_raw, table) -> Principal:
    resolved = _resolve_segment(segment_raw, table)
    user_id = _clean_id(user_raw)

    if resolved.gated:
        logger.warning(
            f"Gated principal: {resolved.gate_reason} "
            f"(segment={resolved.raw_segment!r}, user={user_id})"
        )
        return resolved.model_copy(update={"user_id": user_id})

    return Principal(
        role=normalize_role(role_raw),
        segment=resolved.segment,
        organization_id=_clean_id(org_raw),
        user_id=user_id,
    )


# ============================================================
# BROWSER-SIDE CLAIMS
# ============================================================
def principal_from_claims(claims) -> Principal:
    """
    Normalize an identity-provider claims bag.

    Usage:
        principal = principal_from_claims({"role": "creator", "user_segment": "internal"})
    """
    if not isinstance(claims, Mapping):
        return Principal(gated=True, gate_reason=GateReason.missing_segment)

    return _build(
        _first_claim(claims, ROLE_CLAIM_KEYS),
        _first_claim(claims, SEGMENT_CLAIM_KEYS),
        _first_claim(claims, ORGANIZATION_CLAIM_KEYS),
        _first_claim(claims, USER_ID_CLAIM_KEYS),
        UI_SEGMENTS,
    )


# ============================================================
# SERVER-SIDE RBAC CONTEXT
# ============================================================
def principal_from_context(context) -> Principal:
    """
    Normalize the RBAC context attached by the request pipeline:
    userRole, customerType, orgId, userId.
    """
    if not isinstance(context, Mapping):
        return Principal(gated=True, gate_reason=GateReason.missing_segment)

    return _build(
        _first_claim(context, ("userRole", "role")),
        _first_claim(context, ("customerType", "customer_type")),
        _first_claim(context, ("orgId", "organizationId", "organization_id")),
        _first_claim(context, ("userId", "user_id", "id")),
        CUSTOMER_TYPE_SEGMENTS,
    )


# ============================================================
# ACCESS DENIED MESSAGES
# ============================================================
def access_denied_message(principal: Principal) -> Optional[str]:
    """
    Human-readable explanation for a principal that cannot use the
    application at all. Returns None when the principal is usable.
    """
    if principal.gate_reason is GateReason.missing_segment:
        return (
            "Access denied: Missing user segment claim. "
            "Please contact your administrator to configure the identity claims for your account."
        )

    if principal.gate_reason is GateReason.invalid_segment:
        return (
            f"Access denied: Invalid user segment \"{principal.raw_segment}\". "
            f"Valid segments: {', '.join(UI_SEGMENTS)}. "
            "Please contact your administrator."
        )

    if principal.role is Role.unauthorized or principal.segment not in (Segment.internal, Segment.partner):
        return (
            "Access denied: Insufficient permissions. "
            "Please contact your administrator if you believe this is an error."
        )

    return None
