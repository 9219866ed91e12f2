from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.supabase_client import get_supabase_client
from core.claims import principal_from_claims
from core.errors import unauthorized
from core.logging_config import logger
from models.principal import Principal


# auto_error=False so a missing header gets our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# CLAIMS LOOKUP (Supabase: validates JWT + fetches metadata)
# ============================================================
def fetch_identity_claims(token: str) -> Optional[dict]:
    """
    Resolve a bearer token to the identity provider's claims bag.
    Returns None when the token cannot be validated.
    """
    client = get_supabase_client()
    if not client:
        logger.error("Supabase client not configured; cannot resolve bearer token")
        return None

    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token validation failed: {type(e).__name__}")
        return None

    if not auth_resp or not auth_resp.user:
        return None

    auth_user = auth_resp.user

    # app_metadata is server-controlled and wins over user_metadata
    claims = {}
    claims.update(auth_user.user_metadata or {})
    claims.update(auth_user.app_metadata or {})
    claims["sub"] = auth_user.id
    claims["email"] = auth_user.email
    return claims


# ============================================================
# CURRENT PRINCIPAL
# ============================================================
def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    Authenticated, normalized principal for this request.
    Raises 401 when there is no usable identity at all; a malformed
    segment or role still yields a (gated / unauthorized) principal.
    """
    if not credentials:
        raise unauthorized("No authentication token provided")

    claims = fetch_identity_claims(credentials.credentials)
    if claims is None:
        raise unauthorized("Invalid or expired authentication token")

    return principal_from_claims(claims)
