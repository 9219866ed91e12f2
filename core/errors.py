# core/errors.py

from typing import Optional
from fastapi import HTTPException


class AuthorizationError(HTTPException):
    """
    HTTPException carrying a structured JSON body.
    main.py renders `body` as-is instead of wrapping it in {"detail": ...}.
    """

    def __init__(self, status_code: int, body: dict):
        super().__init__(status_code=status_code, detail=body.get("message"))
        self.body = body


def unauthorized(message: str = "User not authenticated") -> AuthorizationError:
    return AuthorizationError(401, {"error": "unauthorized", "message": message})


def forbidden(action, subject, message: Optional[str] = None) -> AuthorizationError:
    action, subject = str(action), str(subject)
    return AuthorizationError(
        403,
        {
            "error": "forbidden",
            "reason": "insufficient_permissions",
            "message": message or f"{action} {subject}",
            "required": {"action": action, "subject": subject},
        },
    )


def forbidden_any(pairs, message: str = "Insufficient permissions for this operation") -> AuthorizationError:
    """403 for a route satisfied by any one of several permissions; lists them all."""
    return AuthorizationError(
        403,
        {
            "error": "forbidden",
            "reason": "insufficient_permissions",
            "message": message,
            "required": [{"action": str(a), "subject": str(s)} for a, s in pairs],
        },
    )


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1 — Supabase Auth / GoTrue errors
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2 — Supabase errors with args (common)
    if error.args:
        return str(error.args[0])

    # Case 3 — Plain string fallback
    return str(error) or "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.
    Error details are logged, never returned to the client.
    """
    from core.logging_config import logger

    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
