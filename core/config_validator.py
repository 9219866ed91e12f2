# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).

    The authorization engine itself needs no configuration; Supabase is
    only required by the identity lookup and the content routes.
    """
    warnings = []

    if not settings.SUPABASE_URL:
        warnings.append("SUPABASE_URL (required for bearer-token identity lookup)")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        warnings.append("SUPABASE_SERVICE_ROLE_KEY (required for bearer-token identity lookup)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Logs warnings for optional config; never blocks startup.
    """
    missing_optional = validate_optional_config()

    for warning in missing_optional:
        logger.warning(f"Optional configuration missing: {warning}")

    if not missing_optional:
        logger.info("Configuration validation passed")

    return missing_optional
