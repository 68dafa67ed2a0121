# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_optional_config() -> List[str]:
    warnings = []

    if not settings.SUPABASE_ANON_KEY:
        warnings.append("SUPABASE_ANON_KEY (optional but recommended)")
    if settings.ENV == "production" and not settings.STRICT_ROLES:
        warnings.append("STRICT_ROLES is off; unrecognized roles receive the default areas")
    if settings.WORKDAY_START >= settings.WORKDAY_END:
        warnings.append("WORKDAY_START is not before WORKDAY_END; every clock-in will be refused")

    return warnings


def validate_config_on_startup() -> bool:
    """
    Validate configuration on application startup.
    Missing store credentials are logged, not raised: /health/app keeps
    answering and data routes return 500 "Database not initialized".
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        logger.error(f"Missing required environment variables: {', '.join(missing_required)}")

    for warning in missing_optional:
        logger.warning(f"Configuration: {warning}")

    if not missing_required:
        logger.info("Configuration validation passed")
    return not missing_required
