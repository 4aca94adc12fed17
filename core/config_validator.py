# core/config_validator.py

from typing import List
from core.config import settings, DEV_JWT_SECRET
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate settings that must be real in production.
    Returns list of problems (empty when everything is fine).
    """
    missing = []

    if settings.ENV == "production":
        if settings.JWT_SECRET_KEY == DEV_JWT_SECRET or len(settings.JWT_SECRET_KEY) < 32:
            missing.append("JWT_SECRET_KEY (must be a unique value of at least 32 characters)")
        if not settings.DATABASE_URL:
            missing.append("DATABASE_URL")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of warnings.
    """
    warnings = []

    if settings.JWT_SECRET_KEY == DEV_JWT_SECRET:
        warnings.append("JWT_SECRET_KEY is using the development default")
    if not settings.DATABASE_URL:
        warnings.append("DATABASE_URL not set, data is kept in memory only")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Invalid configuration: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    for warning in missing_optional:
        logger.warning(f"Configuration warning: {warning}")

    logger.info("Configuration validation passed")
