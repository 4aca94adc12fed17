# core/errors.py

from fastapi import HTTPException


def extract_storage_error(error: Exception) -> str:
    """
    Safely extract readable details from storage errors.
    Handles:
      • SQLAlchemy DBAPI errors (wrapped driver message in .orig)
      • Plain Python exceptions
    """

    # Case 1: SQLAlchemy wraps the driver error
    orig = getattr(error, "orig", None)
    if orig is not None:
        return str(orig)

    # Case 2: errors with args (common)
    if error.args:
        return str(error.args[0])

    return str(error) or type(error).__name__


def handle_storage_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle storage errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what operation failed (e.g., "Failed to create booking")
        status_code: HTTP status code (default 500)

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    error_detail = extract_storage_error(error)
    logger.error(f"{operation}: {error_detail}")

    # Provide user-friendly messages for common errors
    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
