"""
Custom exception classes and error handling.

Provides consistent error responses across the API. Every error body uses
the same envelope: ``{"success": false, "message": ...}`` plus an optional
``errors`` list or ``error`` string.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any, List


class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def to_content(self) -> Dict[str, Any]:
        """Response body for this error."""
        return {"success": False, "message": self.detail}


class HealthDataValidationError(APIException):
    """Submitted health data failed one or more validation rules."""

    def __init__(self, errors: List[str], detail: str = "Invalid data"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.errors = list(errors)

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["errors"] = self.errors
        return content


class PersistenceError(APIException):
    """The health record could not be stored."""

    def __init__(self, error: Optional[str], detail: str = "Failed to save data to database"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="PERSISTENCE_ERROR"
        )
        self.error = error

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["error"] = self.error
        return content
