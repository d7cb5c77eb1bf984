"""
Application Exceptions

Base exception hierarchy raised by command handlers and application services.
Each exception carries a stable error code and the HTTP status the API layer
should answer with, so handlers stay free of any transport concerns.
"""

from typing import Any, Dict, Optional


class ApplicationError(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    error_code = "APPLICATION_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "type": self.__class__.__name__,
            }
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code}')"


class ResourceNotFoundError(ApplicationError):
    """Raised when a referenced resource does not exist"""

    error_code = "RESOURCE_NOT_FOUND"
    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message += f" (ID: {resource_id})"
        super().__init__(
            message,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
