"""
Shared error handling for the Tenant API Gateway.

Only caller mistakes are raised as exceptions. Outcomes of an upstream
exchange (transport failures, non-2xx answers) are returned as
``GatewayResult`` values and never raised.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class TenantGatewayException(Exception):
    """Base exception for Tenant API Gateway components."""

    status_code: int = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(TenantGatewayException):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class UnknownCommandError(TenantGatewayException):
    """Raised when a command name has no request spec."""

    status_code = 404

    def __init__(self, command: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("UNKNOWN_COMMAND", f"Unknown command: {command}", details)


class ConfigurationError(TenantGatewayException):
    """Configuration-related errors."""

    status_code = 500

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
