"""
Gateway Errors
==============

Error taxonomy for graph operations.

Client errors are raised before the store is touched. Store errors carry a
short driver detail for the caller; the full failure is logged server-side.

Version: 0.1.0
"""

from typing import Any


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    status_code: int = 500
    error_code: str = "gateway_error"

    def __init__(self, message: str, detail: str | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_details(self) -> dict[str, Any] | None:
        """Extra fields for the error body, if any."""
        if self.detail is None:
            return None
        return {"detail": self.detail}


class ClientError(GatewayError):
    """The request itself is wrong; nothing was sent to the store."""

    status_code = 400
    error_code = "client_error"


class MissingParameter(ClientError):
    """A required parameter is absent or empty."""

    error_code = "missing_parameter"

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")

    def to_details(self) -> dict[str, Any]:
        return {"parameter": self.parameter}


class InvalidParameter(ClientError):
    """A parameter is present but fails validation."""

    error_code = "invalid_parameter"

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        super().__init__(f"Invalid parameter '{parameter}': {reason}")

    def to_details(self) -> dict[str, Any]:
        return {"parameter": self.parameter}


class UnknownOperation(ClientError):
    """The operation name does not map to a supported operation."""

    error_code = "unknown_operation"

    def __init__(self, operation: str | None, supported: list[str]) -> None:
        self.operation = operation
        self.supported = supported
        if operation:
            message = f"Unknown operation: {operation}"
        else:
            message = "No operation given"
        super().__init__(message)

    def to_details(self) -> dict[str, Any]:
        return {"operation": self.operation, "supported": self.supported}


class MethodNotAllowed(ClientError):
    """Only read-only (GET) access is supported."""

    status_code = 405
    error_code = "method_not_allowed"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method {method} not allowed, only GET is supported")

    def to_details(self) -> dict[str, Any]:
        return {"method": self.method, "allowed": ["GET"]}


class StoreError(GatewayError):
    """The graph store failed while serving the request."""

    status_code = 500
    error_code = "store_error"


class ConnectionFailure(StoreError):
    """The store could not be reached or the connection dropped."""

    error_code = "connection_failure"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("Graph store unavailable", detail=detail)


class QueryFailure(StoreError):
    """The store rejected or failed to execute the query."""

    error_code = "query_failure"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__("Graph query failed", detail=detail)
