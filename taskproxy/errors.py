"""
Error hierarchy for the task proxy.

Every error carries a code and the HTTP status it maps to, and renders the
``{"error": <message>}`` envelope returned to clients.
"""

from typing import Any, Dict, Optional


class TaskProxyError(Exception):
    """Base exception for all task proxy errors."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> Dict[str, Any]:
        """Convert to the client-facing error envelope."""
        return {"error": self.message}


class InvalidActionError(TaskProxyError):
    """Request named an action outside the supported set."""

    def __init__(self, action: Any):
        super().__init__("Invalid action", "INVALID_ACTION", 400)
        self.action = action


class RecordNotFoundError(TaskProxyError):
    """Single-row lookup matched zero rows."""

    def __init__(self, table: str, filters: Dict[str, Any]):
        super().__init__(
            f"No {table} row matches {filters}", "RECORD_NOT_FOUND", 404,
        )
        self.table = table
        self.filters = filters


class StoreError(TaskProxyError):
    """The external store rejected or failed an operation."""

    def __init__(
        self,
        message: str,
        operation: str,
        table: str,
        store_code: Optional[str] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message, "STORE_ERROR", 500)
        self.operation = operation
        self.table = table
        self.store_code = store_code
        self.details = details
        self.hint = hint


class ConfigurationError(TaskProxyError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR", 500)


def error_message(error: Exception) -> str:
    """Message string reported to clients for any exception."""
    if isinstance(error, TaskProxyError):
        return error.message
    return str(error)
