"""Exception classes for Socketlink SDK."""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import Optional


class SocketlinkError(Exception):
    """Base exception for all Socketlink SDK errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize Socketlink error.

        Args:
            message: Error message
            error_code: Optional error code
            details: Optional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of the error."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class SocketlinkHTTPError(SocketlinkError):
    """HTTP request to the Socketlink API failed."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_text: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize HTTP error.

        Args:
            message: Error message
            status_code: HTTP status code, 0 when no response was received
            response_text: Raw response text
            error_code: Optional error code
            details: Optional error details
        """
        super().__init__(message, error_code, details)
        self.status_code = status_code
        self.response_text = response_text

    def __str__(self) -> str:
        """String representation of the HTTP error."""
        base = super().__str__()
        if self.status_code:
            return f"HTTP {self.status_code}: {base}"
        return base


class SocketlinkTimeoutError(SocketlinkHTTPError):
    """Request timeout error."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize timeout error.

        Args:
            message: Error message
            timeout: Timeout value in seconds
            details: Optional error details
        """
        super().__init__(message, 0, error_code="TIMEOUT", details=details)
        self.timeout = timeout

    def __str__(self) -> str:
        """String representation of the timeout error."""
        base = super().__str__()
        if self.timeout:
            return f"{base} (timeout: {self.timeout}s)"
        return base


class SocketlinkValidationError(SocketlinkError):
    """Invalid argument passed to an API operation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            field: Name of the offending argument
            details: Optional error details
        """
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class SocketlinkWebSocketError(SocketlinkError):
    """WebSocket connection or communication error."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize WebSocket error.

        Args:
            message: Error message
            code: WebSocket close code
            reason: Close reason
            details: Optional error details
        """
        super().__init__(message, "WEBSOCKET_ERROR", details)
        self.code = code
        self.reason = reason

    def __str__(self) -> str:
        """String representation of the WebSocket error."""
        base = super().__str__()
        if self.code and self.reason:
            return f"{base} (code: {self.code}, reason: {self.reason})"
        elif self.code:
            return f"{base} (code: {self.code})"
        return base


class SocketlinkConfigurationError(SocketlinkError):
    """Configuration error, including missing API keys."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            details: Optional error details
        """
        super().__init__(message, "CONFIGURATION_ERROR", details)


class SocketlinkDataError(SocketlinkError):
    """Inbound data could not be parsed."""

    def __init__(
        self,
        message: str,
        data: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize data error.

        Args:
            message: Error message
            data: Invalid data that caused the error
            details: Optional error details
        """
        super().__init__(message, "DATA_ERROR", details)
        self.data = data
