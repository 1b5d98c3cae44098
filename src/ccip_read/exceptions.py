"""Exception hierarchy for offchain lookup resolution."""

from typing import Any


class CCIPReadError(Exception):
    """Base exception for all offchain lookup errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnknownError(CCIPReadError):
    """Raised when a failed call carries no revert payload we understand."""

    pass


class NestedScopeViolationError(CCIPReadError):
    """Raised when an OffchainLookup was not emitted by the call's direct target."""

    def __init__(
        self,
        message: str,
        to: str | None = None,
        sender: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.to = to
        self.sender = sender


class MalformedRedirectError(CCIPReadError):
    """Raised when a payload carries the OffchainLookup selector but does not decode."""

    def __init__(self, message: str, data: bytes | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.data = data


class AllGatewaysFailedError(CCIPReadError):
    """Raised when no gateway URL produced a successful response."""

    def __init__(
        self,
        message: str,
        urls: list[str] | None = None,
        sender: str | None = None,
        call_data: bytes | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.urls = urls or []
        self.sender = sender
        self.call_data = call_data


class TooManyRedirectsError(CCIPReadError):
    """Raised when resolution exceeds the configured hop bound."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
        max_hops: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.target = target
        self.max_hops = max_hops


class NotSupportedError(CCIPReadError):
    """Raised when an adapter operation is unavailable."""

    def __init__(self, message: str, operation: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.operation = operation


class GatewayUnavailableError(CCIPReadError):
    """Raised by fetchers when a gateway cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class RPCError(CCIPReadError):
    """Raised when a forwarded JSON-RPC request returns an error object."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        error: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.method = method
        self.error = error


class ValidationError(CCIPReadError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
