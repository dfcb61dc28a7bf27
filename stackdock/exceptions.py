"""
Custom exceptions for the stackdock application.
"""


class StackDockError(Exception):
    """Base exception for all stackdock errors."""
    pass


class ValidationError(StackDockError):
    """Raised when caller input is rejected before any state change."""
    pass


class NotFoundError(StackDockError):
    """Raised when a requested stack or card is not found."""
    pass


class StorageError(StackDockError):
    """Raised when reading or writing the local snapshot fails."""
    pass


class ConfigurationError(StackDockError):
    """Raised when there's a configuration or setup issue."""
    pass


class GatewayError(StackDockError):
    """Raised by a gateway when the remote service rejects a mutation.

    Attributes:
        status_code: HTTP-like status code reported by the remote side.
    """

    def __init__(self, message: str = "", status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code
