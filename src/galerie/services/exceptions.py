"""Service error hierarchy.

This module defines the exception hierarchy for service-level errors:
- ServiceError: Base for all service errors
- StorageError: Object storage upload or delete failed
- AuthenticationError: Login rejected
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    pass


class StorageError(ServiceError):
    """Object storage call failed.

    ``operation`` is "upload" or "delete"; the message of the underlying
    botocore error is kept for logging only.
    """

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation


class AuthenticationError(ServiceError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    pass
