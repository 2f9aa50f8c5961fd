"""
Service layer exception taxonomy.

Every business outcome that is not a success is raised as a subclass of
ServiceError. The API layer translates them to HTTP responses using the
status code and reason carried by the class; nothing is retried.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for service layer errors."""

    status_code: int = 500
    status: str = "INTERNAL_SERVER_ERROR"
    reason: str = "Unexpected error."

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    status = "NOT_FOUND"
    reason = "The required object was not found."

    def __init__(self, resource: str, identifier: Any, message: str = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} with id={identifier} was not found")


class BusinessRuleViolationError(ServiceError):
    """Raised when an operation is refused by a state-machine or policy rule."""

    status_code = 409
    status = "CONFLICT"
    reason = "For the requested operation the conditions are not met."


class InvalidArgumentError(ServiceError):
    """Raised when input is malformed (bad date range, unsupported value)."""

    status_code = 400
    status = "BAD_REQUEST"
    reason = "Incorrectly made request."

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class AlreadyExistsError(ServiceError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = 409
    status = "CONFLICT"
    reason = "Integrity constraint has been violated."

    def __init__(self, resource: str, field: str, value: Any):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field}={value} already exists")
