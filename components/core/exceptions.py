"""Domain errors raised by the repositories."""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories exposed through ActionResponse."""
    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


class DomainError(Exception):
    """Base class for expected failures of a domain operation."""
    kind = ErrorKind.INTERNAL

    def __init__(self, detail: str = "Domain operation failed"):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail)


class InvalidArgumentError(DomainError):
    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, detail: str = "Invalid argument"):
        super().__init__(detail)


class ConflictError(DomainError):
    """Lost race on a unique-constraint insert whose winner could not be read back."""
    kind = ErrorKind.CONFLICT

    def __init__(self, detail: str = "Conflicting write"):
        super().__init__(detail)
