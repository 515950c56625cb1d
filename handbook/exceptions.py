from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every domain error so the HTTP boundary can map it."""

    MISSING_PARAMETER = "MISSING_PARAMETER"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    DATA_INTEGRITY = "DATA_INTEGRITY"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"


class DomainError(Exception):
    """Base exception class for all domain-specific exceptions."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class MissingParameterError(DomainError):
    """Exception raised when required inputs are absent."""

    kind = ErrorKind.MISSING_PARAMETER

    def __init__(self, *names: str) -> None:
        self.names = names
        message = f"Missing required parameters: {', '.join(names)}"
        super().__init__(message)


class InvalidParameterError(DomainError):
    """Exception raised when an input is present but not acceptable."""

    kind = ErrorKind.INVALID_PARAMETER


class DataIntegrityError(DomainError):
    """Exception raised when stored data cannot be interpreted."""

    kind = ErrorKind.DATA_INTEGRITY


class StoreUnavailableError(DomainError):
    """Exception raised when the backing store cannot serve a query."""

    kind = ErrorKind.STORE_UNAVAILABLE


class NotFoundError(DomainError):
    """Exception raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message)


class AlreadyExistsError(DomainError):
    """Exception raised when creating a resource that already exists."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} with ID {resource_id} already exists"
        super().__init__(message)


class AuthenticationError(DomainError):
    """No usable credentials were supplied."""

    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(DomainError):
    """Credentials were supplied but do not grant access."""

    kind = ErrorKind.AUTHORIZATION
