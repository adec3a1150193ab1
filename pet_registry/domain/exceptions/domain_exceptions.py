"""
Domain Exceptions - Custom exceptions for registry errors.
"""
from enum import Enum
from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for all registry errors.

    All exceptions raised by services and stores inherit from this class so
    the presentation layer can catch and report them in one place.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for reporting."""
        return {
            'error': self.code,
            'message': self.message,
            'details': self.details
        }


class EntityNotFoundException(DomainException):
    """Raised when an update or association target cannot be found."""

    def __init__(
        self,
        entity_type: str,
        entity_id: Optional[Any] = None,
        message: Optional[str] = None
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} not found"
        if message is None and entity_id is not None:
            msg = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(
            message=msg,
            code='ENTITY_NOT_FOUND',
            details={
                'entity_type': entity_type,
                'entity_id': str(entity_id) if entity_id is not None else None
            }
        )


class ValidationException(DomainException):
    """
    Raised when input validation fails.

    Always raised before any unit of work is opened, so nothing needs to be
    rolled back.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, list]] = None
    ):
        self.errors = errors or {}
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            details={'validation_errors': self.errors}
        )

    @classmethod
    def for_field(cls, field: str, error: str) -> 'ValidationException':
        """Build an exception for a single failing field."""
        return cls(message=error, errors={field: [error]})


class BusinessRuleViolationException(DomainException):
    """
    Raised when a business rule is violated.

    Used for invariants that are not simple field validations.
    """

    def __init__(
        self,
        rule: str,
        message: Optional[str] = None
    ):
        self.rule = rule
        super().__init__(
            message=message or f"Business rule violated: {rule}",
            code='BUSINESS_RULE_VIOLATION',
            details={'rule': rule}
        )


class PersistenceException(DomainException):
    """
    Raised when the storage layer fails.

    Covers constraint violations, missing generated keys and failed commits.
    """

    def __init__(
        self,
        entity_type: str,
        operation: str,
        message: str,
        original_error: Optional[str] = None
    ):
        self.entity_type = entity_type
        self.operation = operation
        super().__init__(
            message=f"{entity_type} {operation} failed: {message}",
            code='PERSISTENCE_ERROR',
            details={
                'entity_type': entity_type,
                'operation': operation,
                'original_error': original_error
            }
        )


class DatabaseConnectionException(DomainException):
    """Raised when a connection cannot be obtained or configured."""

    def __init__(
        self,
        message: str,
        original_error: Optional[str] = None
    ):
        super().__init__(
            message=message,
            code='DATABASE_CONNECTION_ERROR',
            details={'original_error': original_error}
        )


class ConfigurationErrorKind(str, Enum):
    """Startup failure categories of the connection configuration."""
    UNREADABLE = "unreadable"
    DRIVER_UNAVAILABLE = "driver_unavailable"
    INVALID_VALUE = "invalid_value"


class ConfigurationException(DomainException):
    """Raised at process start when the database configuration is unusable."""

    def __init__(
        self,
        kind: ConfigurationErrorKind,
        message: str,
        field: Optional[str] = None
    ):
        self.kind = kind
        self.field = field
        super().__init__(
            message=message,
            code='CONFIGURATION_ERROR',
            details={'kind': kind.value, 'field': field}
        )
