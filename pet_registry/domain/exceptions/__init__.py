# Domain Exceptions
from .domain_exceptions import (
    DomainException,
    EntityNotFoundException,
    ValidationException,
    BusinessRuleViolationException,
    PersistenceException,
    DatabaseConnectionException,
    ConfigurationErrorKind,
    ConfigurationException,
)

__all__ = [
    'DomainException',
    'EntityNotFoundException',
    'ValidationException',
    'BusinessRuleViolationException',
    'PersistenceException',
    'DatabaseConnectionException',
    'ConfigurationErrorKind',
    'ConfigurationException',
]
