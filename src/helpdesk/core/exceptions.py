"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. The access resolver and SLA
engine never raise; only services at the store and HTTP seams do.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class StoreUnavailableException(RepositoryException):
    """The ticket or user store failed or timed out."""

    def __init__(self, store: str, message: str, details: Optional[dict] = None):
        self.store = store
        super().__init__(f"{store} unavailable: {message}", details)


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class AccessDeniedException(DomainException):
    """Raised by services when the caller's department lacks a permission."""

    def __init__(
        self,
        module: str,
        required_level: str,
        department: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.module = module
        self.required_level = required_level
        self.department = department
        super().__init__(
            f"Access denied to module '{module}' (requires {required_level})",
            details or {"module": module, "required_level": required_level}
        )
