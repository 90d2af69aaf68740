"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional, Any


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class SLAWindowExpiredException(DomainException):
    """Exception raised when an action is attempted after its SLA window closed."""

    def __init__(
        self,
        window_type: str,
        deadline: Any,
        subject_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.window_type = window_type
        self.deadline = deadline
        self.subject_id = subject_id
        message = f"SLA window {window_type} closed at {deadline.isoformat()}"
        if subject_id:
            message += f" for {subject_id}"
        super().__init__(
            message,
            details or {
                "window_type": window_type,
                "deadline": deadline.isoformat(),
                "subject_id": subject_id,
            }
        )
