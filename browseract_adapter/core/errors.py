# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Custom exceptions for the BrowserAct adapter.

All exceptions inherit from BrowserActError for consistent error handling.
"""

from typing import Any, List, Optional


class BrowserActError(Exception):
    """Base exception for all BrowserAct adapter errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize BrowserAct error.

        Args:
            message: Human-readable error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for an output record."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ValidationError(BrowserActError):
    """Required node parameters missing or empty."""

    def __init__(
        self,
        message: str,
        fields: Optional[List[str]] = None,
        item_index: Optional[int] = None,
        details: Optional[dict] = None
    ):
        """
        Initialize validation error.

        Args:
            message: Validation error message
            fields: Names of the fields that failed validation
            item_index: Index of the input item being processed
            details: Additional error details
        """
        super().__init__(message, details=details)
        self.fields = fields or []
        self.item_index = item_index


class ApiError(BrowserActError):
    """The task API answered with a body this adapter cannot use."""

    def __init__(self, message: str, response: Any = None, details: Optional[dict] = None):
        """
        Initialize API error.

        Args:
            message: Error message
            response: Raw parsed response that failed the check
            details: Additional error details
        """
        super().__init__(message, details=details)
        self.response = response


class TransportError(BrowserActError):
    """HTTP request failed (non-2xx status or network failure)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        details: Optional[dict] = None
    ):
        """
        Initialize transport error.

        Args:
            message: Error message
            status_code: HTTP status code, None for network failures
            endpoint: Endpoint that was called
            details: Additional error details
        """
        super().__init__(message, details=details)
        self.status_code = status_code
        self.endpoint = endpoint


class ConfigurationError(BrowserActError):
    """Configuration error (missing API key, unreadable config file)."""

    def __init__(self, message: str, config_file: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, details=details)
        self.config_file = config_file
