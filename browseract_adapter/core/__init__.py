# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Core utilities and shared modules for the BrowserAct adapter.

This package contains:
- config: Configuration management
- errors: Custom exceptions
- logging: Structured logging
"""

from browseract_adapter.core.config import get_config, Config
from browseract_adapter.core.errors import (
    BrowserActError,
    ValidationError,
    ApiError,
    TransportError,
    ConfigurationError,
)
from browseract_adapter.core.logging import get_logger

__all__ = [
    "get_config",
    "Config",
    "BrowserActError",
    "ValidationError",
    "ApiError",
    "TransportError",
    "ConfigurationError",
    "get_logger",
]
