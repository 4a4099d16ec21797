"""
Storefront Common Utilities

Shared error hierarchy and logging setup.
"""

from .exceptions import (
    StoreError, CatalogError, CatalogFetchError, CatalogDecodeError,
    InstallError, InvalidPackageError, InstallHandlerError, NavigationError,
    ConfigError, InvalidConfigError, MissingConfigError,
)
from .logging_config import setup_logging, LogContext, ContextFilter

__all__ = [
    # Exceptions
    "StoreError", "CatalogError", "CatalogFetchError", "CatalogDecodeError",
    "InstallError", "InvalidPackageError", "InstallHandlerError", "NavigationError",
    "ConfigError", "InvalidConfigError", "MissingConfigError",
    # Logging
    "setup_logging", "LogContext", "ContextFilter",
]
