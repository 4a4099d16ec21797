"""
Storefront Exception Hierarchy

Provides clear, actionable error messages with structured information
for logging, user feedback, and programmatic error handling.
"""

from typing import Optional, Dict, Any


class StoreError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context as key-value pairs
        cause: Original exception that caused this error
        recoverable: Whether the error is recoverable
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable

    def __str__(self):
        s = f"[{self.code}] {self.message}"
        if self.details:
            s += f" (details: {self.details})"
        if self.cause:
            s += f" caused by: {self.cause}"
        return s

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# Catalog errors
# =============================================================================

class CatalogError(StoreError):
    """Base for catalog fetch errors."""
    pass


class CatalogFetchError(CatalogError):
    """The catalog endpoint could not be reached or answered with an error."""
    def __init__(self, url: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to fetch catalog: {reason}",
            code="CATALOG_FETCH_FAILED",
            details={"url": url, "reason": reason},
            cause=cause,
        )


class CatalogDecodeError(CatalogError):
    """The catalog response was not a valid catalog document."""
    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Malformed catalog response: {reason}",
            code="CATALOG_DECODE_FAILED",
            details={"reason": reason},
            cause=cause,
        )


# =============================================================================
# Installation errors
# =============================================================================

class InstallError(StoreError):
    """Base for installation errors."""
    pass


class InvalidPackageError(InstallError):
    """The app carries no usable package reference."""
    def __init__(self, app_id: Any, reason: str):
        super().__init__(
            f"Cannot install app {app_id}: {reason}",
            code="INVALID_PACKAGE",
            details={"app_id": app_id, "reason": reason},
            recoverable=False,
        )


class InstallHandlerError(InstallError):
    """The host install handler could not be launched."""
    def __init__(self, uri: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Install handler failed for {uri}: {reason}",
            code="INSTALL_HANDLER_FAILED",
            details={"uri": uri, "reason": reason},
            cause=cause,
        )


# =============================================================================
# Navigation errors
# =============================================================================

class NavigationError(StoreError):
    """Invalid navigation transition."""
    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot {requested} from {current}",
            code="INVALID_NAVIGATION",
            details={"current": current, "requested": requested},
        )


# =============================================================================
# Configuration errors
# =============================================================================

class ConfigError(StoreError):
    """Base for configuration errors."""
    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration."""
    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration: {field}={value}: {reason}",
            code="INVALID_CONFIG",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MissingConfigError(ConfigError):
    """Required configuration missing."""
    def __init__(self, field: str):
        super().__init__(
            f"Missing required configuration: {field}",
            code="MISSING_CONFIG",
            details={"field": field},
        )
