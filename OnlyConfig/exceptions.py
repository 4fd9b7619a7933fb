"""
Custom exceptions for the OnlyConfig package.

This module defines a hierarchical exception system that provides:
1. Specific, technical error information for debugging and logging
2. User-friendly error messages for end-users
3. Error codes for consistent error identification
4. Optional context information for additional debugging
"""

from typing import Optional, Dict, Any, List, TYPE_CHECKING
import traceback
import sys

if TYPE_CHECKING:
    from OnlyConfig.config.schema import SchemaIssue


class OnlyConfigError(Exception):
    """Base exception for all OnlyConfig errors."""

    # Default values
    error_code = "OC-GENERIC-ERROR"
    user_message = "An unexpected error occurred."

    def __init__(
        self,
        message: str = None,
        user_message: str = None,
        error_code: str = None,
        context: Dict[str, Any] = None,
        cause: Exception = None,
        include_traceback: bool = True
    ):
        # Technical message for logs
        self.message = message or self.__class__.__doc__ or "An error occurred."
        super().__init__(self.message)

        # User-friendly message
        self.user_message = user_message or self.__class__.user_message

        self.error_code = error_code or self.__class__.error_code

        # Additional context
        self.context = context or {}
        self.cause = cause

        # Capture traceback if requested
        self.traceback = None
        if include_traceback:
            self.traceback = traceback.format_exc() if sys.exc_info()[0] else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a dictionary for reporting."""
        error_dict = {
            "error_code": self.error_code,
            "message": self.user_message,
        }

        # Include technical details only in debug mode
        if self.context.get('debug'):
            error_dict["technical_details"] = {
                "message": self.message,
                "context": self.context,
            }
            if self.traceback:
                error_dict["technical_details"]["traceback"] = self.traceback
            if self.cause:
                error_dict["technical_details"]["cause"] = str(self.cause)

        return error_dict


# Configuration Errors - 1000 range
class ConfigError(OnlyConfigError):
    """Base exception for all configuration-related errors."""
    error_code = "OC-CFG-1000"
    user_message = "A configuration error occurred."


class InvalidSchemaError(ConfigError):
    """Exception raised when an object without the schema capability is used as a schema."""
    error_code = "OC-CFG-1001"
    user_message = "The provided schema is not a valid schema descriptor."


class ValidationError(ConfigError):
    """Exception raised when a configuration fails schema validation."""
    error_code = "OC-CFG-1002"
    user_message = "The configuration is invalid. Please check your values."

    def __init__(self, issues: Optional[List["SchemaIssue"]] = None, message: str = None, **kwargs: Any):
        self.issues = list(issues or [])
        if message is None:
            details = "; ".join(f"{issue.path or '<root>'}: {issue.message}" for issue in self.issues)
            message = f"config validation failed: {details}" if details else "config validation failed"
        context = kwargs.pop("context", None) or {}
        context.setdefault("issues", [issue.to_dict() for issue in self.issues])
        super().__init__(message, context=context, **kwargs)


class ConfigFileError(ConfigError):
    """Exception raised when a configuration document cannot be read."""
    error_code = "OC-CFG-1003"
    user_message = "Unable to read the configuration file. Please check the path and format."
