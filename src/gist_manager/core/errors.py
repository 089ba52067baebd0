"""
Structured error system for the Gist Manager API client and commands.

Exception Hierarchy:
    GistError (base)
    ├── GistApiError (non-success HTTP response or undecodable body)
    ├── NetworkError (transport failure before a response arrived)
    ├── AuthenticationError (no token could be obtained)
    ├── GistValidationError (user input rejected before any request)
    └── ConfigurationError (invalid settings)
"""

from typing import Any, Dict, Optional


class GistError(Exception):
    """Base exception for all Gist Manager errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return self.message


class GistApiError(GistError):
    """GitHub answered with a non-success status.

    The raw response text is kept as-is; GitHub's error schema is not parsed.
    """

    def __init__(self, status: int, body: str, **kwargs):
        super().__init__(
            f"GitHub API error: {status} {body}".rstrip(),
            status=status,
            code="API_ERROR",
            **kwargs
        )
        self.body = body


class NetworkError(GistError):
    """Error for transport-level failures."""

    def __init__(self, message: str = "Network error", **kwargs):
        super().__init__(message, code="NETWORK_ERROR", **kwargs)


class AuthenticationError(GistError):
    """No GitHub token could be obtained."""

    def __init__(self, message: str = "GitHub authentication required", **kwargs):
        super().__init__(message, status=401, code="AUTHENTICATION_ERROR", **kwargs)


class GistValidationError(GistError):
    """User input rejected before any network call."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", **kwargs)
        if field:
            self.details["field"] = field


class ConfigurationError(GistError):
    """Error related to client configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_field: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="CONFIGURATION_ERROR", **kwargs)
        if config_field:
            self.details["config_field"] = config_field
