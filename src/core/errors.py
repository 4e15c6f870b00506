"""Error taxonomy shared by every subcommand.

Each error carries a machine-readable ``kind`` tag (printed as ``code`` in the
error envelope), a human-readable message, optional details and a category.
The CLI maps the category to the process exit code.

Nothing here is retried: every failure is terminal for the current call.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse exit-path classification of a failure."""

    INVALID_INPUT = "invalid_input"
    UNREACHABLE = "unreachable"
    REJECTED = "rejected"
    PARSE = "parse"


class PocketError(Exception):
    """Base error. ``kind`` may be overridden per instance by the caller."""

    default_kind = "error"
    category = ErrorCategory.REJECTED

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": True,
            "code": self.kind,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class InputValidationError(PocketError):
    default_kind = "invalid_input"
    category = ErrorCategory.INVALID_INPUT


class ConfigurationError(PocketError):
    """A required setting is missing or a configured value is invalid."""

    default_kind = "missing_config"
    category = ErrorCategory.INVALID_INPUT


class PlatformUnsupportedError(PocketError):
    default_kind = "platform_unsupported"
    category = ErrorCategory.INVALID_INPUT


class ProcessTimeoutError(PocketError):
    """The child process exceeded its deadline and was killed."""

    default_kind = "timeout"
    category = ErrorCategory.UNREACHABLE


class ProcessLaunchError(PocketError):
    """The child process could not be started (missing binary, permissions)."""

    default_kind = "launch_failed"
    category = ErrorCategory.UNREACHABLE


class ScriptError(PocketError):
    """Non-zero exit, or an application-level error reported by a script."""

    default_kind = "script_error"
    category = ErrorCategory.REJECTED


class NotFoundError(PocketError):
    default_kind = "not_found"
    category = ErrorCategory.REJECTED


class HTTPTransportError(PocketError):
    """Connection refused, DNS failure, TLS error..."""

    default_kind = "unreachable"
    category = ErrorCategory.UNREACHABLE


class RequestTimeoutError(HTTPTransportError):
    default_kind = "timeout"


class RateLimitedError(PocketError):
    default_kind = "rate_limited"
    category = ErrorCategory.REJECTED


class HTTPStatusError(PocketError):
    default_kind = "fetch_failed"
    category = ErrorCategory.REJECTED

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, kind=kind, details=details)
        self.status_code = status_code


class UpstreamError(PocketError):
    """The upstream answered successfully at HTTP level but rejected the call."""

    default_kind = "api_error"
    category = ErrorCategory.REJECTED


class ResponseDecodeError(PocketError):
    """The response body was not valid JSON (or not the expected shape)."""

    default_kind = "parse_failed"
    category = ErrorCategory.PARSE


class OutputParseError(PocketError):
    """Text produced by a local process could not be mapped into a record."""

    default_kind = "invalid_output"
    category = ErrorCategory.PARSE
