"""Structured error handling for Tunnelscope."""

import sys
from typing import Any, NoReturn

from tunnelscope.models.error import ErrorCode, StructuredError


class TunnelscopeError(Exception):
    """Base exception for Tunnelscope errors.

    Wraps a StructuredError for consistent error handling.
    """

    def __init__(
        self,
        code: str,
        message: str,
        remediation: str,
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            retryable=retryable,
            context=context,
        )
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.error.code

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError."""
        return self.error

    def to_structured_error(self) -> dict:
        """Convert to JSON-serializable dict for output."""
        return self.error.model_dump(mode="json", exclude_none=True)


class NoValidRecordsError(TunnelscopeError):
    """Raised when non-empty input yields no DNS query records."""

    def __init__(self, source: str | None = None, lines: int | None = None):
        context: dict[str, Any] = {}
        if source:
            context["source"] = source
        if lines is not None:
            context["lines"] = lines
        super().__init__(
            code=ErrorCode.NO_VALID_RECORDS,
            message="No valid DNS queries found",
            remediation=(
                "Provide JSON, line-delimited JSON, CSV or plain-text logs "
                "with a query/domain/qname field"
            ),
            retryable=False,
            context=context or None,
        )


class MissingQueryError(TunnelscopeError):
    """Raised when a field map has no resolvable query name."""

    def __init__(self, keys: list[str]):
        super().__init__(
            code=ErrorCode.MISSING_QUERY,
            message="Record has no query name",
            remediation="Include one of: query, domain, qname, Question",
            retryable=False,
            context={"keys": keys},
        )


class ConfigNotFoundError(TunnelscopeError):
    """Raised when a configuration file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            code=ErrorCode.CONFIG_NOT_FOUND,
            message=f"Configuration file '{path}' not found",
            remediation="Check the --config path or omit it to use built-in defaults",
            retryable=False,
            context={"path": path},
        )


class ConfigValidationError(TunnelscopeError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: str, errors: list[str]):
        super().__init__(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Configuration file '{path}' failed validation",
            remediation="Fix the validation errors and try again",
            retryable=False,
            context={"path": path, "errors": errors},
        )


class EnrichmentError(TunnelscopeError):
    """Raised when a geolocation lookup fails."""

    def __init__(self, ip: str, reason: str):
        super().__init__(
            code=ErrorCode.ENRICHMENT_FAILED,
            message=f"Geolocation lookup failed for {ip}: {reason}",
            remediation="Records are kept without location; retry the lookup later",
            retryable=True,
            context={"ip": ip},
        )


class ForensicAnalysisError(TunnelscopeError):
    """Raised when the forensic report collaborator fails."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCode.ANALYSIS_FAILED,
            message=f"AI analysis failed: {message}",
            remediation="Check the analysis service configuration and try again",
            retryable=True,
            context=context,
        )


def handle_error(error: TunnelscopeError | Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error by outputting it and exiting.

    Args:
        error: The error to handle
        exit_code: Exit code to use
    """
    from tunnelscope.cli.output import output_error

    if isinstance(error, TunnelscopeError):
        output_error(error.to_structured())
    else:
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="This is an unexpected error. Please report it.",
            retryable=False,
            context={"type": type(error).__name__},
        )
        output_error(structured)

    sys.exit(exit_code)
