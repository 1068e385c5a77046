"""Structured error model for Tunnelscope."""

from typing import Any

from pydantic import BaseModel, Field


class StructuredError(BaseModel):
    """Structured error response format.

    All errors emitted by Tunnelscope follow this schema to enable
    programmatic error handling and provide actionable remediation.
    """

    code: str = Field(
        ...,
        pattern=r"^[A-Z][A-Z0-9_]*$",
        description="Error code (e.g., NO_VALID_RECORDS)",
        examples=[
            "NO_VALID_RECORDS",
            "MISSING_QUERY",
            "CONFIG_NOT_FOUND",
            "ANALYSIS_FAILED",
        ],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
    )

    remediation: str = Field(
        ...,
        description="Suggested fix or next step",
    )

    retryable: bool = Field(
        ...,
        description="Whether retry may succeed",
    )

    context: dict[str, Any] | None = Field(
        default=None,
        description="Additional context (path, field, etc.)",
    )

    model_config = {"extra": "forbid"}


class ErrorCode:
    """Standard error codes for Tunnelscope."""

    NO_VALID_RECORDS = "NO_VALID_RECORDS"
    MISSING_QUERY = "MISSING_QUERY"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    ENRICHMENT_FAILED = "ENRICHMENT_FAILED"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    IO_ERROR = "IO_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
