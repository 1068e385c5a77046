"""Observability metrics models for Tunnelscope."""

from uuid import UUID

from pydantic import BaseModel, Field


class StepMetrics(BaseModel):
    """Observability metrics for a command or step.

    Every command invocation emits these metrics to stderr
    for observability and debugging.
    """

    run_id: UUID = Field(
        ...,
        description="Correlation ID for this run",
    )

    step_name: str = Field(
        ...,
        description="Step identifier (e.g., 'parse', 'stats')",
    )

    duration_ms: int = Field(
        ...,
        ge=0,
        description="Execution time in milliseconds",
    )

    records_processed: int = Field(
        default=0,
        ge=0,
        description="Number of input records processed",
    )

    records_output: int = Field(
        default=0,
        ge=0,
        description="Number of records emitted",
    )

    bytes_read: int = Field(
        default=0,
        ge=0,
        description="Bytes read from input",
    )

    skipped: int = Field(
        default=0,
        ge=0,
        description="Skipped line or record count",
    )

    strategy: str | None = Field(
        default=None,
        description="Parse strategy that produced the records",
    )

    model_config = {"extra": "forbid"}
