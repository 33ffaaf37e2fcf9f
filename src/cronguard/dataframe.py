"""Cron expression validator for polars data.

Checks string columns that hold cron expressions (job tables, scheduler
exports, configuration dumps) and reports one issue per column.

Usage:
    >>> import polars as pl
    >>> from cronguard.dataframe import CronExpressionValidator
    >>>
    >>> df = pl.DataFrame({"schedule": ["0 9 * * 1-5", "0 0 L * *", None]})
    >>> issues = CronExpressionValidator().validate(df.lazy())
    >>> issues[0].count
    1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import polars as pl

from cronguard.errors import ColumnNotFoundError
from cronguard.types import Severity
from cronguard.config import resolve_field_specs
from cronguard.validator import check_fields

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """Represents a single data quality issue found during validation."""

    column: str
    issue_type: str
    count: int
    severity: Severity
    details: str | None = None
    sample_values: list[Any] | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "column": self.column,
            "issue_type": self.issue_type,
            "count": self.count,
            "severity": self.severity.value,
            "details": self.details,
        }
        if self.sample_values is not None:
            result["sample_values"] = self.sample_values
        return result


class CronExpressionValidator:
    """Validates cron expressions stored in string columns."""

    name = "cron_expression"

    # Column name patterns that suggest cron content
    COLUMN_PATTERNS: list[str] = ["cron", "schedule"]

    MAX_SAMPLES = 5

    def __init__(
        self,
        columns: list[str] | None = None,
        configuration: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            columns: Columns to check. Defaults to string columns whose name
                suggests cron content.
            configuration: Configuration applied to every expression.
        """
        self.columns = columns
        self.configuration = configuration

    def validate(self, lf: pl.LazyFrame) -> list[ValidationIssue]:
        """Check for invalid cron expressions in string columns.

        Args:
            lf: Polars LazyFrame to validate.

        Returns:
            List of validation issues for columns with invalid expressions.

        Raises:
            ColumnNotFoundError: If an explicitly requested column is missing.
            ConfigurationError: If the configuration is malformed.
        """
        issues: list[ValidationIssue] = []
        specs = resolve_field_specs(self.configuration)

        schema = lf.collect_schema()
        columns = self._target_columns(schema)
        if not columns:
            return issues

        df = lf.select(columns).collect()

        for col in columns:
            col_data = df.get_column(col).drop_nulls()

            invalid: list[str] = []
            first_reason: str | None = None
            checked = 0
            for val in col_data.to_list():
                if not val.strip():
                    continue
                checked += 1
                report = check_fields(val, specs)
                if not report.is_valid:
                    invalid.append(val)
                    if first_reason is None:
                        first_reason = report.messages[0]

            if not invalid:
                continue

            invalid_pct = len(invalid) / checked

            if invalid_pct > 0.3:
                severity = Severity.HIGH
            elif invalid_pct > 0.1:
                severity = Severity.MEDIUM
            else:
                severity = Severity.LOW

            logger.debug(f"[{self.name}] {col}: {len(invalid)}/{checked} invalid")
            issues.append(
                ValidationIssue(
                    column=col,
                    issue_type="invalid_cron_expression",
                    count=len(invalid),
                    severity=severity,
                    details=first_reason,
                    sample_values=invalid[: self.MAX_SAMPLES],
                )
            )

        return issues

    def _target_columns(self, schema: pl.Schema) -> list[str]:
        names = schema.names()

        if self.columns is not None:
            for col in self.columns:
                if col not in names:
                    raise ColumnNotFoundError(col, names)
            return [c for c in self.columns if schema[c] in (pl.String, pl.Utf8)]

        return [
            col
            for col in names
            if schema[col] in (pl.String, pl.Utf8)
            and any(p in col.lower() for p in self.COLUMN_PATTERNS)
        ]
