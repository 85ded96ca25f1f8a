"""Pre-flight review results shown to the user before a strict operation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from bank_ledger.models.ledger import utc_now


class ValidationIssue(BaseModel):
    """One problem spotted in a draft."""

    field: str = Field(
        ...,
        description="Draft field the problem is about (amount, phone, provider)"
    )
    issue_type: str = Field(
        ...,
        description="Kind of problem (e.g., 'missing', 'invalid_value', 'insufficient_funds')"
    )
    message: str = Field(
        ...,
        description="Spanish text the app can show as-is"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Only 'error' blocks the operation"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Outcome of reviewing a transfer or recharge draft.

    Stage 1: Shape checks (amount is a positive number, phone present)
    Stage 2: Ledger checks (enough balance, unusual amounts)
    """

    operation: str
    validated_at: datetime = Field(default_factory=utc_now)

    shape_valid: bool
    ledger_valid: bool

    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.shape_valid and self.ledger_valid

    @property
    def has_errors(self) -> bool:
        """True if any issue would block the operation."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")
