"""
Ledger Validation

DESIGN DECISION: Validation happens in two distinct places:

STRICT CHECKS (used by the store):
- Amounts must be finite and greater than zero
- Amounts are whole cents and no larger than the configured maximum
- Required identifiers (phone, envelope name, match phone) must be non-blank
- Envelope targets must be finite and non-negative
- These raise typed ledger errors and the operation does not happen

PRE-FLIGHT REVIEW (used by a UI before calling the store):
- STAGE 1 - SHAPE: the same checks as above, reported instead of raised
- STAGE 2 - LEDGER: enough balance, unusually large amounts
- Returns a ValidationResult with every issue found

IMPORTANT: Validation NEVER silently fixes amounts.
A value that is not a finite number is rejected, not coerced to zero.
"""

from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from bank_ledger.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTargetError,
    LedgerError,
)
from bank_ledger.models.ledger import RechargeDraft, TransferDraft
from bank_ledger.models.validation import ValidationIssue, ValidationResult


# A single transfer above this share of the balance gets a warning.
LARGE_AMOUNT_SHARE = Decimal("0.5")

# Largest amount a single operation may move. LedgerSettings.max_amount overrides it.
MAX_AMOUNT = Decimal("1000000000000")
CENT = Decimal("0.01")

TOO_LARGE_MESSAGE = "El monto excede el máximo permitido"
TOO_PRECISE_MESSAGE = "El monto no puede tener más de dos decimales"


def to_decimal(value: object) -> Optional[Decimal]:
    """
    Convert an int, float, str or Decimal to a finite Decimal.

    Floats go through ``str`` so ``509015.4`` becomes ``Decimal("509015.4")``
    rather than its binary expansion. Returns None for anything that is not a
    finite number (NaN, infinity, booleans, garbage strings).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, Decimal):
            number = value
        elif isinstance(value, float):
            number = Decimal(str(value))
        else:
            number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def amount_problem(number: Decimal, maximum: Decimal = MAX_AMOUNT) -> Optional[str]:
    """Message for an amount above the maximum or finer than a cent, else None."""
    if abs(number) > maximum:
        return TOO_LARGE_MESSAGE
    if number != number.quantize(CENT):
        return TOO_PRECISE_MESSAGE
    return None


def require_positive_amount(amount: object, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    """
    Raises:
        InvalidAmountError: amount is not a finite number above zero, is
            above the maximum, or has more than two decimal places
    """
    number = to_decimal(amount)
    if number is None or number <= 0:
        raise InvalidAmountError(amount)
    problem = amount_problem(number, maximum)
    if problem:
        raise InvalidAmountError(amount, problem)
    return number


def require_signed_amount(amount: object, maximum: Decimal = MAX_AMOUNT) -> Decimal:
    """Finite, non-zero amount of either sign in whole cents (envelope allocations)."""
    number = to_decimal(amount)
    if number is None or number == 0:
        raise InvalidAmountError(amount)
    problem = amount_problem(number, maximum)
    if problem:
        raise InvalidAmountError(amount, problem)
    return number


def require_funds(amount: Decimal, balance: Decimal) -> None:
    """
    Raises:
        InsufficientFundsError: amount is larger than balance
    """
    if amount > balance:
        raise InsufficientFundsError(amount, balance)


def require_target(target: object, maximum: Decimal = MAX_AMOUNT) -> Optional[Decimal]:
    """
    Validate an optional envelope target amount.

    Raises:
        InvalidTargetError: target is given but negative, not finite,
            above the maximum or finer than a cent
    """
    if target is None:
        return None
    number = to_decimal(target)
    if number is None or number < 0 or amount_problem(number, maximum):
        raise InvalidTargetError(target)
    return number


def require_text(value: Optional[str], error_factory: Callable[[], LedgerError]) -> str:
    """Return the stripped value, or raise ``error_factory()`` if it is blank."""
    cleaned = value.strip() if value else ""
    if not cleaned:
        raise error_factory()
    return cleaned


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Strip a string; blank becomes None."""
    if value is None:
        return None
    return value.strip() or None


class LedgerValidator:
    """
    Non-throwing review of transfer and recharge drafts.

    Stage 1: Shape validation (no balance needed)
    Stage 2: Ledger validation (needs the current balance)
    """

    def __init__(self, max_amount: Decimal = MAX_AMOUNT):
        self.max_amount = max_amount

    def _validate_shape(
        self,
        amount: object,
        phone: str,
    ) -> tuple[bool, list[ValidationIssue]]:
        issues = []
        number = to_decimal(amount)

        if number is None or number <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="El monto debe ser mayor a cero",
                severity="error",
                suggested_fix="Ingresa un monto válido.",
            ))
        elif amount_problem(number, self.max_amount):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=amount_problem(number, self.max_amount),
                severity="error",
                suggested_fix="Ingresa un monto en colones con hasta dos decimales.",
            ))

        if not phone or not phone.strip():
            issues.append(ValidationIssue(
                field="phone",
                issue_type="missing",
                message="Ingresa un número telefónico válido.",
                severity="error",
            ))
        elif sum(1 for c in phone if c.isdigit()) < 8:
            issues.append(ValidationIssue(
                field="phone",
                issue_type="suspicious_value",
                message="El número debe tener al menos 8 dígitos.",
                severity="warning",
                suggested_fix="Verifica el número antes de continuar.",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_ledger(
        self,
        amount: Decimal,
        balance: Decimal,
    ) -> tuple[bool, list[ValidationIssue]]:
        issues = []

        if amount > balance:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="insufficient_funds",
                message="Saldo insuficiente",
                severity="error",
                suggested_fix="Reduce el monto o recarga tu cuenta.",
            ))
        elif balance > 0 and amount > balance * LARGE_AMOUNT_SHARE:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="large_amount",
                message="El monto supera la mitad de tu saldo disponible.",
                severity="warning",
                suggested_fix="Confirma que el monto es correcto.",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _review(
        self,
        operation: str,
        amount: object,
        phone: str,
        balance: Decimal,
    ) -> ValidationResult:
        all_issues = []

        shape_valid, shape_issues = self._validate_shape(amount, phone)
        all_issues.extend(shape_issues)

        # Only check against the ledger if the amount itself makes sense
        ledger_valid = False
        if shape_valid:
            ledger_valid, ledger_issues = self._validate_ledger(to_decimal(amount), balance)
            all_issues.extend(ledger_issues)

        return ValidationResult(
            operation=operation,
            shape_valid=shape_valid,
            ledger_valid=ledger_valid,
            issues=all_issues,
            warnings=[i.message for i in all_issues if i.severity == "warning"],
        )

    def review_transfer(self, draft: TransferDraft, balance: Decimal) -> ValidationResult:
        """Review an outbound transfer draft against the current balance."""
        return self._review("send_transfer", draft.amount, draft.phone, balance)

    def review_recharge(self, draft: RechargeDraft, balance: Decimal) -> ValidationResult:
        """Review a recharge draft against the current balance."""
        result = self._review("make_recharge", draft.amount, draft.phone, balance)
        if not draft.provider.strip():
            result.issues.append(ValidationIssue(
                field="provider",
                issue_type="missing",
                message="Selecciona un operador.",
                severity="warning",
            ))
            result.warnings.append("Selecciona un operador.")
        return result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Render a review for the user.
        """
        if result.is_valid and not result.warnings:
            return "✅ Todo listo. Revisa los datos y confirma."

        lines = []

        if result.has_errors:
            lines.append("❌ No podemos continuar:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Verifica lo siguiente:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
