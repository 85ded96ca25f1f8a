"""Tests for strict checks and the pre-flight review."""

from decimal import Decimal

import pytest

from bank_ledger.errors import InvalidAmountError, InvalidTargetError, MissingNameError
from bank_ledger.models import RechargeDraft, TransferDraft
from bank_ledger.validation import (
    MAX_AMOUNT,
    LedgerValidator,
    amount_problem,
    require_positive_amount,
    require_signed_amount,
    require_target,
    require_text,
    to_decimal,
)


BALANCE = Decimal("509015.40")


class TestStrictChecks:
    """Tests for the raising helpers."""

    @pytest.mark.parametrize("value,expected", [
        (10, Decimal("10")),
        (0.1, Decimal("0.1")),
        (" 12.50 ", Decimal("12.50")),
        (Decimal("3"), Decimal("3")),
        ("abc", None),
        (float("nan"), None),
        (float("-inf"), None),
        (True, None),
        (None, None),
    ])
    def test_to_decimal(self, value, expected):
        """Test conversion never coerces garbage to zero."""
        assert to_decimal(value) == expected

    def test_positive_amount(self):
        """Test zero and negatives are rejected."""
        assert require_positive_amount("5") == Decimal("5")
        with pytest.raises(InvalidAmountError) as exc:
            require_positive_amount(0)
        assert exc.value.amount == 0
        assert str(exc.value) == "El monto debe ser mayor a cero"

    def test_signed_amount(self):
        """Test either sign passes but zero does not."""
        assert require_signed_amount(-5) == Decimal("-5")
        with pytest.raises(InvalidAmountError):
            require_signed_amount("0.00")

    def test_target(self):
        """Test an absent target is allowed and zero is valid."""
        assert require_target(None) is None
        assert require_target(0) == Decimal("0")
        with pytest.raises(InvalidTargetError):
            require_target(-1)

    @pytest.mark.parametrize("value", ["0.001", "1e-26", Decimal("12.345")])
    def test_fractions_of_a_cent_are_rejected(self, value):
        """Test amounts must be whole cents."""
        with pytest.raises(InvalidAmountError) as exc:
            require_positive_amount(value)
        assert str(exc.value) == "El monto no puede tener más de dos decimales"
        with pytest.raises(InvalidAmountError):
            require_signed_amount(value)
        with pytest.raises(InvalidTargetError):
            require_target(value)

    def test_maximum_is_enforced(self):
        """Test amounts above the maximum are rejected without decimal errors."""
        assert require_positive_amount("12.50", maximum=Decimal("100")) == Decimal("12.50")
        assert require_positive_amount(100, maximum=Decimal("100")) == Decimal("100")
        with pytest.raises(InvalidAmountError) as exc:
            require_positive_amount("100.01", maximum=Decimal("100"))
        assert str(exc.value) == "El monto excede el máximo permitido"
        with pytest.raises(InvalidAmountError):
            require_positive_amount("1e1000000")
        with pytest.raises(InvalidAmountError):
            require_signed_amount("-9e999999")
        with pytest.raises(InvalidTargetError):
            require_target("1e1000000")

    def test_amount_problem(self):
        """Test trailing zeros past the cent are fine."""
        assert amount_problem(Decimal("1.500")) is None
        assert amount_problem(Decimal("1E+3")) is None
        assert amount_problem(MAX_AMOUNT + 1) == "El monto excede el máximo permitido"

    def test_text(self):
        """Test blank text raises the requested error."""
        assert require_text("  Renta ", MissingNameError) == "Renta"
        with pytest.raises(MissingNameError):
            require_text(None, MissingNameError)


class TestReview:
    """Tests for the non-throwing review."""

    def setup_method(self):
        self.validator = LedgerValidator()

    def test_clean_transfer(self):
        """Test a normal transfer has no issues."""
        result = self.validator.review_transfer(
            TransferDraft(contact_name="Ana", phone="8888-0000", amount=Decimal("10000")),
            BALANCE,
        )
        assert result.is_valid is True
        assert result.issues == []
        assert result.operation == "send_transfer"

    def test_reports_every_shape_issue(self):
        """Test a bad amount and a blank phone are both reported."""
        result = self.validator.review_transfer(
            TransferDraft(phone=" ", amount=Decimal("0")),
            BALANCE,
        )
        assert result.shape_valid is False
        assert result.ledger_valid is False
        assert result.error_count == 2
        assert {issue.field for issue in result.issues} == {"amount", "phone"}

    def test_out_of_range_amount(self):
        """Test a sub-cent or oversized amount is a shape error."""
        result = LedgerValidator(max_amount=Decimal("1000")).review_transfer(
            TransferDraft(phone="8888-0000", amount=Decimal("1000.001")),
            BALANCE,
        )
        assert result.shape_valid is False
        assert result.issues[0].issue_type == "out_of_range"
        assert result.issues[0].message == "El monto excede el máximo permitido"

    def test_insufficient_funds(self):
        """Test an amount above the balance fails the ledger stage."""
        result = self.validator.review_transfer(
            TransferDraft(phone="8888-0000", amount=BALANCE + 1),
            BALANCE,
        )
        assert result.shape_valid is True
        assert result.ledger_valid is False
        assert result.issues[0].issue_type == "insufficient_funds"

    def test_warnings_do_not_block(self):
        """Test a short phone and a large amount only warn."""
        result = self.validator.review_transfer(
            TransferDraft(phone="8888", amount=Decimal("300000")),
            BALANCE,
        )
        assert result.is_valid is True
        assert result.has_errors is False
        assert len(result.warnings) == 2

    def test_recharge_without_provider(self):
        """Test a missing provider is a warning."""
        result = self.validator.review_recharge(
            RechargeDraft(provider="", phone="8888-0000", amount=Decimal("1000")),
            BALANCE,
        )
        assert result.is_valid is True
        assert result.warnings == ["Selecciona un operador."]

    def test_summary_text(self):
        """Test the summary renders errors and the all-clear case."""
        ok = self.validator.review_recharge(
            RechargeDraft(provider="Kolbi", phone="8888-0000", amount=Decimal("1000")),
            BALANCE,
        )
        assert self.validator.get_user_friendly_summary(ok).startswith("✅")

        bad = self.validator.review_transfer(
            TransferDraft(phone="8888-0000", amount=BALANCE + 1),
            BALANCE,
        )
        summary = self.validator.get_user_friendly_summary(bad)
        assert "Saldo insuficiente" in summary
        assert summary.startswith("❌")
