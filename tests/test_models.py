"""
Tests for the Bank Ledger

Test strategy:
1. Unit tests for individual components (models, validators, sub-collections)
2. Integration tests for store operations (fixtures in conftest.py)
3. No real waiting in tests (biometric delays use a fake sleep)
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import ValidationError

from bank_ledger.models import (
    BiometricResult,
    Contact,
    Envelope,
    LedgerSnapshot,
    NotificationCategory,
    NotificationItem,
    TransferDirection,
    TransferRecord,
    UserProfile,
    ValidationIssue,
    ValidationResult,
)
from bank_ledger.ledger.seeds import DEFAULT_USER


class TestLedgerModels:
    """Tests for ledger entity models."""

    def test_contact_strips_whitespace(self):
        """Test that whitespace is stripped from contact fields."""
        contact = Contact(id="c", name="  Ana  ", phone=" 8888-0000 ", avatar_color="#FFF")
        assert contact.name == "Ana"
        assert contact.phone == "8888-0000"
        assert contact.favorite is False
        assert contact.last_used_at is None

    def test_contact_requires_phone(self):
        """Test a blank phone is rejected."""
        with pytest.raises(ValidationError):
            Contact(id="c", name="Ana", phone="   ", avatar_color="#FFF")

    def test_entities_are_frozen(self):
        """Test entities cannot be mutated in place."""
        contact = Contact(id="c", name="Ana", phone="1", avatar_color="#FFF")
        with pytest.raises(ValidationError):
            contact.name = "Otra"
        assert contact.model_copy(update={"name": "Otra"}).name == "Otra"

    def test_transfer_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError):
            TransferRecord(id="t", contact_name="Ana", phone="1", amount=Decimal("0"))

    def test_transfer_defaults(self):
        """Test a transfer is outbound and unlinked by default."""
        record = TransferRecord(id="t", contact_name="Ana", phone="1", amount=Decimal("5"))
        assert record.direction == TransferDirection.OUTBOUND
        assert record.linked_envelope_id is None
        assert record.created_at.tzinfo is not None

    def test_envelope_target_must_not_be_negative(self):
        """Test a negative target is rejected."""
        with pytest.raises(ValidationError):
            Envelope(id="e", name="Renta", color="#FFF", target_amount=Decimal("-1"))

    def test_envelope_requires_name(self):
        """Test an empty name is rejected."""
        with pytest.raises(ValidationError):
            Envelope(id="e", name=" ", color="#FFF")


class TestSnapshot:
    """Tests for LedgerSnapshot derived values."""

    def test_derived_totals(self):
        """Test total envelope balance and unread count."""
        snapshot = LedgerSnapshot(
            balance=Decimal("10"),
            initial_balance=Decimal("10"),
            is_authenticated=False,
            user=DEFAULT_USER,
            envelopes=[
                Envelope(id="a", name="A", color="#1", balance=Decimal("2.5")),
                Envelope(id="b", name="B", color="#2", balance=Decimal("1")),
            ],
            notifications=[
                NotificationItem(id="n1", title="t", message="m"),
                NotificationItem(id="n2", title="t", message="m", read=True),
            ],
        )
        assert snapshot.total_envelope_balance == Decimal("3.5")
        assert snapshot.unread_notification_count == 1

    def test_empty_snapshot_total(self):
        """Test the envelope total of no envelopes is zero."""
        snapshot = LedgerSnapshot(
            balance=Decimal("0"),
            initial_balance=Decimal("0"),
            is_authenticated=True,
            user=UserProfile(name="A", id="1", phone="2", avatar_color="#3", id_type="DIMEX"),
            taken_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        assert snapshot.total_envelope_balance == Decimal("0")


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            operation="send_transfer",
            shape_valid=False,
            ledger_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="El monto debe ser mayor a cero",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.is_valid is False

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            operation="send_transfer",
            shape_valid=True,
            ledger_valid=True,
            issues=[
                ValidationIssue(
                    field="phone",
                    issue_type="suspicious_value",
                    message="Número corto",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_issue_severity_is_restricted(self):
        """Test an unknown severity is rejected."""
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestEnums:
    """Tests for ledger enums."""

    def test_category_values(self):
        """Test category string values."""
        assert [c.value for c in NotificationCategory] == [
            "transfer", "recharge", "security", "general",
        ]

    def test_biometric_results(self):
        """Test biometric outcomes."""
        assert BiometricResult("timeout") == BiometricResult.TIMEOUT


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
