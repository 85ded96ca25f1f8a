"""Tests for audit logging and storage."""

import logging
from decimal import Decimal

from bank_ledger.audit import AuditLogger, configure_logging
from bank_ledger.config import AppSettings
from bank_ledger.errors import InsufficientFundsError
from bank_ledger.models import AuditEvent, AuditEventBuilder, AuditEventType, AuditSeverity
from bank_ledger.services.storage import AuditStorageInterface, InMemoryAuditStorage, StorageError


class FailingStorage(AuditStorageInterface):
    def append_event(self, event):
        raise StorageError("disk full")

    def get_events_by_entity(self, entity_type, entity_id):
        return []

    def get_recent_events(self, limit=100):
        return []


class TestAuditLogger:
    """Tests for the AuditLogger."""

    def test_log_appends_to_storage(self):
        """Test events reach the storage backend."""
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        logger.log_transfer("transfer-1", "8888-0000", Decimal("10"), Decimal("90"))
        assert len(storage) == 1
        assert storage.get_recent_events()[0].event_type == AuditEventType.TRANSFER_SENT

    def test_storage_failure_is_not_raised(self):
        """Test a broken backend is reported as False."""
        logger = AuditLogger(FailingStorage())
        event = AuditEventBuilder.logout(Decimal("1"))
        assert logger.log(event) is False

    def test_without_storage(self):
        """Test logging without a backend succeeds."""
        assert AuditLogger().log(AuditEventBuilder.logout(Decimal("1"))) is True


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_debug_mode_forces_debug_level(self):
        """Test debug mode overrides the configured level."""
        configure_logging(AppSettings(debug_mode=True, log_level="WARNING", json_logs=True))
        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_applies(self):
        """Test the configured level reaches the root logger."""
        configure_logging(AppSettings(debug_mode=False, log_level="warning", json_logs=True))
        assert logging.getLogger().level == logging.WARNING


class TestInMemoryAuditStorage:
    """Tests for the in-memory backend."""

    def test_limit_drops_oldest(self):
        """Test a capped trail keeps only the newest events."""
        storage = InMemoryAuditStorage(limit=2)
        events = [AuditEventBuilder.logout(Decimal(n)) for n in range(3)]
        for event in events:
            storage.append_event(event)

        assert storage.limit == 2
        assert len(storage) == 2
        assert storage.get_recent_events() == [events[2], events[1]]

    def test_unbounded_by_default(self):
        """Test no limit keeps every event."""
        storage = InMemoryAuditStorage()
        for n in range(5):
            storage.append_event(AuditEventBuilder.logout(Decimal(n)))
        assert storage.limit is None
        assert len(storage) == 5

    def test_queries(self):
        """Test recent, by-entity and by-type lookups."""
        storage = InMemoryAuditStorage()
        first = AuditEventBuilder.contact_changed(AuditEventType.CONTACT_UPSERTED, "contact-1", "1")
        second = AuditEventBuilder.contact_changed(AuditEventType.CONTACT_REMOVED, "contact-1", "1")
        storage.append_event(first)
        storage.append_event(second)

        assert storage.get_recent_events(1) == [second]
        assert storage.get_recent_events(0) == []
        assert storage.get_events_by_entity("contact", "contact-1") == [first, second]
        assert storage.get_events_by_type(AuditEventType.CONTACT_REMOVED) == [second]


class TestAuditModels:
    """Tests for audit event models."""

    def test_audit_event_defaults(self):
        """Test a bare event is info level."""
        event = AuditEvent(event_type=AuditEventType.LOGOUT, description="Session reset")
        assert event.severity == AuditSeverity.INFO

    def test_to_log_dict(self):
        """Test conversion to a log dictionary."""
        event = AuditEventBuilder.transfer(
            transfer_id="transfer-1",
            phone="8888-0000",
            amount=Decimal("10"),
            balance_after=Decimal("90"),
            inbound=True,
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transfer_received"
        assert log_dict["entity_id"] == "transfer-1"
        assert log_dict["details"]["balance_after"] == "90"
        assert '"transfer_received"' in event.to_json()

    def test_operation_rejected(self):
        """Test rejections carry the error class and message."""
        event = AuditEventBuilder.operation_rejected(
            "send_transfer",
            InsufficientFundsError(Decimal("10"), Decimal("5")),
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "InsufficientFundsError"
        assert event.error_message == "Saldo insuficiente"

    def test_login_rejected_is_warning(self):
        """Test a rejected login is a warning."""
        event = AuditEventBuilder.login("", "", success=False)
        assert event.event_type == AuditEventType.LOGIN_REJECTED
        assert event.severity == AuditSeverity.WARNING

    def test_automation_skipped_is_warning(self):
        """Test a skipped automation is a warning."""
        event = AuditEventBuilder.automation_changed(
            AuditEventType.AUTOMATION_SKIPPED, "automation-1", "Regla"
        )
        assert event.severity == AuditSeverity.WARNING
