"""
Audit Logger

DESIGN DECISION: Every ledger mutation, and every rejected attempt, is logged.
This provides:
1. Traceability of the balance
2. Debugging capability when the UI reports a rejected operation
3. A trail that survives logout (the notification feed does not)

The audit logger:
- Is synchronous, like the store it serves
- Gracefully handles failures (a broken sink never breaks a transfer)
"""

import logging
from decimal import Decimal
from typing import Optional

import structlog

from bank_ledger.config import AppSettings, get_settings
from bank_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditEventType
from bank_ledger.services.storage import AuditStorageInterface


_configured = False


def configure_logging(app_settings: Optional[AppSettings] = None) -> None:
    """
    Configure structlog (and the stdlib root logger it writes through).

    Safe to call more than once; the last call wins.
    """
    global _configured

    app_settings = app_settings or get_settings().app
    level = "DEBUG" if app_settings.debug_mode else app_settings.log_level
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if app_settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


class AuditLogger:
    """
    Writes every audit event to two places:
    1. The structlog stream, for whoever is watching the process
    2. An optional AuditStorageInterface, so the app or a test can read it back
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Args:
            storage: Sink for audit events. Without one, events are only
                    written to the log stream.
        """
        if not _configured:
            configure_logging()
        self._storage = storage
        self._logger = structlog.get_logger("bank_ledger.audit").bind(
            environment=get_settings().app.app_environment,
        )

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Emit one event at its severity and hand it to the storage sink.

        Returns False only when the sink rejected the event.
        """
        log_dict = event.to_log_dict()
        emit = getattr(self._logger, event.severity.value, self._logger.info)
        emit("audit_event", **log_dict)

        if self._storage is None:
            return True
        try:
            return self._storage.append_event(event)
        except Exception as e:
            # The ledger operation already committed; report, never raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def log_login(self, user_id: str, phone: str, success: bool) -> None:
        self.log(AuditEventBuilder.login(user_id, phone, success))

    def log_logout(self, balance: Decimal) -> None:
        self.log(AuditEventBuilder.logout(balance))

    def log_transfer(
        self,
        transfer_id: str,
        phone: str,
        amount: Decimal,
        balance_after: Decimal,
        inbound: bool = False,
    ) -> None:
        """Log a sent or received transfer."""
        self.log(AuditEventBuilder.transfer(
            transfer_id=transfer_id,
            phone=phone,
            amount=amount,
            balance_after=balance_after,
            inbound=inbound,
        ))

    def log_recharge(
        self,
        recharge_id: str,
        provider: str,
        phone: str,
        amount: Decimal,
        balance_after: Decimal,
    ) -> None:
        self.log(AuditEventBuilder.recharge_made(
            recharge_id=recharge_id,
            provider=provider,
            phone=phone,
            amount=amount,
            balance_after=balance_after,
        ))

    def log_contact(
        self,
        event_type: AuditEventType,
        contact_id: str,
        phone: str,
    ) -> None:
        self.log(AuditEventBuilder.contact_changed(event_type, contact_id, phone))

    def log_envelope(
        self,
        event_type: AuditEventType,
        envelope_id: str,
        name: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.envelope_changed(event_type, envelope_id, name, details))

    def log_automation(
        self,
        event_type: AuditEventType,
        rule_id: str,
        title: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.automation_changed(event_type, rule_id, title, details))

    def log_biometric(self, event_type: AuditEventType, device: str, result: str) -> None:
        self.log(AuditEventBuilder.biometric(event_type, device, result))

    def log_rejected(
        self,
        operation: str,
        error: Exception,
        details: Optional[dict] = None,
    ) -> None:
        """Log a strict operation that raised and left the ledger untouched."""
        self.log(AuditEventBuilder.operation_rejected(operation, error, details))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(error_type, error_message, details))
