"""
Audit Models for the Bank Ledger

Every ledger mutation (and every rejected attempt) is logged for audit purposes.
This provides:
1. Traceability of how the balance got to where it is
2. Debugging information when an operation is rejected
3. A developer-facing trail separate from the user notification feed

DESIGN DECISION: The audit trail only grows. Events are never edited or removed.
Unlike the notification feed they are not capped and not reset on logout.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Session
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_REJECTED = "login_rejected"
    LOGOUT = "logout"

    # Account ledger
    TRANSFER_SENT = "transfer_sent"
    TRANSFER_RECEIVED = "transfer_received"
    RECHARGE_MADE = "recharge_made"

    # Contact directory
    CONTACT_UPSERTED = "contact_upserted"
    CONTACT_UPDATED = "contact_updated"
    CONTACT_REMOVED = "contact_removed"

    # Envelopes
    ENVELOPE_CREATED = "envelope_created"
    ENVELOPE_UPDATED = "envelope_updated"
    ENVELOPE_REMOVED = "envelope_removed"
    ENVELOPE_ALLOCATED = "envelope_allocated"

    # Automation
    AUTOMATION_CREATED = "automation_created"
    AUTOMATION_UPDATED = "automation_updated"
    AUTOMATION_REMOVED = "automation_removed"
    AUTOMATION_TRIGGERED = "automation_triggered"
    AUTOMATION_SKIPPED = "automation_skipped"

    # Biometrics
    BIOMETRIC_REGISTERED = "biometric_registered"
    BIOMETRIC_ATTEMPT = "biometric_attempt"

    # Failures
    OPERATION_REJECTED = "operation_rejected"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """How loudly an event is logged."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    One entry of the audit trail.

    Each committed mutation or rejected attempt produces one.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Identifier of this audit entry"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC time the event was recorded"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # The ledger entity the event concerns
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transfer', 'envelope', 'contact')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Flat dict handed to structlog as keyword arguments.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_log_dict(), default=str, ensure_ascii=False)


class AuditEventBuilder:
    """
    Factories for the events the ledger store emits.

    Usage:
        event = AuditEventBuilder.transfer_sent(record_id, phone, amount)
        event = AuditEventBuilder.operation_rejected("send_transfer", error)
    """

    @staticmethod
    def login(user_id: str, phone: str, success: bool) -> AuditEvent:
        if success:
            return AuditEvent(
                event_type=AuditEventType.LOGIN_SUCCEEDED,
                entity_type="user",
                entity_id=user_id,
                description="User signed in",
                details={"phone": phone},
            )
        return AuditEvent(
            event_type=AuditEventType.LOGIN_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            description="Sign in rejected: blank id or phone",
        )

    @staticmethod
    def logout(balance: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGOUT,
            entity_type="user",
            description="Session reset to seed state",
            details={"restored_balance": str(balance)},
        )

    @staticmethod
    def transfer(
        transfer_id: str,
        phone: str,
        amount: Decimal,
        balance_after: Decimal,
        inbound: bool,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.TRANSFER_RECEIVED if inbound else AuditEventType.TRANSFER_SENT
        )
        verb = "received from" if inbound else "sent to"
        return AuditEvent(
            event_type=event_type,
            entity_type="transfer",
            entity_id=transfer_id,
            description=f"Transfer of {amount} {verb} {phone}",
            details={
                "phone": phone,
                "amount": str(amount),
                "balance_after": str(balance_after),
            },
        )

    @staticmethod
    def recharge_made(
        recharge_id: str,
        provider: str,
        phone: str,
        amount: Decimal,
        balance_after: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECHARGE_MADE,
            entity_type="recharge",
            entity_id=recharge_id,
            description=f"Recharge of {amount} with {provider} for {phone}",
            details={
                "provider": provider,
                "phone": phone,
                "amount": str(amount),
                "balance_after": str(balance_after),
            },
        )

    @staticmethod
    def contact_changed(
        event_type: AuditEventType,
        contact_id: str,
        phone: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            entity_type="contact",
            entity_id=contact_id,
            description=f"Contact {event_type.value.split('_')[-1]}: {phone}",
            details={"phone": phone},
        )

    @staticmethod
    def envelope_changed(
        event_type: AuditEventType,
        envelope_id: str,
        name: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            entity_type="envelope",
            entity_id=envelope_id,
            description=f"Envelope {event_type.value.split('_')[-1]}: {name}",
            details=details or {},
        )

    @staticmethod
    def automation_changed(
        event_type: AuditEventType,
        rule_id: str,
        title: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        severity = (
            AuditSeverity.WARNING
            if event_type == AuditEventType.AUTOMATION_SKIPPED
            else AuditSeverity.INFO
        )
        return AuditEvent(
            event_type=event_type,
            severity=severity,
            entity_type="automation",
            entity_id=rule_id,
            description=f"Automation {event_type.value.split('_')[-1]}: {title}",
            details=details or {},
        )

    @staticmethod
    def biometric(event_type: AuditEventType, device: str, result: str) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            entity_type="biometric",
            description=f"Biometric {result} on {device}",
            details={"device": device, "result": result},
        )

    @staticmethod
    def operation_rejected(
        operation: str,
        error: Exception,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Operation rejected: {operation}",
            error_code=type(error).__name__,
            error_message=str(error),
            details={"operation": operation, **(details or {})},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
