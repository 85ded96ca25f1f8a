"""
Data Models Package

This package contains all Pydantic models used by the bank ledger.
All data owned by the ledger store must conform to these schemas.
"""

from bank_ledger.models.ledger import (
    AutomationMatchMode,
    AutomationRule,
    AutomationRuleUpdate,
    BiometricAttempt,
    BiometricResult,
    BiometricValidationResult,
    Contact,
    ContactDraft,
    ContactUpdate,
    Envelope,
    EnvelopeUpdate,
    LedgerSnapshot,
    NotificationCategory,
    NotificationItem,
    RechargeDraft,
    RechargeRecord,
    TransferDirection,
    TransferDraft,
    TransferRecord,
    UserProfile,
    utc_now,
)
from bank_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from bank_ledger.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Ledger entities
    "AutomationMatchMode",
    "AutomationRule",
    "AutomationRuleUpdate",
    "BiometricAttempt",
    "BiometricResult",
    "BiometricValidationResult",
    "Contact",
    "ContactDraft",
    "ContactUpdate",
    "Envelope",
    "EnvelopeUpdate",
    "LedgerSnapshot",
    "NotificationCategory",
    "NotificationItem",
    "RechargeDraft",
    "RechargeRecord",
    "TransferDirection",
    "TransferDraft",
    "TransferRecord",
    "UserProfile",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
