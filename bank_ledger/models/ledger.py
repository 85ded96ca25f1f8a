"""
Core Data Models for the Bank Ledger

These models define the strict schemas for every entity the ledger store owns.
They are designed to:
1. Enforce type safety at runtime
2. Be immutable once handed out (updates replace the stored model)
3. Be serializable for logging and snapshots

DESIGN DECISION: Entities are frozen Pydantic v2 models.
The store never mutates a model in place; it builds a new one with
`model_copy(update=...)` and swaps it in. Callers holding an old reference
keep a consistent view of the entity as it was.

Drafts and updates are separate request models with explicit optional fields,
so "not provided" (None) is never confused with "provided and empty".
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Timezone-aware current time used for every ledger timestamp."""
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class NotificationCategory(str, Enum):
    """Category shown next to each notification in the feed."""
    TRANSFER = "transfer"
    RECHARGE = "recharge"
    SECURITY = "security"
    GENERAL = "general"


class TransferDirection(str, Enum):
    """
    Direction of a transfer relative to the account holder.

    Outbound transfers debit the balance; inbound transfers credit it
    and are the only ones the automation engine looks at.
    """
    OUTBOUND = "outbound"
    INBOUND = "inbound"


class BiometricResult(str, Enum):
    """Outcome of a simulated biometric round-trip."""
    SUCCESS = "success"
    MISMATCH = "mismatch"
    TIMEOUT = "timeout"


class AutomationMatchMode(str, Enum):
    """
    How the automation engine handles several active rules for one phone.

    FAN_OUT: every matching rule receives the full amount.
    FIRST_MATCH: only the oldest matching rule fires.
    """
    FAN_OUT = "fan_out"
    FIRST_MATCH = "first_match"


# =============================================================================
# ENTITIES
# =============================================================================

class UserProfile(BaseModel):
    """The signed-in user. Only `login` changes it."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    id: str = Field(..., description="Government ID number")
    phone: str
    avatar_color: str
    id_type: str = Field(..., description="Label of the government ID type")


class Contact(BaseModel):
    """
    Address book entry.

    The phone number is the natural key: the directory never holds two
    contacts with the same phone.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    name: str
    phone: str = Field(..., min_length=1)
    avatar_color: str
    favorite: bool = False
    last_used_at: Optional[datetime] = None


class TransferRecord(BaseModel):
    """A money transfer. Immutable once created."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    contact_name: str
    phone: str
    amount: Decimal = Field(..., gt=0)
    note: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    direction: TransferDirection = TransferDirection.OUTBOUND
    linked_envelope_id: Optional[str] = Field(
        default=None,
        description="Envelope that received this transfer through an automation rule",
    )


class RechargeRecord(BaseModel):
    """A mobile airtime recharge. Immutable once created."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    provider: str
    phone: str
    amount: Decimal = Field(..., gt=0)
    created_at: datetime = Field(default_factory=utc_now)


class Envelope(BaseModel):
    """
    A named sub-balance that ring-fences part of the user's money.

    The envelope balance is tracked independently of the account balance;
    allocating into an envelope does not debit the account.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    name: str = Field(..., min_length=1)
    color: str
    balance: Decimal = Decimal("0")
    target_amount: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = None
    updated_at: datetime = Field(default_factory=utc_now)


class AutomationRule(BaseModel):
    """Routes inbound transfers from `match_phone` into an envelope."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    title: str
    match_phone: str = Field(..., min_length=1)
    envelope_id: str
    active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    last_triggered_at: Optional[datetime] = None


class NotificationItem(BaseModel):
    """One entry of the user-facing notification feed."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    title: str
    message: str
    timestamp: datetime = Field(default_factory=utc_now)
    read: bool = False
    category: NotificationCategory = NotificationCategory.GENERAL


class BiometricAttempt(BaseModel):
    """One simulated biometric validation."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    result: BiometricResult
    timestamp: datetime = Field(default_factory=utc_now)
    device: str


class BiometricValidationResult(BaseModel):
    """What `simulate_biometric_validation` resolves with."""
    model_config = ConfigDict(frozen=True)

    success: bool
    device_name: str
    attempt: BiometricAttempt


# =============================================================================
# DRAFTS AND UPDATES - request models for store operations
# =============================================================================

class TransferDraft(BaseModel):
    """Input for sending or receiving a transfer."""

    contact_name: str = ""
    phone: str
    amount: Decimal
    note: Optional[str] = None


class RechargeDraft(BaseModel):
    """Input for a mobile recharge."""

    provider: str
    phone: str
    amount: Decimal


class ContactDraft(BaseModel):
    """
    Input for `add_contact`.

    Optional fields left as None keep the existing value on upsert.
    """

    phone: str
    name: Optional[str] = None
    avatar_color: Optional[str] = None
    favorite: Optional[bool] = None


class ContactUpdate(BaseModel):
    """Partial update of a contact by id."""

    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_color: Optional[str] = None
    favorite: Optional[bool] = None
    last_used_at: Optional[datetime] = None


class EnvelopeUpdate(BaseModel):
    """Partial update of an envelope by id."""

    name: Optional[str] = None
    color: Optional[str] = None
    target_amount: Optional[Decimal] = None
    description: Optional[str] = None


class AutomationRuleUpdate(BaseModel):
    """Partial update of an automation rule by id."""

    title: Optional[str] = None
    match_phone: Optional[str] = None
    envelope_id: Optional[str] = None
    active: Optional[bool] = None


# =============================================================================
# SNAPSHOT - consistent read of the whole store
# =============================================================================

class LedgerSnapshot(BaseModel):
    """
    The complete read surface of the store, captured in one atomic step.

    Listeners registered with `LedgerStore.subscribe` receive one of these
    after every committed mutation.
    """
    model_config = ConfigDict(frozen=True)

    taken_at: datetime = Field(default_factory=utc_now)
    balance: Decimal
    initial_balance: Decimal
    is_authenticated: bool
    user: UserProfile
    contacts: list[Contact] = Field(default_factory=list)
    transfers: list[TransferRecord] = Field(default_factory=list)
    recharges: list[RechargeRecord] = Field(default_factory=list)
    envelopes: list[Envelope] = Field(default_factory=list)
    automations: list[AutomationRule] = Field(default_factory=list)
    notifications: list[NotificationItem] = Field(default_factory=list)
    biometric_registered: bool = False
    biometric_last_sync: Optional[datetime] = None
    biometric_attempts: list[BiometricAttempt] = Field(default_factory=list)

    @property
    def total_envelope_balance(self) -> Decimal:
        """Sum of all envelope balances (informational only)."""
        return sum((envelope.balance for envelope in self.envelopes), Decimal("0"))

    @property
    def unread_notification_count(self) -> int:
        return sum(1 for item in self.notifications if not item.read)
