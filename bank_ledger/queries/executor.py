"""
Read-side Queries

DESIGN DECISION: Queries are DERIVED, never stored.
Every view here is computed from one `LedgerSnapshot`, so a timeline and the
summary next to it always describe the same moment. Nothing in this module
mutates the store.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from bank_ledger.ledger.store import LedgerStore
from bank_ledger.models.ledger import (
    Contact,
    Envelope,
    LedgerSnapshot,
    TransferDirection,
)


class ActivityKind(str, Enum):
    TRANSFER = "transfer"
    RECHARGE = "recharge"


class ActivityFilter(str, Enum):
    """History screen filter chips."""
    ALL = "all"
    TRANSFER = "transfer"
    RECHARGE = "recharge"


class ActivityEntry(BaseModel):
    """One row of the activity timeline."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: ActivityKind
    title: str
    subtitle: str
    amount: Decimal  # signed: inbound positive, outbound and recharges negative
    timestamp: datetime
    direction: Optional[TransferDirection] = None
    linked_envelope_id: Optional[str] = None


class ActivityGroup(BaseModel):
    """Timeline entries that happened on the same calendar day."""
    model_config = ConfigDict(frozen=True)

    day: date
    items: list[ActivityEntry]


class AccountSummary(BaseModel):
    """Figures shown on the balance screen."""
    model_config = ConfigDict(frozen=True)

    balance: Decimal
    initial_balance: Decimal
    spent_since_start: Decimal
    total_envelope_balance: Decimal
    unassigned_balance: Decimal
    total_transferred: Decimal
    total_recharged: Decimal
    operations_count: int
    unread_notifications: int


def _recency_key(contact: Contact) -> tuple:
    last_used = contact.last_used_at.timestamp() if contact.last_used_at else 0.0
    return (-last_used, contact.name.casefold())


class LedgerQueries:
    """
    Derived views over a ledger store.

    Each public method takes an optional snapshot; without one it captures
    a fresh snapshot from the store.
    """

    def __init__(self, store: LedgerStore):
        self._store = store

    def _snap(self, snapshot: Optional[LedgerSnapshot]) -> LedgerSnapshot:
        return snapshot if snapshot is not None else self._store.snapshot()

    # =========================================================================
    # ACTIVITY
    # =========================================================================

    def timeline(
        self,
        activity_filter: ActivityFilter = ActivityFilter.ALL,
        snapshot: Optional[LedgerSnapshot] = None,
    ) -> list[ActivityEntry]:
        """Transfers and recharges merged, newest first."""
        snap = self._snap(snapshot)
        activity_filter = ActivityFilter(activity_filter)
        entries = []

        if activity_filter in (ActivityFilter.ALL, ActivityFilter.TRANSFER):
            for record in snap.transfers:
                inbound = record.direction == TransferDirection.INBOUND
                label = record.contact_name or record.phone
                entries.append(ActivityEntry(
                    id=record.id,
                    kind=ActivityKind.TRANSFER,
                    title=f"Recibo de {label}" if inbound else f"Envío a {label}",
                    subtitle=record.phone,
                    amount=record.amount if inbound else -record.amount,
                    timestamp=record.created_at,
                    direction=record.direction,
                    linked_envelope_id=record.linked_envelope_id,
                ))

        if activity_filter in (ActivityFilter.ALL, ActivityFilter.RECHARGE):
            for record in snap.recharges:
                entries.append(ActivityEntry(
                    id=record.id,
                    kind=ActivityKind.RECHARGE,
                    title=f"Recarga {record.provider}",
                    subtitle=record.phone,
                    amount=-record.amount,
                    timestamp=record.created_at,
                ))

        # Stable sort: ties keep transfers-before-recharges, each newest first
        entries.sort(key=lambda entry: entry.timestamp, reverse=True)
        return entries

    def grouped_timeline(
        self,
        activity_filter: ActivityFilter = ActivityFilter.ALL,
        snapshot: Optional[LedgerSnapshot] = None,
    ) -> list[ActivityGroup]:
        """The timeline bucketed by calendar day, most recent day first."""
        groups: dict[date, list[ActivityEntry]] = {}
        for entry in self.timeline(activity_filter, snapshot):
            groups.setdefault(entry.timestamp.date(), []).append(entry)
        return [
            ActivityGroup(day=day, items=items)
            for day, items in sorted(groups.items(), key=lambda item: item[0], reverse=True)
        ]

    def month_outflow(
        self,
        year: int,
        month: int,
        snapshot: Optional[LedgerSnapshot] = None,
    ) -> Decimal:
        """Sum of absolute timeline amounts within one calendar month."""
        return sum(
            (
                abs(entry.amount)
                for entry in self.timeline(snapshot=snapshot)
                if entry.timestamp.year == year and entry.timestamp.month == month
            ),
            Decimal("0"),
        )

    # =========================================================================
    # CONTACTS
    # =========================================================================

    def favorite_contacts(self, snapshot: Optional[LedgerSnapshot] = None) -> list[Contact]:
        """Favorites, most recently used first, then by name."""
        contacts = [c for c in self._snap(snapshot).contacts if c.favorite]
        return sorted(contacts, key=_recency_key)

    def other_contacts(self, snapshot: Optional[LedgerSnapshot] = None) -> list[Contact]:
        """Non-favorites, most recently used first, then by name."""
        contacts = [c for c in self._snap(snapshot).contacts if not c.favorite]
        return sorted(contacts, key=_recency_key)

    def alphabetical_contacts(self, snapshot: Optional[LedgerSnapshot] = None) -> list[Contact]:
        return sorted(self._snap(snapshot).contacts, key=lambda c: c.name.casefold())

    def latest_contact_activity(
        self,
        snapshot: Optional[LedgerSnapshot] = None,
    ) -> Optional[datetime]:
        """Most recent `last_used_at` across the directory, if any."""
        stamps = [c.last_used_at for c in self._snap(snapshot).contacts if c.last_used_at]
        return max(stamps) if stamps else None

    # =========================================================================
    # ENVELOPES AND AUTOMATIONS
    # =========================================================================

    @staticmethod
    def envelope_progress(envelope: Envelope) -> Optional[int]:
        """
        Percent of the target reached, capped at 100.

        None when the envelope has no (or a zero) target.
        """
        if not envelope.target_amount:
            return None
        ratio = envelope.balance / envelope.target_amount * 100
        return min(100, int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))

    def resolve_envelope(
        self,
        envelope_id: Optional[str],
        snapshot: Optional[LedgerSnapshot] = None,
    ) -> Optional[Envelope]:
        """Look up an envelope; ids of removed envelopes resolve to None."""
        if envelope_id is None:
            return None
        for envelope in self._snap(snapshot).envelopes:
            if envelope.id == envelope_id:
                return envelope
        return None

    def active_automation_count(self, snapshot: Optional[LedgerSnapshot] = None) -> int:
        return sum(1 for rule in self._snap(snapshot).automations if rule.active)

    # =========================================================================
    # SUMMARY
    # =========================================================================

    def account_summary(self, snapshot: Optional[LedgerSnapshot] = None) -> AccountSummary:
        snap = self._snap(snapshot)
        envelope_total = snap.total_envelope_balance
        return AccountSummary(
            balance=snap.balance,
            initial_balance=snap.initial_balance,
            spent_since_start=snap.initial_balance - snap.balance,
            total_envelope_balance=envelope_total,
            unassigned_balance=snap.balance - envelope_total,
            total_transferred=sum((t.amount for t in snap.transfers), Decimal("0")),
            total_recharged=sum((r.amount for r in snap.recharges), Decimal("0")),
            operations_count=len(snap.transfers) + len(snap.recharges),
            unread_notifications=snap.unread_notification_count,
        )
