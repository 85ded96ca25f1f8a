"""
Ledger Store

The single owner of the user's financial state: balance, transfer and
recharge history, contacts, envelopes, automation rules, the notification
feed and the biometric simulation.

DESIGN DECISION: Each exported operation is one atomic step.
- A re-entrant lock serializes callers (reads take it too)
- The sub-states are captured before the step and restored if it raises
- Listeners and the audit trail only ever see committed state

So a reader never observes, say, a decremented balance without the
transfer record that explains it.

Two error policies coexist:
- STRICT: anything that moves money or needs a required identifier raises
  a typed LedgerError and changes nothing
- LENIENT: update/remove/toggle by an id that no longer exists returns None
"""

import asyncio
import random
from contextlib import contextmanager
from decimal import Decimal
from functools import partial
from threading import RLock
from typing import Awaitable, Callable, Iterator, Optional

from bank_ledger.audit import AuditLogger
from bank_ledger.config import BiometricSettings, LedgerSettings, get_settings
from bank_ledger.errors import LedgerError, MissingPhoneError
from bank_ledger.formatting import format_currency
from bank_ledger.ledger.automation import AutomationEngine
from bank_ledger.ledger.biometrics import BiometricSimulator
from bank_ledger.ledger.contacts import ContactDirectory
from bank_ledger.ledger.envelopes import EnvelopeBook
from bank_ledger.ledger.history import BoundedHistory
from bank_ledger.ledger.ids import create_id
from bank_ledger.ledger.notifications import NotificationFeed
from bank_ledger.ledger.seeds import DEFAULT_USER, default_contacts, default_notifications
from bank_ledger.models.audit import AuditEventType
from bank_ledger.models.ledger import (
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
from bank_ledger.services.storage import AuditStorageInterface, InMemoryAuditStorage
from bank_ledger.validation import (
    clean_optional,
    require_funds,
    require_positive_amount,
    require_signed_amount,
    require_text,
)


Listener = Callable[[LedgerSnapshot], None]


class LedgerStore:
    """
    In-memory, synchronously mutated ledger.

    Every collaborator is injectable so tests can build independent
    instances with a fixed clock and random source.
    """

    def __init__(
        self,
        settings: Optional[LedgerSettings] = None,
        biometric_settings: Optional[BiometricSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        rng: Optional[random.Random] = None,
        clock: Callable = utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        formatter: Optional[Callable[[Decimal], str]] = None,
    ):
        self._settings = settings or get_settings().ledger
        biometric_settings = biometric_settings or get_settings().biometrics
        self._audit = audit_logger or AuditLogger()
        self._clock = clock
        self._format = formatter or partial(
            format_currency, symbol=self._settings.currency_symbol
        )
        rng = rng or random.Random()

        self._lock = RLock()
        self._listeners: list[Listener] = []

        self._initial_balance = Decimal(self._settings.starting_balance)
        self._balance = self._initial_balance
        self._is_authenticated = False
        self._user = DEFAULT_USER

        limit = self._settings.history_limit
        self._transfers: BoundedHistory[TransferRecord] = BoundedHistory(limit)
        self._recharges: BoundedHistory[RechargeRecord] = BoundedHistory(limit)
        self._contacts = ContactDirectory(
            default_contacts(),
            bootstrap_size=self._settings.favorites_bootstrap_size,
            rng=rng,
            clock=clock,
        )
        self._envelopes = EnvelopeBook(clock=clock, max_amount=self._settings.max_amount)
        self._automations = AutomationEngine(
            self._envelopes,
            match_mode=self._settings.automation_match_mode,
            clock=clock,
        )
        self._notifications = NotificationFeed(
            self._settings.notification_limit,
            default_notifications(),
            clock=clock,
        )
        self._biometrics = BiometricSimulator(
            biometric_settings, rng=rng, sleep=sleep, clock=clock
        )

    # =========================================================================
    # ATOMIC STEP
    # =========================================================================

    def _capture(self) -> tuple:
        return (
            self._balance,
            self._is_authenticated,
            self._user,
            self._transfers.to_list(),
            self._recharges.to_list(),
            self._contacts.to_list(),
            self._envelopes.to_list(),
            self._automations.to_list(),
            self._notifications.to_list(),
            self._biometrics.snapshot(),
        )

    def _restore(self, state: tuple) -> None:
        (
            self._balance,
            self._is_authenticated,
            self._user,
            transfers,
            recharges,
            contacts,
            envelopes,
            automations,
            notifications,
            biometrics,
        ) = state
        self._transfers.reset(transfers)
        self._recharges.reset(recharges)
        self._contacts.reset(contacts)
        self._envelopes.reset(envelopes)
        self._automations.reset(automations)
        self._notifications.reset(notifications)
        self._biometrics.restore(biometrics)

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[None]:
        """Run one operation as a single, all-or-nothing state transition."""
        with self._lock:
            saved = self._capture()
            try:
                yield
            except Exception as error:
                self._restore(saved)
                if isinstance(error, LedgerError):
                    self._audit.log_rejected(operation, error)
                else:
                    self._audit.log_error(type(error).__name__, str(error), {"operation": operation})
                raise
            self._publish()

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self._snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                # A broken subscriber must not undo a committed operation
                self._audit.log_error(
                    "listener_failed",
                    str(e),
                    {"listener": getattr(listener, "__name__", repr(listener))},
                )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener` with a fresh snapshot after every committed mutation.

        Returns a function that unsubscribes it.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(
        self,
        title: str,
        message: str,
        category: NotificationCategory = NotificationCategory.GENERAL,
    ) -> NotificationItem:
        return self._notifications.add(title, message, category)

    # =========================================================================
    # READ SURFACE
    # =========================================================================

    def _snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            taken_at=self._clock(),
            balance=self._balance,
            initial_balance=self._initial_balance,
            is_authenticated=self._is_authenticated,
            user=self._user,
            contacts=self._contacts.to_list(),
            transfers=self._transfers.to_list(),
            recharges=self._recharges.to_list(),
            envelopes=self._envelopes.to_list(),
            automations=self._automations.to_list(),
            notifications=self._notifications.to_list(),
            biometric_registered=self._biometrics.registered,
            biometric_last_sync=self._biometrics.last_sync,
            biometric_attempts=self._biometrics.attempts(),
        )

    def snapshot(self) -> LedgerSnapshot:
        """The whole read surface, captured in one step."""
        with self._lock:
            return self._snapshot()

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    @property
    def balance(self) -> Decimal:
        with self._lock:
            return self._balance

    @property
    def initial_balance(self) -> Decimal:
        return self._initial_balance

    @property
    def is_authenticated(self) -> bool:
        with self._lock:
            return self._is_authenticated

    @property
    def user(self) -> UserProfile:
        with self._lock:
            return self._user

    @property
    def contacts(self) -> list[Contact]:
        with self._lock:
            return self._contacts.to_list()

    @property
    def transfers(self) -> list[TransferRecord]:
        with self._lock:
            return self._transfers.to_list()

    @property
    def recharges(self) -> list[RechargeRecord]:
        with self._lock:
            return self._recharges.to_list()

    @property
    def envelopes(self) -> list[Envelope]:
        with self._lock:
            return self._envelopes.to_list()

    @property
    def automations(self) -> list[AutomationRule]:
        with self._lock:
            return self._automations.to_list()

    @property
    def notifications(self) -> list[NotificationItem]:
        with self._lock:
            return self._notifications.to_list()

    @property
    def biometric_registered(self) -> bool:
        with self._lock:
            return self._biometrics.registered

    @property
    def biometric_last_sync(self):
        with self._lock:
            return self._biometrics.last_sync

    @property
    def biometric_attempts(self) -> list[BiometricAttempt]:
        with self._lock:
            return self._biometrics.attempts()

    @property
    def total_envelope_balance(self) -> Decimal:
        """Sum of envelope balances. Never reconciled against `balance`."""
        with self._lock:
            return self._envelopes.total_balance

    @property
    def unread_notification_count(self) -> int:
        with self._lock:
            return self._notifications.unread_count()

    def get_envelope(self, envelope_id: Optional[str]) -> Optional[Envelope]:
        """Resolve an envelope id; removed envelopes resolve to None."""
        with self._lock:
            return self._envelopes.get(envelope_id)

    # =========================================================================
    # ACCOUNT LEDGER
    # =========================================================================

    def login(self, id: str, phone: str, id_type: Optional[str] = None) -> bool:
        """
        Local, non-cryptographic sign-in gate.

        Returns False (and changes nothing) if id or phone is blank.
        """
        user_id = (id or "").strip()
        user_phone = (phone or "").strip()
        if not user_id or not user_phone:
            self._audit.log_login(user_id, user_phone, success=False)
            return False

        with self._atomic("login"):
            self._is_authenticated = True
            self._user = self._user.model_copy(update={
                "id": user_id,
                "phone": user_phone,
                "id_type": clean_optional(id_type) or self._user.id_type,
            })
        self._audit.log_login(user_id, user_phone, success=True)
        return True

    def logout(self) -> None:
        """
        Full session reset: balance back to the initial balance, transfer and
        recharge history emptied, contacts and notifications back to seed.
        """
        with self._atomic("logout"):
            self._is_authenticated = False
            self._balance = self._initial_balance
            self._transfers.clear()
            self._recharges.clear()
            self._contacts.reset(default_contacts())
            self._notifications.reset(default_notifications())
        self._audit.log_logout(self._initial_balance)

    def send_transfer(
        self,
        contact_name: str,
        phone: str,
        amount: object,
        note: Optional[str] = None,
    ) -> TransferRecord:
        """
        Send money to a phone number.

        Debits the balance, records the transfer, upserts the contact and
        notifies, all in one step.

        Raises:
            InvalidAmountError: amount is not a finite number above zero
            InsufficientFundsError: amount is larger than the balance
            MissingPhoneError: phone is blank
        """
        with self._atomic("send_transfer"):
            value = require_positive_amount(amount, self._settings.max_amount)
            require_funds(value, self._balance)
            phone = require_text(phone, MissingPhoneError)

            record = TransferRecord(
                id=create_id("transfer"),
                contact_name=(contact_name or "").strip(),
                phone=phone,
                amount=value,
                note=clean_optional(note),
                created_at=self._clock(),
                direction=TransferDirection.OUTBOUND,
            )
            self._balance -= value
            self._transfers.prepend(record)
            contact, _ = self._contacts.upsert(phone, name=contact_name)
            self._notify(
                "Transferencia enviada",
                f"Enviaste {self._format(value)} a {record.contact_name or record.phone}.",
                NotificationCategory.TRANSFER,
            )
            balance_after = self._balance

        self._audit.log_transfer(record.id, phone, value, balance_after, inbound=False)
        self._audit.log_contact(AuditEventType.CONTACT_UPSERTED, contact.id, phone)
        return record

    def submit_transfer(self, draft: TransferDraft) -> TransferRecord:
        """`send_transfer` taking a draft."""
        return self.send_transfer(draft.contact_name, draft.phone, draft.amount, draft.note)

    def receive_transfer(
        self,
        contact_name: str,
        phone: str,
        amount: object,
        note: Optional[str] = None,
    ) -> TransferRecord:
        """
        Record money received from a phone number.

        Credits the balance, records an inbound transfer, upserts the sender
        contact, notifies, and runs the automation rules for the sender. The
        record links to the envelope of the first rule that was applied.

        Raises:
            InvalidAmountError: amount is not a finite number above zero
            MissingPhoneError: phone is blank
        """
        with self._atomic("receive_transfer"):
            value = require_positive_amount(amount, self._settings.max_amount)
            phone = require_text(phone, MissingPhoneError)

            record = TransferRecord(
                id=create_id("transfer"),
                contact_name=(contact_name or "").strip(),
                phone=phone,
                amount=value,
                note=clean_optional(note),
                created_at=self._clock(),
                direction=TransferDirection.INBOUND,
            )
            self._balance += value
            contact, _ = self._contacts.upsert(phone, name=contact_name)
            self._notify(
                "Transferencia recibida",
                f"Recibiste {self._format(value)} de {record.contact_name or record.phone}.",
                NotificationCategory.TRANSFER,
            )

            outcomes = self._automations.apply(record)
            applied = [outcome for outcome in outcomes if outcome.applied]
            if applied:
                record = record.model_copy(
                    update={"linked_envelope_id": applied[0].envelope.id}
                )
            for outcome in applied:
                self._notify(
                    "Automatización aplicada",
                    f"{self._format(value)} se apartaron en {outcome.envelope.name} "
                    f"por la regla {outcome.rule.title}.",
                    NotificationCategory.GENERAL,
                )
            self._transfers.prepend(record)
            balance_after = self._balance

        self._audit.log_transfer(record.id, phone, value, balance_after, inbound=True)
        self._audit.log_contact(AuditEventType.CONTACT_UPSERTED, contact.id, phone)
        for outcome in outcomes:
            if outcome.applied:
                self._audit.log_automation(
                    AuditEventType.AUTOMATION_TRIGGERED,
                    outcome.rule.id,
                    outcome.rule.title,
                    {"envelope_id": outcome.envelope.id, "amount": str(value)},
                )
            else:
                self._audit.log_automation(
                    AuditEventType.AUTOMATION_SKIPPED,
                    outcome.rule.id,
                    outcome.rule.title,
                    {"envelope_id": outcome.rule.envelope_id, "reason": "envelope_removed"},
                )
        return record

    def make_recharge(self, provider: str, phone: str, amount: object) -> RechargeRecord:
        """
        Top up a phone line from the balance. Does not touch contacts.

        Raises:
            InvalidAmountError: amount is not a finite number above zero
            InsufficientFundsError: amount is larger than the balance
            MissingPhoneError: phone is blank
        """
        with self._atomic("make_recharge"):
            value = require_positive_amount(amount, self._settings.max_amount)
            require_funds(value, self._balance)
            phone = require_text(phone, MissingPhoneError)

            record = RechargeRecord(
                id=create_id("recharge"),
                provider=(provider or "").strip(),
                phone=phone,
                amount=value,
                created_at=self._clock(),
            )
            self._balance -= value
            self._recharges.prepend(record)
            self._notify(
                "Recarga exitosa",
                f"Recargaste {self._format(value)} al {phone} con {record.provider}.",
                NotificationCategory.RECHARGE,
            )
            balance_after = self._balance

        self._audit.log_recharge(record.id, record.provider, phone, value, balance_after)
        return record

    def submit_recharge(self, draft: RechargeDraft) -> RechargeRecord:
        """`make_recharge` taking a draft."""
        return self.make_recharge(draft.provider, draft.phone, draft.amount)

    # =========================================================================
    # CONTACT DIRECTORY
    # =========================================================================

    def add_contact(self, draft: ContactDraft) -> Contact:
        """
        Create the contact, or upsert the existing one with the same phone.

        Raises:
            MissingPhoneError: phone is blank
        """
        with self._atomic("add_contact"):
            contact, _ = self._contacts.upsert(
                draft.phone,
                name=draft.name,
                avatar_color=draft.avatar_color,
                favorite=draft.favorite,
            )
        self._audit.log_contact(AuditEventType.CONTACT_UPSERTED, contact.id, contact.phone)
        return contact

    def record_contact_usage(self, phone: str, name: Optional[str] = None) -> Contact:
        """
        Passive upsert used by other flows (e.g. picking a recipient).

        Raises:
            MissingPhoneError: phone is blank
        """
        with self._atomic("record_contact_usage"):
            contact, _ = self._contacts.upsert(phone, name=name)
        self._audit.log_contact(AuditEventType.CONTACT_UPSERTED, contact.id, contact.phone)
        return contact

    def update_contact(self, contact_id: str, updates: ContactUpdate) -> Optional[Contact]:
        """
        Returns None if the id is unknown.

        Raises:
            MissingPhoneError: the update sets a blank phone
            DuplicatePhoneError: the new phone belongs to another contact
        """
        with self._atomic("update_contact"):
            contact = self._contacts.update(contact_id, updates)
        if contact is not None:
            self._audit.log_contact(AuditEventType.CONTACT_UPDATED, contact.id, contact.phone)
        return contact

    def remove_contact(self, contact_id: str) -> None:
        with self._atomic("remove_contact"):
            removed = self._contacts.remove(contact_id)
        if removed is not None:
            self._audit.log_contact(AuditEventType.CONTACT_REMOVED, removed.id, removed.phone)

    def toggle_favorite_contact(self, contact_id: str) -> Optional[Contact]:
        with self._atomic("toggle_favorite_contact"):
            contact = self._contacts.toggle_favorite(contact_id)
        if contact is not None:
            self._audit.log_contact(AuditEventType.CONTACT_UPDATED, contact.id, contact.phone)
        return contact

    # =========================================================================
    # ENVELOPES
    # =========================================================================

    def create_envelope(
        self,
        name: str,
        color: Optional[str] = None,
        target_amount: object = None,
        description: Optional[str] = None,
    ) -> Envelope:
        """
        Raises:
            MissingNameError: name is blank
            InvalidTargetError: target is negative or not finite
        """
        with self._atomic("create_envelope"):
            envelope = self._envelopes.create(name, color, target_amount, description)
            self._notify(
                "Nuevo sobre creado",
                f"{envelope.name} ya está listo para recibir asignaciones automáticas.",
            )
        self._audit.log_envelope(
            AuditEventType.ENVELOPE_CREATED,
            envelope.id,
            envelope.name,
            {"target_amount": str(envelope.target_amount) if envelope.target_amount is not None else None},
        )
        return envelope

    def update_envelope(self, envelope_id: str, updates: EnvelopeUpdate) -> Optional[Envelope]:
        """
        Returns None if the id is unknown.

        Raises:
            MissingNameError: the update sets a blank name
            InvalidTargetError: the update sets a negative or non-finite target
        """
        with self._atomic("update_envelope"):
            envelope = self._envelopes.update(envelope_id, updates)
            if envelope is not None:
                self._notify("Sobre actualizado", f"{envelope.name} se actualizó correctamente.")
        if envelope is not None:
            self._audit.log_envelope(AuditEventType.ENVELOPE_UPDATED, envelope.id, envelope.name)
        return envelope

    def remove_envelope(self, envelope_id: str) -> None:
        """
        Delete an envelope. Transfers linked to it keep the id; automation
        rules pointing at it stay but are skipped when they match.
        """
        with self._atomic("remove_envelope"):
            removed = self._envelopes.remove(envelope_id)
            if removed is not None:
                self._notify("Sobre eliminado", f"{removed.name} se eliminó del panel de sobres.")
        if removed is not None:
            self._audit.log_envelope(AuditEventType.ENVELOPE_REMOVED, removed.id, removed.name)

    def allocate_to_envelope(
        self,
        envelope_id: str,
        signed_amount: object,
        allow_negative: bool = False,
    ) -> None:
        """
        Deposit (positive) into or withdraw (negative) from an envelope.

        The account balance is not touched. Callers that want a deposit to
        come out of available money validate against `balance` themselves.

        Raises:
            InvalidAmountError: amount is zero or not finite
            EnvelopeNotFoundError: no envelope with that id
            InsufficientEnvelopeBalanceError: the envelope would go below
                zero and allow_negative is False
        """
        with self._atomic("allocate_to_envelope"):
            amount = require_signed_amount(signed_amount, self._settings.max_amount)
            envelope = self._envelopes.allocate(envelope_id, amount, allow_negative)
            if amount < 0:
                self._notify(
                    "Saldo retirado de sobre",
                    f"{self._format(-amount)} se movieron desde {envelope.name} a tu saldo disponible.",
                )
            else:
                self._notify(
                    "Saldo asignado a sobre",
                    f"{self._format(amount)} se apartaron dentro de {envelope.name}.",
                )
        self._audit.log_envelope(
            AuditEventType.ENVELOPE_ALLOCATED,
            envelope.id,
            envelope.name,
            {"amount": str(amount), "balance_after": str(envelope.balance)},
        )

    # =========================================================================
    # AUTOMATION ENGINE
    # =========================================================================

    def create_automation_rule(
        self,
        title: Optional[str],
        match_phone: str,
        envelope_id: str,
        active: bool = True,
    ) -> AutomationRule:
        """
        Raises:
            MissingMatchPhoneError: match_phone is blank
            EnvelopeNotFoundError: envelope_id does not reference an envelope
        """
        with self._atomic("create_automation_rule"):
            rule = self._automations.create(title, match_phone, envelope_id, active)
            envelope = self._envelopes.get(rule.envelope_id)
            self._notify(
                "Automatización creada",
                f"{rule.title} enviará depósitos automáticamente al sobre {envelope.name}.",
            )
        self._audit.log_automation(
            AuditEventType.AUTOMATION_CREATED,
            rule.id,
            rule.title,
            {"match_phone": rule.match_phone, "envelope_id": rule.envelope_id},
        )
        return rule

    def update_automation_rule(
        self,
        rule_id: str,
        updates: AutomationRuleUpdate,
    ) -> Optional[AutomationRule]:
        """
        Returns None if the id is unknown.

        Raises:
            MissingMatchPhoneError: the update sets a blank match phone
            EnvelopeNotFoundError: the update points at a missing envelope
        """
        with self._atomic("update_automation_rule"):
            rule = self._automations.update(rule_id, updates)
            if rule is not None:
                self._notify("Automatización actualizada", f"{rule.title} se ajustó correctamente.")
        if rule is not None:
            self._audit.log_automation(
                AuditEventType.AUTOMATION_UPDATED,
                rule.id,
                rule.title,
                {"active": rule.active},
            )
        return rule

    def remove_automation_rule(self, rule_id: str) -> None:
        with self._atomic("remove_automation_rule"):
            removed = self._automations.remove(rule_id)
            if removed is not None:
                self._notify(
                    "Automatización eliminada",
                    f"{removed.title} dejó de estar activa en tus sobres.",
                )
        if removed is not None:
            self._audit.log_automation(AuditEventType.AUTOMATION_REMOVED, removed.id, removed.title)

    # =========================================================================
    # NOTIFICATION FEED
    # =========================================================================

    def add_notification(
        self,
        title: str,
        message: str,
        category: NotificationCategory = NotificationCategory.GENERAL,
    ) -> NotificationItem:
        with self._atomic("add_notification"):
            return self._notify(title, message, category)

    def mark_notification_read(self, notification_id: str) -> Optional[NotificationItem]:
        with self._atomic("mark_notification_read"):
            return self._notifications.mark_read(notification_id)

    def toggle_notification_read(self, notification_id: str) -> Optional[NotificationItem]:
        with self._atomic("toggle_notification_read"):
            return self._notifications.toggle_read(notification_id)

    def mark_all_notifications_read(self) -> None:
        with self._atomic("mark_all_notifications_read"):
            self._notifications.mark_all_read()

    def clear_notifications(self) -> None:
        with self._atomic("clear_notifications"):
            self._notifications.clear()

    # =========================================================================
    # BIOMETRIC SIMULATION
    # =========================================================================

    async def simulate_biometric_validation(
        self,
        latency_ms: Optional[int] = None,
        expected_match: bool = False,
    ) -> BiometricValidationResult:
        """
        Simulate a sensor round-trip, then log the attempt.

        The delay is awaited without holding the store lock; the attempt is
        recorded in one atomic step afterwards. Once started it cannot be
        cancelled from the store's side.
        """
        attempt = await self._biometrics.round_trip(latency_ms, expected_match)
        with self._atomic("simulate_biometric_validation"):
            self._biometrics.record(attempt)
        self._audit.log_biometric(
            AuditEventType.BIOMETRIC_ATTEMPT, attempt.device, attempt.result.value
        )
        return BiometricValidationResult(
            success=attempt.result == BiometricResult.SUCCESS,
            device_name=attempt.device,
            attempt=attempt,
        )

    def register_biometrics(self, display_name: Optional[str] = None) -> None:
        """Provision the demo sensor."""
        with self._atomic("register_biometrics"):
            self._biometrics.register(display_name)
            self._notify(
                "Biometría registrada",
                f"{self._biometrics.device_name} quedó listo para validar tu identidad.",
                NotificationCategory.SECURITY,
            )
        self._audit.log_biometric(
            AuditEventType.BIOMETRIC_REGISTERED, self._biometrics.device_name, "registered"
        )


def create_ledger_store(
    audit_storage: Optional[AuditStorageInterface] = None,
    **kwargs,
) -> LedgerStore:
    """
    Factory function to create a store wired to the configured settings.

    Args:
        audit_storage: Where audit events go. Defaults to an in-memory trail
            capped at LEDGER_AUDIT_EVENT_LIMIT events.
        **kwargs: Passed through to LedgerStore (clock, rng, sleep, ...).
    """
    settings = get_settings()
    if audit_storage is None:
        audit_storage = InMemoryAuditStorage(settings.ledger.audit_event_limit)
    audit_logger = AuditLogger(audit_storage)
    kwargs.setdefault("settings", settings.ledger)
    kwargs.setdefault("biometric_settings", settings.biometrics)
    return LedgerStore(audit_logger=audit_logger, **kwargs)
