"""
Automation Engine

Standing rules that divert inbound transfers into an envelope.

A rule fires when an inbound transfer's sender phone is exactly equal to the
rule's `match_phone` and the rule is active. Firing allocates the transfer
amount into the rule's envelope and stamps `last_triggered_at`. Turning a
rule off (or removing it) stops future firing; past allocations stay.
"""

from typing import Callable, Iterable, NamedTuple, Optional

from bank_ledger.errors import MissingMatchPhoneError
from bank_ledger.ledger.envelopes import EnvelopeBook
from bank_ledger.ledger.ids import create_id
from bank_ledger.models.ledger import (
    AutomationMatchMode,
    AutomationRule,
    AutomationRuleUpdate,
    Envelope,
    TransferRecord,
    utc_now,
)
from bank_ledger.validation import clean_optional, require_text


class AutomationOutcome(NamedTuple):
    """What happened to one matching rule for one inbound transfer."""
    rule: AutomationRule
    envelope: Optional[Envelope]

    @property
    def applied(self) -> bool:
        return self.envelope is not None


class AutomationEngine:
    """Automation rules by id, in creation order."""

    def __init__(
        self,
        envelopes: EnvelopeBook,
        rules: Iterable[AutomationRule] = (),
        match_mode: AutomationMatchMode = AutomationMatchMode.FAN_OUT,
        clock: Callable = utc_now,
    ):
        self._envelopes = envelopes
        self._match_mode = match_mode
        self._clock = clock
        self._rules: dict[str, AutomationRule] = {}
        self.reset(rules)

    @property
    def match_mode(self) -> AutomationMatchMode:
        return self._match_mode

    def reset(self, rules: Iterable[AutomationRule] = ()) -> None:
        self._rules = {rule.id: rule for rule in rules}

    def to_list(self) -> list[AutomationRule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[AutomationRule]:
        return self._rules.get(rule_id)

    def create(
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
        match_phone = require_text(match_phone, MissingMatchPhoneError)
        self._envelopes.require(envelope_id)
        rule = AutomationRule(
            id=create_id("automation"),
            title=clean_optional(title) or f"Regla {match_phone}",
            match_phone=match_phone,
            envelope_id=envelope_id,
            active=active,
            created_at=self._clock(),
        )
        self._rules[rule.id] = rule
        return rule

    def update(self, rule_id: str, updates: AutomationRuleUpdate) -> Optional[AutomationRule]:
        """
        Partial update. Returns None if the id is unknown.

        Raises:
            MissingMatchPhoneError: the update sets a blank match phone
            EnvelopeNotFoundError: the update points at a missing envelope
        """
        current = self._rules.get(rule_id)
        if current is None:
            return None

        fields = {}
        if updates.title is not None and clean_optional(updates.title):
            fields["title"] = clean_optional(updates.title)
        if updates.match_phone is not None:
            fields["match_phone"] = require_text(updates.match_phone, MissingMatchPhoneError)
        if updates.envelope_id is not None:
            fields["envelope_id"] = self._envelopes.require(updates.envelope_id).id
        if updates.active is not None:
            fields["active"] = updates.active

        rule = current.model_copy(update=fields)
        self._rules[rule_id] = rule
        return rule

    def remove(self, rule_id: str) -> Optional[AutomationRule]:
        return self._rules.pop(rule_id, None)

    def matching_rules(self, phone: str) -> list[AutomationRule]:
        """Active rules whose match_phone equals `phone` exactly, oldest first."""
        phone = phone.strip()
        matches = [
            rule for rule in self._rules.values()
            if rule.active and rule.match_phone == phone
        ]
        if self._match_mode == AutomationMatchMode.FIRST_MATCH:
            return matches[:1]
        return matches

    def apply(self, transfer: TransferRecord) -> list[AutomationOutcome]:
        """
        Run the rules for an inbound transfer.

        Each matching rule allocates the full transfer amount into its
        envelope. A rule whose envelope has since been removed is skipped
        and reported with `envelope=None`.
        """
        outcomes = []
        for rule in self.matching_rules(transfer.phone):
            if rule.envelope_id not in self._envelopes:
                outcomes.append(AutomationOutcome(rule, None))
                continue
            envelope = self._envelopes.allocate(
                rule.envelope_id, transfer.amount, allow_negative=False
            )
            fired = rule.model_copy(update={"last_triggered_at": self._clock()})
            self._rules[rule.id] = fired
            outcomes.append(AutomationOutcome(fired, envelope))
        return outcomes

    def active_count(self) -> int:
        return sum(1 for rule in self._rules.values() if rule.active)

    def __len__(self) -> int:
        return len(self._rules)
