"""
Envelope Subsystem

Named sub-balances that ring-fence part of the user's money toward a goal.

Envelope balances are tracked on their own. Allocating into or out of an
envelope never touches the account balance, and the sum of envelope balances
is never reconciled against it: envelopes are a view over money already
received, not an escrow that blocks spending.
"""

from decimal import Decimal
from typing import Callable, Iterable, Optional

from bank_ledger.errors import (
    EnvelopeNotFoundError,
    InsufficientEnvelopeBalanceError,
    MissingNameError,
)
from bank_ledger.ledger.ids import create_id
from bank_ledger.ledger.seeds import ENVELOPE_COLORS
from bank_ledger.models.ledger import Envelope, EnvelopeUpdate, utc_now
from bank_ledger.validation import (
    MAX_AMOUNT,
    clean_optional,
    require_signed_amount,
    require_target,
    require_text,
)


class EnvelopeBook:
    """Envelopes by id, in creation order."""

    def __init__(
        self,
        envelopes: Iterable[Envelope] = (),
        clock: Callable = utc_now,
        max_amount: Decimal = MAX_AMOUNT,
    ):
        self._clock = clock
        self._max_amount = max_amount
        self._envelopes: dict[str, Envelope] = {}
        self.reset(envelopes)

    def reset(self, envelopes: Iterable[Envelope] = ()) -> None:
        self._envelopes = {envelope.id: envelope for envelope in envelopes}

    def to_list(self) -> list[Envelope]:
        return list(self._envelopes.values())

    def get(self, envelope_id: Optional[str]) -> Optional[Envelope]:
        """Look up an envelope; removed or unknown ids resolve to None."""
        if envelope_id is None:
            return None
        return self._envelopes.get(envelope_id)

    def require(self, envelope_id: Optional[str]) -> Envelope:
        """
        Raises:
            EnvelopeNotFoundError: no envelope with that id
        """
        envelope = self.get(envelope_id)
        if envelope is None:
            raise EnvelopeNotFoundError(envelope_id)
        return envelope

    @property
    def total_balance(self) -> Decimal:
        """Sum of envelope balances. Informational only."""
        return sum((envelope.balance for envelope in self._envelopes.values()), Decimal("0"))

    def create(
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
        name = require_text(name, MissingNameError)
        target = require_target(target_amount, self._max_amount)
        envelope = Envelope(
            id=create_id("envelope"),
            name=name,
            color=clean_optional(color) or ENVELOPE_COLORS[len(self._envelopes) % len(ENVELOPE_COLORS)],
            balance=Decimal("0"),
            target_amount=target,
            description=clean_optional(description),
            updated_at=self._clock(),
        )
        self._envelopes[envelope.id] = envelope
        return envelope

    def update(self, envelope_id: str, updates: EnvelopeUpdate) -> Optional[Envelope]:
        """
        Partial update. Returns None if the id is unknown.

        Raises:
            MissingNameError: the update sets a blank name
            InvalidTargetError: the update sets a negative or non-finite target
        """
        current = self._envelopes.get(envelope_id)
        if current is None:
            return None

        fields = {"updated_at": self._clock()}
        if updates.name is not None:
            fields["name"] = require_text(updates.name, MissingNameError)
        if updates.color is not None and clean_optional(updates.color):
            fields["color"] = clean_optional(updates.color)
        if updates.target_amount is not None:
            fields["target_amount"] = require_target(updates.target_amount, self._max_amount)
        if updates.description is not None:
            fields["description"] = clean_optional(updates.description)

        envelope = current.model_copy(update=fields)
        self._envelopes[envelope_id] = envelope
        return envelope

    def remove(self, envelope_id: str) -> Optional[Envelope]:
        """
        Delete the envelope. Transfers that reference it keep the id; lookups
        of that id simply return None from now on.
        """
        return self._envelopes.pop(envelope_id, None)

    def allocate(
        self,
        envelope_id: str,
        signed_amount: object,
        allow_negative: bool = False,
    ) -> Envelope:
        """
        Move value into (positive) or out of (negative) an envelope.

        Raises:
            InvalidAmountError: amount is zero or not finite
            EnvelopeNotFoundError: no envelope with that id
            InsufficientEnvelopeBalanceError: the result would be below zero
                and allow_negative is False
        """
        amount = require_signed_amount(signed_amount, self._max_amount)
        current = self.require(envelope_id)
        new_balance = current.balance + amount
        if new_balance < 0 and not allow_negative:
            raise InsufficientEnvelopeBalanceError(envelope_id, current.balance, amount)

        envelope = current.model_copy(
            update={"balance": new_balance, "updated_at": self._clock()}
        )
        self._envelopes[envelope_id] = envelope
        return envelope

    def __len__(self) -> int:
        return len(self._envelopes)

    def __contains__(self, envelope_id: object) -> bool:
        return envelope_id in self._envelopes
