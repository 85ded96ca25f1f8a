"""
Ledger Errors

Strict operations (anything that moves money or needs a required identifier)
raise one of these. Each carries the values that caused the rejection and a
message that can be shown to the user as-is.

Lenient operations (update/remove/toggle by id) never raise for an unknown id.
"""

from decimal import Decimal
from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidAmountError(LedgerError):
    """Amount is zero, negative, out of range or not a whole number of cents."""

    def __init__(self, amount: object, message: str = "El monto debe ser mayor a cero"):
        self.amount = amount
        super().__init__(message)


class InsufficientFundsError(LedgerError):
    """Amount is larger than the available balance."""

    def __init__(self, amount: Decimal, balance: Decimal):
        self.amount = amount
        self.balance = balance
        super().__init__("Saldo insuficiente")


class MissingPhoneError(LedgerError):
    """A phone number is required but was blank."""

    def __init__(self):
        super().__init__("Ingresa un número telefónico válido.")


class MissingNameError(LedgerError):
    """A name is required but was blank."""

    def __init__(self):
        super().__init__("Agrega un nombre para el sobre.")


class InvalidTargetError(LedgerError):
    """Envelope target amount is negative or not finite."""

    def __init__(self, target: object):
        self.target = target
        super().__init__("El monto objetivo debe ser válido y positivo.")


class EnvelopeNotFoundError(LedgerError):
    """No envelope with the given id."""

    def __init__(self, envelope_id: Optional[str]):
        self.envelope_id = envelope_id
        super().__init__("El sobre seleccionado ya no está disponible.")


class InsufficientEnvelopeBalanceError(LedgerError):
    """A withdrawal would leave the envelope below zero."""

    def __init__(self, envelope_id: str, balance: Decimal, amount: Decimal):
        self.envelope_id = envelope_id
        self.balance = balance
        self.amount = amount
        super().__init__("No puedes retirar más del saldo disponible en el sobre.")


class MissingMatchPhoneError(LedgerError):
    """An automation rule needs a phone number to watch."""

    def __init__(self):
        super().__init__("Indica el número SINPE o teléfono a vigilar.")


class DuplicatePhoneError(LedgerError):
    """Another contact already owns this phone number."""

    def __init__(self, phone: str, contact_id: str):
        self.phone = phone
        self.contact_id = contact_id
        super().__init__(f"El número {phone} ya pertenece a otro contacto.")
