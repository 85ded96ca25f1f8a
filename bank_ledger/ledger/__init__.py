"""
Ledger package.

The store and the sub-collections it owns. Most callers only need
`LedgerStore` (or `create_ledger_store`).
"""

from bank_ledger.ledger.automation import AutomationEngine, AutomationOutcome
from bank_ledger.ledger.biometrics import BiometricSimulator
from bank_ledger.ledger.contacts import ContactDirectory
from bank_ledger.ledger.envelopes import EnvelopeBook
from bank_ledger.ledger.history import BoundedHistory
from bank_ledger.ledger.notifications import NotificationFeed
from bank_ledger.ledger.seeds import CONTACT_COLORS, DEFAULT_USER, ENVELOPE_COLORS
from bank_ledger.ledger.store import LedgerStore, create_ledger_store

__all__ = [
    "AutomationEngine",
    "AutomationOutcome",
    "BiometricSimulator",
    "BoundedHistory",
    "CONTACT_COLORS",
    "ContactDirectory",
    "DEFAULT_USER",
    "ENVELOPE_COLORS",
    "EnvelopeBook",
    "LedgerStore",
    "NotificationFeed",
    "create_ledger_store",
]
