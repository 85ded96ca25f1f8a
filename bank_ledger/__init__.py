"""
Bank Ledger - Source Package

The client-side financial ledger of a demo mobile-banking app: account
balance, transfer and recharge history, contact directory, savings
envelopes, automation rules, notification feed and a simulated biometric
sensor, all held in memory for one session.

DESIGN PRINCIPLES:
1. Every mutation is one atomic step
2. Fail early, fail visibly (typed errors, nothing half-applied)
3. Every step must be auditable
4. Read models are immutable copies
5. Audit storage is swappable
"""

__version__ = "1.0.0"
__author__ = "Bank Ledger Team"
