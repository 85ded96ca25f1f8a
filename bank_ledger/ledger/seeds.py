"""
Seed data for a fresh session.

The store starts from these values and `logout` restores them. Seed ids and
timestamps are fixed so a reset is reproducible.
"""

from datetime import datetime, timezone

from bank_ledger.models.ledger import (
    Contact,
    NotificationCategory,
    NotificationItem,
    UserProfile,
)


CONTACT_COLORS = (
    "#00F0FF",
    "#FF8A65",
    "#8F9BFF",
    "#4C6BFF",
    "#2BD9A6",
    "#FF3B6B",
    "#FFC857",
    "#B388FF",
)

ENVELOPE_COLORS = (
    "#7A2BFF",
    "#00F0FF",
    "#4ADE80",
    "#FF8A65",
    "#FF3358",
    "#FFC857",
)

DEFAULT_USER = UserProfile(
    name="María Rodríguez",
    id="1-1234-5678",
    phone="6203-4545",
    avatar_color="#FF3358",
    id_type="Cédula de identidad",
)

_DEFAULT_CONTACTS = (
    Contact(
        id="contact-seed-juan",
        name="Juan Perez Rojas",
        phone="6203-4545",
        avatar_color="#00F0FF",
        favorite=True,
    ),
    Contact(
        id="contact-seed-laura",
        name="Laura Hernández",
        phone="7102-9090",
        avatar_color="#FF8A65",
    ),
    Contact(
        id="contact-seed-carlos",
        name="Carlos Jiménez",
        phone="8803-1212",
        avatar_color="#8F9BFF",
    ),
)

_DEFAULT_NOTIFICATIONS = (
    NotificationItem(
        id="notification-seed-welcome",
        title="Bienvenida a tu banca digital",
        message="Tu cuenta está lista para enviar y recibir dinero.",
        timestamp=datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc),
        category=NotificationCategory.GENERAL,
    ),
    NotificationItem(
        id="notification-seed-security",
        title="Consejo de seguridad",
        message="Nunca compartas tu clave ni códigos de verificación.",
        timestamp=datetime(2025, 1, 6, 8, 30, tzinfo=timezone.utc),
        category=NotificationCategory.SECURITY,
    ),
)


def default_contacts() -> list[Contact]:
    """Seed address book, most recently used first."""
    return list(_DEFAULT_CONTACTS)


def default_notifications() -> list[NotificationItem]:
    """Seed notification feed, newest first."""
    return list(_DEFAULT_NOTIFICATIONS)
