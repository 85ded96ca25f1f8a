"""
Contact Directory

An address book deduplicated by phone number and kept in
most-recently-used-first order.

Internally the directory is an ``OrderedDict`` keyed by phone (the natural
key) whose iteration order *is* the recency order, plus an id -> phone index
for the by-id operations. Upserts move the key to the front instead of
re-sorting the whole list.
"""

import random
from collections import OrderedDict
from typing import Callable, Iterable, Optional

from bank_ledger.errors import DuplicatePhoneError, MissingPhoneError
from bank_ledger.ledger.ids import create_id
from bank_ledger.ledger.seeds import CONTACT_COLORS
from bank_ledger.models.ledger import Contact, ContactUpdate, utc_now
from bank_ledger.validation import clean_optional


class ContactDirectory:
    """
    Deduplicated-by-phone address book.

    Invariant: at most one contact per phone number.
    Order: most recently used first. Callers that want another order
    sort a copy from `to_list()`.
    """

    def __init__(
        self,
        contacts: Iterable[Contact] = (),
        bootstrap_size: int = 3,
        rng: Optional[random.Random] = None,
        clock: Callable = utc_now,
    ):
        self._bootstrap_size = bootstrap_size
        self._rng = rng or random.Random()
        self._clock = clock
        self._by_phone: OrderedDict[str, Contact] = OrderedDict()
        self._phone_by_id: dict[str, str] = {}
        self.reset(contacts)

    def reset(self, contacts: Iterable[Contact] = ()) -> None:
        """Replace the whole directory. Later duplicates of a phone are dropped."""
        self._by_phone = OrderedDict()
        self._phone_by_id = {}
        for contact in contacts:
            if contact.phone in self._by_phone:
                continue
            self._by_phone[contact.phone] = contact
            self._phone_by_id[contact.id] = contact.phone

    def to_list(self) -> list[Contact]:
        return list(self._by_phone.values())

    def get(self, contact_id: str) -> Optional[Contact]:
        phone = self._phone_by_id.get(contact_id)
        return self._by_phone.get(phone) if phone is not None else None

    def get_by_phone(self, phone: str) -> Optional[Contact]:
        return self._by_phone.get(phone.strip())

    def upsert(
        self,
        phone: str,
        name: Optional[str] = None,
        avatar_color: Optional[str] = None,
        favorite: Optional[bool] = None,
    ) -> tuple[Contact, bool]:
        """
        Create or refresh the contact for `phone` and move it to the front.

        Existing contacts only take the fields that were provided; new
        contacts fall back to the phone as name, a random palette color and
        favorite while the directory is still smaller than the bootstrap size.

        Returns:
            (contact, created)

        Raises:
            MissingPhoneError: phone is blank
        """
        phone = clean_optional(phone)
        if phone is None:
            raise MissingPhoneError()
        name = clean_optional(name)
        avatar_color = clean_optional(avatar_color)
        now = self._clock()

        existing = self._by_phone.get(phone)
        if existing is not None:
            updates = {"last_used_at": now}
            if name is not None:
                updates["name"] = name
            if avatar_color is not None:
                updates["avatar_color"] = avatar_color
            if favorite is not None:
                updates["favorite"] = favorite
            contact = existing.model_copy(update=updates)
            self._by_phone[phone] = contact
            self._by_phone.move_to_end(phone, last=False)
            return contact, False

        contact = Contact(
            id=create_id("contact"),
            name=name or phone,
            phone=phone,
            avatar_color=avatar_color or self._rng.choice(CONTACT_COLORS),
            favorite=(
                favorite if favorite is not None
                else len(self._by_phone) < self._bootstrap_size
            ),
            last_used_at=now,
        )
        self._by_phone[phone] = contact
        self._by_phone.move_to_end(phone, last=False)
        self._phone_by_id[contact.id] = phone
        return contact, True

    def update(self, contact_id: str, updates: ContactUpdate) -> Optional[Contact]:
        """
        Field-level update by id. Position in the recency order is kept.

        Returns None if the id is unknown.

        Raises:
            MissingPhoneError: the update sets a blank phone
            DuplicatePhoneError: the new phone belongs to another contact
        """
        current = self.get(contact_id)
        if current is None:
            return None

        fields = {}
        if updates.name is not None:
            fields["name"] = clean_optional(updates.name) or current.phone
        if updates.avatar_color is not None and clean_optional(updates.avatar_color):
            fields["avatar_color"] = clean_optional(updates.avatar_color)
        if updates.favorite is not None:
            fields["favorite"] = updates.favorite
        if updates.last_used_at is not None:
            fields["last_used_at"] = updates.last_used_at

        new_phone = current.phone
        if updates.phone is not None:
            new_phone = clean_optional(updates.phone)
            if new_phone is None:
                raise MissingPhoneError()
            owner = self._by_phone.get(new_phone)
            if owner is not None and owner.id != contact_id:
                raise DuplicatePhoneError(new_phone, owner.id)
            fields["phone"] = new_phone
            if updates.name is None and current.name == current.phone:
                fields["name"] = new_phone

        contact = current.model_copy(update=fields)
        if new_phone == current.phone:
            self._by_phone[new_phone] = contact
        else:
            self._by_phone = OrderedDict(
                (new_phone, contact) if phone == current.phone else (phone, item)
                for phone, item in self._by_phone.items()
            )
            self._phone_by_id[contact_id] = new_phone
        return contact

    def remove(self, contact_id: str) -> Optional[Contact]:
        phone = self._phone_by_id.pop(contact_id, None)
        if phone is None:
            return None
        return self._by_phone.pop(phone, None)

    def toggle_favorite(self, contact_id: str) -> Optional[Contact]:
        current = self.get(contact_id)
        if current is None:
            return None
        contact = current.model_copy(update={"favorite": not current.favorite})
        self._by_phone[contact.phone] = contact
        return contact

    def __len__(self) -> int:
        return len(self._by_phone)

    def __contains__(self, phone: object) -> bool:
        return isinstance(phone, str) and phone.strip() in self._by_phone
