"""Tests for the ContactDirectory."""

import random

import pytest

from bank_ledger.errors import DuplicatePhoneError, MissingPhoneError
from bank_ledger.ledger.contacts import ContactDirectory
from bank_ledger.ledger.seeds import CONTACT_COLORS, default_contacts
from bank_ledger.models import ContactUpdate


@pytest.fixture
def directory(clock):
    return ContactDirectory(default_contacts(), rng=random.Random(7), clock=clock)


class TestUpsert:
    """Tests for upsert-by-phone."""

    def test_new_contact_goes_first(self, directory):
        """Test a new phone creates a contact at the front."""
        contact, created = directory.upsert("8000-1111", name="Sofía")
        assert created is True
        assert directory.to_list()[0] == contact
        assert contact.avatar_color in CONTACT_COLORS
        assert contact.last_used_at is not None

    def test_new_contact_name_defaults_to_phone(self, directory):
        """Test a nameless contact is named after its phone."""
        contact, _ = directory.upsert(" 8000-1111 ")
        assert contact.phone == "8000-1111"
        assert contact.name == "8000-1111"

    def test_existing_phone_is_refreshed(self, directory):
        """Test an upsert on a known phone keeps the id and moves it first."""
        contact, created = directory.upsert("8803-1212", favorite=True)
        assert created is False
        assert contact.id == "contact-seed-carlos"
        assert contact.name == "Carlos Jiménez"
        assert contact.favorite is True
        assert [c.id for c in directory.to_list()] == [
            "contact-seed-carlos",
            "contact-seed-juan",
            "contact-seed-laura",
        ]

    def test_phone_is_unique(self, directory):
        """Test repeated upserts never duplicate a phone."""
        for _ in range(3):
            directory.upsert("8000-1111")
        phones = [c.phone for c in directory.to_list()]
        assert len(phones) == len(set(phones)) == 4

    def test_blank_phone_raises(self, directory):
        """Test an empty phone is rejected."""
        with pytest.raises(MissingPhoneError):
            directory.upsert("   ")

    def test_bootstrap_favorites(self, clock):
        """Test the first contacts of an empty directory become favorites."""
        directory = ContactDirectory(bootstrap_size=2, rng=random.Random(1), clock=clock)
        first, _ = directory.upsert("1")
        second, _ = directory.upsert("2")
        third, _ = directory.upsert("3")
        assert (first.favorite, second.favorite, third.favorite) == (True, True, False)


class TestUpdate:
    """Tests for updates by id."""

    def test_update_keeps_position(self, directory):
        """Test an update does not reorder the directory."""
        directory.update("contact-seed-laura", ContactUpdate(name="Laura H."))
        assert [c.name for c in directory.to_list()][1] == "Laura H."

    def test_update_phone_reindexes(self, directory):
        """Test changing the phone moves the phone key."""
        contact = directory.update("contact-seed-laura", ContactUpdate(phone="7000-0000"))
        assert contact.phone == "7000-0000"
        assert directory.get_by_phone("7000-0000").id == "contact-seed-laura"
        assert directory.get_by_phone("7102-9090") is None
        assert "7000-0000" in directory
        assert [c.id for c in directory.to_list()][1] == "contact-seed-laura"

    def test_update_to_taken_phone(self, directory):
        """Test a phone owned by another contact is rejected."""
        with pytest.raises(DuplicatePhoneError) as exc:
            directory.update("contact-seed-laura", ContactUpdate(phone="8803-1212"))
        assert exc.value.contact_id == "contact-seed-carlos"

    def test_update_to_blank_phone(self, directory):
        """Test a blank phone is rejected."""
        with pytest.raises(MissingPhoneError):
            directory.update("contact-seed-laura", ContactUpdate(phone=" "))

    def test_update_unknown_id(self, directory):
        """Test an unknown id returns None."""
        assert directory.update("nobody", ContactUpdate(name="X")) is None


class TestRemoveAndToggle:
    """Tests for remove and toggle."""

    def test_remove(self, directory):
        """Test remove drops the contact and its phone."""
        removed = directory.remove("contact-seed-juan")
        assert removed.phone == "6203-4545"
        assert "6203-4545" not in directory
        assert directory.get("contact-seed-juan") is None
        assert directory.remove("contact-seed-juan") is None

    def test_toggle_favorite(self, directory):
        """Test toggle flips the flag."""
        assert directory.toggle_favorite("contact-seed-laura").favorite is True
        assert directory.toggle_favorite("contact-seed-laura").favorite is False
        assert directory.toggle_favorite("nobody") is None
