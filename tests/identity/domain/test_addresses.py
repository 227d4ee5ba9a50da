"""Tests for the User's saved address book."""

import pytest
from identity.user.events import AddressAdded, AddressRemoved, AddressUpdated
from identity.user.user import User
from shared.errors import NotFound


def _user():
    user = User.register(name="Jane Doe", email="jane@example.com", password="s3cret-pass")
    user._events.clear()
    return user


def _add(user, street="123 Elm Street", **overrides):
    fields = {
        "street": street,
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    }
    fields.update(overrides)
    return user.add_address(**fields)


def _defaults(user):
    return [address.street for address in user.addresses if address.is_default]


class TestAddAddress:
    def test_first_address_becomes_default(self):
        user = _user()
        address = _add(user)

        assert address.id is not None
        assert address.is_default is True
        assert len(user.addresses) == 1

    def test_later_addresses_are_not_default(self):
        user = _user()
        _add(user, street="1 First Ave")
        _add(user, street="2 Second Ave")

        assert _defaults(user) == ["1 First Ave"]

    def test_new_default_unsets_the_others(self):
        user = _user()
        _add(user, street="1 First Ave")
        _add(user, street="2 Second Ave")
        _add(user, street="3 Third Ave", is_default=True)

        assert _defaults(user) == ["3 Third Ave"]

    def test_raises_address_added(self):
        user = _user()
        address = _add(user)

        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, AddressAdded)
        assert event.address_id == address.id
        assert event.is_default is True


class TestUpdateAddress:
    def test_update_changes_only_given_fields(self):
        user = _user()
        address = _add(user)

        user.update_address(address.id, city="Shelbyville", zip_code=None)

        assert address.city == "Shelbyville"
        assert address.zip_code == "62701"
        assert isinstance(user._events[-1], AddressUpdated)

    def test_making_an_address_default_unsets_the_others(self):
        user = _user()
        _add(user, street="1 First Ave")
        second = _add(user, street="2 Second Ave")

        user.update_address(second.id, is_default=True)

        assert _defaults(user) == ["2 Second Ave"]

    def test_default_is_kept_until_another_takes_over(self):
        user = _user()
        first = _add(user, street="1 First Ave")
        _add(user, street="2 Second Ave")

        user.update_address(first.id, is_default=False)

        assert _defaults(user) == ["1 First Ave"]

    def test_unknown_address(self):
        user = _user()
        with pytest.raises(NotFound) as exc:
            user.update_address("missing", city="Nowhere")
        assert exc.value.message == "Address not found"


class TestRemoveAddress:
    def test_removing_the_default_promotes_the_first_remaining(self):
        user = _user()
        first = _add(user, street="1 First Ave")
        _add(user, street="2 Second Ave")
        _add(user, street="3 Third Ave")

        user.remove_address(first.id)

        assert [address.street for address in user.addresses] == ["2 Second Ave", "3 Third Ave"]
        assert _defaults(user) == ["2 Second Ave"]
        assert isinstance(user._events[-1], AddressRemoved)

    def test_removing_another_address_keeps_the_default(self):
        user = _user()
        _add(user, street="1 First Ave")
        second = _add(user, street="2 Second Ave")

        user.remove_address(second.id)

        assert _defaults(user) == ["1 First Ave"]

    def test_the_last_address_can_be_removed(self):
        user = _user()
        address = _add(user)

        user.remove_address(address.id)

        assert user.addresses == []

    def test_unknown_address(self):
        user = _user()
        with pytest.raises(NotFound):
            user.remove_address("missing")
