"""User aggregate: account credentials, role, contact details and saved addresses."""

from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String

from identity.domain import identity
from identity.user.email import is_valid_email, normalize_email
from identity.user.passwords import check_password, hash_password
from shared.access import Role
from shared.errors import NotFound

MIN_PASSWORD_LENGTH = 6

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def _check_password_strength(password, field="password"):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({field: [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})


@identity.entity(part_of="User")
class Address:
    """A saved shipping address in a user's address book.

    While a user has any addresses, exactly one of them is the default.
    """

    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)


@identity.aggregate
class User:
    """A person holding an account on the storefront.

    The stored password is only ever a salted hash; the plain text never
    leaves ``register`` and ``change_password``. The role decides which
    capabilities the account is granted at the HTTP boundary.
    """

    name: String(required=True, min_length=2, max_length=30)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.USER.value)
    phone_number: String(max_length=20)
    addresses: HasMany(Address)
    created_at: DateTime(default=datetime.now)

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": ["Please enter valid email address"]})

    @classmethod
    def register(cls, name, email, password, role=Role.USER.value, phone_number=None):
        from identity.user.events import UserRegistered

        _check_password_strength(password)

        user = cls(
            name=name.strip() if isinstance(name, str) else name,
            email=normalize_email(email),
            password_hash=hash_password(password),
            role=role,
            phone_number=phone_number,
            created_at=datetime.now(),
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=user.created_at,
            )
        )
        return user

    def verify_password(self, password) -> bool:
        return check_password(password or "", self.password_hash)

    def update_profile(self, name=_UNSET, email=_UNSET, phone_number=_UNSET):
        from identity.user.events import ProfileUpdated

        if name is not _UNSET and name is not None:
            self.name = name.strip()
        if email is not _UNSET and email is not None:
            self.email = normalize_email(email)
        if phone_number is not _UNSET:
            self.phone_number = phone_number

        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                name=self.name,
                email=self.email,
                phone_number=self.phone_number,
            )
        )

    def change_password(self, old_password, new_password):
        from identity.user.events import PasswordChanged

        if not self.verify_password(old_password):
            raise ValidationError({"old_password": ["Old password is incorrect"]})
        _check_password_strength(new_password, field="new_password")

        self.password_hash = hash_password(new_password)
        self.raise_(PasswordChanged(user_id=self.id, changed_at=datetime.now()))

    def assign(self, name=None, email=None, role=None):
        """Administrative change of a user's name, email and role."""
        from identity.user.events import AccountChangedByAdmin

        previous_role = self.role
        if name is not None:
            self.name = name.strip()
        if email is not None:
            self.email = normalize_email(email)
        if role is not None:
            self.role = Role(role).value

        self.raise_(
            AccountChangedByAdmin(
                user_id=self.id,
                name=self.name,
                email=self.email,
                role=self.role,
                previous_role=previous_role,
            )
        )

    # --- Address book ---

    def _find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise NotFound("Address not found")
        return address

    def _clear_default_address(self):
        for address in self.addresses:
            if address.is_default:
                address.is_default = False

    def add_address(self, street, city, state, zip_code, country, is_default=False):
        from identity.user.events import AddressAdded

        # The first saved address is always the default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                self._clear_default_address()

            address = Address(
                street=street,
                city=city,
                state=state,
                zip_code=zip_code,
                country=country,
                is_default=bool(is_default),
            )
            self.add_addresses(address)

        self.raise_(AddressAdded(user_id=self.id, address_id=address.id, is_default=address.is_default))
        return address

    def update_address(self, address_id, is_default=None, **changes):
        """Change the given fields of a saved address.

        ``is_default=True`` makes it the default and unsets every other one.
        An address stops being the default only when another one takes over.
        """
        from identity.user.events import AddressUpdated

        address = self._find_address(address_id)

        with atomic_change(self):
            for field, value in changes.items():
                if value is not None:
                    setattr(address, field, value)
            if is_default:
                self._clear_default_address()
                address.is_default = True

        self.raise_(AddressUpdated(user_id=self.id, address_id=address.id, is_default=address.is_default))
        return address

    def remove_address(self, address_id):
        from identity.user.events import AddressRemoved

        address = self._find_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # The first remaining address inherits the default
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.raise_(AddressRemoved(user_id=self.id, address_id=address.id))
