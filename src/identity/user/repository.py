"""Repository for the User aggregate."""

from identity.domain import identity
from identity.user.email import normalize_email
from identity.user.user import User
from shared.db import fetch_all


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Find a User by email, case-insensitively."""
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def email_taken(self, email: str, exclude_id=None) -> bool:
        existing = self.find_by_email(email)
        return existing is not None and str(existing.id) != str(exclude_id)

    def newest_first(self) -> list[User]:
        return fetch_all(self._dao.query.order_by(["-created_at", "id"]))

    def remove(self, user: User) -> None:
        self._dao.delete(user)
