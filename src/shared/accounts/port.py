"""Account directory port: how the HTTP boundary confirms who a token names.

A token only says who the caller was when it was signed. Every request
re-reads the account so role changes and deletions take effect at once.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountRecord:
    """The parts of an account that decide what a caller may do."""

    user_id: str
    name: str
    role: str


class AccountDirectoryPort(ABC):
    """Abstract interface for account directory adapters."""

    @abstractmethod
    def find(self, user_id) -> AccountRecord | None:
        """Look up an account by id.

        Returns:
            the current record, or None when no such account exists.
        """
        ...
