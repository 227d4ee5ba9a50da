"""Fake account directory: an in-memory account table for tests."""

from shared.accounts.port import AccountDirectoryPort, AccountRecord


class FakeAccountDirectory(AccountDirectoryPort):
    def __init__(self):
        self.accounts: dict[str, AccountRecord] = {}

    def enroll(self, user_id, name, role="user") -> AccountRecord:
        """Add or replace an account."""
        record = AccountRecord(user_id=str(user_id), name=name, role=role)
        self.accounts[record.user_id] = record
        return record

    def forget(self, user_id) -> None:
        self.accounts.pop(str(user_id), None)

    def find(self, user_id) -> AccountRecord | None:
        return self.accounts.get(str(user_id))
