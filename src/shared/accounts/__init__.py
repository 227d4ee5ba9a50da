"""Account directory abstraction: where request principals come from."""

import os

_directory_instance = None


def get_account_directory():
    """Return the configured account directory (singleton).

    Reads accounts from the identity domain by default. Set
    ACCOUNT_DIRECTORY_ADAPTER to ``fake`` for an in-memory table.
    """
    global _directory_instance
    if _directory_instance is None:
        adapter = os.environ.get("ACCOUNT_DIRECTORY_ADAPTER", "domain")
        if adapter == "domain":
            from shared.accounts.domain_adapter import DomainAccountDirectory

            _directory_instance = DomainAccountDirectory()
        elif adapter == "fake":
            from shared.accounts.fake_adapter import FakeAccountDirectory

            _directory_instance = FakeAccountDirectory()
        else:
            raise ValueError(f"Unknown account directory adapter: {adapter}")
    return _directory_instance


def set_account_directory(directory):
    """Install a specific directory instance (useful for testing)."""
    global _directory_instance
    _directory_instance = directory


def reset_account_directory():
    """Reset the account directory singleton (useful for testing)."""
    global _directory_instance
    _directory_instance = None
