"""Catalogue adapter abstraction: how ordering reaches product data."""

import os

_catalogue_instance = None


def get_catalogue():
    """Return the configured catalogue adapter (singleton).

    Uses the in-process catalogue domain by default. Set CATALOGUE_ADAPTER
    to ``fake`` for an in-memory product table.
    """
    global _catalogue_instance
    if _catalogue_instance is None:
        adapter = os.environ.get("CATALOGUE_ADAPTER", "domain")
        if adapter == "domain":
            from ordering.catalogue.domain_adapter import DomainCatalogue

            _catalogue_instance = DomainCatalogue()
        elif adapter == "fake":
            from ordering.catalogue.fake_adapter import FakeCatalogue

            _catalogue_instance = FakeCatalogue()
        else:
            raise ValueError(f"Unknown catalogue adapter: {adapter}")
    return _catalogue_instance


def set_catalogue(adapter):
    """Install a specific adapter instance (useful for testing)."""
    global _catalogue_instance
    _catalogue_instance = adapter


def reset_catalogue():
    """Reset the catalogue singleton (useful for testing)."""
    global _catalogue_instance
    _catalogue_instance = None
