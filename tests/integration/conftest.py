"""Fixtures for end-to-end tests through the assembled application.

The application initializes every domain on import; each request pushes the
context of the domain that owns its URL. Tests reset all three domains' data
afterwards.
"""

import os

import pytest


@pytest.fixture(scope="session")
def storefront_app(request):
    os.environ["PROTEAN_ENV"] = request.config.option.env
    os.environ.setdefault("IMAGE_STORE_ADAPTER", "fake")
    os.environ.setdefault("CATALOGUE_ADAPTER", "domain")

    from app import app

    return app


@pytest.fixture(scope="session")
def domains(storefront_app):
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    return identity, catalogue, ordering


@pytest.fixture(scope="session", autouse=True)
def setup_databases(domains):
    from shared.db import drop_db, setup_db

    for domain in domains:
        setup_db(domain)

    yield

    for domain in domains:
        drop_db(domain)


@pytest.fixture(autouse=True)
def reset_between_tests(domains):
    """Clear every domain's stores and the adapter singletons after each test."""
    from catalogue.images import reset_image_store
    from ordering.catalogue import reset_catalogue
    from shared.accounts import reset_account_directory

    reset_image_store()
    reset_catalogue()
    reset_account_directory()

    yield

    for domain in domains:
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            for _, broker in domain.brokers.items():
                broker._data_reset()
            domain.event_store.store._data_reset()

    reset_image_store()
    reset_catalogue()
    reset_account_directory()


@pytest.fixture()
def client(storefront_app):
    from fastapi.testclient import TestClient

    return TestClient(storefront_app)
