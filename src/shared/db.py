"""Persistence helpers: schema setup for SQL-backed providers and batched reads.

The default configuration uses Protean's in-memory provider, for which both
functions are no-ops. When a context is configured against SQLite or
PostgreSQL, touching each repository's DAO registers its table on the
provider's metadata so ``create_all`` can build the schema.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")

# Rows read per round trip when a listing walks every match
BATCH_SIZE = 500


def _register_tables(domain: Domain, provider) -> None:
    for _, aggregate_record in domain.registry.aggregates.items():
        if aggregate_record.cls.meta_.provider == provider.name:
            domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

    for _, entity_record in domain.registry.entities.items():
        if entity_record.cls.meta_.provider == provider.name:
            domain.repository_for(entity_record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every SQL provider of ``domain``."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                _register_tables(domain, provider)
                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop tables for every SQL provider of ``domain``."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)


def fetch_all(query, batch_size=None) -> list:
    """Every row ``query`` matches, read in offset/limit batches.

    ``query`` must be totally ordered so that batches neither overlap nor skip.
    """
    batch_size = batch_size or BATCH_SIZE
    rows = []
    offset = 0
    while True:
        batch = query.offset(offset).limit(batch_size).all().items
        rows.extend(batch)
        if len(batch) < batch_size:
            return rows
        offset += batch_size
