"""Ordering bounded context: order assembly, order lifecycle and the shopping cart.

Orders are standard CQRS aggregates. The cart lives client-side until
checkout and is modelled as a plain object over a storage port.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="storefront")

ordering = Domain(name="ordering")

logger = get_logger(__name__)
