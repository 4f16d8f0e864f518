"""Storefront bounded context: Catalogue and Ordering.

Products (with embedded reviews and stock) and Orders live in one domain so
that a single command handler can check and mutate stock and persist the
order inside the same unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
