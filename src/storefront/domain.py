"""Storefront bounded context — catalogue, shopping cart, checkout and feedback.

Handles the per-user cart, the checkout (order) lifecycle managed by
employees, and customer feedback with ratings. All writes are processed
synchronously as commands; reads go straight to the repositories.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
