"""Checkout deletion — command and handler.

Deletion is a hard delete. Feedback that refers to the order is left in
place and simply stops resolving its order reference.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Checkout")
class DeleteCheckout:
    checkout_id = Identifier(required=True)


@storefront.command_handler(part_of=Checkout)
class DeleteCheckoutHandler:
    @handle(DeleteCheckout)
    def delete_checkout(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = repo.get(command.checkout_id)
        repo.remove(checkout)
        logger.info("checkout_deleted", checkout_id=str(command.checkout_id))
