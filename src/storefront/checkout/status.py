"""Checkout status updates — command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Checkout")
class UpdateCheckoutStatus:
    checkout_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Checkout)
class UpdateCheckoutStatusHandler:
    @handle(UpdateCheckoutStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = repo.get(command.checkout_id)

        previous = checkout.status
        checkout.change_status(
            command.status,
            enforce_transitions=get_settings().enforce_status_transitions,
        )
        repo.add(checkout)

        if previous != checkout.status:
            logger.info(
                "checkout_status_changed",
                checkout_id=str(command.checkout_id),
                previous_status=previous,
                new_status=checkout.status,
            )
        return checkout.status
