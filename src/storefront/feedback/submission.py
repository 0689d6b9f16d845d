"""Feedback submission — commands and handler.

Order feedback is accepted only once the order has been delivered, and only
once per order; later changes go through ``UpdateOrderFeedback``. General
feedback needs a signed-in customer.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.domain import storefront
from storefront.errors import UnauthorizedError
from storefront.feedback.feedback import Feedback
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Feedback")
class SubmitOrderFeedback:
    order_id = Identifier(required=True)
    user_id = Identifier()
    feedback = Text()
    rating = Integer()


@storefront.command(part_of="Feedback")
class AddFeedback:
    user_id = Identifier()  # Signed-in customer; empty for anonymous callers
    user_name = String(max_length=100)
    rating = Integer()
    comment = Text()


@storefront.command_handler(part_of=Feedback)
class SubmitFeedbackHandler:
    @handle(SubmitOrderFeedback)
    def submit_order_feedback(self, command):
        if not command.feedback or not command.user_id:
            raise ValidationError({"_entity": ["Feedback and userId are required"]})

        try:
            order = current_domain.repository_for(Checkout).get(command.order_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError({"order_id": ["Order not found"]}) from None

        if not order.is_delivered:
            raise ValidationError({"order_id": ["Feedback can only be submitted for delivered orders"]})

        repo = current_domain.repository_for(Feedback)
        if repo.find_by_order(command.order_id) is not None:
            raise ValidationError({"order_id": ["Feedback already submitted for this order"]})

        author = current_domain.repository_for(User).find_many([command.user_id]).get(str(command.user_id))

        feedback = Feedback.submit(
            user_id=command.user_id,
            comment=command.feedback,
            rating=command.rating,
            order_id=command.order_id,
            user_name=author.username if author else None,
        )
        repo.add(feedback)

        logger.info(
            "order_feedback_submitted",
            feedback_id=str(feedback.id),
            order_id=str(command.order_id),
            rating=feedback.score,
        )
        return str(feedback.id)

    @handle(AddFeedback)
    def add_feedback(self, command):
        if not command.user_id:
            raise UnauthorizedError("You must be signed in to add feedback")

        feedback = Feedback.submit(
            user_id=command.user_id,
            comment=command.comment,
            rating=command.rating,
            user_name=command.user_name,
        )
        current_domain.repository_for(Feedback).add(feedback)

        logger.info("feedback_added", feedback_id=str(feedback.id), rating=feedback.score)
        return str(feedback.id)
