"""Feedback editing — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import ForbiddenError, UnauthorizedError
from storefront.feedback.feedback import Feedback
from storefront.identity.caller import Caller


@storefront.command(part_of="Feedback")
class UpdateOrderFeedback:
    """Replace the text and rating of the feedback left for an order."""

    order_id = Identifier(required=True)
    feedback = Text()
    rating = Integer()


@storefront.command(part_of="Feedback")
class EditFeedback:
    """Change a feedback's rating and/or comment. Only its author may do so."""

    feedback_id = Identifier(required=True)
    requested_by = Identifier()
    requested_by_admin = Boolean(default=False)
    rating = Integer()
    comment = Text()


def load_feedback(feedback_id) -> Feedback:
    try:
        return current_domain.repository_for(Feedback).get(feedback_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"feedback_id": ["Feedback not found"]}) from None


@storefront.command_handler(part_of=Feedback)
class EditFeedbackHandler:
    @handle(UpdateOrderFeedback)
    def update_order_feedback(self, command):
        if not command.feedback or command.rating is None:
            raise ValidationError({"_entity": ["Feedback and rating are required"]})

        repo = current_domain.repository_for(Feedback)
        feedback = repo.find_by_order(command.order_id)
        if feedback is None:
            raise ObjectNotFoundError({"order_id": ["Feedback not found"]})

        feedback.revise(comment=command.feedback, rating=command.rating)
        repo.add(feedback)
        return str(feedback.id)

    @handle(EditFeedback)
    def edit_feedback(self, command):
        caller = Caller(
            user_id=str(command.requested_by) if command.requested_by else None,
            is_admin=bool(command.requested_by_admin),
        )
        if not caller.is_authenticated:
            raise UnauthorizedError("You must be signed in to edit feedback")

        feedback = load_feedback(command.feedback_id)
        if not feedback.capability_for(caller).is_owner:
            raise ForbiddenError("You can only edit your own feedback")

        feedback.revise(comment=command.comment, rating=command.rating)
        current_domain.repository_for(Feedback).add(feedback)
        return str(feedback.id)
