"""Feedback deletion — commands and handler.

``DeleteFeedback`` is what customers call: it succeeds for the author, and
for an administrator. ``DeleteAnyFeedback`` is the moderation action and
requires the administrator capability outright.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import ForbiddenError, UnauthorizedError
from storefront.feedback.editing import load_feedback
from storefront.feedback.feedback import Feedback
from storefront.feedback.queries import feedback_document
from storefront.identity.caller import Caller
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Feedback")
class DeleteFeedback:
    feedback_id = Identifier()  # One of feedback_id / order_id
    order_id = Identifier()
    requested_by = Identifier()
    requested_by_admin = Boolean(default=False)


@storefront.command(part_of="Feedback")
class DeleteAnyFeedback:
    feedback_id = Identifier(required=True)
    requested_by = Identifier()
    requested_by_admin = Boolean(default=False)


def _caller(command) -> Caller:
    return Caller(
        user_id=str(command.requested_by) if command.requested_by else None,
        is_admin=bool(command.requested_by_admin),
    )


@storefront.command_handler(part_of=Feedback)
class DeleteFeedbackHandler:
    @handle(DeleteFeedback)
    def delete_feedback(self, command):
        caller = _caller(command)
        if not caller.is_authenticated:
            raise UnauthorizedError("You must be signed in to delete feedback")

        repo = current_domain.repository_for(Feedback)
        if command.feedback_id:
            feedback = load_feedback(command.feedback_id)
        elif command.order_id:
            feedback = repo.find_by_order(command.order_id)
            if feedback is None:
                raise ObjectNotFoundError({"order_id": ["Feedback not found"]})
        else:
            raise ValidationError({"_entity": ["A feedback id or order id is required"]})

        if not feedback.capability_for(caller).can_modify:
            raise ForbiddenError("You can only delete your own feedback")

        repo.remove(feedback)
        logger.info(
            "feedback_deleted",
            feedback_id=str(feedback.id),
            deleted_by=caller.user_id,
            as_admin=caller.is_admin,
        )

    @handle(DeleteAnyFeedback)
    def delete_any_feedback(self, command):
        caller = _caller(command)
        if not caller.is_admin:
            raise ForbiddenError("Only administrators can delete any feedback")

        feedback = load_feedback(command.feedback_id)
        document = feedback_document(feedback)
        current_domain.repository_for(Feedback).remove(feedback)

        logger.info("feedback_moderated", feedback_id=str(feedback.id), deleted_by=caller.user_id)
        return document
