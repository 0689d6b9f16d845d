"""Domain events for the Feedback aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Feedback")
class FeedbackSubmitted:
    """A customer left a rating and comment, optionally for a delivered order."""

    __version__ = "v1"

    feedback_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_id = Identifier()
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Feedback")
class FeedbackEdited:
    __version__ = "v1"

    feedback_id = Identifier(required=True)
    rating = Integer(required=True)
    edited_at = DateTime(required=True)
