"""Feedback aggregate — customer ratings and comments.

Two variants share one aggregate: order feedback (``order_id`` set, at most
one per delivered order) and general store feedback (no order, signed with
the customer's display name). Only the author may edit a feedback; the
author or an administrator may delete it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.feedback.events import FeedbackEdited, FeedbackSubmitted
from storefront.identity.caller import Capability

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

DEFAULT_RATING = 5


@storefront.value_object(part_of="Feedback")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})


@storefront.aggregate
class Feedback:
    order_id = Identifier()
    user_id = Identifier(required=True)
    user_name = String(max_length=100)
    rating = ValueObject(Rating, required=True)
    comment = Text(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and len(self.comment.strip()) == 0:
            raise ValidationError({"comment": ["Comment cannot be empty"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, user_id, comment, rating=None, order_id=None, user_name=None):
        """Record new feedback. A missing rating counts as 5 stars; 0 does not."""
        if rating is None:
            rating = DEFAULT_RATING

        now = datetime.now(UTC)
        feedback = cls(
            order_id=order_id,
            user_id=user_id,
            user_name=user_name,
            rating=Rating(score=rating),
            comment=comment.strip() if comment else comment,
            created_at=now,
            updated_at=now,
        )

        feedback.raise_(
            FeedbackSubmitted(
                feedback_id=str(feedback.id),
                user_id=str(user_id),
                order_id=str(order_id) if order_id else None,
                rating=rating,
                submitted_at=now,
            )
        )

        return feedback

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def score(self):
        return self.rating.score if self.rating else None

    def capability_for(self, caller) -> Capability:
        return Capability.resolve(caller.user_id, self.user_id, is_admin=caller.is_admin)

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def revise(self, comment=_UNSET, rating=_UNSET):
        """Change the comment and/or rating. Omitted values are kept."""
        now = datetime.now(UTC)

        if rating is not _UNSET and rating is not None:
            self.rating = Rating(score=rating)
        if comment is not _UNSET and comment is not None:
            self.comment = comment.strip()
        self.updated_at = now

        self.raise_(
            FeedbackEdited(
                feedback_id=str(self.id),
                rating=self.rating.score,
                edited_at=now,
            )
        )
