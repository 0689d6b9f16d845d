"""Repository for the Feedback aggregate."""

from storefront.domain import storefront
from storefront.feedback.feedback import Feedback


@storefront.repository(part_of=Feedback)
class FeedbackRepository:
    def find_all(self) -> list[Feedback]:
        return self._dao.query.all().items

    def find_by_order(self, order_id) -> Feedback | None:
        records = self._dao.query.filter(order_id=str(order_id)).all().items
        return records[0] if records else None

    def find_by_orders(self, order_ids) -> list[Feedback]:
        wanted = list({str(oid) for oid in order_ids})
        if not wanted:
            return []
        return self._dao.query.filter(order_id__in=wanted).all().items

    def find_by_user(self, user_id) -> list[Feedback]:
        return self._dao.query.filter(user_id=str(user_id)).all().items

    def remove(self, feedback: Feedback) -> None:
        self._dao.delete(feedback)
