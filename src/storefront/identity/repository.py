"""Repositories for User and Employee with email lookups."""

from storefront.domain import storefront
from storefront.identity.user import Employee, User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=email.strip().lower()).all().items
        return users[0] if users else None

    def find_many(self, user_ids) -> dict[str, User]:
        wanted = list({str(uid) for uid in user_ids if uid})
        if not wanted:
            return {}
        users = self._dao.query.filter(id__in=wanted).all().items
        return {str(u.id): u for u in users}


@storefront.repository(part_of=Employee)
class EmployeeRepository:
    def find_by_email(self, email: str) -> Employee | None:
        employees = self._dao.query.filter(email=email.strip().lower()).all().items
        return employees[0] if employees else None

    def has_employees(self) -> bool:
        return bool(self._dao.query.all().items)
