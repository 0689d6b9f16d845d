"""Credential checks for users and employees.

Read-only: nothing is persisted here. The API layer stores the returned
identity in the session.
"""

from storefront.errors import UnauthorizedError
from storefront.identity.user import Employee, User

_INVALID_CREDENTIALS = "Invalid email or password"


def authenticate_user(domain, email, password) -> User:
    user = domain.repository_for(User).find_by_email(email or "")
    if user is None or not user.check_password(password):
        raise UnauthorizedError(_INVALID_CREDENTIALS)
    return user


def authenticate_employee(domain, email, password) -> Employee:
    employee = domain.repository_for(Employee).find_by_email(email or "")
    if employee is None or not employee.check_password(password):
        raise UnauthorizedError(_INVALID_CREDENTIALS)
    return employee
