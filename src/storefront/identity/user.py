"""User and Employee aggregates.

Users shop: they own carts, checkouts and feedback. Employees run the store:
they manage products and checkouts and moderate feedback. Both only ever
store a salted password hash.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront
from storefront.identity.events import EmployeeAdded, UserRegistered
from storefront.identity.passwords import hash_password, verify_password

_MIN_PASSWORD_LENGTH = 6


def _check_password(password):
    if not password or len(password) < _MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {_MIN_PASSWORD_LENGTH} characters"]})


@storefront.aggregate
class User:
    username = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    address = Text()
    mobile = String(max_length=20)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        if self.email and "@" not in self.email:
            raise ValidationError({"email": ["Invalid email address"]})

    @classmethod
    def register(cls, username, email, password, address=None, mobile=None):
        _check_password(password)
        now = datetime.now(UTC)

        user = cls(
            username=username,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            address=address,
            mobile=mobile,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=user.username,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    def check_password(self, password):
        return verify_password(password, self.password_hash)

    def to_public_dict(self):
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "address": self.address,
            "mobile": self.mobile,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@storefront.aggregate
class Employee:
    email = String(required=True, max_length=254)
    password_hash = String(required=True, max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, email, password):
        _check_password(password)
        now = datetime.now(UTC)

        employee = cls(
            email=email.strip().lower(),
            password_hash=hash_password(password),
            created_at=now,
            updated_at=now,
        )
        employee.raise_(
            EmployeeAdded(
                employee_id=str(employee.id),
                email=employee.email,
                added_at=now,
            )
        )
        return employee

    def check_password(self, password):
        return verify_password(password, self.password_hash)

    def to_public_dict(self):
        return {
            "id": str(self.id),
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
