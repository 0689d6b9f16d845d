"""Explicit caller identity.

Services never look at the HTTP session. The API layer resolves the session
into a ``Caller`` and hands it to each command; handlers derive a
``Capability`` for the specific resource they are about to change.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    user_id: str | None = None
    user_name: str | None = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def anonymous(cls) -> "Caller":
        return cls()

    @classmethod
    def for_user(cls, user_id, user_name=None) -> "Caller":
        return cls(user_id=str(user_id), user_name=user_name, is_admin=False)

    @classmethod
    def for_employee(cls, employee_id, email=None) -> "Caller":
        return cls(user_id=str(employee_id), user_name=email, is_admin=True)


@dataclass(frozen=True)
class Capability:
    is_owner: bool = False
    is_admin: bool = False

    @classmethod
    def resolve(cls, requester_id, owner_id, is_admin=False) -> "Capability":
        is_owner = requester_id is not None and owner_id is not None and str(requester_id) == str(owner_id)
        return cls(is_owner=is_owner, is_admin=bool(is_admin))

    @property
    def can_modify(self) -> bool:
        return self.is_owner or self.is_admin
