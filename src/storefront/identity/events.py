"""Domain events for the User and Employee aggregates."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A shopper created an account."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    username = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="Employee")
class EmployeeAdded:
    """A new employee account was created."""

    __version__ = "v1"

    employee_id = Identifier(required=True)
    email = String(required=True)
    added_at = DateTime(required=True)
