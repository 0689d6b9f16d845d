"""Account creation — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import UnauthorizedError
from storefront.identity.user import Employee, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    username = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=255)
    address = Text()
    mobile = String(max_length=20)


@storefront.command(part_of="Employee")
class AddEmployee:
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=255)
    requested_by = Identifier()  # Employee id of the caller, if any
    requested_by_admin = Boolean(default=False)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email):
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(
            username=command.username,
            email=command.email,
            password=command.password,
            address=command.address,
            mobile=command.mobile,
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id))
        return str(user.id)


@storefront.command_handler(part_of=Employee)
class AddEmployeeHandler:
    @handle(AddEmployee)
    def add_employee(self, command):
        repo = current_domain.repository_for(Employee)

        # The very first employee bootstraps the store; after that only
        # employees can add colleagues.
        if repo.has_employees() and not command.requested_by_admin:
            raise UnauthorizedError("Only employees can add employees")

        if repo.find_by_email(command.email):
            raise ValidationError({"email": ["Employee with this email already exists"]})

        employee = Employee.add(email=command.email, password=command.password)
        repo.add(employee)
        logger.info("employee_added", employee_id=str(employee.id), added_by=command.requested_by)
        return str(employee.id)
