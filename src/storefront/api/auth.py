"""Session-backed identity: sign-up/sign-in routes and caller dependencies.

The signed session cookie (Starlette ``SessionMiddleware``) holds either a
``user`` or an ``employee`` entry. Routes never read it directly; they
depend on ``current_caller`` and pass the resulting ``Caller`` on.
"""

from fastapi import APIRouter, Depends, Request
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import CredentialsRequest, SignUpRequest, StatusResponse
from storefront.errors import UnauthorizedError
from storefront.identity.authentication import authenticate_employee, authenticate_user
from storefront.identity.caller import Caller
from storefront.identity.registration import AddEmployee, RegisterUser
from storefront.identity.user import Employee, User

SESSION_USER = "user"
SESSION_EMPLOYEE = "employee"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------
def current_caller(request: Request) -> Caller:
    employee = request.session.get(SESSION_EMPLOYEE)
    if employee:
        return Caller.for_employee(employee["id"], employee.get("email"))

    user = request.session.get(SESSION_USER)
    if user:
        return Caller.for_user(user["id"], user.get("username"))

    return Caller.anonymous()


def require_user(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_authenticated:
        raise UnauthorizedError("You must be signed in")
    return caller


def require_employee(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_admin:
        raise UnauthorizedError("Employee login required")
    return caller


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("/signup", status_code=201)
async def sign_up(body: SignUpRequest):
    command = RegisterUser(
        username=body.username,
        email=body.email,
        password=body.password,
        address=body.address,
        mobile=body.mobile,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return {"success": True, "message": "User registered successfully", "user": user.to_public_dict()}


@user_router.post("/signin")
async def sign_in(body: CredentialsRequest, request: Request):
    user = authenticate_user(current_domain, body.email, body.password)
    request.session.pop(SESSION_EMPLOYEE, None)
    request.session[SESSION_USER] = {"id": str(user.id), "username": user.username, "email": user.email}
    return {"success": True, "message": "Signed in successfully", "user": user.to_public_dict()}


@user_router.post("/signout", response_model=StatusResponse)
async def sign_out(request: Request) -> StatusResponse:
    request.session.pop(SESSION_USER, None)
    return StatusResponse(message="Signed out successfully")


@user_router.get("/user/{user_id}")
async def get_user(user_id: str):
    try:
        user = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"user_id": ["User not found"]}) from None
    return user.to_public_dict()


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------
employee_router = APIRouter(prefix="/employee", tags=["employees"])


@employee_router.post("/login")
async def employee_login(body: CredentialsRequest, request: Request):
    employee = authenticate_employee(current_domain, body.email, body.password)
    request.session.pop(SESSION_USER, None)
    request.session[SESSION_EMPLOYEE] = {"id": str(employee.id), "email": employee.email}
    return {"success": True, "message": "Logged in successfully", "employee": employee.to_public_dict()}


@employee_router.post("/logout", response_model=StatusResponse)
async def employee_logout(request: Request) -> StatusResponse:
    request.session.pop(SESSION_EMPLOYEE, None)
    return StatusResponse(message="Logged out successfully")


@employee_router.post("/add", status_code=201)
async def add_employee(body: CredentialsRequest, caller: Caller = Depends(current_caller)):
    command = AddEmployee(
        email=body.email,
        password=body.password,
        requested_by=caller.user_id if caller.is_admin else None,
        requested_by_admin=caller.is_admin,
    )
    employee_id = current_domain.process(command, asynchronous=False)
    employee = current_domain.repository_for(Employee).get(employee_id)
    return {"success": True, "message": "Employee added successfully", "employee": employee.to_public_dict()}
