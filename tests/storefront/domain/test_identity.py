"""Tests for users, employees, password hashing and caller capabilities."""

import pytest
from protean.exceptions import ValidationError
from storefront.identity.caller import Caller, Capability
from storefront.identity.events import UserRegistered
from storefront.identity.passwords import hash_password, verify_password
from storefront.identity.user import Employee, User


class TestPasswords:
    def test_hash_is_not_plain_text(self):
        encoded = hash_password("s3cret-pass")
        assert "s3cret-pass" not in encoded
        assert encoded.startswith("pbkdf2_sha256$")

    def test_hash_is_salted(self):
        assert hash_password("s3cret-pass") != hash_password("s3cret-pass")

    def test_verify(self):
        encoded = hash_password("s3cret-pass")
        assert verify_password("s3cret-pass", encoded)
        assert not verify_password("wrong-pass", encoded)

    def test_verify_rejects_garbage(self):
        assert not verify_password("s3cret-pass", "not-a-hash")
        assert not verify_password("s3cret-pass", None)


class TestUser:
    def test_register(self):
        user = User.register(username="jane", email=" Jane@Example.com ", password="s3cret-pass")
        assert user.email == "jane@example.com"
        assert user.password_hash != "s3cret-pass"
        assert user.check_password("s3cret-pass")
        assert isinstance(user._events[-1], UserRegistered)

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            User.register(username="jane", email="jane@example.com", password="123")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            User.register(username="jane", email="not-an-email", password="s3cret-pass")

    def test_public_dict_hides_hash(self):
        user = User.register(username="jane", email="jane@example.com", password="s3cret-pass")
        public = user.to_public_dict()
        assert "password_hash" not in public
        assert public["username"] == "jane"


class TestEmployee:
    def test_add(self):
        employee = Employee.add(email="Admin@Store.com", password="admin-pass")
        assert employee.email == "admin@store.com"
        assert employee.check_password("admin-pass")
        assert not employee.check_password("other-pass")


class TestCaller:
    def test_anonymous(self):
        caller = Caller.anonymous()
        assert not caller.is_authenticated
        assert not caller.is_admin

    def test_employee_is_admin(self):
        caller = Caller.for_employee("emp-1", "admin@store.com")
        assert caller.is_authenticated
        assert caller.is_admin

    def test_capability_resolution(self):
        assert Capability.resolve("u1", "u1").is_owner
        assert not Capability.resolve("u1", "u2").is_owner
        assert not Capability.resolve(None, None).is_owner
        assert Capability.resolve("u1", "u2", is_admin=True).can_modify
