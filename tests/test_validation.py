"""
Tests for the request contract rules.
"""

from typing import ClassVar

import pytest

from accounts.core.errors import HttpError
from accounts.core.validation import (
    Contract,
    FieldRule,
    Rule,
    Violation,
    ensure_valid,
    in_range,
    is_email,
    validate,
)
from accounts.schemas.user import (
    MAX_PAGE,
    ForgotPasswordInput,
    LoginInput,
    PageQuery,
    PasswordUpdateInput,
    RegisterInput,
    ResetPasswordInput,
    RoleUpdateInput,
    UpdateProfileInput,
    VerifyEmailInput,
)


def messages(contract: Contract) -> list[str]:
    return [v.message for v in validate(contract)]


def test_valid_register_input() -> None:
    body = RegisterInput(name="Ali", email="a@b.co", password="abcdef", password_confirm="abcdef")
    assert validate(body) == []


def test_short_email_fails_both_rules() -> None:
    body = ForgotPasswordInput(email="ab@c")
    assert messages(body) == [
        "Email must be at least 6 characters long",
        "Email must be a valid email address",
    ]


def test_six_character_email_passes() -> None:
    assert validate(ForgotPasswordInput(email="a@b.co")) == []


@pytest.mark.parametrize("value", ["a@b.co", "someone@example.com"])
def test_is_email_accepts(value: str) -> None:
    assert is_email(value)


@pytest.mark.parametrize("value", ["ab@c", "no-at-sign", "two@@example.com", "", None])
def test_is_email_rejects(value: object) -> None:
    assert not is_email(value)


def test_empty_password_reports_required_and_length() -> None:
    body = LoginInput(email="someone@example.com", password="")
    assert messages(body) == [
        "Password must be at least 1 character long",
        "Password must be at least 6 characters long",
    ]


@pytest.mark.parametrize("password", ["", "abc", "abcdef", "abcdefgh"])
def test_register_mismatch_always_tagged_to_confirmation(password: str) -> None:
    body = RegisterInput(
        name="Alice", email="alice@example.com", password=password, password_confirm="zzzzzzz"
    )
    violations = validate(body)
    assert Violation("password_confirm", "Passwords do not match") in violations


def test_empty_confirmation_is_separate_from_mismatch() -> None:
    body = RegisterInput(
        name="Alice", email="alice@example.com", password="abcdef", password_confirm=""
    )
    assert validate(body) == [
        Violation("password_confirm", "Password confirmation is required"),
        Violation("password_confirm", "Passwords do not match"),
    ]


def test_confirmation_alias() -> None:
    body = RegisterInput.model_validate(
        {"name": "Ali", "email": "a@b.co", "password": "abcdef", "password_confirmation": "abcdef"}
    )
    assert body.password_confirm == "abcdef"
    assert validate(body) == []


def test_name_thresholds_differ_between_contracts() -> None:
    register = RegisterInput(name="Al", email="a@b.co", password="abcdef", password_confirm="abcdef")
    assert messages(register) == ["Name must be at least 3 characters long"]
    assert validate(UpdateProfileInput(name="Al")) == []
    assert messages(UpdateProfileInput(name="")) == ["Name is required"]


@pytest.mark.parametrize("role", ["user", "admin"])
def test_role_accepts_known_roles(role: str) -> None:
    assert validate(RoleUpdateInput(role=role)) == []


@pytest.mark.parametrize("role", ["superuser", "Admin", "", "moderator"])
def test_role_rejects_other_values(role: str) -> None:
    assert validate(RoleUpdateInput(role=role)) == [Violation("role", "Invalid user role")]


@pytest.mark.parametrize("role", [5, None, True, ["admin"], {"role": "admin"}])
def test_role_rejects_non_string_values(role: object) -> None:
    assert validate(RoleUpdateInput(role=role)) == [Violation("role", "Invalid user role")]


def test_password_update_rules() -> None:
    body = PasswordUpdateInput(old_password="", new_password="abc", new_password_confirm="abd")
    assert messages(body) == [
        "Current password is required",
        "New password must be at least 6 characters long",
        "Passwords do not match",
    ]


def test_password_update_accepts_confirmation_alias() -> None:
    body = PasswordUpdateInput.model_validate(
        {"old_password": "old", "new_password": "abcdef", "new_password_confirmation": "abcdef"}
    )
    assert validate(body) == []


def test_reset_password_rules() -> None:
    body = ResetPasswordInput(token="", new_password="", new_password_confirm="")
    assert messages(body) == [
        "Token is required",
        "New password is required",
        "New password must be at least 6 characters long",
        "Password confirmation is required",
    ]


def test_verify_email_requires_token() -> None:
    assert messages(VerifyEmailInput(token="")) == ["Token is required"]
    assert validate(VerifyEmailInput(token="abc")) == []


@pytest.mark.parametrize(
    "page,limit,expected",
    [
        (None, None, []),
        (1, 1, []),
        (3, 50, []),
        (0, None, ["Page must be at least 1"]),
        (None, 0, ["Limit must be between 1 and 50"]),
        (None, 51, ["Limit must be between 1 and 50"]),
        (-1, 100, ["Page must be at least 1", "Limit must be between 1 and 50"]),
        (MAX_PAGE, 50, []),
        (MAX_PAGE + 1, None, ["Page must be at most 1000000"]),
        (10**19, 10, ["Page must be at most 1000000"]),
    ],
)
def test_page_query(page: int | None, limit: int | None, expected: list[str]) -> None:
    assert messages(PageQuery(page=page, limit=limit)) == expected


def test_in_range_absent_value_passes() -> None:
    assert in_range(1, 50)(None)


@pytest.mark.parametrize(
    "contract",
    [
        RegisterInput(name="", email="x", password="", password_confirm="y"),
        LoginInput(email="ab@c", password="abc"),
        RoleUpdateInput(role="root"),
        PageQuery(page=0, limit=99),
    ],
)
def test_validation_is_idempotent(contract: Contract) -> None:
    assert validate(contract) == validate(contract)


def test_predicate_errors_count_as_violations() -> None:
    def explode(value: object) -> bool:
        raise RuntimeError("boom")

    class Exploding(Contract):
        value: str

        rules: ClassVar[tuple[Rule, ...]] = (FieldRule("value", explode, "Value is broken"),)

    assert validate(Exploding(value="x")) == [Violation("value", "Value is broken")]


def test_ensure_valid_raises_bad_request_listing_messages() -> None:
    with pytest.raises(HttpError) as exc_info:
        ensure_valid(LoginInput(email="ab@c", password="abcdef"))
    assert exc_info.value.status == 400
    assert exc_info.value.message == (
        "Email must be at least 6 characters long, Email must be a valid email address"
    )


def test_ensure_valid_returns_contract() -> None:
    body = LoginInput(email="someone@example.com", password="abcdef")
    assert ensure_valid(body) is body
