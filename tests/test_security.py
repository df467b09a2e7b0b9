"""
Tests for password hashing and JWT helpers.
"""

from datetime import timedelta

import pytest

from accounts.core.config import Settings
from accounts.core.errors import AppError, ErrorMessage
from accounts.core.security import (
    MAX_PASSWORD_LENGTH,
    create_access_token,
    decode_access_token,
    generate_verification_code,
    hash_password,
    verify_password,
)


def test_hash_and_verify() -> None:
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed) is True
    assert verify_password("wrong horse", hashed) is False


def test_hash_empty_password() -> None:
    with pytest.raises(AppError) as exc_info:
        hash_password("")
    assert exc_info.value.kind is ErrorMessage.EMPTY_PASSWORD


def test_hash_too_long_password() -> None:
    with pytest.raises(AppError) as exc_info:
        hash_password("a" * (MAX_PASSWORD_LENGTH + 1))
    assert exc_info.value.message == (
        f"Password exceeds maximum length of {MAX_PASSWORD_LENGTH} characters"
    )


def test_hash_at_limit_is_accepted() -> None:
    password = "a" * MAX_PASSWORD_LENGTH
    assert verify_password(password, hash_password(password))


def test_verify_unrecognised_hash() -> None:
    with pytest.raises(AppError) as exc_info:
        verify_password("whatever", "not-a-hash")
    assert exc_info.value.kind is ErrorMessage.INVALID_HASH_FORMAT


def test_verify_empty_password() -> None:
    with pytest.raises(AppError) as exc_info:
        verify_password("", hash_password("abcdef"))
    assert exc_info.value.kind is ErrorMessage.EMPTY_PASSWORD


def test_token_round_trip(settings: Settings) -> None:
    token = create_access_token("subject-1", settings)
    assert decode_access_token(token, settings).sub == "subject-1"


def test_expired_token(settings: Settings) -> None:
    token = create_access_token("subject-1", settings, expires_delta=timedelta(seconds=-10))
    with pytest.raises(AppError) as exc_info:
        decode_access_token(token, settings)
    assert exc_info.value.kind is ErrorMessage.INVALID_TOKEN


def test_malformed_token(settings: Settings) -> None:
    with pytest.raises(AppError) as exc_info:
        decode_access_token("not.a.jwt", settings)
    assert exc_info.value.kind is ErrorMessage.INVALID_TOKEN


def test_verification_codes_are_unique() -> None:
    codes = {generate_verification_code() for _ in range(20)}
    assert len(codes) == 20
