"""Tests for the User model and credential hashing."""

import pytest
from pydantic import ValidationError

from infobooks.credentials import hash_secret, verify_secret
from infobooks.models.user import User


class TestUserModel:
    def test_create_user(self):
        user = User(name="  Lenitha Borges ", national_id="09835633304", secret_hash="x$y")

        assert user.name == "Lenitha Borges"
        assert user.is_admin is False
        assert user.active is True

    def test_national_id_must_be_digits(self):
        with pytest.raises(ValidationError):
            User(name="Lenitha", national_id="098.356.333-04", secret_hash="x$y")

    def test_national_id_must_be_ascii_digits(self):
        with pytest.raises(ValidationError):
            User(name="Lenitha", national_id="０９８３５６３３３０４", secret_hash="x$y")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            User(name="   ", national_id="1", secret_hash="x$y")

    def test_secret_hash_not_in_repr(self):
        user = User(name="Miguel", national_id="45863258207", secret_hash="salt$digest")

        assert "salt$digest" not in repr(user)

    def test_profile_has_no_secret(self):
        user = User(name="Miguel", national_id="45863258207", secret_hash="salt$digest")

        profile = user.to_profile()

        assert profile.id == user.id
        assert "secret_hash" not in profile.model_dump()


class TestCredentials:
    def test_verify_matching_secret(self):
        stored = hash_secret("12345678g")

        assert verify_secret("12345678g", stored) is True
        assert verify_secret("12345678G", stored) is False

    def test_hash_is_salted(self):
        first = hash_secret("lenitha123")
        second = hash_secret("lenitha123")

        assert first != second
        assert "lenitha123" not in first

    def test_malformed_hash_never_verifies(self):
        assert verify_secret("anything", "no-separator") is False
