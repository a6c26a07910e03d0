from __future__ import annotations

import pytest
from pydantic import ValidationError

from statuspage.domain.schemas import MAX_PASSWORD_BYTES, CreateUserInput
from statuspage.services.passwords import hash_password, verify_password


def test_hash_is_salted_bcrypt_with_embedded_cost() -> None:
    first = hash_password("correct horse", rounds=4)
    second = hash_password("correct horse", rounds=4)
    assert first != second
    assert first.startswith("$2b$04$")
    assert "correct horse" not in first


def test_verify_accepts_match_and_rejects_mismatch() -> None:
    encoded = hash_password("s3cret-pass", rounds=4)
    assert verify_password("s3cret-pass", encoded) is True
    assert verify_password("wrong-pass", encoded) is False


def test_verify_rejects_malformed_hashes() -> None:
    assert verify_password("anything", "not-a-hash") is False
    assert verify_password("anything", "md5$1$abc$def") is False


def test_passwords_longer_than_bcrypt_input_are_rejected() -> None:
    # Multi-byte characters count by encoded length.
    too_long = "é" * (MAX_PASSWORD_BYTES // 2 + 1)
    with pytest.raises(ValidationError, match="72 bytes"):
        CreateUserInput.model_validate(
            {"email": "a@b.io", "password": too_long, "first_name": "a", "last_name": "b"}
        )
