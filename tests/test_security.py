from __future__ import annotations

from vidtube.core.security import hash_password, verify_password


def test_hash_is_salted_and_verifies() -> None:
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first != second
    assert first != "secret123"
    assert verify_password("secret123", first)
    assert verify_password("secret123", second)


def test_wrong_password_does_not_verify() -> None:
    hashed = hash_password("secret123")
    assert not verify_password("secret124", hashed)
    assert not verify_password("", hashed)


def test_uses_cost_ten() -> None:
    assert hash_password("pw").split("$")[2] == "10"


def test_malformed_hash_is_rejected_quietly() -> None:
    assert not verify_password("secret123", "not-a-hash")
    assert not verify_password("secret123", "")

