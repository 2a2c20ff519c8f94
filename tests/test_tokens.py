from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace

import pytest
from jose import jwt

from vidtube.core import tokens as token_module
from vidtube.core.tokens import TokenIssuer
from vidtube.errors import ExpiredToken, InvalidToken


USER = SimpleNamespace(id=7, email="ada@x.com", username="ada", fullname="Ada Lovelace")


def test_access_token_carries_identity(tokens: TokenIssuer) -> None:
    claims = tokens.verify_access_token(tokens.create_access_token(USER))

    assert claims["id"] == 7
    assert claims["email"] == "ada@x.com"
    assert claims["username"] == "ada"
    assert claims["fullname"] == "Ada Lovelace"
    assert claims["exp"] > claims["iat"]


def test_refresh_token_carries_only_id(tokens: TokenIssuer) -> None:
    claims = tokens.verify_refresh_token(tokens.create_refresh_token(USER))

    assert claims["id"] == 7
    assert "email" not in claims
    assert "username" not in claims


def test_tokens_issued_back_to_back_differ(tokens: TokenIssuer) -> None:
    assert tokens.create_refresh_token(USER) != tokens.create_refresh_token(USER)
    assert tokens.create_access_token(USER) != tokens.create_access_token(USER)


def test_kinds_use_separate_secrets(tokens: TokenIssuer) -> None:
    access = tokens.create_access_token(USER)
    refresh = tokens.create_refresh_token(USER)

    with pytest.raises(InvalidToken):
        tokens.verify_refresh_token(access)
    with pytest.raises(InvalidToken):
        tokens.verify_access_token(refresh)


def test_kind_claim_is_checked_even_with_the_right_secret(tokens: TokenIssuer) -> None:
    forged = token_module.issue({"id": 7, "type": "refresh"}, tokens.access_secret, timedelta(minutes=5))
    with pytest.raises(InvalidToken):
        tokens.verify_access_token(forged)


def test_expired_token() -> None:
    token = token_module.issue({"id": 1}, "k", timedelta(seconds=-30))
    with pytest.raises(ExpiredToken):
        token_module.verify(token, "k")


def test_wrong_signature() -> None:
    token = token_module.issue({"id": 1}, "k", timedelta(minutes=5))
    with pytest.raises(InvalidToken):
        token_module.verify(token, "other")


@pytest.mark.parametrize("garbage", ["", None, "abc", "a.b.c", 42])
def test_malformed_input_is_invalid(garbage) -> None:
    with pytest.raises(InvalidToken):
        token_module.verify(garbage, "k")


def test_verify_options_are_separate_from_secret() -> None:
    token = token_module.issue({"id": 1}, "k", timedelta(seconds=-30))
    claims = token_module.verify(token, "k", options={"verify_exp": False})
    assert claims["id"] == 1


def test_signed_with_hs256() -> None:
    token = token_module.issue({"id": 1}, "k", timedelta(minutes=1))
    assert jwt.get_unverified_header(token)["alg"] == "HS256"
