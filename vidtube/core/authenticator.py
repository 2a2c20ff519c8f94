# vidtube/core/authenticator.py

from vidtube.core.store import CredentialStore
from vidtube.core.tokens import TokenIssuer
from vidtube.errors import TokenError, Unauthorized


class RequestAuthenticator:
    """
    Resolves an access token to the sanitized user it was issued for.
    Only reads from the store.
    """

    def __init__(self, store: CredentialStore, tokens: TokenIssuer):
        self.store = store
        self.tokens = tokens

    def authenticate(self, token: str | None) -> dict:
        if not token:
            raise Unauthorized("Unauthorized request")
        try:
            payload = self.tokens.verify_access_token(token)
        except TokenError as e:
            raise Unauthorized("Invalid access token") from e

        user = self.store.find_by_id(payload["id"])
        if user is None:
            raise Unauthorized("Invalid access token")
        return user.to_public()


def extract_token(cookie_token: str | None, authorization: str | None) -> str | None:
    """Cookie first, then an `Authorization: Bearer <token>` header."""
    if cookie_token:
        return cookie_token
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return None
