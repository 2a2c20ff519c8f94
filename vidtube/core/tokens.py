# vidtube/core/tokens.py

import uuid
from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt

from vidtube.config import Settings
from vidtube.errors import ExpiredToken, InvalidToken


ALGORITHM = "HS256"

ACCESS = "access"
REFRESH = "refresh"


def issue(claims: dict, secret: str, expiry: timedelta) -> str:
    to_encode = claims.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({
        "iat": now,
        "exp": now + expiry,
        "jti": uuid.uuid4().hex,
    })
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def verify(token: str, secret: str, options: dict | None = None) -> dict:
    """
    Decodes a token signed with `secret`.
    Raises ExpiredToken past expiry and InvalidToken for anything else
    (bad signature, garbage input); jose errors never leave this function.
    """
    if not token or not isinstance(token, str):
        raise InvalidToken("Token missing")
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM], options=options)
    except ExpiredSignatureError as e:
        raise ExpiredToken("Token expired") from e
    except (JWTError, ValueError, TypeError) as e:
        raise InvalidToken("Invalid token") from e


class TokenIssuer:
    """
    Mints and checks the two token kinds.
    Access tokens carry the public identity; refresh tokens only the user id.
    """

    def __init__(self, settings: Settings):
        self.access_secret = settings.access_token_secret
        self.refresh_secret = settings.refresh_token_secret
        self.access_expiry = settings.access_token_expiry
        self.refresh_expiry = settings.refresh_token_expiry

    def create_access_token(self, user) -> str:
        return issue(
            {
                "id": user.id,
                "email": user.email,
                "username": user.username,
                "fullname": user.fullname,
                "type": ACCESS,
            },
            self.access_secret,
            self.access_expiry,
        )

    def create_refresh_token(self, user) -> str:
        return issue({"id": user.id, "type": REFRESH}, self.refresh_secret, self.refresh_expiry)

    def verify_access_token(self, token: str) -> dict:
        return self._verify_kind(token, self.access_secret, ACCESS)

    def verify_refresh_token(self, token: str) -> dict:
        return self._verify_kind(token, self.refresh_secret, REFRESH)

    @staticmethod
    def _verify_kind(token: str, secret: str, kind: str) -> dict:
        payload = verify(token, secret)
        if payload.get("type") != kind or not isinstance(payload.get("id"), int):
            raise InvalidToken("Invalid token")
        return payload
