# vidtube/core/sessions.py

import logging
import secrets
from dataclasses import dataclass

from vidtube.core.security import verify_password
from vidtube.core.store import CredentialStore
from vidtube.core.tokens import TokenIssuer
from vidtube.errors import (
    Conflict,
    NotFound,
    TokenError,
    Unauthorized,
    ValidationError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisterRequest:
    fullname: str
    username: str
    email: str
    password: str
    avatar: str | None
    cover_image: str | None = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class LoginResult:
    user: dict
    access_token: str
    refresh_token: str


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class SessionManager:
    """
    Register, login, logout, refresh-token rotation and password change.

    Each user holds at most one refresh token. Login overwrites it, refresh
    rotates it with a conditional write, logout clears it.
    """

    def __init__(self, store: CredentialStore, tokens: TokenIssuer):
        self.store = store
        self.tokens = tokens

    # -------------------------------
    # Registration
    # -------------------------------

    def register(self, req: RegisterRequest) -> dict:
        if any(_blank(f) for f in (req.fullname, req.username, req.email, req.password)):
            raise ValidationError("All fields are required")

        if self.store.find_by_username_or_email(username=req.username, email=req.email):
            raise Conflict("User with email or username already exists")

        if _blank(req.avatar):
            raise ValidationError("Avatar file is required")

        user = self.store.create(
            fullname=req.fullname.strip(),
            username=req.username,
            email=req.email,
            password=req.password,
            avatar=req.avatar,
            cover_image=req.cover_image or "",
            refresh_token=None,
        )
        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return user.to_public()

    # -------------------------------
    # Login / Logout
    # -------------------------------

    def login(self, password: str, username: str | None = None, email: str | None = None) -> LoginResult:
        if _blank(username) and _blank(email):
            raise ValidationError("Username or email is required")

        user = self.store.find_by_username_or_email(username=username, email=email)
        if user is None:
            raise NotFound("User does not exist")

        if not verify_password(password, user.password):
            logger.warning("Failed login for user id=%s", user.id)
            raise Unauthorized("Invalid user credentials")

        pair = self._issue_pair(user)
        user = self.store.update_fields(user.id, refresh_token=pair.refresh_token)
        if user is None:
            raise NotFound("User does not exist")
        logger.info("User id=%s logged in", user.id)
        return LoginResult(
            user=user.to_public(),
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    def logout(self, user_id: int) -> None:
        self.store.update_fields(user_id, refresh_token=None)
        logger.info("User id=%s logged out", user_id)

    # -------------------------------
    # Refresh
    # -------------------------------

    def refresh_session(self, presented: str | None) -> TokenPair:
        if _blank(presented):
            raise Unauthorized("Unauthorized request")

        try:
            payload = self.tokens.verify_refresh_token(presented)
        except TokenError as e:
            raise Unauthorized("Invalid or expired refresh token") from e

        user = self.store.find_by_id(payload["id"])
        if user is None:
            raise Unauthorized("Invalid refresh token")

        stored = user.refresh_token or ""
        if not secrets.compare_digest(stored.encode(), presented.encode()):
            logger.warning("Refresh token reuse for user id=%s", user.id)
            raise Unauthorized("Refresh token is expired or used")

        pair = self._issue_pair(user)
        if not self.store.swap_refresh_token(user.id, expected=presented, new=pair.refresh_token):
            logger.warning("Concurrent refresh lost for user id=%s", user.id)
            raise Unauthorized("Refresh token is expired or used")

        logger.info("Rotated refresh token for user id=%s", user.id)
        return pair

    # -------------------------------
    # Password
    # -------------------------------

    def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        if _blank(new_password):
            raise ValidationError("New password is required")

        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFound("User does not exist")

        if not verify_password(old_password, user.password):
            raise Unauthorized("Invalid old password")

        self.store.update_fields(user_id, password=new_password)
        logger.info("Password changed for user id=%s", user_id)

    def _issue_pair(self, user) -> TokenPair:
        return TokenPair(
            access_token=self.tokens.create_access_token(user),
            refresh_token=self.tokens.create_refresh_token(user),
        )
