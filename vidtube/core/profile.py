# vidtube/core/profile.py

from vidtube.core.store import CredentialStore
from vidtube.errors import NotFound, ValidationError


class ProfileService:
    """
    Edits to the current user's own account.
    Username and email are fixed at registration.
    """

    def __init__(self, store: CredentialStore):
        self.store = store

    def update_account_details(self, user_id: int, fullname: str | None) -> dict:
        if not fullname or not fullname.strip():
            raise ValidationError("Full name is required")
        return self._update(user_id, fullname=fullname.strip())

    def update_avatar(self, user_id: int, avatar_url: str | None) -> dict:
        if not avatar_url:
            raise ValidationError("Avatar file is missing")
        return self._update(user_id, avatar=avatar_url)

    def update_cover_image(self, user_id: int, cover_image_url: str | None) -> dict:
        if not cover_image_url:
            raise ValidationError("Cover image file is missing")
        return self._update(user_id, cover_image=cover_image_url)

    def _update(self, user_id: int, **fields) -> dict:
        user = self.store.update_fields(user_id, **fields)
        if user is None:
            raise NotFound("User does not exist")
        return user.to_public()
