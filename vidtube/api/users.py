# vidtube/api/users.py

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from vidtube.api.auth import (
    api_response,
    get_current_user,
    get_db,
    get_media_store,
    get_store,
)
from vidtube.core.channels import get_channel_profile, get_watch_history
from vidtube.core.media import MediaStore
from vidtube.core.profile import ProfileService
from vidtube.core.store import CredentialStore


router = APIRouter(prefix="/api/v1/users", tags=["users"])


class UpdateAccountRequest(BaseModel):
    fullname: str | None = None


def get_profile_service(store: CredentialStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)


# -------------------------------
# Account Endpoints
# -------------------------------

@router.get("/current-user")
def current_user(user: dict = Depends(get_current_user)):
    return api_response(status.HTTP_200_OK, "Current user fetched successfully", user)


@router.patch("/update-account")
def update_account(
    req: UpdateAccountRequest,
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    updated = profiles.update_account_details(user["id"], req.fullname)
    return api_response(status.HTTP_200_OK, "Account details updated successfully", updated)


def _replace_media(upload, kind, field, update, user, media: MediaStore):
    new_url = media.save(upload, kind)
    try:
        updated = update(user["id"], new_url)
    except Exception:
        media.remove(new_url)
        raise
    media.remove(user.get(field))
    return updated


@router.patch("/avatar")
def update_avatar(
    avatar: UploadFile | None = File(None),
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
    media: MediaStore = Depends(get_media_store),
):
    updated = _replace_media(avatar, "avatars", "avatar", profiles.update_avatar, user, media)
    return api_response(status.HTTP_200_OK, "Avatar updated successfully", updated)


@router.patch("/cover-image")
def update_cover_image(
    cover_image: UploadFile | None = File(None, alias="coverImage"),
    user: dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
    media: MediaStore = Depends(get_media_store),
):
    updated = _replace_media(cover_image, "covers", "cover_image", profiles.update_cover_image, user, media)
    return api_response(status.HTTP_200_OK, "Cover image updated successfully", updated)


# -------------------------------
# Channel Endpoints
# -------------------------------

@router.get("/c/{username}")
def channel_profile(
    username: str,
    user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    profile = get_channel_profile(db, username, viewer_id=user["id"])
    return api_response(status.HTTP_200_OK, "Channel fetched successfully", profile)


@router.get("/history")
def watch_history(
    user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    history = get_watch_history(db, user["id"])
    return api_response(status.HTTP_200_OK, "Watch history fetched successfully", history)
