# vidtube/api/auth.py

from fastapi import APIRouter, Body, Cookie, Depends, File, Form, Header, Request, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from vidtube.config import Settings
from vidtube.core.authenticator import RequestAuthenticator, extract_token
from vidtube.core.media import MediaStore
from vidtube.core.sessions import RegisterRequest, SessionManager
from vidtube.core.store import CredentialStore
from vidtube.core.tokens import TokenIssuer


router = APIRouter(prefix="/api/v1/users", tags=["auth"])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# -------------------------------
# Request / Response Schemas
# -------------------------------

class LoginRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str = ""


class RefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(None, alias="refreshToken")


class ChangePasswordRequest(BaseModel):
    old_password: str = ""
    new_password: str = ""


def api_response(status_code: int, message: str, data=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "message": message,
            "data": data,
            "success": status_code < 400,
        },
    )


# -------------------------------
# Dependencies
# -------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request):
    yield from request.app.state.database.get_db()


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer(settings)


def get_session_manager(
    store: CredentialStore = Depends(get_store),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> SessionManager:
    return SessionManager(store, tokens)


def get_current_user(
    access_cookie: str | None = Cookie(None, alias=ACCESS_COOKIE),
    authorization: str | None = Header(None),
    store: CredentialStore = Depends(get_store),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> dict:
    token = extract_token(access_cookie, authorization)
    return RequestAuthenticator(store, tokens).authenticate(token)


def _cookie_options(settings: Settings) -> dict:
    return {"httponly": True, "secure": settings.cookie_secure, "samesite": "lax", "path": "/"}


def _set_session_cookies(resp: JSONResponse, settings: Settings, access_token: str, refresh_token: str):
    options = _cookie_options(settings)
    resp.set_cookie(
        ACCESS_COOKIE, access_token,
        max_age=int(settings.access_token_expiry.total_seconds()), **options
    )
    resp.set_cookie(
        REFRESH_COOKIE, refresh_token,
        max_age=int(settings.refresh_token_expiry.total_seconds()), **options
    )


# -------------------------------
# Authentication Endpoints
# -------------------------------

@router.post("/register")
def register(
    fullname: str | None = Form(None),
    username: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    cover_image: UploadFile | None = File(None, alias="coverImage"),
    sessions: SessionManager = Depends(get_session_manager),
    media: MediaStore = Depends(get_media_store),
):
    """
    Creates an account from multipart form data.
    The avatar upload is mandatory, the cover image is optional.
    """
    avatar_url = media.save(avatar, "avatars")
    cover_url = media.save(cover_image, "covers")
    try:
        user = sessions.register(RegisterRequest(
            fullname=fullname,
            username=username,
            email=email,
            password=password,
            avatar=avatar_url,
            cover_image=cover_url,
        ))
    except Exception:
        media.remove(avatar_url)
        media.remove(cover_url)
        raise
    return api_response(status.HTTP_201_CREATED, "User registered successfully", user)


@router.post("/login")
def login(
    req: LoginRequest,
    sessions: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
):
    result = sessions.login(req.password, username=req.username, email=req.email)
    resp = api_response(status.HTTP_200_OK, "User logged in successfully", {
        "user": result.user,
        "access_token": result.access_token,
        "refresh_token": result.refresh_token,
    })
    _set_session_cookies(resp, settings, result.access_token, result.refresh_token)
    return resp


@router.post("/logout")
def logout(
    current_user: dict = Depends(get_current_user),
    sessions: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
):
    sessions.logout(current_user["id"])
    resp = api_response(status.HTTP_200_OK, "User logged out", {})
    options = _cookie_options(settings)
    resp.delete_cookie(ACCESS_COOKIE, **options)
    resp.delete_cookie(REFRESH_COOKIE, **options)
    return resp


@router.post("/refresh-token")
def refresh_token(
    body: RefreshRequest | None = Body(None),
    refresh_cookie: str | None = Cookie(None, alias=REFRESH_COOKIE),
    sessions: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
):
    presented = (body.refresh_token if body else None) or refresh_cookie
    pair = sessions.refresh_session(presented)
    resp = api_response(status.HTTP_200_OK, "Access token refreshed", {
        "access_token": pair.access_token,
        "refresh_token": pair.refresh_token,
    })
    _set_session_cookies(resp, settings, pair.access_token, pair.refresh_token)
    return resp


@router.post("/change-password")
def change_password(
    req: ChangePasswordRequest,
    current_user: dict = Depends(get_current_user),
    sessions: SessionManager = Depends(get_session_manager),
):
    sessions.change_password(current_user["id"], req.old_password, req.new_password)
    return api_response(status.HTTP_200_OK, "Password changed successfully", {})
