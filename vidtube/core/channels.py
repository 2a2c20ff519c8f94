# vidtube/core/channels.py

from sqlalchemy import func
from sqlalchemy.orm import Session

from vidtube.core.store import normalize
from vidtube.errors import NotFound, ValidationError
from vidtube.models import Subscription, User, Video, WatchHistory


def _count(db: Session, *criteria) -> int:
    return db.query(func.count(Subscription.id)).filter(*criteria).scalar() or 0


def get_channel_profile(db: Session, username: str, viewer_id: int | None = None) -> dict:
    """
    Public profile of a channel with its subscription counts.
    `is_subscribed` tells whether the viewer follows this channel.
    """
    if not username or not username.strip():
        raise ValidationError("Username is missing")

    channel = db.query(User).filter(User.username == normalize(username)).first()
    if channel is None:
        raise NotFound("Channel does not exist")

    is_subscribed = False
    if viewer_id is not None:
        is_subscribed = _count(
            db,
            Subscription.channel_id == channel.id,
            Subscription.subscriber_id == viewer_id,
        ) > 0

    return {
        "id": channel.id,
        "fullname": channel.fullname,
        "username": channel.username,
        "email": channel.email,
        "avatar": channel.avatar,
        "cover_image": channel.cover_image or "",
        "subscribers_count": _count(db, Subscription.channel_id == channel.id),
        "subscribed_to_count": _count(db, Subscription.subscriber_id == channel.id),
        "is_subscribed": is_subscribed,
    }


def get_watch_history(db: Session, user_id: int) -> list[dict]:
    """
    Videos the user watched, oldest first, each with its owner's public fields.
    """
    rows = (
        db.query(Video, User)
        .join(WatchHistory, WatchHistory.video_id == Video.id)
        .outerjoin(User, User.id == Video.owner_id)
        .filter(WatchHistory.user_id == user_id)
        .order_by(WatchHistory.watched_at, WatchHistory.id)
        .all()
    )

    history = []
    for video, owner in rows:
        history.append({
            "id": video.id,
            "title": video.title,
            "description": video.description,
            "video_file": video.video_file,
            "thumbnail": video.thumbnail,
            "duration": video.duration,
            "views": video.views,
            "owner": {
                "fullname": owner.fullname,
                "username": owner.username,
                "avatar": owner.avatar,
            } if owner else None,
        })
    return history
