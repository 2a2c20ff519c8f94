from __future__ import annotations

import pytest

from vidtube.core.channels import get_channel_profile, get_watch_history
from vidtube.core.store import CredentialStore
from vidtube.errors import NotFound, ValidationError
from vidtube.models import Subscription, Video, WatchHistory


def _user(store: CredentialStore, name: str):
    return store.create(
        fullname=name.title(),
        username=name,
        email=f"{name}@x.com",
        password="secret123",
        avatar=f"{name}.png",
    )


@pytest.fixture
def people(store: CredentialStore, db_session):
    ada, grace, alan = (_user(store, n) for n in ("ada", "grace", "alan"))
    db_session.add_all([
        Subscription(subscriber_id=grace.id, channel_id=ada.id),
        Subscription(subscriber_id=alan.id, channel_id=ada.id),
        Subscription(subscriber_id=ada.id, channel_id=grace.id),
    ])
    db_session.commit()
    return ada, grace, alan


def test_channel_profile_counts(db_session, people) -> None:
    ada, grace, alan = people
    profile = get_channel_profile(db_session, "ADA", viewer_id=grace.id)

    assert profile["username"] == "ada"
    assert profile["subscribers_count"] == 2
    assert profile["subscribed_to_count"] == 1
    assert profile["is_subscribed"] is True
    assert "password" not in profile


def test_channel_profile_for_non_subscriber(db_session, people) -> None:
    ada, grace, alan = people
    profile = get_channel_profile(db_session, "alan", viewer_id=ada.id)

    assert profile["subscribers_count"] == 0
    assert profile["subscribed_to_count"] == 1
    assert profile["is_subscribed"] is False


def test_channel_profile_errors(db_session, people) -> None:
    with pytest.raises(ValidationError):
        get_channel_profile(db_session, "  ")
    with pytest.raises(NotFound):
        get_channel_profile(db_session, "linus")


def test_watch_history_joins_owner(db_session, people) -> None:
    ada, grace, alan = people
    first = Video(video_file="v1.mp4", thumbnail="t1.png", title="engines",
                  description="analytical", duration=61.5, owner_id=ada.id)
    second = Video(video_file="v2.mp4", thumbnail="t2.png", title="compilers",
                   description="a-0", duration=120.0, owner_id=grace.id)
    db_session.add_all([first, second])
    db_session.flush()
    db_session.add_all([
        WatchHistory(user_id=alan.id, video_id=first.id),
        WatchHistory(user_id=alan.id, video_id=second.id),
    ])
    db_session.commit()

    history = get_watch_history(db_session, alan.id)

    assert [v["title"] for v in history] == ["engines", "compilers"]
    assert history[0]["owner"] == {"fullname": "Ada", "username": "ada", "avatar": "ada.png"}
    assert history[1]["owner"]["username"] == "grace"
    assert history[0]["views"] == 0


def test_empty_watch_history(db_session, people) -> None:
    ada, grace, alan = people
    assert get_watch_history(db_session, ada.id) == []
