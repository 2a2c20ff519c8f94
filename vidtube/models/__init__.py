# vidtube/models/__init__.py

from sqlalchemy.orm import declarative_base


Base = declarative_base()


from .user import User  # noqa: E402
from .video import Video, Subscription, WatchHistory  # noqa: E402

__all__ = ["Base", "User", "Video", "Subscription", "WatchHistory"]
