# vidtube/database.py

from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vidtube.config import Settings
from vidtube.models import Base


class Database:
    """
    Owns the engine and session factory for one application instance.
    """

    def __init__(self, settings: Settings):
        url = make_url(settings.database_url)
        kwargs = {}
        if url.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": settings.db_timeout,
            }
            if url.database in (None, "", ":memory:"):
                # one shared connection, otherwise every session sees an empty db
                kwargs["poolclass"] = StaticPool
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        else:
            kwargs["pool_timeout"] = settings.db_timeout

        self.engine = create_engine(settings.database_url, **kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def init_db(self):
        Base.metadata.create_all(bind=self.engine)

    def get_db(self):
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()
