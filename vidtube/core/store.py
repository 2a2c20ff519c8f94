# vidtube/core/store.py

import logging

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vidtube.errors import Conflict, InternalError
from vidtube.models.user import User


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"fullname", "avatar", "cover_image", "password", "refresh_token"}


def normalize(value: str | None) -> str:
    return (value or "").strip().lower()


class CredentialStore:
    """
    User persistence on top of one SQLAlchemy session.
    Username and email are kept lower-cased, so lookups are case-insensitive.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == normalize(username)).first()

    def find_by_username_or_email(self, username: str | None = None, email: str | None = None) -> User | None:
        clauses = []
        if normalize(username):
            clauses.append(User.username == normalize(username))
        if normalize(email):
            clauses.append(User.email == normalize(email))
        if not clauses:
            return None
        return self.db.query(User).filter(or_(*clauses)).first()

    def create(self, **fields) -> User:
        fields["username"] = normalize(fields.get("username"))
        fields["email"] = normalize(fields.get("email"))
        user = User(**fields)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # lost a race against a concurrent registration
            self.db.rollback()
            raise Conflict("User with email or username already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("User store write failed")
            raise InternalError() from e
        self.db.refresh(user)
        return user

    def update_fields(self, user_id: int, **fields) -> User | None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"fields not updatable: {sorted(unknown)}")
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for name, value in fields.items():
            setattr(user, name, value)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("User store write failed")
            raise InternalError() from e
        self.db.refresh(user)
        return user

    def swap_refresh_token(self, user_id: int, expected: str, new: str | None) -> bool:
        """
        Replaces the stored refresh token only if it still equals `expected`.
        Returns False when another writer got there first.
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("User store write failed")
            raise InternalError() from e
        return result.rowcount == 1
