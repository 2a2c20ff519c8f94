# vidtube/models/user.py

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship, validates
from . import Base
from vidtube.core.security import hash_password


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for application users.
    Stores identity, the password hash, the single active refresh token
    and references to externally stored media.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    fullname = Column(String, index=True, nullable=False)
    avatar = Column(String, nullable=False)
    cover_image = Column(String, nullable=False, default="")
    password = Column("password_hash", String, nullable=False)
    refresh_token = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    videos = relationship("Video", back_populates="owner")

    @validates("password")
    def _hash_password(self, key, value):
        # every assignment is a new plaintext; rows loaded from the db skip this
        if not value:
            return value
        return hash_password(value)

    def to_public(self) -> dict:
        """Sanitized view: never includes the password hash or refresh token."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "fullname": self.fullname,
            "avatar": self.avatar,
            "cover_image": self.cover_image or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

