"""
User model for authentication.

Users only exist to obtain tokens; is_admin unlocks the write endpoints for
companies and jobs.
"""

from sqlalchemy import Boolean, Column, String, Text
from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # bcrypt hash, never the plain password
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
