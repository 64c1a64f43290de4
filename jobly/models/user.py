"""
User model for authentication and job applications.
"""

from sqlalchemy import Boolean, Column, String, Text, false
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    """
    User account, identified by username.

    Admins can manage companies, jobs and other users.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # Authentication credentials (bcrypt hash)
    password = Column(Text, nullable=False)

    # User profile
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)

    is_admin = Column(Boolean, nullable=False, server_default=false())

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
