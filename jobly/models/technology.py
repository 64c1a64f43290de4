"""
Technologies and the jobs/users that use them.

Jobs are matched to users through the technologies they share.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from jobly.core.database import Base


jobs_technologies = Table(
    "jobs_technologies",
    Base.metadata,
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("tech_id", Integer, ForeignKey("technologies.id", ondelete="CASCADE"), primary_key=True),
)

users_technologies = Table(
    "users_technologies",
    Base.metadata,
    Column("username", String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True),
    Column("tech_id", Integer, ForeignKey("technologies.id", ondelete="CASCADE"), primary_key=True),
)


class Technology(Base):
    """A technology such as a language or framework"""
    __tablename__ = "technologies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, unique=True, nullable=False)

    def __repr__(self):
        return f"<Technology(id={self.id}, name='{self.name}')>"
