import enum
from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """
    Application progress.

    - INTERESTED: User bookmarked the job
    - APPLIED: User applied to the job
    - ACCEPTED: Company accepted the application
    - REJECTED: Company rejected the application
    """
    INTERESTED = "interested"
    APPLIED = "applied"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(Base):
    """
    Association between a user and a job they applied to.
    """
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)
    status = Column(Text, nullable=False, default=ApplicationStatus.APPLIED.value)

    # Relationships
    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id}, status='{self.status}')>"
