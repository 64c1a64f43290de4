"""
Database models package.
"""

from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.user import User
from jobly.models.application import Application, ApplicationStatus
from jobly.models.technology import Technology, jobs_technologies, users_technologies

__all__ = [
    "Company",
    "Job",
    "User",
    "Application",
    "ApplicationStatus",
    "Technology",
    "jobs_technologies",
    "users_technologies",
]
