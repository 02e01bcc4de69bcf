"""
Database models package.
"""

from app.models.company import Company
from app.models.job import Job
from app.models.user import User

__all__ = ["Company", "Job", "User"]
