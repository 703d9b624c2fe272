"""
Database models package.

The models define the tables; services query them with SQL through
app.core.database.Database.
"""

from app.models.company import Company
from app.models.job import Job
from app.models.user import User
from app.models.application import Application

__all__ = ["Company", "Job", "User", "Application"]
