from db.models.application import Application
from db.models.company import Company
from db.models.job import Job
from db.models.user import User

__all__ = ["Application", "Company", "Job", "User"]
