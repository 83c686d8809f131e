"""
Models module - SQLAlchemy ORM entities.

- User (+ Admin profile), Student (+ Skill, Experience), Company
- JobListing (+ JobSkill tags), Application
"""

from jobboard.models.enums import ApplicationStatus, JobLevel, LocationType, UserRole
from jobboard.models.user import Admin, User
from jobboard.models.student import Experience, Skill, Student
from jobboard.models.company import Company
from jobboard.models.job import JobListing, JobSkill
from jobboard.models.application import Application

__all__ = [
    "Admin",
    "Application",
    "ApplicationStatus",
    "Company",
    "Experience",
    "JobLevel",
    "JobListing",
    "JobSkill",
    "LocationType",
    "Skill",
    "Student",
    "User",
    "UserRole",
]
