"""
Job Board
A backend where students and companies meet through job listings.

Architecture:
- FastAPI routes delegate to services in jobboard.services
- SQLAlchemy models in jobboard.models, pydantic schemas in jobboard.schemas
- JWT sessions and role checks in jobboard.core
"""

__version__ = "1.0.0"
