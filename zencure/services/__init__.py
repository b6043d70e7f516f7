"""
Domain services for ZenCure.

Each module exposes plain functions taking a SQLAlchemy session first. They
raise ``zencure.exceptions.ServiceError`` subclasses for business failures and
leave committing to the caller.
"""

from . import (
    admin_service,
    aggregation_service,
    auth_service,
    comment_service,
    remedy_service,
    review_service,
)
from .pagination import Page

__all__ = [
    "Page",
    "admin_service",
    "aggregation_service",
    "auth_service",
    "comment_service",
    "remedy_service",
    "review_service",
]
