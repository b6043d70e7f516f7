"""
ZenCure core library.

Relevance scoring, moderation and rating aggregation for the remedy-review
platform, together with the database, model and repository layers they run on.

Usage:
    # Database
    from zencure.db import db, get_db
    from zencure.models import Remedy, Review, Source

    # Services
    from zencure.services import remedy_service, review_service

    # Config / logging
    from zencure.config import get_settings
    from zencure.logging import get_logger
"""

__version__ = "1.0.0"
