"""
Database configuration and session management
"""

import logging

from bookreviews import db

logger = logging.getLogger(__name__)

def init_db():
    """Initialize the database, creating all tables"""
    from bookreviews.models.store_entry import StoreEntry  # noqa: F401  registers the table
    db.create_all()
    logger.debug("Database tables ensured")

def reset_db():
    """Drop and recreate every table"""
    from bookreviews.models.store_entry import StoreEntry  # noqa: F401
    db.drop_all()
    db.create_all()
    logger.info("Database tables recreated")

def shutdown_session(exception=None):
    """Remove the session at the end of request"""
    db.session.remove()
