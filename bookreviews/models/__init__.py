"""
Record types and database models.
"""

from .records import User, Book, Review, utc_timestamp

__all__ = ['User', 'Book', 'Review', 'utc_timestamp']
