"""
Services package containing the storage accessor and the domain logic built on it.
Includes the key-value stores, authentication, rating aggregation and catalogue helpers.
"""

from .kv_store import KeyValueStore, MemoryStore, SQLStore
from .storage import Storage
from .auth_service import AuthService, AuthResult, AuthError, CurrentSession
from .ratings import average_rating, format_rating, summarize_books, profile_summary

__all__ = [
    'KeyValueStore',
    'MemoryStore',
    'SQLStore',
    'Storage',
    'AuthService',
    'AuthResult',
    'AuthError',
    'CurrentSession',
    'average_rating',
    'format_rating',
    'summarize_books',
    'profile_summary',
]
