"""
Core package initialization.
"""

from .config import DATABASE, STORAGE, VALIDATION, GENRES, LOGGING

__all__ = ['DATABASE', 'STORAGE', 'VALIDATION', 'GENRES', 'LOGGING']
