"""
Core configuration settings for the application.
"""

import os
import logging
import logging.config
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

@dataclass(frozen=True)
class StorageSettings:
    """Keys under which the collections and the session live in the store"""
    users_key: str = 'users'
    books_key: str = 'books'
    reviews_key: str = 'reviews'
    session_key: str = 'currentUser'

# Database settings
DATABASE = {
    'default': {
        'URL': os.getenv(
            'BOOKREVIEWS_DATABASE_URL',
            f'sqlite:///{os.path.join(BASE_DIR, "data", "bookreviews.db")}'
        ),
        'ECHO': os.getenv('SQL_ECHO', 'False').lower() == 'true'
    }
}

STORAGE = StorageSettings()

# Form limits shared by the views and the accessor
VALIDATION = {
    'MIN_RATING': 1,
    'MAX_RATING': 5,
    'MIN_REVIEW_LENGTH': 10,
    'MIN_DESCRIPTION_LENGTH': 50,
}

GENRES = [
    'Classic Fiction',
    'Mystery Thriller',
    'Science Fiction',
    'Fantasy',
    'Romance',
    'Historical Fiction',
    'Horror',
    'Dystopian Fiction',
    'Literary Fiction',
    'Contemporary Fiction',
    'Biography',
    'Self-Help',
    'Non-Fiction',
    'Poetry',
    'Young Adult'
]

DEFAULT_COVER_IMAGE = (
    'https://images.unsplash.com/photo-1652305489491-789257d2e95c?crop=entropy&cs=tinysrgb'
    '&fit=max&fm=jpg&ixid=M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxib29rJTIwbGlicmFyeSUyMHJlYWRpbmd8'
    'ZW58MXx8fHwxNzU5NTgzOTEwfDA&ixlib=rb-4.1.0&q=80&w=1080'
)

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Logging configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s][%(name)s:%(lineno)d] %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s [%(levelname)s][%(name)s:%(funcName)s:%(lineno)d] %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stdout'
        }
    },
    'loggers': {
        '': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True
        },
        'bookreviews': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False
        },
        'sqlalchemy': {'level': 'WARNING'},
        'werkzeug': {'level': 'WARNING'}
    }
}

def configure_logging():
    """Apply the LOGGING dictionary to the logging module."""
    logging.config.dictConfig(LOGGING)
    logger.debug(f"Logging configured at level {LOG_LEVEL}")
