"""
Database reset script.
This script drops the key-value store, recreates it and reloads the sample data.
"""

import sys
import logging
from pathlib import Path

# Add the parent directory to the Python path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from bookreviews import create_app
from bookreviews.api.context import get_storage
from bookreviews.models.database import reset_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def init_db():
    """Reset the store to the sample data, ending any session."""
    app = create_app()

    with app.app_context():
        try:
            reset_db()
            storage = get_storage()
            storage.initialize_if_needed()
            app.current_session.user = None
            logger.info("Sample data loaded successfully")
        except Exception as e:
            logger.error(f"Database initialization failed: {str(e)}")
            raise

if __name__ == '__main__':
    init_db()
