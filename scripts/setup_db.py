"""
Database setup script
"""

import sys
import logging
from pathlib import Path

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Add the parent directory to the Python path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from bookreviews import create_app
from bookreviews.api.context import get_storage

def setup_database():
    """Create the store table and seed any missing collection"""
    try:
        app = create_app()

        with app.app_context():
            storage = get_storage()
            storage.initialize_if_needed()
            logger.info(
                f"Store ready: {len(storage.list_users())} users, "
                f"{len(storage.list_books())} books, {len(storage.list_reviews())} reviews"
            )

    except Exception as e:
        logger.error(f"Database setup failed: {str(e)}")
        raise

def main():
    """Main entry point"""
    try:
        setup_database()
    except Exception as e:
        logger.error(f"Setup failed: {str(e)}")
        sys.exit(1)

if __name__ == "__main__":
    main()
