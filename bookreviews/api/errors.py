"""
Error handlers mapping domain exceptions to JSON responses
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from bookreviews.services.errors import (
    ConcurrentModification,
    IntegrityError,
    InvalidReference,
    StoreCorrupt,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

def register_error_handlers(app):
    @app.errorhandler(ValidationFailed)
    def handle_validation(e):
        return jsonify({'error': str(e), 'fields': e.errors}), 400

    @app.errorhandler(InvalidReference)
    def handle_invalid_reference(e):
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(IntegrityError)
    def handle_integrity(e):
        return jsonify({'error': str(e)}), 409

    @app.errorhandler(ConcurrentModification)
    def handle_conflict(e):
        logger.warning(f"Write rejected: {e}")
        return jsonify({'error': 'The data changed while you were editing. Please reload and try again.'}), 409

    @app.errorhandler(StoreCorrupt)
    def handle_corrupt(e):
        logger.error(f"Store corruption: {e}", exc_info=True)
        return jsonify({'error': 'Stored data is corrupt and cannot be read.'}), 500

    @app.errorhandler(HTTPException)
    def handle_http(e):
        return jsonify({'error': e.description}), e.code
