"""
Services held by the application context
"""

import logging
from functools import wraps
from typing import Callable

from flask import abort, current_app, jsonify, request

from bookreviews.services.auth_service import AuthService, CurrentSession
from bookreviews.services.kv_store import SQLStore
from bookreviews.services.storage import Storage

logger = logging.getLogger(__name__)

def init_services(app):
    """Build the accessor and restore the persisted session; needs an app context."""
    storage = Storage(SQLStore())
    session = CurrentSession(storage)
    session.load()

    app.storage = storage
    app.current_session = session
    app.auth_service = AuthService(storage, session)
    logger.info("Book review services initialized")

def get_storage() -> Storage:
    return current_app.storage

def get_session() -> CurrentSession:
    return current_app.current_session

def get_auth_service() -> AuthService:
    return current_app.auth_service

def json_body() -> dict:
    """Request body as a dict; an empty body reads as {}, anything but an object is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Rejected request body of type {type(data).__name__}")
        abort(400, description='Request body must be a JSON object')
    return data

def login_required(f: Callable) -> Callable:
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_session().is_authenticated:
            return jsonify({'error': 'Please login to continue'}), 401
        return f(*args, **kwargs)
    return decorated_function
