"""
Routes for signing up, logging in and out
"""

import logging

from flask import Blueprint, jsonify

from bookreviews.api.context import get_auth_service, get_session, json_body
from bookreviews.services.auth_service import AuthError
from bookreviews.services.catalog import validate_signup_form

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

# Status code for each discriminated auth failure
FAILURE_STATUS = {
    AuthError.NOT_FOUND: 404,
    AuthError.INVALID_CREDENTIALS: 401,
    AuthError.DUPLICATE_EMAIL: 409,
}

def _auth_response(result, success_status=200):
    if not result.success:
        return jsonify({'error': result.message}), FAILURE_STATUS[result.error]
    return jsonify({'user': result.user.public_dict()}), success_status

@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create an account and start a session for it"""
    form = validate_signup_form(json_body())
    result = get_auth_service().signup(form['email'], form['password'], form['name'])
    return _auth_response(result, success_status=201)

@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    result = get_auth_service().login(data.get('email', ''), data.get('password', ''))
    return _auth_response(result)

@auth_bp.route('/logout', methods=['POST'])
def logout():
    get_auth_service().logout()
    return jsonify({'message': 'Logged out'})

@auth_bp.route('/me', methods=['GET'])
def me():
    """Return the signed-in user, or null"""
    user = get_session().user
    return jsonify({'user': user.public_dict() if user else None})
