"""
Profile route for the signed-in user
"""

from flask import Blueprint, jsonify

from bookreviews.api.context import get_storage, get_session, login_required
from bookreviews.services.ratings import profile_summary

profile_bp = Blueprint('profile', __name__, url_prefix='/api')

@profile_bp.route('/profile', methods=['GET'])
@login_required
def profile():
    """Reviews written, average rating given and books added"""
    summary = profile_summary(get_storage(), get_session().user)
    return jsonify(summary.to_dict())
