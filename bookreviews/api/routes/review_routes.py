"""
Routes for posting, editing and deleting reviews
"""

import logging
import uuid

from flask import Blueprint, jsonify, abort

from bookreviews.api.context import get_storage, get_session, json_body, login_required
from bookreviews.models.records import Review, utc_timestamp
from bookreviews.services.catalog import validate_review_changes, validate_review_form

logger = logging.getLogger(__name__)

review_bp = Blueprint('reviews', __name__, url_prefix='/api')

def _owned_review(review_id):
    review = get_storage().get_review_by_id(review_id)
    if review is None:
        abort(404, description='Review not found')
    if review.user_id != get_session().user.id:
        abort(403, description='You can only change your own reviews')
    return review

@review_bp.route('/books/<book_id>/reviews', methods=['POST'])
@login_required
def add_review(book_id):
    """Post the current user's review of a book"""
    storage = get_storage()
    if storage.get_book_by_id(book_id) is None:
        abort(404, description='Book not found')

    data = json_body()
    form = validate_review_form(data.get('rating'), data.get('reviewText'))
    user = get_session().user
    review = Review(
        id=f'review-{uuid.uuid4().hex}',
        book_id=book_id,
        user_id=user.id,
        user_name=user.name,
        date=utc_timestamp(),
        **form
    )
    storage.add_review(review)
    return jsonify({'review': review.to_dict()}), 201

@review_bp.route('/reviews/<review_id>', methods=['PATCH'])
@login_required
def edit_review(review_id):
    _owned_review(review_id)
    changes = validate_review_changes(json_body())
    review = get_storage().update_review(review_id, changes)
    if review is None:
        abort(404, description='Review not found')
    return jsonify({'review': review.to_dict()})

@review_bp.route('/reviews/<review_id>', methods=['DELETE'])
@login_required
def delete_review(review_id):
    _owned_review(review_id)
    get_storage().delete_review(review_id)
    return jsonify({'message': 'Review deleted'})
