"""
Routes for listing, viewing, adding, editing and deleting books
"""

import logging
import uuid

from flask import Blueprint, request, jsonify, abort

from bookreviews.api.context import get_storage, get_session, json_body, login_required
from bookreviews.core.config import GENRES
from bookreviews.models.records import Book, utc_timestamp
from bookreviews.services.catalog import (
    ALL_GENRES,
    genre_options,
    search_books,
    validate_book_changes,
    validate_book_form,
)
from bookreviews.services.ratings import average_rating, format_rating, summarize_books

logger = logging.getLogger(__name__)

book_bp = Blueprint('books', __name__, url_prefix='/api/books')

def _owned_book(book_id):
    """Fetch a book the current user added; aborts with 404 or 403."""
    book = get_storage().get_book_by_id(book_id)
    if book is None:
        abort(404, description='Book not found')
    if book.added_by != get_session().user.id:
        abort(403, description='Only the person who added this book can change it')
    return book

@book_bp.route('', methods=['GET'])
def list_books():
    """List books filtered by the q and genre query parameters"""
    storage = get_storage()
    books = search_books(
        storage.list_books(),
        query=request.args.get('q', ''),
        genre=request.args.get('genre', ALL_GENRES)
    )
    summaries = summarize_books(books, storage.list_reviews())
    return jsonify({'books': [summary.to_dict() for summary in summaries]})

@book_bp.route('/genres', methods=['GET'])
def genres():
    return jsonify({
        'filters': genre_options(get_storage().list_books()),
        'suggested': GENRES
    })

@book_bp.route('/<book_id>', methods=['GET'])
def book_detail(book_id):
    """Book with its reviews and rating overview"""
    storage = get_storage()
    book = storage.get_book_by_id(book_id)
    if book is None:
        abort(404, description='Book not found')

    reviews = storage.get_reviews_by_book_id(book_id)
    user = get_session().user
    average = average_rating(reviews)
    return jsonify({
        'book': book.to_dict(),
        'reviews': [review.to_dict() for review in reviews],
        'reviewCount': len(reviews),
        'averageRating': average,
        'averageRatingDisplay': format_rating(average),
        'userHasReviewed': bool(user) and any(r.user_id == user.id for r in reviews),
        'canEdit': bool(user) and book.added_by == user.id
    })

@book_bp.route('', methods=['POST'])
@login_required
def add_book():
    form = validate_book_form(json_body())
    book = Book(
        id=f'book-{uuid.uuid4().hex}',
        added_by=get_session().user.id,
        date_added=utc_timestamp(),
        **form
    )
    get_storage().add_book(book)
    return jsonify({'book': book.to_dict()}), 201

@book_bp.route('/<book_id>', methods=['PATCH'])
@login_required
def edit_book(book_id):
    _owned_book(book_id)
    changes = validate_book_changes(json_body())
    book = get_storage().update_book(book_id, changes)
    if book is None:
        abort(404, description='Book not found')
    return jsonify({'book': book.to_dict()})

@book_bp.route('/<book_id>', methods=['DELETE'])
@login_required
def delete_book(book_id):
    """Delete a book together with its reviews"""
    _owned_book(book_id)
    get_storage().delete_book(book_id)
    return jsonify({'message': 'Book deleted'})
