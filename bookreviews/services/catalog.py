"""
Catalogue search and form validation used by the views
"""

from typing import Dict, Iterable, List

from bookreviews.core.config import DEFAULT_COVER_IMAGE, VALIDATION
from bookreviews.models.records import Book
from .errors import ValidationFailed

ALL_GENRES = 'all'

def search_books(books: Iterable[Book], query: str = '', genre: str = ALL_GENRES) -> List[Book]:
    """Books whose title, author or description contains query (case-insensitive)."""
    needle = (query or '').lower()
    genre = genre or ALL_GENRES
    matches = []
    for book in books:
        matches_search = (
            needle in book.title.lower()
            or needle in book.author.lower()
            or needle in book.description.lower()
        )
        matches_genre = genre == ALL_GENRES or book.genre == genre
        if matches_search and matches_genre:
            matches.append(book)
    return matches

def genre_options(books: Iterable[Book]) -> List[str]:
    """'all' followed by each distinct genre in first-seen order."""
    options = [ALL_GENRES]
    for book in books:
        if book.genre not in options:
            options.append(book.genre)
    return options

def _text(data: Dict, name: str) -> str:
    value = data.get(name)
    return value.strip() if isinstance(value, str) else ''

def validate_book_form(data: Dict) -> Dict[str, str]:
    """
    Check the add-book form and return cleaned field values.

    Args:
        data: title, author, genre, description and optional coverImage

    Returns:
        Dict keyed by Book attribute names

    Raises:
        ValidationFailed: with one message per offending field
    """
    cleaned = {
        'title': _text(data, 'title'),
        'author': _text(data, 'author'),
        'genre': _text(data, 'genre'),
        'description': _text(data, 'description'),
        'cover_image': _text(data, 'coverImage') or DEFAULT_COVER_IMAGE,
    }
    errors = {}
    for name, label in (('title', 'Book title'), ('author', 'Author'),
                        ('genre', 'Genre'), ('description', 'Description')):
        if not cleaned[name]:
            errors[name] = f'{label} is required'

    min_length = VALIDATION['MIN_DESCRIPTION_LENGTH']
    if cleaned['description'] and len(cleaned['description']) < min_length:
        errors['description'] = f'Description must be at least {min_length} characters'

    if errors:
        raise ValidationFailed(errors)
    return cleaned

def validate_book_changes(data: Dict) -> Dict[str, str]:
    """Validate a partial book edit; only the supplied fields are checked."""
    field_names = {
        'title': 'title',
        'author': 'author',
        'genre': 'genre',
        'description': 'description',
        'coverImage': 'cover_image',
    }
    unknown = [name for name in data if name not in field_names]
    if unknown:
        raise ValidationFailed({name: f'Unknown field: {name}' for name in unknown})

    changes, errors = {}, {}
    for name, attr in field_names.items():
        if name not in data:
            continue
        value = _text(data, name)
        if not value and name != 'coverImage':
            errors[name] = f'{name} cannot be empty'
        changes[attr] = value or DEFAULT_COVER_IMAGE

    min_length = VALIDATION['MIN_DESCRIPTION_LENGTH']
    if 'description' in changes and 'description' not in errors \
            and len(changes['description']) < min_length:
        errors['description'] = f'Description must be at least {min_length} characters'

    if errors:
        raise ValidationFailed(errors)
    return changes

def validate_review_form(rating, review_text) -> Dict:
    """Check a rating and review text; returns the cleaned values."""
    errors = {}
    low, high = VALIDATION['MIN_RATING'], VALIDATION['MAX_RATING']
    if isinstance(rating, bool) or not isinstance(rating, int) or not low <= rating <= high:
        errors['rating'] = 'Please select a rating'

    text = review_text.strip() if isinstance(review_text, str) else ''
    if len(text) < VALIDATION['MIN_REVIEW_LENGTH']:
        errors['reviewText'] = f"Review must be at least {VALIDATION['MIN_REVIEW_LENGTH']} characters"

    if errors:
        raise ValidationFailed(errors)
    return {'rating': rating, 'review_text': text}

def validate_review_changes(data: Dict) -> Dict:
    """Validate a partial review edit of rating and/or reviewText."""
    unknown = [name for name in data if name not in ('rating', 'reviewText')]
    if unknown:
        raise ValidationFailed({name: f'Unknown field: {name}' for name in unknown})
    if not data:
        return {}

    # fill the missing side with a passing value so only supplied fields are judged
    rating = data.get('rating', VALIDATION['MAX_RATING'])
    text = data.get('reviewText', 'x' * VALIDATION['MIN_REVIEW_LENGTH'])
    cleaned = validate_review_form(rating, text)
    return {
        attr: cleaned[attr]
        for name, attr in (('rating', 'rating'), ('reviewText', 'review_text'))
        if name in data
    }

def validate_signup_form(data: Dict) -> Dict[str, str]:
    cleaned = {
        'email': _text(data, 'email'),
        'password': data.get('password') if isinstance(data.get('password'), str) else '',
        'name': _text(data, 'name'),
    }
    errors = {name: f'{name.capitalize()} is required' for name, value in cleaned.items() if not value}
    if errors:
        raise ValidationFailed(errors)
    return cleaned
