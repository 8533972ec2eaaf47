"""
Persistence accessor for users, books and reviews.

Each collection is kept as one JSON array under a fixed key of a
KeyValueStore. Every operation reads the whole collection, and every write
replaces it, carrying the version it read so that a concurrent writer is
detected instead of silently overwritten.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple, Type

from bookreviews.core.config import STORAGE, VALIDATION, StorageSettings
from bookreviews.models.records import Record, User, Book, Review
from .errors import (
    ConcurrentModification,
    DuplicateEmail,
    DuplicateRecord,
    DuplicateReview,
    InvalidReference,
    StoreCorrupt,
    ValidationFailed,
)
from .kv_store import KeyValueStore
from .sample_data import sample_users, sample_books, sample_reviews

logger = logging.getLogger(__name__)

class Storage:
    """Synchronous CRUD over the three collections plus the session slot."""

    def __init__(self, store: KeyValueStore, settings: StorageSettings = STORAGE):
        self.store = store
        self.settings = settings
        self._keys = {
            User: settings.users_key,
            Book: settings.books_key,
            Review: settings.reviews_key,
        }

    # ------------------------------------------------------------------
    # Encoding

    @staticmethod
    def _encode(records: List[Record]) -> str:
        return json.dumps([record.to_dict() for record in records])

    @staticmethod
    def _decode_json(key: str, text: str):
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error(f"Cannot decode stored value for '{key}': {e}")
            raise StoreCorrupt(key, str(e)) from e

    def _decode(self, key: str, text: str, record_cls: Type[Record]) -> List[Record]:
        payload = self._decode_json(key, text)
        if not isinstance(payload, list):
            logger.error(f"Stored value for '{key}' is not a list")
            raise StoreCorrupt(key, 'expected a list of records')
        try:
            return [record_cls.from_dict(item) for item in payload]
        except (KeyError, TypeError) as e:
            logger.error(f"Malformed record under '{key}': {e}")
            raise StoreCorrupt(key, f'malformed record: {e}') from e

    # ------------------------------------------------------------------
    # Seeding

    def initialize_if_needed(self):
        """Write the sample collections under every key that is entirely absent."""
        seeds = (
            (self.settings.books_key, sample_books),
            (self.settings.reviews_key, sample_reviews),
            (self.settings.users_key, sample_users),
        )
        for key, factory in seeds:
            if self.store.read(key) is not None:
                continue
            try:
                self.store.write({key: self._encode(factory())}, expected={key: 0})
                logger.info(f"Seeded '{key}' with sample data")
            except ConcurrentModification:
                logger.debug(f"'{key}' was seeded by another writer")

    # ------------------------------------------------------------------
    # Collection plumbing

    def _load(self, record_cls: Type[Record]) -> Tuple[List[Record], int]:
        self.initialize_if_needed()
        key = self._keys[record_cls]
        stored = self.store.read(key)
        if stored is None:
            return [], 0
        return self._decode(key, stored.value, record_cls), stored.version

    def _save(self, record_cls: Type[Record], records: List[Record], version: int):
        key = self._keys[record_cls]
        self.store.write({key: self._encode(records)}, expected={key: version})

    def _append(self, record_cls: Type[Record], record: Record):
        records, version = self._load(record_cls)
        if any(existing.id == record.id for existing in records):
            raise DuplicateRecord(self._keys[record_cls], record.id)
        records.append(record)
        self._save(record_cls, records, version)
        logger.info(f"Added {record!r}")
        return record

    def _update(self, record_cls: Type[Record], record_id: str, fields: Dict, check=None):
        records, version = self._load(record_cls)
        for index, record in enumerate(records):
            if record.id != record_id:
                continue
            self._check_update_fields(record_cls, fields)
            if check is not None:
                check(fields)
            updated = record.merged(fields)
            records[index] = updated
            self._save(record_cls, records, version)
            logger.info(f"Updated {updated!r} fields={sorted(fields)}")
            return updated
        logger.debug(f"No {record_cls.__name__} with id '{record_id}' to update")
        return None

    @staticmethod
    def _check_update_fields(record_cls: Type[Record], fields: Dict):
        errors = {}
        known = record_cls.attribute_names()
        for name in fields:
            if name not in known:
                errors[name] = f'Unknown field: {name}'
            elif name in record_cls.IMMUTABLE:
                errors[name] = f'{name} cannot be changed'
        if errors:
            raise ValidationFailed(errors)
        if 'rating' in fields:
            Storage._check_rating(fields['rating'])

    @staticmethod
    def _check_rating(rating):
        low, high = VALIDATION['MIN_RATING'], VALIDATION['MAX_RATING']
        if isinstance(rating, bool) or not isinstance(rating, int) or not low <= rating <= high:
            raise ValidationFailed({'rating': f'Rating must be a whole number from {low} to {high}'})

    # ------------------------------------------------------------------
    # Users

    def list_users(self) -> List[User]:
        return self._load(User)[0]

    def add_user(self, user: User) -> User:
        if self.find_user_by_email(user.email) is not None:
            logger.warning(f"Rejected user with registered email '{user.email}'")
            raise DuplicateEmail(user.email)
        return self._append(User, user)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.email == email), None)

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.id == user_id), None)

    # ------------------------------------------------------------------
    # Books

    def list_books(self) -> List[Book]:
        return self._load(Book)[0]

    def add_book(self, book: Book) -> Book:
        if self.find_user_by_id(book.added_by) is None:
            raise InvalidReference('addedBy', book.added_by)
        return self._append(Book, book)

    def get_book_by_id(self, book_id: str) -> Optional[Book]:
        return next((b for b in self.list_books() if b.id == book_id), None)

    def update_book(self, book_id: str, fields: Dict) -> Optional[Book]:
        return self._update(Book, book_id, fields, check=self._check_added_by)

    def _check_added_by(self, fields: Dict):
        if 'added_by' in fields and self.find_user_by_id(fields['added_by']) is None:
            raise InvalidReference('addedBy', fields['added_by'])

    def delete_book(self, book_id: str) -> bool:
        """
        Remove a book and every review that points at it in one write.

        Reviews left behind by an earlier removal of the same id are swept as
        well, but the result only reports whether a book record was removed.
        """
        books, books_version = self._load(Book)
        reviews, reviews_version = self._load(Review)
        remaining_books = [b for b in books if b.id != book_id]
        remaining_reviews = [r for r in reviews if r.book_id != book_id]

        removed = len(remaining_books) != len(books)
        cascaded = len(reviews) - len(remaining_reviews)
        if not removed and not cascaded:
            logger.debug(f"No book with id '{book_id}' to delete")
            return False

        books_key, reviews_key = self._keys[Book], self._keys[Review]
        self.store.write(
            {
                books_key: self._encode(remaining_books),
                reviews_key: self._encode(remaining_reviews),
            },
            expected={books_key: books_version, reviews_key: reviews_version},
        )
        logger.info(f"Deleted book '{book_id}' and {cascaded} review(s)")
        return removed

    # ------------------------------------------------------------------
    # Reviews

    def list_reviews(self) -> List[Review]:
        return self._load(Review)[0]

    def add_review(self, review: Review) -> Review:
        self._check_rating(review.rating)
        if self.get_book_by_id(review.book_id) is None:
            raise InvalidReference('bookId', review.book_id)
        if self.find_user_by_id(review.user_id) is None:
            raise InvalidReference('userId', review.user_id)
        if any(r.user_id == review.user_id for r in self.get_reviews_by_book_id(review.book_id)):
            logger.warning(f"Rejected second review of '{review.book_id}' by '{review.user_id}'")
            raise DuplicateReview(review.user_id, review.book_id)
        return self._append(Review, review)

    def get_review_by_id(self, review_id: str) -> Optional[Review]:
        return next((r for r in self.list_reviews() if r.id == review_id), None)

    def get_reviews_by_book_id(self, book_id: str) -> List[Review]:
        return [r for r in self.list_reviews() if r.book_id == book_id]

    def get_reviews_by_user_id(self, user_id: str) -> List[Review]:
        return [r for r in self.list_reviews() if r.user_id == user_id]

    def update_review(self, review_id: str, fields: Dict) -> Optional[Review]:
        return self._update(Review, review_id, fields)

    def delete_review(self, review_id: str) -> bool:
        reviews, version = self._load(Review)
        remaining = [r for r in reviews if r.id != review_id]
        if len(remaining) == len(reviews):
            logger.debug(f"No review with id '{review_id}' to delete")
            return False
        self._save(Review, remaining, version)
        logger.info(f"Deleted review '{review_id}'")
        return True

    # ------------------------------------------------------------------
    # Session slot

    def set_current_session(self, user: Optional[User]):
        """Persist the current user, or remove the session key entirely."""
        key = self.settings.session_key
        if user is None:
            self.store.remove_item(key)
        else:
            self.store.set_item(key, json.dumps(user.to_dict()))

    def get_current_session(self) -> Optional[User]:
        key = self.settings.session_key
        text = self.store.get_item(key)
        if text is None:
            return None
        payload = self._decode_json(key, text)
        try:
            return User.from_dict(payload)
        except (KeyError, TypeError) as e:
            logger.error(f"Malformed session record: {e}")
            raise StoreCorrupt(key, f'malformed record: {e}') from e
