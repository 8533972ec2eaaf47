"""
Exception hierarchy for the storage and domain layers
"""

class BookReviewsError(Exception):
    """Base exception class for book review errors"""
    pass

class StorageError(BookReviewsError):
    """Raised when the key-value store cannot serve a request"""
    pass

class StoreCorrupt(StorageError):
    """Raised when a stored value cannot be decoded into records"""

    def __init__(self, key, reason):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored value for '{key}' is corrupt: {reason}")

class ConcurrentModification(StorageError):
    """Raised when a versioned write finds the key changed since it was read"""

    def __init__(self, key, expected, actual):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"'{key}' was modified concurrently (expected version {expected}, found {actual})"
        )

class IntegrityError(StorageError):
    """Raised when a write would break a collection rule"""
    pass

class DuplicateEmail(IntegrityError):
    """Raised when a user with the same email already exists"""

    def __init__(self, email):
        self.email = email
        super().__init__('Email already registered')

class DuplicateReview(IntegrityError):
    """Raised when a user reviews the same book twice"""

    def __init__(self, user_id, book_id):
        self.user_id = user_id
        self.book_id = book_id
        super().__init__('You have already reviewed this book')

class DuplicateRecord(IntegrityError):
    """Raised when a record id is already taken in its collection"""

    def __init__(self, collection, record_id):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"A record with id '{record_id}' already exists in {collection}")

class InvalidReference(IntegrityError):
    """Raised when a reference field names a record that does not exist"""

    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} '{value}' does not refer to an existing record")

class ValidationFailed(BookReviewsError):
    """Raised when input fails validation; errors maps field to message"""

    def __init__(self, errors):
        self.errors = dict(errors)
        super().__init__('; '.join(self.errors.values()))
