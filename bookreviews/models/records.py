"""
Record types for users, books and reviews as they are kept in the store.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import ClassVar, Dict, Tuple

def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

class Record:
    """Mixin mapping snake_case attributes to the camelCase persisted keys."""

    # (attribute, persisted key) pairs in persisted order
    FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = ()
    # attributes that identify the record and may not be changed by updates
    IMMUTABLE: ClassVar[Tuple[str, ...]] = ('id',)

    @classmethod
    def attribute_names(cls):
        return [attr for attr, _ in cls.FIELDS]

    @classmethod
    def from_dict(cls, data: Dict):
        """Build a record from its persisted form; raises KeyError on a missing field."""
        return cls(**{attr: data[key] for attr, key in cls.FIELDS})

    def to_dict(self) -> Dict:
        """Convert the record to its persisted form."""
        return {key: getattr(self, attr) for attr, key in self.FIELDS}

    def merged(self, changes: Dict):
        """Return a copy with the given attributes overwritten."""
        return replace(self, **changes)

@dataclass
class User(Record):
    id: str
    email: str
    password: str
    name: str
    created_at: str

    FIELDS: ClassVar = (
        ('id', 'id'),
        ('email', 'email'),
        ('password', 'password'),
        ('name', 'name'),
        ('created_at', 'createdAt'),
    )

    def public_dict(self) -> Dict:
        """Persisted form without the password."""
        data = self.to_dict()
        data.pop('password')
        return data

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"

@dataclass
class Book(Record):
    id: str
    title: str
    author: str
    genre: str
    description: str
    cover_image: str
    added_by: str
    date_added: str

    FIELDS: ClassVar = (
        ('id', 'id'),
        ('title', 'title'),
        ('author', 'author'),
        ('genre', 'genre'),
        ('description', 'description'),
        ('cover_image', 'coverImage'),
        ('added_by', 'addedBy'),
        ('date_added', 'dateAdded'),
    )

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}')>"

@dataclass
class Review(Record):
    id: str
    book_id: str
    user_id: str
    user_name: str
    rating: int
    review_text: str
    date: str

    FIELDS: ClassVar = (
        ('id', 'id'),
        ('book_id', 'bookId'),
        ('user_id', 'userId'),
        ('user_name', 'userName'),
        ('rating', 'rating'),
        ('review_text', 'reviewText'),
        ('date', 'date'),
    )
    IMMUTABLE: ClassVar = ('id', 'book_id', 'user_id')

    def __repr__(self):
        return f"<Review(id={self.id}, book_id={self.book_id}, rating={self.rating})>"
