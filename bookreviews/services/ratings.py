"""
Review aggregation computed on demand from the full collections
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from bookreviews.models.records import User, Book, Review

@dataclass
class BookSummary:
    book: Book
    review_count: int
    average_rating: Optional[float]

    def to_dict(self) -> Dict:
        data = self.book.to_dict()
        data['reviewCount'] = self.review_count
        data['averageRating'] = self.average_rating
        data['averageRatingDisplay'] = format_rating(self.average_rating)
        return data

@dataclass
class ReviewedBook:
    review: Review
    book: Optional[Book]

@dataclass
class ProfileSummary:
    user: User
    reviews: List[ReviewedBook] = field(default_factory=list)
    average_rating: Optional[float] = None
    books_added: List[BookSummary] = field(default_factory=list)

    @property
    def review_count(self) -> int:
        return len(self.reviews)

    def to_dict(self) -> Dict:
        return {
            'user': self.user.public_dict(),
            'reviewCount': self.review_count,
            'averageRating': self.average_rating,
            'averageRatingDisplay': format_rating(self.average_rating),
            'booksAddedCount': len(self.books_added),
            'reviews': [
                {
                    'review': item.review.to_dict(),
                    'book': item.book.to_dict() if item.book else None
                }
                for item in self.reviews
            ],
            'booksAdded': [summary.to_dict() for summary in self.books_added]
        }

def average_rating(reviews: Iterable[Review]) -> Optional[float]:
    """Mean rating of the reviews, or None when there are none."""
    ratings = [review.rating for review in reviews]
    if not ratings:
        return None
    return sum(ratings) / len(ratings)

def format_rating(value: Optional[float]) -> str:
    return 'N/A' if value is None else f'{value:.1f}'

def summarize_books(books: Iterable[Book], reviews: Iterable[Review]) -> List[BookSummary]:
    """Review count and average for each book, in the order of books."""
    by_book = defaultdict(list)
    for review in reviews:
        by_book[review.book_id].append(review)
    return [
        BookSummary(book, len(by_book[book.id]), average_rating(by_book[book.id]))
        for book in books
    ]

def profile_summary(storage, user: User) -> ProfileSummary:
    """Everything the profile page shows for a user."""
    user_reviews = storage.get_reviews_by_user_id(user.id)
    books = storage.list_books()
    books_by_id = {book.id: book for book in books}
    added = [book for book in books if book.added_by == user.id]

    return ProfileSummary(
        user=user,
        reviews=[ReviewedBook(review, books_by_id.get(review.book_id)) for review in user_reviews],
        average_rating=average_rating(user_reviews),
        books_added=summarize_books(added, storage.list_reviews())
    )
