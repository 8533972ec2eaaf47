"""
Sample records written into a fresh store
"""

from bookreviews.core.config import DEFAULT_COVER_IMAGE
from bookreviews.models.records import User, Book, Review

DEMO_USER_ID = 'demo-user'

def _cover(photo, ixid):
    return (
        f'https://images.unsplash.com/{photo}?crop=entropy&cs=tinysrgb&fit=max&fm=jpg'
        f'&ixid={ixid}&ixlib=rb-4.1.0&q=80&w=1080'
    )

def sample_users():
    return [
        User(
            id=DEMO_USER_ID,
            email='demo@bookreviews.com',
            password='demo123',
            name='Demo User',
            created_at='2024-03-01T10:00:00.000Z'
        )
    ]

def sample_books():
    return [
        Book(
            id='1',
            title='To Kill a Mockingbird',
            author='Harper Lee',
            genre='Classic Fiction',
            description=(
                'A gripping, heart-wrenching, and wholly remarkable tale of coming-of-age '
                'in a South poisoned by virulent prejudice.'
            ),
            cover_image=_cover(
                'photo-1419640303358-44f0d27f48e7',
                'M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxjbGFzc2ljJTIwbGl0ZXJhdHVyZXxlbnwxfHx8fDE3NTk2NDA1MDl8MA'
            ),
            added_by=DEMO_USER_ID,
            date_added='2024-03-15T10:00:00.000Z'
        ),
        Book(
            id='2',
            title='1984',
            author='George Orwell',
            genre='Dystopian Fiction',
            description=(
                'A dystopian social science fiction novel that follows the life of '
                'Winston Smith, a low ranking member of the Party.'
            ),
            cover_image=_cover(
                'photo-1599185186578-0ba91c2a15c0',
                'M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxmaWN0aW9uJTIwbm92ZWx8ZW58MXx8fHwxNzU5NjQwNTA5fDA'
            ),
            added_by=DEMO_USER_ID,
            date_added='2024-03-14T10:00:00.000Z'
        ),
        Book(
            id='3',
            title='The Great Gatsby',
            author='F. Scott Fitzgerald',
            genre='Classic Fiction',
            description=(
                'The story primarily concerns the young and mysterious millionaire Jay Gatsby '
                'and his quixotic passion for the beautiful Daisy Buchanan.'
            ),
            cover_image=DEFAULT_COVER_IMAGE,
            added_by=DEMO_USER_ID,
            date_added='2024-03-13T10:00:00.000Z'
        ),
        Book(
            id='4',
            title='The Silent Patient',
            author='Alex Michaelides',
            genre='Mystery Thriller',
            description=(
                "A shocking psychological thriller of a woman's act of violence against her "
                "husband and the therapist obsessed with uncovering her motive."
            ),
            cover_image=_cover(
                'photo-1698954634383-eba274a1b1c7',
                'M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxteXN0ZXJ5JTIwdGhyaWxsZXIlMjBib29rfGVufDF8fHx8MTc1OTU5NDMyNnww'
            ),
            added_by=DEMO_USER_ID,
            date_added='2024-03-12T10:00:00.000Z'
        )
    ]

def sample_reviews():
    return [
        Review(
            id='1',
            book_id='1',
            user_id=DEMO_USER_ID,
            user_name='Demo User',
            rating=5,
            review_text=(
                'An absolute masterpiece! This book beautifully captures the essence of '
                'morality and justice through the eyes of a child.'
            ),
            date='2024-03-16T10:00:00.000Z'
        ),
        Review(
            id='2',
            book_id='2',
            user_id=DEMO_USER_ID,
            user_name='Demo User',
            rating=5,
            review_text=(
                "Eerily prophetic and deeply disturbing. Orwell's vision of a totalitarian "
                "future remains relevant today."
            ),
            date='2024-03-15T10:00:00.000Z'
        ),
        Review(
            id='3',
            book_id='3',
            user_id=DEMO_USER_ID,
            user_name='Demo User',
            rating=4,
            review_text=(
                "A brilliant portrayal of the American Dream and its corruption. "
                "Fitzgerald's prose is simply beautiful."
            ),
            date='2024-03-14T10:00:00.000Z'
        )
    ]
