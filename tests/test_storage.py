"""
Tests for the persistence accessor.
"""

import json

import pytest
from bookreviews.models import Book
from bookreviews.services import MemoryStore, Storage
from bookreviews.services.errors import (
    ConcurrentModification,
    DuplicateEmail,
    DuplicateRecord,
    DuplicateReview,
    InvalidReference,
    StoreCorrupt,
    ValidationFailed,
)

@pytest.fixture
def empty_storage(make_user):
    """Accessor whose collections exist but hold only one user."""
    owner = make_user(id='owner')
    store = MemoryStore({
        'users': json.dumps([owner.to_dict()]),
        'books': '[]',
        'reviews': '[]',
    })
    return Storage(store)

class TestSeeding:
    def test_fresh_store_is_seeded(self, storage):
        assert [u.id for u in storage.list_users()] == ['demo-user']
        assert [b.title for b in storage.list_books()] == [
            'To Kill a Mockingbird', '1984', 'The Great Gatsby', 'The Silent Patient'
        ]
        assert [(r.book_id, r.rating) for r in storage.list_reviews()] == [('1', 5), ('2', 5), ('3', 4)]

    def test_seeding_is_idempotent(self, storage):
        storage.list_books()
        storage.list_books()
        storage.list_reviews()
        assert len(storage.list_books()) == 4
        assert len(storage.list_reviews()) == 3
        assert len(storage.list_users()) == 1

    def test_existing_empty_collection_is_not_reseeded(self):
        storage = Storage(MemoryStore({'books': '[]'}))
        assert storage.list_books() == []
        assert len(storage.list_reviews()) == 3

    def test_session_read_does_not_seed(self, store, storage):
        assert storage.get_current_session() is None
        assert store.keys() == []

class TestUsers:
    def test_add_and_find(self, storage, make_user):
        user = make_user()
        storage.add_user(user)
        assert storage.find_user_by_id(user.id) == user
        assert storage.find_user_by_email(user.email) == user
        assert storage.list_users()[-1] == user

    def test_duplicate_email_is_rejected(self, storage, make_user):
        with pytest.raises(DuplicateEmail):
            storage.add_user(make_user(email='demo@bookreviews.com'))
        assert len(storage.list_users()) == 1

    def test_email_match_is_case_sensitive(self, storage, make_user):
        storage.add_user(make_user(email='Demo@BookReviews.com'))
        assert storage.find_user_by_email('demo@bookreviews.com').id == 'demo-user'
        assert storage.find_user_by_email('DEMO@BOOKREVIEWS.COM') is None

    def test_lookup_miss_returns_none(self, storage):
        assert storage.find_user_by_id('nobody') is None
        assert storage.find_user_by_email('nobody@example.com') is None

    def test_duplicate_id_is_rejected(self, storage, make_user):
        with pytest.raises(DuplicateRecord):
            storage.add_user(make_user(id='demo-user'))

class TestBooks:
    def test_round_trip(self, storage, make_book):
        book = make_book()
        storage.add_book(book)
        assert storage.get_book_by_id(book.id) == book

    def test_added_by_must_exist(self, storage, make_book):
        with pytest.raises(InvalidReference):
            storage.add_book(make_book(added_by='ghost'))
        assert len(storage.list_books()) == 4

    def test_reads_are_snapshots(self, storage):
        book = storage.get_book_by_id('1')
        book.title = 'Changed'
        assert storage.get_book_by_id('1').title == 'To Kill a Mockingbird'

    def test_update_merges_fields(self, storage):
        updated = storage.update_book('2', {'title': 'Nineteen Eighty-Four'})
        assert updated.title == 'Nineteen Eighty-Four'
        assert updated.author == 'George Orwell'
        assert storage.get_book_by_id('2') == updated

    def test_update_missing_book_is_noop(self, storage):
        before = storage.list_books()
        assert storage.update_book('missing', {'title': 'x'}) is None
        assert storage.list_books() == before

    def test_update_rejects_unknown_and_identity_fields(self, storage):
        with pytest.raises(ValidationFailed) as excinfo:
            storage.update_book('1', {'id': '99', 'colour': 'red'})
        assert set(excinfo.value.errors) == {'id', 'colour'}

    def test_update_added_by_must_exist(self, storage, make_user):
        with pytest.raises(InvalidReference):
            storage.update_book('1', {'added_by': 'ghost'})
        assert storage.get_book_by_id('1').added_by == 'demo-user'

        other = storage.add_user(make_user())
        assert storage.update_book('1', {'added_by': other.id}).added_by == other.id

    def test_delete_cascades_to_reviews(self, empty_storage, make_book, make_review):
        b1 = empty_storage.add_book(make_book(added_by='owner'))
        b2 = empty_storage.add_book(make_book(added_by='owner'))
        empty_storage.add_review(make_review(b1.id, user_id='owner'))
        r2 = empty_storage.add_review(make_review(b2.id, user_id='owner'))

        assert empty_storage.delete_book(b1.id) is True
        assert empty_storage.list_books() == [b2]
        assert empty_storage.list_reviews() == [r2]

    def test_delete_missing_book(self, storage):
        assert storage.delete_book('missing') is False
        assert len(storage.list_books()) == 4
        assert len(storage.list_reviews()) == 3

    def test_delete_sweeps_orphan_reviews(self, make_user, make_review):
        owner = make_user(id='owner')
        orphan = make_review('gone', user_id='owner')
        storage = Storage(MemoryStore({
            'users': json.dumps([owner.to_dict()]),
            'books': '[]',
            'reviews': json.dumps([orphan.to_dict()]),
        }))
        assert storage.delete_book('gone') is False
        assert storage.list_reviews() == []

    def test_delete_is_one_versioned_write(self, store, storage):
        storage.list_books()
        books_version = store.version('books')
        reviews_version = store.version('reviews')
        storage.delete_book('1')
        assert store.version('books') == books_version + 1
        assert store.version('reviews') == reviews_version + 1

class TestReviews:
    def test_filters_preserve_order(self, storage, make_user, make_review):
        other = storage.add_user(make_user())
        review = storage.add_review(make_review('1', user_id=other.id))
        assert [r.id for r in storage.get_reviews_by_book_id('1')] == ['1', review.id]
        assert [r.id for r in storage.get_reviews_by_user_id('demo-user')] == ['1', '2', '3']
        assert storage.get_reviews_by_book_id('missing') == []

    def test_round_trip(self, storage, make_review):
        review = make_review('4')
        storage.add_review(review)
        assert storage.get_review_by_id(review.id) == review

    def test_one_review_per_user_per_book(self, storage, make_review):
        with pytest.raises(DuplicateReview):
            storage.add_review(make_review('1'))
        assert len(storage.get_reviews_by_book_id('1')) == 1

    @pytest.mark.parametrize('rating', [0, 6, 4.5, '5', True])
    def test_rating_must_be_one_to_five(self, storage, make_review, rating):
        with pytest.raises(ValidationFailed):
            storage.add_review(make_review('4', rating=rating))

    def test_references_must_exist(self, storage, make_review):
        with pytest.raises(InvalidReference):
            storage.add_review(make_review('missing'))
        with pytest.raises(InvalidReference):
            storage.add_review(make_review('4', user_id='ghost'))

    def test_update_review(self, storage):
        updated = storage.update_review('3', {'rating': 5, 'review_text': 'Better on a reread.'})
        assert (updated.rating, updated.review_text) == (5, 'Better on a reread.')
        assert updated.user_name == 'Demo User'

    def test_update_missing_review_is_noop(self, storage):
        before = storage.list_reviews()
        assert storage.update_review('missing', {'rating': 1}) is None
        assert storage.list_reviews() == before

    def test_update_rejects_bad_rating_and_moves(self, storage):
        with pytest.raises(ValidationFailed):
            storage.update_review('3', {'rating': 9})
        with pytest.raises(ValidationFailed):
            storage.update_review('3', {'book_id': '4'})
        assert storage.get_review_by_id('3').rating == 4

    def test_delete_review_has_no_cascade(self, storage):
        assert storage.delete_review('2') is True
        assert storage.get_review_by_id('2') is None
        assert storage.get_book_by_id('2') is not None
        assert storage.delete_review('2') is False

class TestSessionSlot:
    def test_set_and_clear(self, store, storage):
        user = storage.find_user_by_id('demo-user')
        storage.set_current_session(user)
        assert storage.get_current_session() == user
        assert json.loads(store.get_item('currentUser'))['password'] == 'demo123'

        storage.set_current_session(None)
        assert storage.get_current_session() is None
        assert store.read('currentUser') is None

class TestCorruption:
    @pytest.mark.parametrize('payload', ['{not json', '{"id": "1"}', '[1, 2]', '[{"id": "1"}]'])
    def test_corrupt_collection_raises(self, payload):
        storage = Storage(MemoryStore({'books': payload}))
        with pytest.raises(StoreCorrupt) as excinfo:
            storage.list_books()
        assert excinfo.value.key == 'books'

    def test_corrupt_session_raises(self):
        storage = Storage(MemoryStore({'currentUser': 'nope'}))
        with pytest.raises(StoreCorrupt):
            storage.get_current_session()

class TestConcurrency:
    def test_stale_write_is_rejected(self, store, storage, make_book):
        storage.list_books()
        stale_version = store.version('books')
        storage.add_book(make_book())

        with pytest.raises(ConcurrentModification):
            store.write({'books': '[]'}, expected={'books': stale_version})
        assert len(storage.list_books()) == 5

    def test_interleaved_instances_do_not_lose_updates(self, store, make_book):
        first, second = Storage(store), Storage(store)
        books, version = first._load(Book)
        second.add_book(make_book())

        books.append(make_book())
        with pytest.raises(ConcurrentModification):
            first._save(Book, books, version)
        assert len(first.list_books()) == 5

    def test_removed_key_does_not_reuse_versions(self, store):
        store.set_item('currentUser', '{}')
        stale_version = store.version('currentUser')
        store.remove_item('currentUser')
        store.set_item('currentUser', '{}')

        assert store.version('currentUser') == 3
        with pytest.raises(ConcurrentModification):
            store.write({'currentUser': None}, expected={'currentUser': stale_version})
