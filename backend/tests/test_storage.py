"""Tests for the in-memory entity store."""

from studyshare.db import DEFAULT_CATEGORIES, KEEP, MemStorage, RatingUpdate


def make_note(storage: MemStorage, **overrides):
    fields = {
        "title": "Linear Algebra",
        "description": "Eigenvalues and eigenvectors",
        "file_name": "la.pdf",
        "file_size": 1024,
        "file_type": "application/pdf",
        "user_id": 1,
        "category_id": 2,
    }
    fields.update(overrides)
    return storage.create_note(**fields)


def test_seeds_six_categories_in_order():
    storage = MemStorage()
    categories = storage.get_categories()
    assert [c.name for c in categories] == [c["name"] for c in DEFAULT_CATEGORIES]
    assert [c.id for c in categories] == [1, 2, 3, 4, 5, 6]
    assert categories[0].color == "blue"
    assert categories[5].icon == "flask-line"


def test_unseeded_store_is_empty():
    assert MemStorage(seed_categories=False).get_categories() == []


def test_create_user_assigns_increasing_ids():
    storage = MemStorage()
    first = storage.create_user(username="a", password="x", display_name="A", email="a@x.io")
    second = storage.create_user(username="b", password="x", display_name="B", email="b@x.io")
    assert (first.id, second.id) == (1, 2)
    assert first.profile_image is None
    assert storage.get_user(2) == second
    assert storage.get_user_by_username("a") == first
    assert storage.get_user_by_email("b@x.io") == second
    assert storage.get_user(99) is None
    assert storage.get_user_by_username("nobody") is None


def test_create_note_stamps_date_and_zeroes_counters():
    storage = MemStorage()
    note = make_note(storage)
    assert note.id == 1
    assert note.views == 0
    assert note.downloads == 0
    assert note.upload_date.tzinfo is not None
    assert storage.get_note(1) == note
    assert storage.get_notes() == [note]


def test_notes_filtered_by_category_and_user():
    storage = MemStorage()
    a = make_note(storage, category_id=2, user_id=1)
    b = make_note(storage, category_id=3, user_id=1)
    c = make_note(storage, category_id=2, user_id=2)
    assert storage.get_notes_by_category(2) == [a, c]
    assert storage.get_notes_by_category(99) == []
    assert storage.get_notes_by_user(1) == [a, b]


def test_counters_increment_by_one():
    storage = MemStorage()
    note = make_note(storage)
    for expected in (1, 2, 3):
        assert storage.increment_note_views(note.id).views == expected
    assert storage.increment_note_downloads(note.id).downloads == 1
    stored = storage.get_note(note.id)
    assert (stored.views, stored.downloads) == (3, 1)
    # Earlier references are not mutated
    assert note.views == 0


def test_counters_on_missing_note_return_none():
    storage = MemStorage()
    assert storage.increment_note_views(42) is None
    assert storage.increment_note_downloads(42) is None


def test_discard_note_does_not_reuse_id():
    storage = MemStorage()
    note = make_note(storage)
    storage.discard_note(note.id)
    assert storage.get_note(note.id) is None
    assert make_note(storage).id == note.id + 1


def test_ratings_lookup_and_update():
    storage = MemStorage()
    rating = storage.create_rating(user_id=1, note_id=5, rating=3, comment="ok")
    storage.create_rating(user_id=2, note_id=5, rating=5)
    storage.create_rating(user_id=1, note_id=6, rating=1)

    assert len(storage.get_ratings_by_note(5)) == 2
    assert storage.get_user_rating(1, 5) == rating
    assert storage.get_user_rating(3, 5) is None

    updated = storage.update_rating(rating.id, RatingUpdate(rating=4))
    assert updated.id == rating.id
    assert updated.rating == 4
    assert updated.comment == "ok"

    cleared = storage.update_rating(rating.id, RatingUpdate(comment=None))
    assert cleared.rating == 4
    assert cleared.comment is None

    assert storage.update_rating(999, RatingUpdate(rating=2)) is None
    assert len(storage.get_ratings_by_note(5)) == 2


def test_rating_update_defaults_keep_everything():
    update = RatingUpdate()
    assert update.rating is KEEP
    assert update.comment is KEEP
