import pytest
from sqlalchemy.exc import IntegrityError

from kindred import crud, schemas


def test_accessor_lifecycle(db):
    created = crud.recipes.create(db, schemas.RecipeCreate(title="Pancakes", ingredients=["flour"]))
    assert created.id is not None
    assert created.created_at is not None
    assert crud.recipes.get(db, created.id).title == "Pancakes"
    assert [r.id for r in crud.recipes.list(db)] == [created.id]

    updated = crud.recipes.update(db, created.id, schemas.RecipePatch(category="non-veg"))
    assert updated.category == "non-veg"
    assert updated.ingredients == ["flour"]

    assert crud.recipes.delete(db, created.id) is True
    assert crud.recipes.get(db, created.id) is None
    assert crud.recipes.delete(db, created.id) is False


def test_missing_rows_return_absent_values(db):
    assert crud.timeline_notes.get(db, 1) is None
    assert crud.timeline_notes.update(db, 1, schemas.TimelineNotePatch(content="x")) is None
    assert crud.timeline_notes.delete(db, 1) is False


def test_empty_update_returns_row_unchanged(db):
    audio = crud.legacy_audio.create(db, schemas.LegacyAudioCreate(title="Lesson"))
    same = crud.legacy_audio.update(db, audio.id, schemas.LegacyAudioPatch())
    assert same.title == "Lesson"
    assert same.category == "stories"


def test_users(db):
    user = crud.create_user(db, schemas.UserCreate(username="amma", password="secret"))
    assert len(user.id) == 36
    assert crud.get_user(db, user.id).username == "amma"
    assert crud.get_user_by_username(db, "amma").id == user.id
    assert crud.get_user_by_username(db, "appa") is None


def test_store_errors_propagate(db):
    crud.create_user(db, schemas.UserCreate(username="amma", password="a"))
    with pytest.raises(IntegrityError):
        crud.create_user(db, schemas.UserCreate(username="amma", password="b"))
