# flake8: noqa
import pytest

from conftest import PIN
from kindred import filters

ENDPOINTS = {
    "recipes": {"title": "Sunday Curry"},
    "legacy-audio": {"title": "The mango tree"},
    "timeline-notes": {"year": 1985, "content": "Opened the shop"},
}


def create(client, path, payload):
    res = client.post(f"/api/{path}", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_recipe_applies_defaults(client):
    obj = create(client, "recipes", {"title": "Sunday Curry"})
    assert isinstance(obj["id"], int)
    assert obj["title"] == "Sunday Curry"
    assert obj["ingredients"] == []
    assert obj["instructions"] == []
    assert obj["category"] == "veg"
    assert obj["videoUrl"] is None
    assert obj["cookTime"] is None


def test_post_then_get_returns_same_record(client):
    payload = {
        "title": "Dal",
        "ingredients": ["lentils", "turmeric"],
        "instructions": ["rinse", "boil"],
        "category": "veg",
        "cookTime": "30 min",
        "servings": "4",
        "thumbnailUrl": "https://example.com/dal.jpg",
    }
    obj = create(client, "recipes", payload)
    res = client.get(f"/api/recipes/{obj['id']}")
    assert res.status_code == 200
    got = res.json()
    assert got == obj
    for key, value in payload.items():
        assert got[key] == value


def test_text_is_stored_verbatim(client):
    payload = {
        "title": "  Dal ",
        "ingredients": ["  1 cup lentils", "salt  "],
        "instructions": ["\tRinse twice"],
        "cookTime": " 30 min",
    }
    obj = create(client, "recipes", payload)
    got = client.get(f"/api/recipes/{obj['id']}").json()
    for key, value in payload.items():
        assert got[key] == value


def test_blank_title_is_rejected(client):
    assert client.post("/api/recipes", json={"title": "   "}).status_code == 400
    assert client.post("/api/legacy-audio", json={"title": " "}).status_code == 400
    res = client.post("/api/timeline-notes", json={"year": 1990, "content": "\n"})
    assert res.status_code == 400
    obj = create(client, "recipes", {"title": "Dal"})
    assert client.patch(f"/api/recipes/{obj['id']}", json={"title": "  "}).status_code == 400


def test_list_returns_all_rows(client):
    create(client, "recipes", {"title": "One"})
    create(client, "recipes", {"title": "Two"})
    res = client.get("/api/recipes")
    assert res.status_code == 200
    assert sorted(r["title"] for r in res.json()) == ["One", "Two"]


def test_create_validation_errors_list_every_field(client):
    res = client.post("/api/recipes", json={"title": "", "ingredients": "flour", "category": None})
    assert res.status_code == 400
    errors = res.json()["error"]
    fields = {e["loc"][-1] for e in errors}
    assert {"title", "ingredients", "category"} <= fields


def test_create_missing_required_field(client):
    res = client.post("/api/timeline-notes", json={"content": "no year"})
    assert res.status_code == 400
    assert any(e["loc"][-1] == "year" for e in res.json()["error"])


def test_timeline_year_must_be_integer(client):
    res = client.post("/api/timeline-notes", json={"year": "1990", "content": "x"})
    assert res.status_code == 400


def test_audio_category_is_restricted(client):
    res = client.post("/api/legacy-audio", json={"title": "t", "category": "cooking"})
    assert res.status_code == 400
    obj = create(client, "legacy-audio", {"title": "t"})
    assert obj["category"] == "stories"


def test_generated_id_in_body_is_ignored(client):
    obj = create(client, "recipes", {"id": 999, "title": "Mine"})
    assert obj["id"] != 999


@pytest.mark.parametrize("path", list(ENDPOINTS))
def test_bad_id_is_400(client, path):
    assert client.get(f"/api/{path}/abc").status_code == 400
    assert client.patch(f"/api/{path}/abc", json={}).status_code == 400
    res = client.delete(f"/api/{path}/abc", headers={"x-pin": PIN})
    assert res.status_code == 400


@pytest.mark.parametrize("path", list(ENDPOINTS))
@pytest.mark.parametrize("item_id", ["9" * 25, "-" + "9" * 25, str(2 ** 63)])
def test_oversized_id_is_404(client, path, item_id):
    assert client.get(f"/api/{path}/{item_id}").status_code == 404
    assert client.patch(f"/api/{path}/{item_id}", json={}).status_code == 404
    res = client.delete(f"/api/{path}/{item_id}", headers={"x-pin": PIN})
    assert res.status_code == 404


@pytest.mark.parametrize("path", list(ENDPOINTS))
def test_missing_id_is_404(client, path):
    assert client.get(f"/api/{path}/4242").status_code == 404
    assert client.patch(f"/api/{path}/4242", json={}).status_code == 404
    assert client.delete(f"/api/{path}/4242", headers={"x-pin": PIN}).status_code == 404


def test_not_found_message(client):
    res = client.get("/api/recipes/77")
    assert res.json() == {"error": "Recipe not found"}
    res = client.get("/api/recipes/x")
    assert res.json() == {"error": "Invalid recipe ID"}


@pytest.mark.parametrize("path,payload", list(ENDPOINTS.items()))
def test_delete_with_wrong_pin_is_403_and_keeps_row(client, path, payload):
    obj = create(client, path, payload)
    for headers in ({"x-pin": "nope"}, {}):
        res = client.delete(f"/api/{path}/{obj['id']}", headers=headers)
        assert res.status_code == 403
        assert res.json() == {"error": "Invalid PIN"}
    # PIN is checked before the id is parsed
    assert client.delete(f"/api/{path}/abc", headers={"x-pin": "nope"}).status_code == 403
    assert client.get(f"/api/{path}/{obj['id']}").status_code == 200


@pytest.mark.parametrize("path,payload", list(ENDPOINTS.items()))
def test_delete_with_pin(client, path, payload):
    obj = create(client, path, payload)
    res = client.delete(f"/api/{path}/{obj['id']}", headers={"x-pin": PIN})
    assert res.status_code == 204
    assert res.content == b""
    assert client.get(f"/api/{path}/{obj['id']}").status_code == 404
    res = client.delete(f"/api/{path}/{obj['id']}", headers={"x-pin": PIN})
    assert res.status_code == 404


def test_pin_case_sensitivity_differs_per_entity(client):
    audio = create(client, "legacy-audio", ENDPOINTS["legacy-audio"])
    recipe = create(client, "recipes", ENDPOINTS["recipes"])
    note = create(client, "timeline-notes", ENDPOINTS["timeline-notes"])
    shouted = {"x-pin": PIN.upper()}

    assert client.delete(f"/api/legacy-audio/{audio['id']}", headers=shouted).status_code == 204
    assert client.delete(f"/api/recipes/{recipe['id']}", headers=shouted).status_code == 403
    assert client.delete(f"/api/timeline-notes/{note['id']}", headers=shouted).status_code == 403


@pytest.mark.parametrize("path,payload", list(ENDPOINTS.items()))
def test_patch_empty_body_leaves_record_unchanged(client, path, payload):
    obj = create(client, path, payload)
    res = client.patch(f"/api/{path}/{obj['id']}", json={})
    assert res.status_code == 200
    assert res.json() == obj


def test_patch_updates_only_given_fields(client):
    obj = create(client, "recipes", {"title": "Toast", "ingredients": ["bread"], "servings": "1"})
    res = client.patch(f"/api/recipes/{obj['id']}", json={"title": "Cheese Toast", "servings": None})
    assert res.status_code == 200
    updated = res.json()
    assert updated["title"] == "Cheese Toast"
    assert updated["servings"] is None
    assert updated["ingredients"] == ["bread"]
    assert updated["category"] == "veg"
    assert client.get(f"/api/recipes/{obj['id']}").json() == updated


def test_patch_rejects_null_for_required_fields(client):
    obj = create(client, "recipes", {"title": "Toast"})
    res = client.patch(f"/api/recipes/{obj['id']}", json={"title": None})
    assert res.status_code == 400
    note = create(client, "timeline-notes", {"year": 2001, "content": "x"})
    res = client.patch(f"/api/timeline-notes/{note['id']}", json={"year": None})
    assert res.status_code == 400


def test_patch_validation_applies_field_rules(client):
    audio = create(client, "legacy-audio", {"title": "t"})
    res = client.patch(f"/api/legacy-audio/{audio['id']}", json={"category": "finance"})
    assert res.status_code == 200
    assert res.json()["category"] == "finance"
    res = client.patch(f"/api/legacy-audio/{audio['id']}", json={"category": "sport"})
    assert res.status_code == 400


def test_timeline_year_ordering_is_stable(client):
    for year, content in [(1990, "a"), (1980, "b"), (1990, "c"), (1980, "d")]:
        create(client, "timeline-notes", {"year": year, "content": content})
    notes = client.get("/api/timeline-notes").json()
    ordered = filters.timeline_order(notes)
    assert [n["content"] for n in ordered] == ["b", "d", "a", "c"]


def test_startup_initializes_database_from_settings():
    from fastapi.testclient import TestClient
    from kindred.app import app

    # no overrides: the lifespan binds the session factory to KINDRED_DATABASE_URL
    with TestClient(app) as c:
        res = c.post("/api/timeline-notes", json={"year": 2000, "content": "Y2K"})
        assert res.status_code == 201
        assert c.get(f"/api/timeline-notes/{res.json()['id']}").status_code == 200


def test_unknown_route_uses_error_shape(client):
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert "error" in res.json()
