import json
from unittest import mock

from bson import ObjectId
import pytest
from pymongo.errors import AutoReconnect
from starlette.testclient import TestClient

from app.app import create_app
from domain.repository import RecipeRepository


PAYLOAD = {
    "name": "Caprese Salad",
    "description": "Simple and delicious salad.",
    "favorite": False,
    "ingredients": [
        {"qty": 4, "unit": "", "name": "Tomatoes"},
        {"qty": 1, "unit": "bunch", "name": "Basil"},
    ],
    "directions": [
        {"order": 1, "description": "Slice tomatoes and mozzarella."},
        {"order": 2, "description": "Drizzle with olive oil."},
    ],
}


@pytest.fixture
def client(repo: RecipeRepository) -> TestClient:
    return TestClient(create_app(repo))


def test_create_and_get(client: TestClient) -> None:
    resp = client.post("/recipes", json=PAYLOAD)
    assert resp.status_code == 201
    created = resp.json()
    assert ObjectId.is_valid(created["id"])
    assert {k: v for k, v in created.items() if k != "id"} == PAYLOAD

    resp = client.get(f"/recipes/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_list(client: TestClient) -> None:
    assert client.get("/recipes").json() == []

    client.post("/recipes", json=PAYLOAD)
    client.post("/recipes", json=PAYLOAD | {"name": "Chocolate Cake"})

    resp = client.get("/recipes")
    assert resp.status_code == 200
    assert sorted(r["name"] for r in resp.json()) == ["Caprese Salad", "Chocolate Cake"]


def test_update(client: TestClient) -> None:
    id = client.post("/recipes", json=PAYLOAD).json()["id"]

    body = PAYLOAD | {"id": str(ObjectId()), "favorite": True, "ingredients": []}
    resp = client.put(f"/recipes/{id}", json=body)
    assert resp.status_code == 200
    assert resp.json()["id"] == id

    got = client.get(f"/recipes/{id}").json()
    assert got["favorite"] is True
    assert got["ingredients"] == []
    assert got["directions"] == PAYLOAD["directions"]


def test_delete(client: TestClient) -> None:
    id = client.post("/recipes", json=PAYLOAD).json()["id"]

    assert client.delete(f"/recipes/{id}").status_code == 204
    resp = client.get(f"/recipes/{id}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


@pytest.mark.parametrize(
    "method,path,status,error",
    (
        ("get", f"/recipes/{ObjectId()}", 404, "not_found"),
        ("delete", f"/recipes/{ObjectId()}", 404, "not_found"),
        ("get", "/recipes/nope", 400, "invalid_identifier"),
        ("delete", "/recipes/nope", 400, "invalid_identifier"),
    ),
)
def test_errors(client: TestClient, method: str, path: str, status: int, error: str) -> None:
    resp = getattr(client, method)(path)
    assert resp.status_code == status
    assert resp.json()["error"] == error


def test_update_missing(client: TestClient) -> None:
    resp = client.put(f"/recipes/{ObjectId()}", json=PAYLOAD)
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "body",
    (
        {"description": "No name", "favorite": False, "ingredients": [], "directions": []},
        PAYLOAD | {"favorite": "yes"},
        ["not", "a", "recipe"],
    ),
)
def test_bad_body(client: TestClient, body: object) -> None:
    resp = client.post("/recipes", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "http"


def test_storage_failure() -> None:
    collection = mock.Mock()
    collection.find.side_effect = AutoReconnect("connection reset")
    client = TestClient(create_app(RecipeRepository(collection)))

    resp = client.get("/recipes")
    assert resp.status_code == 500
    assert resp.json()["error"] == "storage_read"


def test_update_malformed_id(client: TestClient) -> None:
    resp = client.put("/recipes/nope", json=PAYLOAD)
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_identifier"


def test_unusable_assigned_id() -> None:
    collection = mock.Mock()
    collection.insert_one.return_value = mock.Mock(inserted_id="not-an-object-id")
    client = TestClient(create_app(RecipeRepository(collection)))

    resp = client.post("/recipes", json=PAYLOAD)
    assert resp.status_code == 500
    assert resp.json()["error"] == "identifier_format"


@pytest.mark.parametrize(
    "body",
    (
        json.dumps(PAYLOAD | {"directions": [{"order": 1e30, "description": "Wait"}]}),
        # A lone surrogate, escaped so it survives the trip as valid JSON.
        json.dumps(PAYLOAD | {"name": "\ud800"}),
    ),
)
@pytest.mark.parametrize(
    "method,path",
    (
        ("post", "/recipes"),
        ("put", f"/recipes/{ObjectId()}"),
    ),
)
def test_unencodable_recipe(
    encoding: mock.Mock, method: str, path: str, body: str
) -> None:
    client = TestClient(create_app(RecipeRepository(encoding)))

    resp = getattr(client, method)(
        path, content=body, headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 500
    assert resp.json()["error"] == "storage_write"
