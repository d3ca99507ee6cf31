import sqlite3

import pytest
from flask import Flask

from minisearch.database import create_schema
from minisearch.handlers.authors import AuthorInput, add_author, add_authors
from minisearch.repositories import SQLiteAuthorsRepository


@pytest.fixture
def repo():
    db = sqlite3.connect(":memory:", check_same_thread=False)
    create_schema(db)
    yield SQLiteAuthorsRepository(db)
    db.close()


@pytest.fixture
def client(repo):
    app = Flask(__name__)
    app.add_url_rule("/authors", view_func=add_author(repo), methods=["POST"])
    app.add_url_rule("/authors/batch", view_func=add_authors(repo), methods=["POST"])
    return app.test_client()


def test_add_author_assigns_id(client, repo):
    response = client.post("/authors", json={"name": "Ann"})
    assert response.status_code == 201
    data = response.get_json()
    assert data["name"] == "Ann"
    assert repo.find_author_by_id(data["id"]).name == "Ann"


def test_add_author_keeps_given_id(client, repo):
    response = client.post("/authors", json={"name": "Bob", "author_id": 7})
    assert response.get_json()["id"] == 7
    assert repo.find_author_by_id(7).name == "Bob"


def test_add_author_duplicate_name_fails(client):
    client.post("/authors", json={"name": "Ann"})
    response = client.post("/authors", json={"name": "Ann"})
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to insert author"}


def test_add_author_requires_name(client):
    response = client.post("/authors", json={"author_id": 3})
    assert response.status_code == 400
    assert "Name" in response.get_json()["error"]


def test_add_authors_reports_each_outcome(client):
    response = client.post(
        "/authors/batch", json=[{"name": "Ann"}, {"name": "Ann"}, {"name": "Cy"}]
    )
    assert response.status_code == 201
    data = response.get_json()
    assert data["summary"] == {"total_inserted": 2, "total_failed": 1}
    assert [author["name"] for author in data["inserted"]] == ["Ann", "Cy"]
    (failure,) = data["failed"]
    (message, author) = next(iter(failure.items()))
    assert "UNIQUE" in message
    assert author["name"] == "Ann"


def test_add_authors_rejects_invalid_item(client):
    response = client.post("/authors/batch", json=[{"name": "Ann"}, {"name": ""}])
    assert response.status_code == 400
    assert "Name" in response.get_json()["error"]


def test_add_authors_requires_array(client):
    response = client.post("/authors/batch", json={"name": "Ann"})
    assert response.status_code == 400


def test_author_input_defaults():
    item = AuthorInput.from_json({"name": "Ann"})
    assert (item.name, item.author_id) == ("Ann", None)


@pytest.mark.parametrize(
    "data", [{"name": 3}, {"name": "Ann", "author_id": "x"}, {}, "Ann"]
)
def test_author_input_rejects_bad_data(data):
    with pytest.raises(ValueError):
        AuthorInput.from_json(data)