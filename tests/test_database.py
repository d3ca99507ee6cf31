import sqlite3

import pytest

from minisearch.database import connect, create_schema


def _tables(connection):
    rows = connection.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
    ).fetchall()
    return {name for (name,) in rows}


def test_create_schema_creates_all_tables():
    db = connect(":memory:")
    create_schema(db)
    assert _tables(db) == {"authors", "articles", "tags", "article_tags"}
    db.close()


def test_create_schema_is_idempotent():
    db = connect(":memory:")
    create_schema(db)
    db.execute("INSERT INTO tags (label, updated_at) VALUES ('x', 'now')")
    create_schema(db)
    assert db.execute("SELECT label FROM tags").fetchall() == [("x",)]
    db.close()


def test_tag_label_is_unique():
    db = connect(":memory:")
    create_schema(db)
    db.execute("INSERT INTO tags (label) VALUES ('dup')")
    with pytest.raises(sqlite3.IntegrityError):
        db.execute("INSERT INTO tags (label) VALUES ('dup')")
    db.close()


def test_default_database_is_shared_between_connections():
    first = connect()
    second = connect()
    try:
        create_schema(first)
        assert "tags" in _tables(second)
    finally:
        first.close()
        second.close()


def test_connect_to_file(tmp_path):
    path = tmp_path / "store.db"
    db = connect(path)
    create_schema(db)
    db.close()
    assert path.exists()
    reopened = connect(path)
    assert "articles" in _tables(reopened)
    reopened.close()