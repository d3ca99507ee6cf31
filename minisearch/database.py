"""SQLite connection and schema setup."""

from __future__ import annotations

import os
import sqlite3

DEFAULT_DATABASE = "file:articles.db?mode=memory&cache=shared"

_TIMESTAMP_NOW = "timestamp default current_timestamp"

# Each table: its column definitions followed by its table-level constraints.
_TABLES: dict[str, tuple[str, ...]] = {
    "authors": (
        "id integer primary key autoincrement",
        "name text not null unique",
        f"created_at {_TIMESTAMP_NOW}",
    ),
    "articles": (
        "id integer primary key autoincrement",
        "title text not null",
        "body text not null",
        "author_id integer not null",
        f"created_at {_TIMESTAMP_NOW}",
        "foreign key (author_id) references authors (id)",
    ),
    "tags": (
        "id integer primary key autoincrement",
        "label text not null unique",
        f"created_at {_TIMESTAMP_NOW}",
        "updated_at timestamp",
    ),
    "article_tags": (
        "article_id integer not null",
        "tag_id integer not null",
        "primary key (article_id, tag_id)",
        "foreign key (article_id) references articles (id)",
        "foreign key (tag_id) references tags (id)",
    ),
}


def _schema_script() -> str:
    statements = (
        f"create table if not exists {name} ({', '.join(parts)});"
        for name, parts in _TABLES.items()
    )
    return "\n".join(statements)


def connect(path: str | os.PathLike[str] = DEFAULT_DATABASE) -> sqlite3.Connection:
    """Open a database; by default a shared in-memory one."""
    return sqlite3.connect(os.fspath(path), uri=True, check_same_thread=False)


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the tables if they do not exist yet."""
    connection.executescript(_schema_script())