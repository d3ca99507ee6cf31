"""SQLite-backed repositories for authors, articles and tags."""

from __future__ import annotations

import sqlite3
from typing import Sequence

from minisearch.models import Article, Author, Tag


class NotFoundError(LookupError):
    """Raised when a requested record does not exist."""


def _tag_from_row(row: Sequence) -> Tag:
    return Tag(id=row[0], label=row[1], created_at=row[2], updated_at=row[3])


class SQLiteAuthorsRepository:
    """Authors stored in SQLite."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def save(self, author: Author) -> int:
        """Insert the author and return its id."""
        with self._db:
            cursor = self._db.execute(
                "INSERT INTO authors (id, name, created_at) VALUES (?, ?, ?)",
                (author.id, author.name, author.created_at),
            )
        return cursor.lastrowid

    def find_author_by_id(self, author_id: int) -> Author:
        """Return the author with ``author_id`` or raise NotFoundError."""
        row = self._db.execute(
            "SELECT id, name, created_at FROM authors WHERE id = ?", (author_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"author {author_id} not found")
        return Author(id=row[0], name=row[1], created_at=row[2])


class SQLiteArticleRepository:
    """Articles and their tag links stored in SQLite."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def save(self, article: Article) -> int:
        """Insert the article and its tag links in one transaction."""
        with self._db:
            cursor = self._db.execute(
                "INSERT INTO articles (title, body, author_id, created_at) "
                "VALUES (?, ?, ?, ?)",
                (article.title, article.body, article.author_id, article.created_at),
            )
            article_id = cursor.lastrowid
            self._db.executemany(
                "INSERT INTO article_tags (article_id, tag_id) VALUES (?, ?)",
                [(article_id, tag.id) for tag in article.tags],
            )
        return article_id

    def find_by_tag(self, tag: Tag) -> list[Article]:
        """Return the articles carrying ``tag``, each with all of its tags."""
        rows = self._db.execute(
            """
            SELECT a.id, a.title, a.body, a.author_id, au.name, a.created_at,
                   t.id, t.label, t.created_at, t.updated_at
            FROM articles a
            JOIN authors au ON a.author_id = au.id
            JOIN article_tags link ON a.id = link.article_id
            JOIN tags t ON link.tag_id = t.id
            WHERE a.id IN (
                SELECT article_id FROM article_tags WHERE tag_id = ?
            )
            ORDER BY a.id, t.id
            """,
            (tag.id,),
        ).fetchall()

        articles: dict[int, Article] = {}
        for row in rows:
            article = articles.get(row[0])
            if article is None:
                article = Article(
                    id=row[0],
                    title=row[1],
                    body=row[2],
                    author_id=row[3],
                    author=row[4],
                    created_at=row[5],
                )
                articles[row[0]] = article
            article.tags.append(_tag_from_row(row[6:]))
        return list(articles.values())


class SQLiteTagsRepository:
    """Tags stored in SQLite."""

    _COLUMNS = "id, label, created_at, updated_at"

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def save(self, tag: Tag) -> int:
        """Insert the tag, or update the one with the same label; return its id."""
        with self._db:
            self._db.execute(
                """
                INSERT INTO tags (label, updated_at, created_at)
                VALUES (?, ?, ?)
                ON CONFLICT(label) DO UPDATE SET
                    label = ?,
                    updated_at = ?
                """,
                (tag.label, tag.updated_at, tag.created_at, tag.label, tag.updated_at),
            )
            (tag_id,) = self._db.execute(
                "SELECT id FROM tags WHERE label = ?", (tag.label,)
            ).fetchone()
        return tag_id

    def find_by_label(self, label: str) -> Tag:
        """Return the tag labelled ``label`` or raise NotFoundError."""
        row = self._db.execute(
            f"SELECT {self._COLUMNS} FROM tags WHERE label = ?", (label,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"tag '{label}' not found")
        return _tag_from_row(row)

    def find_by_labels(self, labels: Sequence[str]) -> list[Tag]:
        """Return the known tags among ``labels``; unknown labels are skipped."""
        labels = list(labels or [])
        if not labels:
            return []
        placeholders = ",".join("?" * len(labels))
        rows = self._db.execute(
            f"SELECT {self._COLUMNS} FROM tags WHERE label IN ({placeholders})",
            labels,
        ).fetchall()
        return [_tag_from_row(row) for row in rows]

    def find_by_id(self, tag_id: int) -> Tag:
        """Return the tag with ``tag_id`` or raise NotFoundError."""
        row = self._db.execute(
            f"SELECT {self._COLUMNS} FROM tags WHERE id = ?", (tag_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"tag {tag_id} not found")
        return _tag_from_row(row)

    def find_all(self) -> list[Tag]:
        """Return every tag in insertion order."""
        rows = self._db.execute(
            f"SELECT {self._COLUMNS} FROM tags ORDER BY id"
        ).fetchall()
        return [_tag_from_row(row) for row in rows]