import sqlite3

import pytest

from minisearch.database import connect, create_schema
from minisearch.models import Author, Tag, new_article, new_author, new_tag
from minisearch.repositories import (
    NotFoundError,
    SQLiteArticleRepository,
    SQLiteAuthorsRepository,
    SQLiteTagsRepository,
)


@pytest.fixture
def db():
    connection = connect(":memory:")
    create_schema(connection)
    yield connection
    connection.close()


@pytest.fixture
def authors(db):
    return SQLiteAuthorsRepository(db)


@pytest.fixture
def tags(db):
    return SQLiteTagsRepository(db)


@pytest.fixture
def articles(db):
    return SQLiteArticleRepository(db)


def _saved_tag(tags, label):
    tag = new_tag(label)
    tag.id = tags.save(tag)
    return tag


def _saved_author(authors, name):
    author = new_author(None, name)
    author.id = authors.save(author)
    return author


def test_author_round_trip(authors):
    author = new_author(None, "Ada")
    author_id = authors.save(author)
    found = authors.find_author_by_id(author_id)
    assert found == Author(id=author_id, name="Ada", created_at=author.created_at)


def test_author_with_explicit_id(authors):
    assert authors.save(new_author(42, "Grace")) == 42
    assert authors.find_author_by_id(42).name == "Grace"


def test_missing_author_raises(authors):
    with pytest.raises(NotFoundError):
        authors.find_author_by_id(123)


def test_duplicate_author_name_raises(authors):
    authors.save(new_author(None, "Same"))
    with pytest.raises(sqlite3.IntegrityError):
        authors.save(new_author(None, "Same"))


def test_tag_round_trip(tags):
    tag = new_tag("python")
    tag_id = tags.save(tag)
    tag.id = tag_id
    assert tags.find_by_id(tag_id) == tag
    assert tags.find_by_label("python") == tag


def test_saving_existing_label_updates_it(tags):
    first = Tag(label="go", created_at="2020-01-01T00:00:00Z", updated_at="2020-01-01T00:00:00Z")
    first_id = tags.save(first)
    _saved_tag(tags, "other")
    second = Tag(label="go", created_at="2021-01-01T00:00:00Z", updated_at="2021-06-01T00:00:00Z")
    assert tags.save(second) == first_id
    stored = tags.find_by_id(first_id)
    assert stored.created_at == first.created_at
    assert stored.updated_at == second.updated_at


def test_missing_tag_raises(tags):
    with pytest.raises(NotFoundError):
        tags.find_by_label("nope")
    with pytest.raises(NotFoundError):
        tags.find_by_id(99)


def test_find_by_labels(tags):
    a = _saved_tag(tags, "a")
    _saved_tag(tags, "b")
    c = _saved_tag(tags, "c")
    found = tags.find_by_labels(["c", "a", "unknown"])
    assert sorted(found, key=lambda t: t.id) == [a, c]
    assert tags.find_by_labels([]) == []
    assert tags.find_by_labels(None) == []


def test_find_all_in_insertion_order(tags):
    saved = [_saved_tag(tags, label) for label in ("x", "y", "z")]
    assert tags.find_all() == saved


def test_find_all_empty(tags):
    assert tags.find_all() == []


def test_article_save_and_find_by_tag(authors, tags, articles):
    author = _saved_author(authors, "Ada")
    red = _saved_tag(tags, "red")
    blue = _saved_tag(tags, "blue")
    tagged = new_article("One", "first body", author, [red, blue])
    tagged.id = articles.save(tagged)
    other = new_article("Two", "second body", author, [blue])
    other.id = articles.save(other)

    found = articles.find_by_tag(red)
    assert len(found) == 1
    article = found[0]
    assert article.id == tagged.id
    assert article.title == "One"
    assert article.author == "Ada"
    assert article.author_id == author.id
    assert article.tags == [red, blue]

    by_blue = articles.find_by_tag(blue)
    assert [a.id for a in by_blue] == [tagged.id, other.id]


def test_find_by_tag_without_articles(authors, tags, articles):
    lonely = _saved_tag(tags, "lonely")
    assert articles.find_by_tag(lonely) == []


def test_failed_article_save_rolls_back(db, authors, tags, articles):
    author = _saved_author(authors, "Ada")
    red = _saved_tag(tags, "red")
    article = new_article("Dup", "body", author, [red, red])
    with pytest.raises(sqlite3.IntegrityError):
        articles.save(article)
    assert db.execute("SELECT COUNT(*) FROM articles").fetchone() == (0,)
    assert db.execute("SELECT COUNT(*) FROM article_tags").fetchone() == (0,)