import re
from datetime import datetime

from minisearch.models import (
    Article,
    Author,
    Tag,
    new_article,
    new_author,
    new_tag,
)

RFC3339 = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(Z|[+-]\d{2}:\d{2})$")


def _parse(stamp):
    return datetime.fromisoformat(stamp.replace("Z", "+00:00"))


def test_new_author_keeps_id_and_name():
    author = new_author(7, "Ada")
    assert author.id == 7
    assert author.name == "Ada"
    assert RFC3339.match(author.created_at)


def test_new_tag_sets_both_timestamps():
    tag = new_tag("python")
    assert tag.label == "python"
    assert tag.id is None
    assert tag.created_at == tag.updated_at
    assert RFC3339.match(tag.created_at)
    assert _parse(tag.created_at).tzinfo is not None


def test_tag_update_changes_label_but_not_creation():
    tag = Tag(id=3, label="old", created_at="2020-01-01T00:00:00Z", updated_at="2020-01-01T00:00:00Z")
    tag.update("new")
    assert tag.label == "new"
    assert tag.id == 3
    assert tag.created_at == "2020-01-01T00:00:00Z"
    assert _parse(tag.updated_at) > _parse(tag.created_at)


def test_new_article_copies_author_fields():
    author = Author(id=4, name="Grace", created_at="2020-01-01T00:00:00Z")
    tags = [Tag(id=1, label="a"), Tag(id=2, label="b")]
    article = new_article("Title", "Body", author, tags)
    assert article.id is None
    assert article.author == "Grace"
    assert article.author_id == 4
    assert article.tags == tags
    assert RFC3339.match(article.created_at)


def test_new_article_without_tags_has_empty_list():
    article = new_article("T", "B", Author(id=1, name="x"), None)
    assert article.tags == []


def test_article_to_dict_nests_tags():
    tag = Tag(id=1, label="go", created_at="c", updated_at="u")
    article = Article(
        id=9, title="t", body="b", author="a", author_id=2, created_at="c", tags=[tag]
    )
    data = article.to_dict()
    assert list(data) == ["id", "title", "body", "author", "author_id", "created_at", "tags"]
    assert data["tags"] == [tag.to_dict()]
    assert data["id"] == 9


def test_author_to_dict_round_trip():
    author = Author(id=5, name="Linus", created_at="stamp")
    assert Author(**author.to_dict()) == author


def test_tag_to_dict_round_trip():
    tag = Tag(id=5, label="l", created_at="c", updated_at="u")
    assert Tag(**tag.to_dict()) == tag