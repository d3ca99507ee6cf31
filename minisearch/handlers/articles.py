"""HTTP handlers for creating articles."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from flask import jsonify, request

from minisearch.models import Article, new_article
from minisearch.retry import with_backoff

logger = logging.getLogger(__name__)


def _read_json() -> Any:
    try:
        return json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise ValueError(f"invalid JSON body: {exc}") from exc


def _typed(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"field '{key}' must be of type {kind.__name__}")
    return value


@dataclass
class ArticleInput:
    title: str
    body: str
    author_id: int
    author: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> ArticleInput:
        """Validate a decoded JSON object; raises ValueError when it is unusable."""
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object")
        item = cls(
            title=_typed(data, "title", str, ""),
            body=_typed(data, "body", str, ""),
            author_id=_typed(data, "author_id", int, 0),
            author=_typed(data, "author", str, ""),
            tags=_typed(data, "tags", list, []),
        )
        if not all(isinstance(tag, str) for tag in item.tags):
            raise ValueError("field 'tags' must be a list of strings")
        for name, value in (
            ("Title", item.title),
            ("Body", item.body),
            ("AuthorID", item.author_id),
        ):
            if not value:
                raise ValueError(
                    f"Key: '{cls.__name__}.{name}' Error:Field validation for "
                    f"'{name}' failed on the 'required' tag"
                )
        return item

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _resync_in_background(sync, articles: list[Article]) -> None:
    def run() -> None:
        try:
            with_backoff(lambda: sync.sync_after_articles_changed(articles))
        except Exception:
            logger.exception("could not sync %d article(s) with the index", len(articles))

    threading.Thread(target=run, daemon=True).start()


def add_articles(repository, finder, tags_repository, sync):
    """Build the view that stores a batch of articles and reports each outcome."""

    def add_articles_view():
        try:
            data = _read_json() or []
            if not isinstance(data, list):
                raise ValueError("expected a JSON array of articles")
            inputs = [ArticleInput.from_json(item) for item in data]
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        inserted: list[Article] = []
        failed: list[dict[str, Any]] = []
        for item in inputs:
            reason = "author not found"
            try:
                author = finder.find_author_by_id(item.author_id)
                reason = "tags not found"
                tags = tags_repository.find_by_labels(item.tags)
                article = new_article(item.title, item.body, author, tags)
                reason = None
                article.id = repository.save(article)
            except Exception as exc:
                failed.append({reason or str(exc): item.to_dict()})
                continue
            inserted.append(article)

        if inserted:
            _resync_in_background(sync, inserted)

        return jsonify(
            {
                "summary": {
                    "total_inserted": len(inserted),
                    "total_failed": len(failed),
                },
                "inserted": [article.to_dict() for article in inserted],
                "failed": failed,
            }
        ), 201

    return add_articles_view


def add_article(repository, finder, tags_repository, sync):
    """Build the view that stores one article and schedules its indexing."""

    def add_article_view():
        try:
            item = ArticleInput.from_json(_read_json())
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        try:
            author = finder.find_author_by_id(item.author_id)
        except Exception:
            return jsonify({"error": "Author not found"}), 400
        try:
            tags = tags_repository.find_by_labels(item.tags)
        except Exception:
            return jsonify({"error": "Could not find one (or more) tags"}), 400

        article = new_article(item.title, item.body, author, tags)
        try:
            article.id = repository.save(article)
        except Exception:
            return jsonify({"error": "Failed to save article"}), 500

        _resync_in_background(sync, [article])
        return jsonify(article.to_dict()), 201

    return add_article_view