"""The HTTP application wiring repositories, search and handlers together."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence

from flask import Flask

from minisearch.database import DEFAULT_DATABASE, connect, create_schema
from minisearch.handlers.articles import add_article, add_articles
from minisearch.handlers.authors import add_author, add_authors
from minisearch.handlers.search import search_articles
from minisearch.handlers.tags import (
    add_tag,
    add_tags_in_batch,
    find_articles_by_labels,
    get_tag_by_label,
    list_all_tags,
    update_tag_with_label,
)
from minisearch.meilisearch import DEFAULT_HOST, init_engine
from minisearch.repositories import (
    SQLiteArticleRepository,
    SQLiteAuthorsRepository,
    SQLiteTagsRepository,
)
from minisearch.search import IndexSyncManager


@dataclass
class AppConfig:
    """Settings for running the server."""

    host: str = "0.0.0.0"
    port: int = 8080
    database: str = DEFAULT_DATABASE
    meilisearch_host: str = DEFAULT_HOST


def create_app(articles, authors, tags, sync, engine) -> Flask:
    """Build the Flask application with every route registered."""
    app = Flask(__name__)
    routes = [
        ("/articles", "add_article", add_article(articles, authors, tags, sync), "POST"),
        ("/articles/batch", "add_articles", add_articles(articles, authors, tags, sync), "POST"),
        ("/authors", "add_author", add_author(authors), "POST"),
        ("/authors/batch", "add_authors", add_authors(authors), "POST"),
        ("/tags", "add_tag", add_tag(tags), "POST"),
        ("/tags/<label>", "update_tag", update_tag_with_label(tags, sync), "PATCH"),
        ("/tags/batch", "add_tags_in_batch", add_tags_in_batch(tags), "POST"),
        ("/tags", "list_all_tags", list_all_tags(tags), "GET"),
        ("/tags/<label>", "get_tag", get_tag_by_label(tags), "GET"),
        (
            "/tags/<label>/articles",
            "find_articles_by_label",
            find_articles_by_labels(articles, tags),
            "GET",
        ),
        ("/search", "search_articles", search_articles(engine), "GET"),
    ]
    for rule, endpoint, view, method in routes:
        app.add_url_rule(rule, endpoint=endpoint, view_func=view, methods=[method])
    return app


def _parse_args(argv: Sequence[str] | None) -> AppConfig:
    defaults = AppConfig()
    parser = argparse.ArgumentParser(description="Run the article search server.")
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument("--database", default=defaults.database)
    parser.add_argument("--meilisearch", default=defaults.meilisearch_host)
    args = parser.parse_args(argv)
    return AppConfig(
        host=args.host,
        port=args.port,
        database=args.database,
        meilisearch_host=args.meilisearch,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Set up storage and the search index, then serve HTTP requests."""
    config = _parse_args(argv)
    db = connect(config.database)
    try:
        create_schema(db)
        articles = SQLiteArticleRepository(db)
        authors = SQLiteAuthorsRepository(db)
        tags = SQLiteTagsRepository(db)
        engine = init_engine(config.meilisearch_host)
        sync = IndexSyncManager(engine, articles, tags)
        app = create_app(articles, authors, tags, sync, engine)
        app.run(host=config.host, port=config.port)
    finally:
        db.close()
    return 0