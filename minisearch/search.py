"""Search engine protocol, search result records and index synchronisation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Protocol, Sequence

from minisearch.models import Article, ArticleRepository, Tag, TagsRepository

ARTICLES_INDEX_NAME = "articles"


@dataclass
class SearchOptions:
    limit: int = 0
    offset: int = 0
    sort: list[str] = field(default_factory=list)
    filter: str = ""
    facets: str = ""


@dataclass
class SearchHit:
    id: int = 0
    title: str = ""
    author: str = ""
    body: str = ""
    tags: list[Tag] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchHit:
        tags = [
            Tag(
                id=tag.get("id"),
                label=tag.get("label", ""),
                created_at=tag.get("created_at", ""),
                updated_at=tag.get("updated_at", ""),
            )
            for tag in data.get("tags") or []
        ]
        return cls(
            id=data.get("id", 0),
            title=data.get("title", ""),
            author=data.get("author", ""),
            body=data.get("body", ""),
            tags=tags,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SearchResponse:
    query: str
    hits: list[SearchHit] = field(default_factory=list)
    offset: int = 0
    limit: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SearchEngine(Protocol):
    def search(self, query: str, options: SearchOptions) -> SearchResponse: ...

    def index_articles(self, articles: Sequence[Article]) -> None: ...


@dataclass
class IndexSyncManager:
    """Keeps the search index in step with the stored articles and tags."""

    engine: SearchEngine
    articles_repository: ArticleRepository
    tags_repository: TagsRepository

    def sync_after_tags_changed(self, tag: Tag) -> None:
        """Reindex every article that carries ``tag``."""
        self.engine.index_articles(self.articles_repository.find_by_tag(tag))

    def sync_after_articles_changed(self, articles: Sequence[Article]) -> None:
        self.engine.index_articles(articles)