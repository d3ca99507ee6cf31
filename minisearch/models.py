"""Domain records for authors, tags and articles, and the repository protocols."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Protocol, Sequence


def _now() -> str:
    """Current local time as an RFC 3339 timestamp with second precision."""
    stamp = datetime.now().astimezone().replace(microsecond=0).isoformat()
    return stamp[:-6] + "Z" if stamp.endswith("+00:00") else stamp


@dataclass
class Author:
    id: int | None = None
    name: str = ""
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Tag:
    id: int | None = None
    label: str = ""
    created_at: str = ""
    updated_at: str = ""

    def update(self, label: str) -> None:
        """Rename the tag and refresh its modification time."""
        self.label = label
        self.updated_at = _now()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Article:
    id: int | None = None
    title: str = ""
    body: str = ""
    author: str = ""
    author_id: int | None = None
    created_at: str = ""
    tags: list[Tag] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def new_author(author_id: int | None, name: str) -> Author:
    return Author(id=author_id, name=name, created_at=_now())


def new_tag(label: str) -> Tag:
    now = _now()
    return Tag(label=label, created_at=now, updated_at=now)


def new_article(
    title: str, body: str, author: Author, tags: Sequence[Tag] | None
) -> Article:
    return Article(
        title=title,
        body=body,
        author=author.name,
        author_id=author.id,
        tags=list(tags or []),
        created_at=_now(),
    )


class ArticleRepository(Protocol):
    def save(self, article: Article) -> int: ...

    def find_by_tag(self, tag: Tag) -> list[Article]: ...


class TagsRepository(Protocol):
    def save(self, tag: Tag) -> int: ...

    def find_by_id(self, tag_id: int) -> Tag: ...

    def find_by_label(self, label: str) -> Tag: ...

    def find_by_labels(self, labels: Sequence[str]) -> list[Tag]: ...

    def find_all(self) -> list[Tag]: ...