"""Search engine backed by a Meilisearch server over its HTTP API."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import requests

from minisearch.models import Article
from minisearch.search import (
    ARTICLES_INDEX_NAME,
    SearchHit,
    SearchOptions,
    SearchResponse,
)

DEFAULT_HOST = "http://localhost:7700"


class MeilisearchError(RuntimeError):
    """Raised when the server cannot be reached or rejects a request."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MeilisearchClient:
    def __init__(self, host: str = DEFAULT_HOST) -> None:
        self.host = host.rstrip("/")

    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.host}{path}"
        try:
            response = requests.request(method, url, json=payload, timeout=10)
            response.raise_for_status()
            return response.json() if response.content else {}
        except requests.HTTPError as exc:
            raise MeilisearchError(
                f"{method} {url}: {exc}", status=exc.response.status_code
            ) from exc
        except (requests.RequestException, ValueError) as exc:
            raise MeilisearchError(f"{method} {url}: {exc}") from exc

    def create_index(self, uid: str, primary_key: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"uid": uid}
        if primary_key is not None:
            payload["primaryKey"] = primary_key
        return self._request("POST", "/indexes", payload)

    def index(self, uid: str) -> MeilisearchIndex:
        return MeilisearchIndex(self, uid)


class MeilisearchIndex:
    def __init__(self, client: MeilisearchClient, uid: str) -> None:
        self.client = client
        self.uid = uid

    def _call(self, method: str, suffix: str, payload: Any) -> dict[str, Any]:
        return self.client._request(method, f"/indexes/{self.uid}{suffix}", payload)

    def add_documents(self, documents: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
        return self._call("POST", "/documents", [dict(doc) for doc in documents])

    def search(
        self, query: str, request: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        return self._call("POST", "/search", {"q": query, **(request or {})})

    def update_searchable_attributes(self, attributes: Sequence[str]) -> dict[str, Any]:
        return self._call("PUT", "/settings/searchable-attributes", list(attributes))

    def update_filterable_attributes(self, attributes: Sequence[str]) -> dict[str, Any]:
        return self._call("PUT", "/settings/filterable-attributes", list(attributes))

    def update_sortable_attributes(self, attributes: Sequence[str]) -> dict[str, Any]:
        return self._call("PUT", "/settings/sortable-attributes", list(attributes))


class MeilisearchEngine:
    def __init__(self, index: MeilisearchIndex) -> None:
        self.index = index

    def index_articles(self, articles: Sequence[Article]) -> None:
        self.index.add_documents([article.to_dict() for article in articles])

    def search(self, query: str, options: SearchOptions) -> SearchResponse:
        request: dict[str, Any] = {"limit": options.limit, "offset": options.offset}
        if options.filter:
            request["filter"] = options.filter
        if options.sort:
            request["sort"] = list(options.sort)

        result = self.index.search(query, request)
        return SearchResponse(
            query=result.get("query", query),
            hits=[SearchHit.from_dict(hit) for hit in result.get("hits") or []],
            offset=int(result.get("offset", 0)),
            limit=int(result.get("limit", 0)),
            total=int(result.get("estimatedTotalHits", 0)),
        )


def init_engine(host: str = DEFAULT_HOST) -> MeilisearchEngine:
    """Create and configure the articles index and return an engine for it."""
    client = MeilisearchClient(host)
    client.create_index(ARTICLES_INDEX_NAME, primary_key="id")
    index = client.index(ARTICLES_INDEX_NAME)
    index.update_searchable_attributes(["title", "body", "author", "tags"])
    index.update_filterable_attributes(["author", "tags"])
    index.update_sortable_attributes(["author", "title"])
    return MeilisearchEngine(index)