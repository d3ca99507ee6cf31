"""HTTP handler for full-text search of articles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from flask import jsonify, request

from minisearch.search import SearchEngine, SearchOptions


def _int_arg(args: Mapping[str, str], name: str, default: int) -> int:
    value = args.get(name)
    if value is None:
        return default
    if value == "":
        return 0
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"parameter '{name}' must be an integer, got {value!r}") from exc


@dataclass
class SearchQueryParams:
    """The query-string parameters of a search request."""

    query: str
    limit: int = 10
    offset: int = 0
    filter: str = ""
    sort: str = "title:asc"

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> SearchQueryParams:
        """Read parameters from a query-string mapping; raises ValueError on bad input."""
        query = args.get("q") or ""
        if not query:
            raise ValueError(
                f"Key: '{cls.__name__}.Query' Error:Field validation for "
                "'Query' failed on the 'required' tag"
            )
        return cls(
            query=query,
            limit=_int_arg(args, "limit", cls.limit),
            offset=_int_arg(args, "offset", cls.offset),
            filter=args.get("filter", cls.filter),
            sort=args.get("sort", cls.sort),
        )


def search_articles(engine: SearchEngine) -> Callable[[], Any]:
    """Build the view that runs a search against the engine."""

    def search_view():
        try:
            params = SearchQueryParams.from_args(request.args)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        options = SearchOptions(
            limit=params.limit,
            offset=params.offset,
            filter=params.filter,
            sort=[params.sort],
        )
        try:
            response = engine.search(params.query, options)
        except Exception:
            return jsonify({"error": "Failed to search articles"}), 500

        return jsonify(response.to_dict()), 200

    return search_view