"""HTTP handlers for creating authors."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from flask import jsonify, request

from minisearch.models import Author, new_author


def _read_json() -> Any:
    try:
        return json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise ValueError(f"invalid JSON body: {exc}") from exc


@dataclass
class AuthorInput:
    name: str
    author_id: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> AuthorInput:
        """Validate a decoded JSON object; raises ValueError when it is unusable."""
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object")
        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValueError("field 'name' must be of type str")
        author_id = data.get("author_id")
        if author_id is not None and (
            not isinstance(author_id, int) or isinstance(author_id, bool)
        ):
            raise ValueError("field 'author_id' must be of type int")
        if not name:
            raise ValueError(
                f"Key: '{cls.__name__}.Name' Error:Field validation for "
                "'Name' failed on the 'required' tag"
            )
        return cls(name=name, author_id=author_id)


def add_authors(repository):
    """Build the view that stores a batch of authors and reports each outcome."""

    def add_authors_view():
        try:
            data = _read_json() or []
            if not isinstance(data, list):
                raise ValueError("expected a JSON array of authors")
            inputs = [AuthorInput.from_json(item) for item in data]
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        inserted: list[Author] = []
        failed: list[dict[str, Any]] = []
        for item in inputs:
            author = new_author(item.author_id, item.name)
            try:
                author.id = repository.save(author)
            except Exception as exc:
                failed.append({str(exc): author.to_dict()})
                continue
            inserted.append(author)

        return jsonify(
            {
                "summary": {
                    "total_inserted": len(inserted),
                    "total_failed": len(failed),
                },
                "inserted": [author.to_dict() for author in inserted],
                "failed": failed,
            }
        ), 201

    return add_authors_view


def add_author(repository):
    """Build the view that stores one author."""

    def add_author_view():
        try:
            item = AuthorInput.from_json(_read_json())
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        author = new_author(item.author_id, item.name)
        try:
            author.id = repository.save(author)
        except Exception:
            return jsonify({"error": "Failed to insert author"}), 500

        return jsonify(author.to_dict()), 201

    return add_author_view