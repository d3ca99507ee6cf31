"""HTTP handlers for creating, renaming and listing tags."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Mapping

from flask import jsonify, request

from minisearch.models import Tag, new_tag
from minisearch.retry import with_backoff

logger = logging.getLogger(__name__)


def _read_json() -> Any:
    try:
        return json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise ValueError(f"invalid JSON body: {exc}") from exc


def _required_label(data: Any, type_name: str) -> str:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    label = data.get("label")
    if label is not None and not isinstance(label, str):
        raise ValueError("field 'label' must be of type str")
    if not label:
        raise ValueError(
            f"Key: '{type_name}.Label' Error:Field validation for "
            "'Label' failed on the 'required' tag"
        )
    return label


@dataclass
class TagInput:
    label: str

    @classmethod
    def from_json(cls, data: Any) -> TagInput:
        return cls(label=_required_label(data, cls.__name__))

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label}


@dataclass
class UpdateTagInput:
    new_label: str

    @classmethod
    def from_json(cls, data: Any) -> UpdateTagInput:
        return cls(new_label=_required_label(data, cls.__name__))


def _find_quietly(repository, tag_id: int) -> Tag | None:
    try:
        return repository.find_by_id(tag_id)
    except Exception:
        return None


def _as_json(tag: Tag | None):
    return jsonify(tag.to_dict() if tag else None)


def add_tags_in_batch(repository):
    """Build the view that stores a batch of tags and reports each outcome."""

    def add_tags_in_batch_view():
        try:
            data = _read_json() or []
            if not isinstance(data, list):
                raise ValueError("expected a JSON array of tags")
            inputs = [TagInput.from_json(item) for item in data]
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        inserted: list[Tag] = []
        failed: list[dict[str, Any]] = []
        for item in inputs:
            tag = new_tag(item.label)
            try:
                tag.id = repository.save(tag)
            except Exception as exc:
                failed.append({str(exc): item.to_dict()})
                continue
            inserted.append(tag)

        return jsonify(
            {
                "summary": {
                    "total_inserted": len(inserted),
                    "total_failed": len(failed),
                },
                "inserted": [tag.to_dict() for tag in inserted],
                "failed": failed,
            }
        ), 201

    return add_tags_in_batch_view


def add_tag(repository):
    """Build the view that stores one tag and returns it as stored."""

    def add_tag_view():
        try:
            item = TagInput.from_json(_read_json())
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        try:
            tag_id = repository.save(new_tag(item.label))
        except Exception:
            return jsonify({"error": "Failed to insert new tag"}), 500

        return _as_json(_find_quietly(repository, tag_id)), 201

    return add_tag_view


def update_tag_with_label(repository, sync):
    """Build the view that relabels a tag and schedules reindexing of its articles."""

    def update_tag_view(label: str):
        try:
            item = UpdateTagInput.from_json(_read_json())
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        try:
            tag = repository.find_by_label(label)
        except Exception:
            return jsonify({"error": f"Could not find tag '{label}'"}), 404

        tag.update(item.new_label)
        try:
            tag_id = repository.save(tag)
        except Exception:
            return jsonify({"error": f"Failed to update tag '{tag.label}'"}), 500

        retrieved = _find_quietly(repository, tag_id)
        if retrieved is not None:

            def resync() -> None:
                try:
                    with_backoff(lambda: sync.sync_after_tags_changed(retrieved))
                except Exception:
                    logger.exception(
                        "could not sync articles tagged '%s' with the index",
                        retrieved.label,
                    )

            threading.Thread(target=resync, daemon=True).start()
        return _as_json(retrieved), 200

    return update_tag_view


def list_all_tags(repository):
    """Build the view that lists every tag."""

    def list_all_tags_view():
        try:
            tags = repository.find_all()
        except Exception:
            return jsonify({"error": "Failed to fetch tags"}), 500
        return jsonify([tag.to_dict() for tag in tags]), 200

    return list_all_tags_view


def get_tag_by_label(repository):
    """Build the view that returns one tag by its label."""

    def get_tag_view(label: str):
        try:
            tag = repository.find_by_label(label)
        except Exception:
            return jsonify({"error": f"Could not find tag '{label}'"}), 404
        return jsonify(tag.to_dict()), 200

    return get_tag_view


def find_articles_by_labels(articles_repository, tags_repository):
    """Build the view that lists the articles carrying a tag."""

    def find_articles_view(label: str = ""):
        if not label:
            return jsonify({"error": "Label is required"}), 400

        try:
            tag = tags_repository.find_by_label(label)
        except Exception:
            return jsonify({"error": f"Could not find tag '{label}'"}), 404

        try:
            articles = articles_repository.find_by_tag(tag)
        except Exception:
            return jsonify({"error": f"Could not find articles with tag {tag.label}"}), 500

        return jsonify([article.to_dict() for article in articles]), 200

    return find_articles_view