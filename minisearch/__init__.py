"""Article, author and tag storage with Meilisearch full-text search, served over HTTP."""

__version__ = "0.1.0"