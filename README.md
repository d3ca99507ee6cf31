# minisearch

A small HTTP service for publishing articles and searching them.

Authors, tags and articles are stored in SQLite (by default a shared
in-memory database, so nothing survives a restart). Every article that is
added, and every article carrying a tag that is renamed, is pushed to a
Meilisearch index in a background thread, retried with exponential,
jittered back-off for up to ten seconds. Searches are answered straight
from that index.

## Installing

```
pip install .
```

Tests need the `test` extra (`pip install .[test]`) and run with `pytest`.

## Running

```
minisearch
```

Options:

| Option          | Default                                     |
|-----------------|---------------------------------------------|
| `--host`        | `0.0.0.0`                                   |
| `--port`        | `8080`                                      |
| `--database`    | `file:articles.db?mode=memory&cache=shared` |
| `--meilisearch` | `http://localhost:7700`                     |

`--database` takes an SQLite path or `file:` URI. On start the tables are
created if missing, and the Meilisearch server is asked to create the
`articles` index (primary key `id`) and to set:

- searchable attributes: `title`, `body`, `author`, `tags`
- filterable attributes: `author`, `tags`
- sortable attributes: `author`, `title`

If the server cannot be reached or refuses, start-up fails with
`minisearch.meilisearch.MeilisearchError`.

## Endpoints

Request bodies are JSON. A body that is not valid JSON, or misses a required
field, is answered with `400` and `{"error": "..."}`.

### Authors

| Method | Path             | Body                                |
|--------|------------------|-------------------------------------|
| POST   | `/authors`       | `{"name": "Ada", "author_id": 1}`   |
| POST   | `/authors/batch` | a list of the objects above         |

`name` is required and unique; `author_id` is optional. A failed insert on
`/authors` answers `500`.

### Tags

| Method | Path                     | Notes                                         |
|--------|--------------------------|-----------------------------------------------|
| POST   | `/tags`                  | `{"label": "python"}`                         |
| POST   | `/tags/batch`            | a list of the objects above                   |
| GET    | `/tags`                  | every tag, in insertion order                 |
| GET    | `/tags/<label>`          | one tag, `404` if unknown                     |
| PATCH  | `/tags/<label>`          | `{"label": "new-label"}`                      |
| GET    | `/tags/<label>/articles` | articles carrying the tag, `404` if unknown   |

Saving a tag whose label already exists updates that tag instead of adding a
second one. `PATCH` looks the tag up by its current label (`404` if unknown),
saves it under the new label and answers `200` with the stored tag; the
articles carrying that stored tag are then re-indexed in the background.

### Articles

| Method | Path              | Body                                                                  |
|--------|-------------------|-----------------------------------------------------------------------|
| POST   | `/articles`       | `{"title": "...", "body": "...", "author_id": 1, "tags": ["python"]}` |
| POST   | `/articles/batch` | a list of the objects above                                           |

`title`, `body` and `author_id` are required. `/articles` answers `400` if the
author does not exist. Tag labels that do not match a known tag are ignored.

Batch endpoints answer `201` with a summary:

```json
{
  "summary": {"total_inserted": 2, "total_failed": 1},
  "inserted": [ ... ],
  "failed": [ {"author not found": { ... }} ]
}
```

Each failed entry maps the reason to the input that was rejected.

### Search

`GET /search` takes these query parameters:

| Parameter | Default     | Meaning                                    |
|-----------|-------------|--------------------------------------------|
| `q`       | (required)  | the search text                            |
| `limit`   | `10`        | maximum number of hits                     |
| `offset`  | `0`         | number of hits to skip                     |
| `filter`  | empty       | a Meilisearch filter, e.g. `tags = python` |
| `sort`    | `title:asc` | a sort rule on `author` or `title`         |

The answer holds `query`, `hits`, `offset`, `limit` and `total` (the
estimated number of matches). A failing search engine gives `500`.

## Using it as a library

- `minisearch.app.create_app(articles, authors, tags, sync, engine)` builds
  the Flask application from any repositories and engine that follow
  `minisearch.models.ArticleRepository`, `minisearch.models.TagsRepository`
  and `minisearch.search.SearchEngine`; a stand-in engine works as well as
  Meilisearch.
- `minisearch.database.connect()` and `create_schema()` open the database and
  create its tables.
- `minisearch.repositories` holds `SQLiteAuthorsRepository`,
  `SQLiteArticleRepository` and `SQLiteTagsRepository`; lookups of missing
  records raise `NotFoundError`.
- `minisearch.search.IndexSyncManager` pushes changed articles to an engine.
- `minisearch.meilisearch.init_engine(host)` configures the index and returns
  a `MeilisearchEngine`.
- `minisearch.retry.with_backoff(operation, max_time=10.0)` retries a callable
  until it succeeds or the time runs out.

## What it does not do

Articles, authors and tags can only be added (and tags relabelled): there are
no endpoints to delete records or edit articles, and no authentication.