# planboard

planboard keeps plans as plain Markdown files and remembers which file belongs
to which day, which month and which named field. The mapping lives in a small
SQLite database; the plans themselves stay ordinary `.md` files.

It can also fetch the astronomy picture of the day for a given date, and pick
a random image from a local folder when that is not available.

The package has no runtime dependencies beyond the standard library.

## Modules

- `planboard.persistence` — `TaskStore`, the abstract store, and
  `SqliteTaskStore`, which keeps three tables (`fields`, `months`, `dates`),
  each mapping a key to a Markdown path. Reads on a closed store return
  nothing; failed statements are logged and reported as `False`/`None`.
  `SqliteTaskStore` is also a context manager (opens on enter, closes on exit).
- `planboard.records` — `TaskRecord` (a path) and `TaskRecordings`, an
  in-memory index that files each record by key type: `str` field, `int`
  month or `datetime.date`.
- `planboard.record_helpers` — `TaskRecordsHelper`, which looks records up in
  memory first and then in the store, and keeps both in step; failures are
  collected in its `errors` list. `sync_init(path)` opens an SQLite store,
  loads it and returns the helper, or `None`.
- `planboard.config` — `PreInitHelper`, a JSON configuration file whose keys
  are checked or supplied by `InitItem` objects; `query`, `update` and `save`
  read and change it.
- `planboard.init_items` — `DatabaseInitItem` (key `todo_db`, critical) and
  `CoverFolderInitItem` (key `default_cover_folder`), plus `try_open_sqlite`.
  Both items take a `choose_folder` callable; without one they ask on standard
  input.
- `planboard.markdown_tree` — `TreeItem` trees of headings, paragraphs,
  quotes, lists and task items (`NodeType`), written out as Markdown with
  `serialize_item` and `tree_to_markdown`; `is_horizontal_rule` recognises
  `---` lines.
- `planboard.progress` — `build_progress` returns `ProgressNode` branches that
  contain checkable items, with total, checked and a rounded percentage per
  root; `count_checkable` and `has_checkable_descendants` do the counting.
- `planboard.sidebar` — `FieldList`, the ordered field names with at most one
  selected, and `composed_month(year, month)`, the month key
  (year × 100 + month, years 1900–3000).
- `planboard.apod` — `ApodData`, `apod_url`, `parse_apod_page` and
  `ApodFetcher`, which downloads the page for a day and then its image;
  `NetworkQuery` and `ImageFetch` are the download policies behind it.
- `planboard.default_images` — `DefaultImageHandler`, which picks a random
  `.png`, `.jpg`, `.jpeg`, `.bmp` or `.webp` file from a folder with a random
  title and description.
- `planboard.cached_proxy` — `CachedProxyPolicy` and `CachedProxy`, a fixed
  number of levels tried in order until one policy yields a value.
- `planboard.url_reader` — `read_from_url` (local `file:` URLs only),
  `read_from_local_path` and `truncate_write`.
- `planboard.markdown_paths` — `is_valid_markdown_path`: an existing file
  ending in `.md` or `.markdown`.
- `planboard.errors` — the exceptions listed below.

## Example

```python
import datetime

from planboard.record_helpers import sync_init
from planboard.records import TaskRecord
from planboard.sidebar import composed_month

helper = sync_init("todo.db")

helper.register_field("reading", TaskRecord("reading.md"))
helper.register_month(composed_month(2025, 3), TaskRecord("2025-03.md"))
helper.register_date(datetime.date(2025, 3, 14), TaskRecord("2025-03-14.md"))

print(helper.all_fields())                        # ['reading']
print(helper.get_date(datetime.date(2025, 3, 14)))
# TaskRecord(task_file_path='2025-03-14.md')

helper.remove_field("reading")
helper.deinit()
```

## Errors

- `read_from_local_path` and `truncate_write` raise `OSError` when the file
  cannot be opened; `read_from_url` raises `ValueError` for a URL that is not
  a `file:` URL.
- `CachedProxy.register_policy` raises `ProxyLevelInvalid` for a level out of
  range, `CachedProxyEmpty` for a missing policy and
  `DuplicateProxyRegistration` when the level is taken and duplicates are not
  allowed.
- `ApodFetcher` logs `APODDataRequestFailed` and returns an empty `ApodData`
  when the image cannot be fetched or is not an image.
- `PreInitHelper` raises `ConfigError` when it is given no items, when a
  critical item fails, or when `save` cannot write the file. A configuration
  file that is not valid JSON is replaced by an empty one and `init` returns
  `False`.
- `composed_month` raises `ValueError` for an out-of-range year or month.

## What it does not do

planboard has no window, screen or command-line program; it is a library.
It writes a `TreeItem` tree out as Markdown but does not parse Markdown text
into a tree — building the tree is left to the caller.