# rumbling

rumbling crawls a website without leaving its host. It stores the paragraph
text of each page it visits in a SQLite database. It can also extract the key
phrases from stored text with the RAKE algorithm (Rapid Automatic Keyword
Extraction).

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running the server

The `rumbling` command starts an HTTP server (`rumbling.server:main`). It
reads its settings from the environment. It first loads a dotenv file, which
is `.env` by default. Use `--env-file PATH` to load a different file.

- `DB_URL`: path to the SQLite database file. The file and its `data` table
  are created if they do not exist.
- `PORT`: the address to listen on, in the form `host:port` or `:port`. With
  no host, the server listens on `0.0.0.0`.

```
DB_URL=crawl.db PORT=:8080 rumbling
```

If `DB_URL` or `PORT` is missing, or if the port is not a valid number, the
command exits with an error message.

### `POST /api/data`

Send a JSON object with the URL to start from:

```
curl -X POST localhost:8080/api/data -d '{"url": "https://www.example.com"}'
```

The request waits until the crawl has finished and then returns `200`. If the
body is not valid JSON, is not an object, or its `url` is not a string, the
server returns `400` with a body such as `{"error": "..."}`.

## How crawling works

`rumbling.crawler.Crawler(queries, domain, max_visits=20, concurrency=5)`
starts from a URL when you call `init_crawl(url)`:

- It follows only links whose host matches the host of `domain`.
  Relative links are resolved against `domain`.
- It fetches at most `concurrency` pages at a time.
- It stops taking new pages once it has recorded `max_visits` URLs.
- It visits each normalized URL once.
- `get_html` raises `FetchError` for a `404` ("dead link"), for any other 4xx
  status, and for a response whose `Content-Type` is not `text/html`. The
  crawler skips pages that fail to fetch, as well as pages that fail while
  being processed.
- The crawler takes the text directly inside each `<p>` element and lower-cases
  it. It keeps only letters, digits, spaces and `. , ! ?`. The pieces are
  joined with spaces and stored under the page's normalized URL. Pages with no
  such text are not stored.

The server uses these defaults: 20 visits and 5 fetches at once.

Stored rows are keyed by their normalized URL: the host and the path, with any
trailing slashes removed. `normalize_url` computes it:

```python
from rumbling.crawler import normalize_url

normalize_url("https://www.example.com/world/?q=1")  # "www.example.com/world"
```

## Storage

`rumbling.database.connect(path)` opens or creates the database and returns
a `Queries` object, which has two methods:

- `insert_data(url, content)`: stores a row.
- `retrieve_data(url)`: returns a `DataRow` with `url` and `content`. It
  raises `LookupError` if no row exists for the URL.

## Extracting keywords

```python
from rumbling.database import connect
from rumbling.parser import rake

queries = connect("crawl.db")
row = queries.retrieve_data("www.example.com/about")
result = rake(row)
print(result.url, result.keywords)
```

`rake` works in these steps, which are also available as separate functions
in `rumbling.parser`:

1. `delimit_by_punct` splits the text into sentences at punctuation.
2. `delimit_by_stop` splits the sentences into phrases at stop words.
3. `co_occurrence` builds the word co-occurrence graph.
4. `deg_freq_calc` scores each word as its degree divided by its frequency.
5. `term_scoring` scores each phrase as the sum of its words' scores.
6. `filtering` returns the top third of the phrases by score, plus one. If
   there are three phrases or fewer, it returns all of them.

If the text cannot be processed, these functions raise
`rumbling.parser.ParseError`. Empty content is one such case.

## What it does not do

The HTTP server only starts crawls. It has no endpoint that returns stored text
or keywords. Keyword extraction is available only from Python, through
`rumbling.parser.rake`. Storage is a local SQLite file only.

## Tests

```
pytest
```