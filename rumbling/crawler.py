"""Same-domain web crawler that stores the paragraph text of each page."""

from __future__ import annotations

import logging
import re
import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
from urllib.parse import urljoin, urlsplit

import requests
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from rumbling.database import Queries

logger = logging.getLogger(__name__)

DEFAULT_MAX_VISITS = 20
DEFAULT_CONCURRENCY = 5

# Keep letters, digits, single spaces and sentence punctuation.
_NOT_KEPT = re.compile(r"[^a-zA-Z0-9 .,!?]+")


class FetchError(Exception):
    """Raised when a page cannot be used as HTML."""


def get_html(raw_url: str) -> str:
    """Fetch a page and return its body if it is HTML."""
    res = requests.get(raw_url)
    with res:
        if res.status_code == 404:
            raise FetchError("dead link")
        if 400 <= res.status_code < 500:
            raise FetchError("client error")
        if "text/html" not in res.headers.get("Content-Type", ""):
            raise FetchError("content type not html")
        return res.text


def normalize_url(raw_url: str) -> str:
    """Reduce a url to host and path, without scheme, query, fragment or trailing slash."""
    parts = urlsplit(raw_url)
    return parts.netloc + parts.path.rstrip("/")


class Crawler:
    """Crawls the pages of one domain and stores their paragraph text."""

    def __init__(
        self,
        queries: Queries,
        domain: str,
        max_visits: int = DEFAULT_MAX_VISITS,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self.queries = queries
        self.domain = domain
        self._host = urlsplit(domain).hostname or ""
        self.max_visits = max_visits
        self.concurrency = concurrency
        self.links: dict[str, list[str]] = {}
        self._lock = threading.Lock()
        self._idle = threading.Condition()
        self._pending = 0
        self._pool: Optional[ThreadPoolExecutor] = None

    def init_crawl(self, base_url: str) -> None:
        """Crawl from base_url and return once every spawned page is done."""
        with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
            self._pool = pool
            self._submit(base_url)
            with self._idle:
                self._idle.wait_for(lambda: self._pending == 0)
        self._pool = None

    def _submit(self, url: str) -> None:
        with self._idle:
            self._pending += 1
        assert self._pool is not None
        self._pool.submit(self._run, url)

    def _run(self, url: str) -> None:
        try:
            for link in self.crawl_page(url):
                logger.info("crawling %s", link)
                self._submit(link)
        finally:
            with self._idle:
                self._pending -= 1
                self._idle.notify_all()

    def data_from_html(self, norm_curr_url: str, html_body: str) -> None:
        """Record the links of a page and store its cleaned paragraph text."""
        with self._lock:
            soup = BeautifulSoup(html_body, "html.parser")
            page_links = self.links.setdefault(norm_curr_url, [])
            content = []
            for node in soup.descendants:
                if not isinstance(node, Tag):
                    continue
                if node.name == "a":
                    href = node.get("href")
                    if href is None:
                        continue
                    if isinstance(href, list):
                        href = " ".join(href)
                    if urlsplit(href).hostname:
                        page_links.append(href)
                    else:
                        page_links.append(urljoin(self.domain, href))
                elif node.name == "p":
                    for child in node.children:
                        if isinstance(child, NavigableString) and not isinstance(
                            child, PreformattedString
                        ):
                            clean = _NOT_KEPT.sub("", str(child).lower()).strip()
                            if clean:
                                content.append(clean)

            text = " ".join(content).strip()
            if text:
                self.queries.insert_data(norm_curr_url, text)

    def url_visited(self, norm_curr_url: str) -> bool:
        """Return True if the url was seen before; otherwise mark it as seen."""
        with self._lock:
            if norm_curr_url in self.links:
                return True
            self.links[norm_curr_url] = []
            return False

    def max_reached(self) -> bool:
        """Return True once the visit limit has been reached."""
        with self._lock:
            return len(self.links) >= self.max_visits

    def crawl_page(self, raw_curr_url: str) -> list[str]:
        """Process one page and return the links found on it to crawl next."""
        if self.max_reached():
            return []
        try:
            parts = urlsplit(raw_curr_url)
            if (parts.hostname or "") != self._host:
                return []
            norm_curr_url = normalize_url(raw_curr_url)
        except ValueError:
            return []
        if self.url_visited(norm_curr_url):
            return []
        try:
            body = get_html(raw_curr_url)
            self.data_from_html(norm_curr_url, body)
        except (FetchError, requests.RequestException, ValueError, sqlite3.Error) as exc:
            logger.debug("skipping %s: %s", raw_curr_url, exc)
            return []
        with self._lock:
            return list(self.links[norm_curr_url])