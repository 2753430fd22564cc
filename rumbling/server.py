"""HTTP API that crawls a site on request and stores its text."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sqlite3
from typing import Optional, Sequence

from dotenv import load_dotenv
from flask import Flask, Response, request

from rumbling.crawler import DEFAULT_CONCURRENCY, DEFAULT_MAX_VISITS, Crawler
from rumbling.database import Queries, connect

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: BaseException) -> Response:
    """Log an error and build a JSON error response for it."""
    logger.error("%s", error)
    body = json.dumps({"error": str(error)})
    return Response(body, status=status_code, mimetype="application/json")


def create_app(queries: Queries) -> Flask:
    """Build the application serving the crawl endpoint."""
    app = Flask(__name__)

    @app.post("/api/data")
    def post_data():
        try:
            payload = json.loads(request.get_data())
        except ValueError as exc:
            return error_response(400, exc)
        if not isinstance(payload, dict):
            return error_response(400, ValueError("request body must be a JSON object"))
        url = payload.get("url", "")
        if not isinstance(url, str):
            return error_response(400, ValueError("url must be a string"))
        try:
            crawler = Crawler(
                queries,
                url,
                max_visits=DEFAULT_MAX_VISITS,
                concurrency=DEFAULT_CONCURRENCY,
            )
        except ValueError as exc:
            return error_response(400, exc)
        crawler.init_crawl(url)
        return Response(status=200)

    return app


def _parse_address(address: str) -> tuple[str, int]:
    host, _, port = address.rpartition(":")
    number = int(port)
    if not 0 <= number <= 65535:
        raise ValueError(f"port out of range: {number}")
    return host or "0.0.0.0", number


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Start the API server configured from the environment."""
    parser = argparse.ArgumentParser(prog="rumbling", description="Crawl sites and store their text.")
    parser.add_argument("--env-file", default=".env", help="file to load environment variables from")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    if not load_dotenv(args.env_file):
        logger.info("no environment variables loaded from .env file")

    db_url = os.environ.get("DB_URL", "")
    if not db_url:
        logger.error("no database url provided")
        raise SystemExit("no database url provided")
    try:
        queries = connect(db_url)
    except sqlite3.Error:
        logger.error("no connection to database")
        raise SystemExit("no connection to database")
    logger.info("connected to database")

    address = os.environ.get("PORT", "")
    if not address:
        logger.error("no port provided")
        raise SystemExit("no port provided")
    try:
        host, port = _parse_address(address)
    except ValueError:
        logger.error("server not started")
        raise SystemExit("server not started")

    app = create_app(queries)
    logger.info("server started, serving at http://localhost:%d", port)
    app.run(host=host, port=port)