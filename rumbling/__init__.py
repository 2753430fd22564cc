"""Same-domain web crawler with SQLite storage and RAKE keyword extraction."""

__version__ = "0.1.0"
__all__ = ["crawler", "database", "parser", "server"]