"""Board API: authentication and bulletin board CRUD over FastAPI."""

__version__ = "1.0.0"
