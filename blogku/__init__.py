"""Blogku backend: cache-aside content repository behind a FastAPI service."""

__version__ = "1.0.0"
