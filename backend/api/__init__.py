"""
TPC Portal API package.

Provides the FastAPI application that resolves site URLs through the
navigation and access-control pipeline.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
