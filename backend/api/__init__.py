"""
Agentic System API package.

Provides the FastAPI application for accounts and chat history.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
