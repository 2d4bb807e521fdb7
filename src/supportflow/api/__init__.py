"""
SupportFlow API

FastAPI-based REST API for ticket classification and engine administration.
"""

from supportflow.api.main import app, create_app

__all__ = ["app", "create_app"]
