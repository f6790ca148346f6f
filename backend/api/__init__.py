"""
Appliance tracker API package.

Provides the FastAPI application for the appliance tracking service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
