"""Mini README: Interfaces (web dashboard, presentation helpers) for PocketLedger.

Exports the FastAPI application factory. ``presentation`` holds the
renderer-agnostic view models shared by the dashboard and the CLI.
"""

from .web_app import create_application

__all__ = ["create_application"]
