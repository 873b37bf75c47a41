"""FastAPI host for the tutor.

The chat itself is served by NiceGUI, mounted on this application.

Endpoints:
    - GET /health: Service health status
    - GET /: Chat page (NiceGUI)
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
