"""FastAPI application for chart sonification.

This module provides a REST API with endpoints for:
- /health: Service health check
- /sonify: Tone sweep rendering for chart points

Example:
    To run the API server:

    $ uvicorn src.api.main:app --host 0.0.0.0 --port 8000
"""

from .main import app

__all__ = ["app"]
