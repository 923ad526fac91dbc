"""Entry point for the reference backend service.

This thin wrapper exposes the FastAPI `app` from plant_api/main.py
as `app` at the repository root so that a start command like
`uvicorn main:app` works regardless of the working directory.
"""

from plant_api.main import app  # re-export for uvicorn
