"""
Name: ASGI Entrypoint (talentgate.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path `talentgate.main:app` stable for uvicorn

Notes/Constraints:
  - No configuration or IO should live here
"""

from talentgate.api.main import app

__all__ = ["app"]
