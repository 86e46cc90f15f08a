"""
Python client layer for the portal API.

- PortalClient: httpx wrappers for the AI endpoints and the auth routes.
- PortalSessionSource: feeds an AuthContext from the portal session.
"""

from .portal_client import (
    GenerateBioRequest,
    GenerateBioResponse,
    PortalClient,
    PortalClientError,
)
from .session_source import PortalSessionSource

__all__ = [
    "GenerateBioRequest",
    "GenerateBioResponse",
    "PortalClient",
    "PortalClientError",
    "PortalSessionSource",
]
