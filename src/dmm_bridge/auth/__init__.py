"""
dmm_bridge.auth

Inbound webhook authentication.

Responsibilities:
- FastAPI dependency checking the shared `Authorization` header value.
"""

# Package marker.
