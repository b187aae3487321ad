"""
dmm_bridge.api

API package for the bridge.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and request models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: payload validation + auth + delegation to RelayService.
