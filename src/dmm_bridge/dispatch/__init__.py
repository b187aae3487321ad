"""
dmm_bridge.dispatch

Outbound dispatch package.

Responsibilities:
- Define the media target handed to a dispatcher and the dispatcher interface.
- Provide the two outbound paths: authenticated HTTP call, scripted browser session.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The relay service depends on the `Dispatcher` protocol only; which concrete
# dispatcher runs is decided once at startup from settings (see `factory`).
