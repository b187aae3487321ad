"""
dmm_bridge.services

Service-layer package.

Responsibilities:
- Decide what an inbound notification means and drive the dispatcher.
"""

# Package marker.
