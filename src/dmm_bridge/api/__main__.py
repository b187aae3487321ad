"""
dmm_bridge.api.__main__

Entrypoint for running the bridge via `python -m dmm_bridge.api` (or `dmm-bridge`).

Responsibilities:
- Load settings; exit(1) when required environment variables are missing.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import sys

import uvicorn
from pydantic import ValidationError

from dmm_bridge.api.app import create_app
from dmm_bridge.observability.logging import configure_logging, get_logger
from dmm_bridge.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(service_name="dmm-bridge", level="INFO")
        log.error(
            "invalid_configuration",
            errors=[
                {"field": ".".join(str(p) for p in err["loc"]) or "settings", "msg": err["msg"]}
                for err in e.errors()
            ],
        )
        sys.exit(1)

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
