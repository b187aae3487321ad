"""
dmm_bridge.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Validate that one complete downstream credential scheme is configured.
- Hide secrets from repr/logging (bearer token, debrid tokens).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DispatchMode = Literal["browser", "api"]

# Env var names of the debrid quadruple, in the order operators usually paste them.
_DEBRID_FIELDS = ("rd_access_token", "rd_client_id", "rd_client_secret", "rd_refresh_token")


class Settings(BaseSettings):
    """
    No env prefix: variable names (DMM_URL, RD_ACCESS_TOKEN, ...) match the ones
    already used by existing bridge deployments.
    """

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    service_name: str = "dmm-bridge"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    port: int = 3000

    # Downstream discovery site
    dmm_url: str = Field(min_length=1)
    dispatch_mode: DispatchMode = "browser"

    # Credential scheme A: static bearer token
    dmm_token: str | None = Field(default=None, repr=False)

    # Credential scheme B: Real-Debrid token set (cast token is optional)
    rd_access_token: str | None = Field(default=None, repr=False)
    rd_client_id: str | None = Field(default=None, repr=False)
    rd_client_secret: str | None = Field(default=None, repr=False)
    rd_refresh_token: str | None = Field(default=None, repr=False)
    rd_cast_token: str | None = Field(default=None, repr=False)

    # Inbound auth: value Overseerr sends in its "Authorization Header" webhook setting.
    webhook_auth_header: str | None = Field(default=None, repr=False)

    # Scripted browser session. Selectors chase the site's UI, so they are config.
    browser_headless: bool = True
    browser_timeout_ms: int = Field(default=30_000, ge=1)
    search_path: str = "/search"
    login_selector: str = 'button[type="submit"]'
    results_selector: str = ".search-results"
    result_item_selector: str = ".search-result-item"

    # API dispatch
    api_path_template: str = "/api/{media_type}/{provider}/{external_id}"
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @model_validator(mode="after")
    def _check_credentials(self) -> Settings:
        present = [name for name in _DEBRID_FIELDS if getattr(self, name)]
        if present and len(present) != len(_DEBRID_FIELDS):
            missing = [name.upper() for name in _DEBRID_FIELDS if name not in present]
            raise ValueError(f"incomplete debrid credentials, missing: {', '.join(missing)}")
        if not self.dmm_token and not present:
            raise ValueError(
                "no downstream credentials: set DMM_TOKEN or the RD_* debrid token set"
            )
        if self.dispatch_mode == "api" and not self.dmm_token:
            raise ValueError("DISPATCH_MODE=api requires DMM_TOKEN")
        return self

    @model_validator(mode="after")
    def _check_api_path_template(self) -> Settings:
        # Fail at startup rather than with a KeyError on every dispatch.
        try:
            self.api_path_template.format(media_type="movie", provider="tmdb", external_id="0")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                "API_PATH_TEMPLATE may only use {media_type}, {provider} and {external_id}: "
                f"{e!r}"
            ) from e
        return self

    @property
    def has_bearer(self) -> bool:
        return bool(self.dmm_token)

    @property
    def has_debrid(self) -> bool:
        return all(getattr(self, name) for name in _DEBRID_FIELDS)

    @property
    def base_url(self) -> str:
        return self.dmm_url.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()  # type: ignore[call-arg]


# --- Module Notes -----------------------------------------------------------
# A missing DMM_URL or credential scheme raises pydantic.ValidationError here;
# `dmm_bridge.api.__main__` turns that into a logged exit(1) before serving.
