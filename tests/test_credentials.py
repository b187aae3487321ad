"""
tests.test_credentials

localStorage items for each credential scheme.
"""

from __future__ import annotations

from dmm_bridge.dispatch.credentials import storage_items


def test_bearer_only(settings) -> None:
    assert storage_items(settings) == {"token": "tok"}


def test_storage_items_cover_both_schemes(debrid_settings) -> None:
    both = debrid_settings.model_copy(update={"dmm_token": "tok", "rd_cast_token": "cast"})

    items = storage_items(both)

    assert items["token"] == "tok"
    assert items["rd:castToken"] == '"cast"'
    assert set(items) == {
        "token",
        "rd:accessToken",
        "rd:clientId",
        "rd:clientSecret",
        "rd:refreshToken",
        "rd:castToken",
    }


# --- Module Notes -----------------------------------------------------------
# Values must stay JSON.parse-able by the site, except the verbatim access token.
