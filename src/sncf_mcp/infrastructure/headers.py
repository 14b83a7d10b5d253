from __future__ import annotations

import base64

USER_AGENT = "sncf-mcp/0.1 (+https://www.digital.sncf.com/startup/api)"


def basic_auth_value(api_key: str) -> str:
    """Return the Authorization header value for an SNCF API key.

    The key is the Basic-auth username; the password is always empty,
    so the encoded credential is base64("<key>:").
    """
    token = base64.b64encode(f"{api_key}:".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def make_headers(api_key: str) -> dict[str, str]:
    """Return the headers sent with every SNCF API request."""
    return {
        "Accept": "application/json",
        "Accept-Language": "fr-FR,fr;q=0.9,en;q=0.8",
        "Authorization": basic_auth_value(api_key),
        "User-Agent": USER_AGENT,
    }
