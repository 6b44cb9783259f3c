"""PSN Remote Play OAuth login and token exchange."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import httpx

from psnauth.auth.constants import LOGIN_DISPLAY_PARAMS
from psnauth.auth.errors import (
    InvalidRedirectURLError,
    MissingRefreshTokenError,
    TokenDecodeError,
    TokenRequestError,
)
from psnauth.auth.models import TokenSet
from psnauth.config.schema import Config

logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def build_login_url(duid: str, config: Config) -> str:
    """Build the Remote Play login page URL for the given device id."""
    params = {
        "service_entity": "urn:service-entity:psn",
        "response_type": "code",
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "scope": config.scope,
        "duid": duid,
        **LOGIN_DISPLAY_PARAMS,
    }
    query = urllib.parse.urlencode(params, quote_via=urllib.parse.quote, safe=":/")
    return f"{config.authorize_url}?{query}"


def parse_redirect_url(raw: str) -> str:
    """Extract the authorization code from the pasted redirect URL."""
    value = raw.strip()
    try:
        url = urllib.parse.urlparse(value)
        qs = urllib.parse.parse_qs(url.query)
    except ValueError as exc:
        raise InvalidRedirectURLError(f"Invalid URL has been submitted: {exc}") from exc
    code = qs.get("code", [None])[0]
    if not code:
        raise InvalidRedirectURLError("Invalid URL has been submitted")
    return code


def _decode_json(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise TokenDecodeError(f"Malformed response from {response.url}: {exc}") from exc
    if not isinstance(payload, dict):
        raise TokenDecodeError(f"Unexpected response from {response.url}: {payload!r}")
    return payload


def _request_token(data: dict[str, str], config: Config, transport: httpx.BaseTransport | None) -> TokenSet:
    grant = data["grant_type"]
    logger.debug("POST %s (grant_type=%s)", config.token_url, grant)
    try:
        with httpx.Client(
            timeout=config.timeout,
            auth=httpx.BasicAuth(config.client_id, config.client_secret),
            transport=transport,
        ) as client:
            response = client.post(config.token_url, data=data, headers=_FORM_HEADERS)
    except httpx.HTTPError as exc:
        raise TokenRequestError(f"Token request failed: {exc}") from exc

    logger.debug("Token endpoint answered %s", response.status_code)
    if not response.is_success:
        raise TokenRequestError(f"Token request failed: {response.status_code} {response.text}")

    payload = _decode_json(response)
    try:
        return TokenSet.from_payload(payload)
    except (TypeError, ValueError) as exc:
        raise TokenDecodeError(f"Malformed token response: {exc}") from exc


def exchange_code(code: str, config: Config, transport: httpx.BaseTransport | None = None) -> TokenSet:
    """Exchange an authorization code for a token set."""
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": config.redirect_uri,
    }
    return _request_token(data, config, transport)


def refresh_token(refresh: str, config: Config, transport: httpx.BaseTransport | None = None) -> TokenSet:
    """Exchange a refresh token for a new token set."""
    if not refresh:
        raise MissingRefreshTokenError("No refresh token available. Run the login command first.")
    data = {
        "grant_type": "refresh_token",
        "refresh_token": refresh,
        "scope": config.scope,
        "redirect_uri": config.redirect_uri,
    }
    return _request_token(data, config, transport)
