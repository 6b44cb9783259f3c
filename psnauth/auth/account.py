"""Remote Play account id lookup."""

from __future__ import annotations

import base64
import logging

import httpx

from psnauth.auth.constants import ACCOUNT_ID_BYTES
from psnauth.auth.errors import TokenDecodeError, TokenRequestError
from psnauth.auth.flow import _decode_json
from psnauth.config.schema import Config

logger = logging.getLogger(__name__)


def encode_account_id(user_id: int) -> str:
    """Base64 of the user id as 8 little-endian bytes."""
    raw = (user_id & (2 ** (8 * ACCOUNT_ID_BYTES) - 1)).to_bytes(ACCOUNT_ID_BYTES, "little")
    return base64.b64encode(raw).decode("ascii")


def fetch_account_id(access_token: str, config: Config, transport: httpx.BaseTransport | None = None) -> str:
    """Look up the numeric user id behind an access token and encode it."""
    url = f"{config.token_url}/{access_token}"
    logger.debug("GET %s/<access token>", config.token_url)
    try:
        with httpx.Client(
            timeout=config.timeout,
            auth=httpx.BasicAuth(config.client_id, config.client_secret),
            transport=transport,
        ) as client:
            response = client.get(url, headers={"Content-Type": "application/json"})
    except httpx.HTTPError as exc:
        raise TokenRequestError(f"Account lookup failed: {exc}") from exc

    if not response.is_success:
        raise TokenRequestError(f"Account lookup failed: {response.status_code} {response.text}")

    payload = _decode_json(response)
    user_id = payload.get("user_id")
    try:
        return encode_account_id(int(str(user_id)))
    except ValueError as exc:
        raise TokenDecodeError(f"Account lookup response has no usable user_id: {user_id!r}") from exc
