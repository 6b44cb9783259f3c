"""Configuration schema."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from psnauth.auth.constants import (
    AUTHORIZE_URL,
    CLIENT_ID,
    CLIENT_SECRET,
    CREDENTIALS_FILENAME,
    DUID_PREFIX,
    REDIRECT_URI,
    REQUEST_TIMEOUT_SEC,
    SCOPE,
    TOKEN_FILENAME,
    TOKEN_URL,
)


def get_data_path() -> Path:
    """Directory holding the config file and the credentials file."""
    return Path.home() / ".psnauth"


def _default_credentials_path() -> str:
    return str(get_data_path() / CREDENTIALS_FILENAME)


def _default_token_path() -> str:
    return str(Path(tempfile.gettempdir()) / TOKEN_FILENAME)


@dataclass
class Config:
    """Runtime configuration injected into the OAuth flow."""

    client_id: str = CLIENT_ID
    client_secret: str = CLIENT_SECRET
    authorize_url: str = AUTHORIZE_URL
    token_url: str = TOKEN_URL
    redirect_uri: str = REDIRECT_URI
    scope: str = SCOPE
    duid_prefix: str = DUID_PREFIX
    credentials_path: str = field(default_factory=_default_credentials_path)
    token_path: str = field(default_factory=_default_token_path)
    refresh_token: str = ""
    timeout: float = REQUEST_TIMEOUT_SEC

    @property
    def credentials_file(self) -> Path:
        return Path(self.credentials_path).expanduser()

    @property
    def token_file(self) -> Path:
        return Path(self.token_path).expanduser()
