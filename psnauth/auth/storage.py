"""Token storage helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from psnauth.auth.errors import StorageError
from psnauth.auth.models import TokenSet

logger = logging.getLogger(__name__)

_REFRESH_PREFIX = "Refresh Token: "


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fp:
            fp.write(text)
            fp.flush()
    except OSError as exc:
        raise StorageError(f"File does not exist or cannot be created: {path} ({exc})") from exc


def save_credentials(token: TokenSet, path: Path) -> None:
    """Write the human readable credentials file."""
    _write_text(
        path,
        f"Access Token: {token.access_token}\n"
        f"Refresh Token: {token.refresh_token}\n"
        f"Expiry Date: {token.expires_in}\n",
    )
    logger.debug("Wrote credentials to %s", path)


def save_bare_token(token: TokenSet, path: Path) -> None:
    """Write only the access token, for other tools to read."""
    _write_text(path, token.access_token)
    logger.debug("Wrote access token to %s", path)


def save_token_set(token: TokenSet, credentials_path: Path, token_path: Path) -> None:
    """Persist both files. Stops at the first file that cannot be written."""
    save_credentials(token, credentials_path)
    save_bare_token(token, token_path)


def load_refresh_token(path: Path) -> str | None:
    """Read the refresh token from an existing credentials file."""
    if not path.exists():
        return None
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise StorageError(f"Cannot read credentials file {path}: {exc}") from exc
    for line in lines:
        if line.startswith(_REFRESH_PREFIX):
            return line[len(_REFRESH_PREFIX):].strip() or None
    return None


def load_access_token(path: Path) -> str | None:
    """Read the bare access token file."""
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except OSError as exc:
        raise StorageError(f"Cannot read token file {path}: {exc}") from exc
