"""Device identifier helpers."""

from __future__ import annotations

import os

from psnauth.auth.constants import DUID_PREFIX, DUID_RANDOM_BYTES
from psnauth.auth.errors import DuidError


def generate_duid(prefix: str = DUID_PREFIX) -> str:
    """Return the prefix followed by 16 random bytes as lowercase hex."""
    try:
        suffix = os.urandom(DUID_RANDOM_BYTES).hex()
    except (NotImplementedError, OSError) as exc:
        raise DuidError(f"Random source unavailable: {exc}") from exc
    return prefix + suffix
