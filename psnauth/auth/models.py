"""PSN OAuth data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _token_field(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {value!r}")
    return value


def _expires_field(payload: dict[str, Any]) -> int:
    value = payload.get("expires_in")
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"expires_in must be a number, got {value!r}")
    return int(value)


@dataclass
class TokenSet:
    """Token set returned by the token endpoint."""

    access_token: str
    refresh_token: str
    expires_in: int

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenSet":
        """Build a token set, leaving absent fields empty instead of failing.

        Present fields of the wrong type raise ``TypeError`` or ``ValueError``.
        """
        return cls(
            access_token=_token_field(payload, "access_token"),
            refresh_token=_token_field(payload, "refresh_token"),
            expires_in=_expires_field(payload),
        )
