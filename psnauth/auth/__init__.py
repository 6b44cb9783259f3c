"""PSN Remote Play OAuth module."""

from psnauth.auth.account import encode_account_id, fetch_account_id
from psnauth.auth.duid import generate_duid
from psnauth.auth.errors import AuthError
from psnauth.auth.flow import build_login_url, exchange_code, parse_redirect_url, refresh_token
from psnauth.auth.models import TokenSet
from psnauth.auth.storage import save_token_set

__all__ = [
    "AuthError",
    "TokenSet",
    "build_login_url",
    "encode_account_id",
    "exchange_code",
    "fetch_account_id",
    "generate_duid",
    "parse_redirect_url",
    "refresh_token",
    "save_token_set",
]
