"""Error kinds raised by the PSN OAuth flow.

Each kind carries the process exit code the CLI terminates with.
"""


class AuthError(Exception):
    """Base class for fatal flow errors."""

    exit_code = 1


class ConfigError(AuthError):
    exit_code = 2


class MissingRefreshTokenError(AuthError):
    exit_code = 2


class DuidError(AuthError):
    exit_code = 3


class InvalidRedirectURLError(AuthError):
    exit_code = 4


class TokenRequestError(AuthError):
    exit_code = 5


class TokenDecodeError(AuthError):
    exit_code = 6


class StorageError(AuthError):
    exit_code = 1
