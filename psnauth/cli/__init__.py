"""CLI module for psnauth."""

from psnauth.cli.commands import app

__all__ = ["app"]
