"""
Entry point for running psnauth as a module: python -m psnauth
"""

from psnauth.cli.commands import app

if __name__ == "__main__":
    app()
