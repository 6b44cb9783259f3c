"""CLI commands for psnauth."""

import logging
import webbrowser
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from psnauth import __logo__, __version__
from psnauth.auth.account import fetch_account_id
from psnauth.auth.duid import generate_duid
from psnauth.auth.errors import AuthError, MissingRefreshTokenError
from psnauth.auth.flow import build_login_url, exchange_code, parse_redirect_url, refresh_token
from psnauth.auth.models import TokenSet
from psnauth.auth.storage import load_access_token, load_refresh_token, save_token_set
from psnauth.config.loader import get_config_path, load_config, save_config
from psnauth.config.schema import Config

app = typer.Typer(
    name="psnauth",
    help=f"{__logo__} psnauth - PSN Remote Play token helper",
    no_args_is_help=True,
)

console = Console()

_INTRO = """== PSN ID Scraper for Remote Play ==
In order to get your Account code for Remote Play, You'll need to Login via a special Remote Play login webpage.
After logging in, you will see a webpage that displays "redirect" in the top-left.
When you see this page, Copy the entire URL from your browser, paste it below and then press *Enter*
"""

_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config file")
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Verbose output")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} psnauth v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True
    ),
):
    """psnauth - PSN Remote Play token helper."""
    pass


def _setup(config_path: Path | None, verbose: bool) -> Config:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    # Request lines carry the access token in the account lookup URL.
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
    try:
        return load_config(config_path)
    except AuthError as exc:
        _fail(exc)


def _fail(exc: AuthError):
    console.print(f"[red]Error: {escape(str(exc))}[/red]")
    raise typer.Exit(exc.exit_code)


def _persist(token: TokenSet, config: Config) -> None:
    save_token_set(token, config.credentials_file, config.token_file)
    console.print(f"Your credentials are saved to: {config.credentials_file}")
    console.print(f"Your access token is saved to: {config.token_file}")


# ============================================================================
# Token commands
# ============================================================================


@app.command()
def login(
    headless: bool = typer.Option(False, "--headless", help="Print the login URL instead of opening a browser"),
    config_path: Path = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
):
    """Log in through the browser and save a new token set."""
    config = _setup(config_path, verbose)
    console.print(_INTRO, markup=False, highlight=False)

    try:
        duid = generate_duid(config.duid_prefix)
        console.print(f"Duid: {duid} with length: {len(duid)}")
        url = build_login_url(duid, config)

        if headless:
            console.print(
                "[Headless] You'll need to open this page in a web browser that supports Javascript/ReCaptcha",
                markup=False,
            )
            console.print(f"[Headless] {url}", markup=False, soft_wrap=True)
        else:
            typer.prompt(
                "Press Enter to open the PSN Remote Play login webpage in your browser",
                default="",
                show_default=False,
                prompt_suffix="",
            )
            webbrowser.open(url)

        raw = typer.prompt("Awaiting Input >", default="", show_default=False, prompt_suffix=" ")
        code = parse_redirect_url(raw)

        console.print("Exchanging authorization code for tokens...")
        token = exchange_code(code, config)
        _persist(token, config)
    except AuthError as exc:
        _fail(exc)


@app.command()
def refresh(
    token_value: str = typer.Option(None, "--refresh-token", "-r", help="Refresh token to exchange"),
    config_path: Path = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
):
    """Exchange a refresh token for a new token set."""
    config = _setup(config_path, verbose)

    try:
        refresh_value = token_value or config.refresh_token or load_refresh_token(config.credentials_file)
        if not refresh_value:
            raise MissingRefreshTokenError(
                "No refresh token found. Pass --refresh-token, set refreshToken in the config, "
                f"or run the login command to create {config.credentials_file}"
            )
        token = refresh_token(refresh_value, config)
        _persist(token, config)
    except AuthError as exc:
        _fail(exc)


@app.command("account-id")
def account_id(
    access_token: str = typer.Option(None, "--access-token", "-a", help="Access token (defaults to the token file)"),
    config_path: Path = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
):
    """Print the Remote Play account id for an access token."""
    config = _setup(config_path, verbose)

    try:
        access = access_token or load_access_token(config.token_file)
        if not access:
            console.print(f"[red]Error: No access token found in {config.token_file}[/red]")
            console.print("Run [cyan]psnauth login[/cyan] first or pass --access-token")
            raise typer.Exit(1)
        console.print(fetch_account_id(access, config), markup=False, highlight=False)
    except AuthError as exc:
        _fail(exc)


@app.command()
def duid(
    config_path: Path = _CONFIG_OPTION,
):
    """Print a freshly generated device id."""
    config = _setup(config_path, False)

    try:
        console.print(generate_duid(config.duid_prefix), highlight=False)
    except AuthError as exc:
        _fail(exc)


# ============================================================================
# Onboard / Setup
# ============================================================================


@app.command()
def onboard(
    config_path: Path = _CONFIG_OPTION,
):
    """Write the default psnauth configuration."""
    path = config_path or get_config_path()

    if path.exists():
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), path)
    console.print(f"[green]✓[/green] Created config at {path}")
    console.print("\nNext steps:")
    console.print("  1. Log in: [cyan]psnauth login[/cyan]")
    console.print("  2. Later, refresh: [cyan]psnauth refresh[/cyan]")


if __name__ == "__main__":
    app()
