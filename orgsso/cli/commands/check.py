"""Configuration check command."""

import asyncio
import sys

import cyclopts
import httpx
from rich.console import Console

from orgsso.config import Config
from orgsso.domain.shared.error import ConfigurationError
from orgsso.infrastructure.auth.di import build_identity_provider, http_timeout

app = cyclopts.App(name="check", help="Validate identity provider configuration")


async def _describe(config: Config) -> tuple[str, str]:
    async with httpx.AsyncClient(timeout=http_timeout(config)) as client:
        provider = build_identity_provider(config, client)
        return provider.build_authorization_url(), provider.build_logout_url(config.frontend.url)


@app.default
def check() -> None:
    """Construct the configured identity provider and print its URLs.

    Exits with status 1 when required settings are missing.
    """
    console = Console()
    config = Config()  # type: ignore[call-arg]

    try:
        login_url, logout_url = asyncio.run(_describe(config))
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e.message}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Strategy: [bold]{config.auth.strategy}[/bold]")
    console.print(f"  [dim]Login URL:[/dim]  {login_url}")
    console.print(f"  [dim]Logout URL:[/dim] {logout_url}")
    console.print(f"  [dim]Frontend:[/dim]   {config.frontend.url}")
    if config.frontend.not_secured:
        console.print("  [yellow]not_secured is on: cookies are sent without Secure/HttpOnly[/yellow]")
