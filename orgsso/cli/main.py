"""Main CLI application using Cyclopts."""

import cyclopts

from orgsso.cli.commands import check, server

app = cyclopts.App(
    name="orgsso",
    help="Organization single sign-on - CLI",
)

app.command(server.app, name="serve")
app.command(check.app, name="check")


def main() -> None:
    app()
