"""Logout command."""

from dataclasses import dataclass

from orgsso.domain.auth.service.auth import AuthService
from orgsso.domain.shared.command import Command, CommandHandler, Result


class Logout(Command):
    """Command to end the session at the identity provider."""

    provider: str
    post_logout_redirect: str


class LogoutResult(Result):
    """Result containing the provider logout URL."""

    logout_url: str


@dataclass
class LogoutHandler(CommandHandler[Logout, LogoutResult]):
    """Handler for Logout command."""

    auth_service: AuthService

    async def run(self, cmd: Logout) -> LogoutResult:
        logout_url = self.auth_service.build_logout_url(cmd.provider, cmd.post_logout_redirect)
        return LogoutResult(logout_url=logout_url)
