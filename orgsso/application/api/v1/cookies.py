"""Session cookie helpers for the auth routes."""

import ipaddress
from datetime import UTC, datetime, timedelta
from urllib.parse import urlsplit

from fastapi import Request, Response

from orgsso.config import Frontend

AUTH_COOKIE = "auth"
SHOW_ORG_COOKIE = "showorg"
ORG_HINT_COOKIE = "org"

COOKIE_LIFETIME = timedelta(days=365)


def cookie_domain(frontend_url: str) -> str | None:
    """Derive the cookie domain from the frontend URL.

    `https://app.example.com` -> `.example.com`, so the cookie is shared with
    sibling subdomains. Single-label hosts (`localhost`) and IP addresses get
    None: browsers reject them as a Domain attribute, so the cookie stays
    host-only.
    """
    host = urlsplit(frontend_url).hostname or ""
    try:
        ipaddress.ip_address(host)
        return None
    except ValueError:
        pass

    labels = host.split(".")
    if len(labels) < 2:
        return None
    return "." + ".".join(labels[-2:])


def set_session_cookie(response: Response, frontend: Frontend, name: str, value: str) -> None:
    """Set a one-year cookie scoped to the frontend domain.

    In not_secured mode the cookie is plain and its value is also echoed as
    a response header of the same name for clients without a cookie jar.
    """
    if frontend.not_secured:
        response.set_cookie(
            name,
            value,
            domain=cookie_domain(frontend.url),
            expires=datetime.now(UTC) + COOKIE_LIFETIME,
            samesite=None,
        )
        response.headers[name] = value
        return

    response.set_cookie(
        name,
        value,
        domain=cookie_domain(frontend.url),
        expires=datetime.now(UTC) + COOKIE_LIFETIME,
        secure=True,
        httponly=True,
        samesite="none",
    )


def clear_session_cookie(response: Response, frontend: Frontend) -> None:
    if frontend.not_secured:
        response.delete_cookie(AUTH_COOKIE, domain=cookie_domain(frontend.url), samesite=None)
        return

    response.delete_cookie(
        AUTH_COOKIE,
        domain=cookie_domain(frontend.url),
        secure=True,
        httponly=True,
        samesite="none",
    )


def client_ip(request: Request) -> str:
    """Best-effort client address, honouring reverse proxy headers."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else ""
