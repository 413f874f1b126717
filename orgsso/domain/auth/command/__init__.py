"""Auth domain commands."""

from .login import (
    CompleteCallback,
    CompleteCallbackHandler,
    CompleteCallbackResult,
    InitiateLogin,
    InitiateLoginHandler,
    InitiateLoginResult,
)
from .logout import Logout, LogoutHandler, LogoutResult

__all__ = [
    "CompleteCallback",
    "CompleteCallbackHandler",
    "CompleteCallbackResult",
    "InitiateLogin",
    "InitiateLoginHandler",
    "InitiateLoginResult",
    "Logout",
    "LogoutHandler",
    "LogoutResult",
]
