from .dto import AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, RefreshOut, TokenPairOut
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "RefreshOut",
    "TokenPairOut",
]
