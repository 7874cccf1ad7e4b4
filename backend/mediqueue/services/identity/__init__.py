from .dto import IdentityCreateIn, IdentityPublicOut, ProfileUpdateIn
from .service import IdentityService, create_identity

__all__ = [
    "IdentityService",
    "IdentityCreateIn",
    "IdentityPublicOut",
    "ProfileUpdateIn",
    "create_identity",
]
