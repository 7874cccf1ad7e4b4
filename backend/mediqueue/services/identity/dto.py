from __future__ import annotations

from dataclasses import dataclass

from mediqueue.models.user import Identity, Role


@dataclass(frozen=True, slots=True)
class IdentityCreateIn:
    """
    Input DTO to create an identity.

    :param name: Display name.
    :param email: Login email (normalized by the model).
    :param password: Raw password (the model setter hashes it).
    :param role: Role, fixed for the identity's lifetime.
    """

    name: str
    email: str
    password: str
    role: Role = Role.PATIENT


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Partial profile update by the identity itself.

    ``None`` leaves a field unchanged; role, email and session fields are
    not editable here.
    """

    name: str | None = None
    phone: str | None = None

    def changes(self) -> dict[str, str]:
        return {k: v for k, v in (("name", self.name), ("phone", self.phone)) if v is not None}


@dataclass(frozen=True, slots=True)
class IdentityPublicOut:
    """Public-safe identity projection (no secrets, no session fields)."""

    id: int
    name: str
    email: str
    role: str
    is_active: bool
    phone: str | None = None

    @classmethod
    def from_model(cls, identity: Identity) -> IdentityPublicOut:
        return cls(
            id=identity.id,
            name=identity.name,
            email=identity.email,
            role=identity.role.value,
            is_active=identity.is_active,
            phone=identity.phone,
        )
