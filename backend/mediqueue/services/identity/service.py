"""
IdentityService
===============

Aggregate service for :class:`~mediqueue.models.user.Identity`:

- Creation with email uniqueness and a fixed role.
- Retrieval and partial update of the authenticated principal's profile.
- Provisioning of the configuration-defined admin.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from mediqueue.models.user import Identity, Role
from mediqueue.repositories.user import IdentityRepository
from mediqueue.services._shared.base import BaseService
from mediqueue.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from mediqueue.services.identity.dto import IdentityCreateIn, IdentityPublicOut, ProfileUpdateIn

log = logging.getLogger(__name__)


def create_identity(repo: IdentityRepository, dto: IdentityCreateIn) -> Identity:
    """
    Stage a new identity on ``repo`` inside the caller's transaction.

    :raises ConflictError: When the email is already registered.
    :raises ServiceError: When the model rejects a field.
    """
    if repo.exists_by_email(dto.email):
        raise ConflictError("Identity", "email already in use")
    try:
        identity = Identity(
            name=dto.name,
            email=dto.email,
            password=dto.password,
            role=dto.role,
        )
        repo.add(identity)
    except ValueError as exc:
        raise ServiceError(str(exc)) from exc
    except IntegrityError as exc:
        if violates(exc, "uq_identities_email"):
            raise ConflictError("Identity", "email already in use") from exc
        raise
    return identity


class IdentityService(BaseService):
    """Application service for the identity aggregate."""

    def get(self, identity_id: int) -> IdentityPublicOut:
        """
        :raises NotFoundError: If the identity does not exist.
        """
        with self.rw_uow() as uow:
            identity = uow.identities.get(identity_id)
            if identity is None:
                raise NotFoundError("Identity", identity_id)
            return IdentityPublicOut.from_model(identity)

    def update_profile(self, identity_id: int, dto: ProfileUpdateIn) -> IdentityPublicOut:
        """
        Apply a partial update to the caller's own profile.

        :raises ServiceError: When nothing would change or a field is invalid.
        :raises NotFoundError: If the identity does not exist.
        """
        changes = dto.changes()
        if not changes:
            raise ServiceError("No changes provided")
        with self.rw_uow() as uow:
            identity = uow.identities.get(identity_id)
            if identity is None:
                raise NotFoundError("Identity", identity_id)
            try:
                uow.identities.update(identity, **changes)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            out = IdentityPublicOut.from_model(identity)
        log.info(
            "identity.profile_updated",
            extra={"identity_id": out.id, "fields": sorted(changes)},
        )
        return out

    def ensure_admin(self, *, email: str, password: str, name: str) -> tuple[IdentityPublicOut, bool]:
        """
        Provision the admin identity defined by configuration. Idempotent.

        An existing identity with that email is accepted only if it already
        holds the admin role; roles never change after creation.

        :returns: ``(identity, created)``.
        :raises ConflictError: If the email belongs to a non-admin identity.
        """
        with self.rw_uow() as uow:
            existing = uow.identities.get_by_email(email)
            if existing is not None:
                if existing.role is not Role.ADMIN:
                    raise ConflictError("Identity", "admin email belongs to a non-admin identity")
                return IdentityPublicOut.from_model(existing), False
            identity = create_identity(
                uow.identities,
                IdentityCreateIn(name=name, email=email, password=password, role=Role.ADMIN),
            )
            out = IdentityPublicOut.from_model(identity)
        log.info("identity.admin_provisioned", extra={"identity_id": out.id, "role": out.role})
        return out, True
