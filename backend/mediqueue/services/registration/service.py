"""
RegistrationService
===================

Process-level service for patient self-registration: the identity is created
with the patient role and a token pair is issued immediately, both inside one
Unit of Work so a failure leaves neither behind.
"""

from __future__ import annotations

import logging

from mediqueue.models.user import Role
from mediqueue.services._shared.base import BaseService
from mediqueue.services.auth.service import AuthService
from mediqueue.services.identity.dto import IdentityCreateIn, IdentityPublicOut
from mediqueue.services.identity.service import create_identity
from mediqueue.services.registration.dto import PatientRegistrationIn, RegistrationOut

log = logging.getLogger(__name__)


class RegistrationService(BaseService):
    """Register patients and open their first session."""

    def __init__(self, *, auth: AuthService) -> None:
        self.auth = auth

    def register_patient(self, dto: PatientRegistrationIn) -> RegistrationOut:
        """
        :raises ConflictError: When the email is already registered.
        """
        with self.rw_uow() as uow:
            identity = create_identity(
                uow.identities,
                IdentityCreateIn(
                    name=dto.name,
                    email=dto.email,
                    password=dto.password,
                    role=Role.PATIENT,
                ),
            )
            tokens = self.auth.issue_tokens(identity)
            out = RegistrationOut(identity=IdentityPublicOut.from_model(identity), tokens=tokens)
        log.info("identity.registered", extra={"identity_id": out.identity.id, "role": "patient"})
        return out
