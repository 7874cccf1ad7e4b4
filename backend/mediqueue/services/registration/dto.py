"""
DTOs for RegistrationService.

Contracts for patient self-registration, which creates the identity and
opens its first session in one transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from mediqueue.services.auth.dto import TokenPairOut
from mediqueue.services.identity.dto import IdentityPublicOut


@dataclass(frozen=True, slots=True)
class PatientRegistrationIn:
    """
    :param name: Display name.
    :param email: Login email.
    :param password: Raw password.
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RegistrationOut:
    identity: IdentityPublicOut
    tokens: TokenPairOut
