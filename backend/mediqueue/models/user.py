"""Identity model: the stored principal behind every login."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from mediqueue.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Role(str, enum.Enum):
    """Authorization scope of an identity, fixed when the identity is created."""

    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class Identity(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity for a patient, doctor or admin.

    Fields
    ------
    name : str
        Display name.
    email : str
        Login key. Stored normalized (lowercase, trimmed).
    password_hash : str
        Hashed password (write-only setter via ``password``).
    role : Role
        Immutable after creation.
    phone : str | None
        Optional contact number, editable by its owner.
    is_active : bool
        Inactive identities can neither log in nor refresh.
    refresh_token_digest : str | None
        SHA-256 digest of the single live refresh token, ``None`` when logged out.
    session_issued_at : datetime | None
        When the live session was established; always set/cleared with the digest.
    """

    __tablename__ = "identities"
    __repr_attrs__ = ("id", "role", "is_active")

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            name="identity_role",
            native_enum=False,
            validate_strings=True,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.PATIENT,
        active_history=True,
    )
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Single live refresh session (tagged by its issue time)
    refresh_token_digest: Mapped[str | None] = mapped_column(String(64), nullable=True)
    session_issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_identities_email"),
        Index("ix_identities_role", "role"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Session field --------------------
    @property
    def has_live_session(self) -> bool:
        return self.refresh_token_digest is not None

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()

    @validates("phone")
    def _normalize_phone(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        v = value.strip()
        if not v:
            return None
        if not all(ch.isdigit() or ch in "+-() " for ch in v):
            raise ValueError("Phone may only contain digits, spaces and + - ( ).")
        return v

    @validates("role")
    def _freeze_role(self, key: str, value: Role | str) -> Role:
        """Accept a role once; reassigning a different role is rejected."""
        role = Role(value)
        current = self.__dict__.get("role")
        if current is not None and Role(current) is not role:
            raise ValueError("Role is fixed at creation.")
        return role
