"""Recruiter authentication: password hashing, bearer tokens, ownership."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from careerstudio.core.config import get_settings
from careerstudio.core.exceptions import (
    AuthenticationError,
    EmailAlreadyRegisteredError,
    NotAuthorizedError,
)
from careerstudio.core.logging import get_logger
from careerstudio.db import get_db
from careerstudio.db.models import Company, Recruiter

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"
# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

bearer_scheme = HTTPBearer(auto_error=False)


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt (cost from settings unless given)."""
    salt = bcrypt.gensalt(rounds=rounds or get_settings().bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password; a malformed stored hash never matches."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        logger.warning("Stored password hash is not a bcrypt hash")
        return False


def create_access_token(recruiter_id: str, now: datetime | None = None) -> str:
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(recruiter_id),
        "iat": issued,
        "exp": issued + timedelta(days=settings.access_token_expire_days),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the recruiter id carried by a valid token."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Invalid token")
    return subject


def register_recruiter(db: Session, email: str, password: str) -> Recruiter:
    if db.query(Recruiter).filter(Recruiter.email == email).first():
        raise EmailAlreadyRegisteredError(email)

    recruiter = Recruiter(email=email, password_hash=hash_password(password))
    db.add(recruiter)
    db.commit()
    db.refresh(recruiter)
    logger.info(f"Registered recruiter {recruiter.id}")
    return recruiter


def authenticate(db: Session, email: str, password: str) -> Recruiter:
    recruiter = db.query(Recruiter).filter(Recruiter.email == email).first()
    if recruiter is None or not verify_password(password, recruiter.password_hash):
        logger.warning(f"Failed login for {email}")
        raise AuthenticationError()
    return recruiter


def get_current_recruiter(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Recruiter:
    """Resolve the bearer token to a recruiter."""
    if credentials is None:
        raise AuthenticationError("No token provided")

    recruiter_id = decode_access_token(credentials.credentials)
    try:
        recruiter_uuid = uuid.UUID(recruiter_id)
    except ValueError:
        raise AuthenticationError("Invalid token")

    recruiter = db.query(Recruiter).filter(Recruiter.id == recruiter_uuid).first()
    if recruiter is None:
        raise AuthenticationError("Recruiter not found")
    return recruiter


def ensure_company_owner(company: Company, recruiter: Recruiter) -> None:
    if company.recruiter_id != recruiter.id:
        logger.warning(f"Recruiter {recruiter.id} denied access to company {company.id}")
        raise NotAuthorizedError("Not authorized to modify this company")
