import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import AuthenticationRequired, PermissionDenied
from app.services.directory import ROLE_MODELS, find_account

logger = structlog.get_logger(__name__)

# missing or non-Bearer headers reach get_current_identity as None
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    id: int
    role: str


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


def create_access_token(account_id: int, role: str) -> str:
    exp = datetime.now(timezone.utc) + timedelta(days=settings.JWT_EXPIRES_DAYS)
    payload = {"id": account_id, "role": role, "exp": exp}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def resolve_identity(db: Session, token: str) -> Identity:
    """
    Turn a bearer token into the caller's identity.

    Every role is re-checked against its directory, so a deleted brand,
    customer or rider loses access immediately instead of at token expiry.
    All failures raise the same AuthenticationRequired.
    """
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        logger.debug("auth.rejected", reason="expired")
        raise AuthenticationRequired()
    except jwt.InvalidTokenError:
        logger.debug("auth.rejected", reason="invalid_token")
        raise AuthenticationRequired()

    account_id = payload.get("id")
    role = payload.get("role")
    if not isinstance(account_id, int) or role not in ROLE_MODELS:
        logger.debug("auth.rejected", reason="bad_payload")
        raise AuthenticationRequired()

    if find_account(db, role, account_id) is None:
        logger.debug("auth.rejected", reason="unknown_account", role=role, account_id=account_id)
        raise AuthenticationRequired()

    return Identity(id=account_id, role=role)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> Identity:
    if credentials is None or not credentials.credentials:
        logger.debug("auth.rejected", reason="missing_credentials")
        raise AuthenticationRequired()
    return resolve_identity(db, credentials.credentials)


def require_role(*roles: str):
    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in roles:
            raise PermissionDenied()
        return identity

    return checker
