"""HTTP Basic Auth for the scheme administration routes.

One admin account: username from ADMIN_WEB_USERNAME (default "admin"),
password from ADMIN_WEB_PASSWORD. Citizen accounts never reach /admin.
"""

from __future__ import annotations

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from yogyatha.config import settings

security = HTTPBasic(realm="Yogyatha admin")


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


async def verify_admin(
    credentials: HTTPBasicCredentials = Depends(security),  # noqa: B008
) -> str:
    """FastAPI dependency guarding catalog edits, analytics and the audit log.

    Returns the admin username recorded on ADMIN_ACCESS events.
    Raises 503 while no admin password is configured, 401 on a mismatch.
    """
    admin = settings.security
    if not admin.admin_web_password:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scheme administration disabled: ADMIN_WEB_PASSWORD not configured",
        )

    # Both fields are always compared
    username_ok = _matches(credentials.username, admin.admin_web_username)
    password_ok = _matches(credentials.password, admin.admin_web_password)
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": 'Basic realm="Yogyatha admin"'},
        )

    return credentials.username
