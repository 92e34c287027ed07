"""
Authentication for Prep Kitchen admin endpoints.

Admin routes (catalog management, document imports, prep list generation)
use HTTP Basic Auth with credentials from ADMIN_USERNAME / ADMIN_PASSWORD.
Reading a prep list and updating item status are open to line cooks on the
kitchen tablet.

- Credentials are compared with secrets.compare_digest() so response time
  does not leak how many characters matched.
- All admin routes share one realm so browsers cache the credentials.
- Without ADMIN_PASSWORD the admin routes answer 503 instead of opening up.

Usage:

    from prep_kitchen.auth import verify_admin_credentials

    @router.post("/admin/prep-lists/generate")
    def generate(admin: str = Depends(verify_admin_credentials)):
        ...
"""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config

logger = logging.getLogger(__name__)

security = HTTPBasic(realm="Prep Kitchen Admin")


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    FastAPI dependency requiring admin credentials.

    Returns:
        The authenticated username, recorded as created_by on prep lists.

    Raises:
        HTTPException (503): ADMIN_PASSWORD is not configured.
        HTTPException (401): Wrong username or password. The response carries
            WWW-Authenticate so browsers prompt for credentials.
    """
    if not config.ADMIN_PASSWORD:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication not configured. Set ADMIN_PASSWORD environment variable.",
        )

    username_correct = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        config.ADMIN_USERNAME.encode("utf-8"),
    )
    password_correct = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8"),
    )

    if not (username_correct and password_correct):
        logger.warning("Rejected admin credentials for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username
