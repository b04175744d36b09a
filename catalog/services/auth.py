# catalog/services/auth.py
# Responsibility: Single-admin credential check and the request authorization dependency.

import secrets

from fastapi import HTTPException, Request

from catalog.config.settings import settings


def verify_credentials(username: str, password: str) -> bool:
    user_ok = secrets.compare_digest(username.encode("utf-8"), settings.AUTH.USERNAME.encode("utf-8"))
    password_ok = secrets.compare_digest(password.encode("utf-8"), settings.AUTH.PASSWORD.encode("utf-8"))
    return user_ok and password_ok


def is_authorized(request: Request) -> bool:
    """Checks the admin session cookie on the request."""
    token = request.cookies.get(settings.AUTH.COOKIE_NAME)
    if not token:
        return False
    return secrets.compare_digest(token.encode("utf-8"), settings.AUTH.TOKEN.encode("utf-8"))


def require_admin(request: Request) -> None:
    """FastAPI dependency guarding admin endpoints."""
    if not is_authorized(request):
        raise HTTPException(status_code=401, detail="Unauthorized")
