# catalog/routers/auth.py
# Responsibility: Admin login/logout via a session cookie.

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from catalog.config.settings import settings
from catalog.services.auth import require_admin, verify_credentials

router = APIRouter(
    prefix="/api",
    tags=["Auth"]
)

class LoginRequest(BaseModel):
    username: str
    password: str

@router.post("/login")
def login_endpoint(req: LoginRequest, response: Response):
    if not verify_credentials(req.username, req.password):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    response.set_cookie(
        key=settings.AUTH.COOKIE_NAME,
        value=settings.AUTH.TOKEN,
        max_age=settings.AUTH.COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax"
    )
    return {"message": "Login successful"}

@router.post("/logout")
def logout_endpoint(response: Response):
    response.delete_cookie(settings.AUTH.COOKIE_NAME)
    return {"message": "Logged out"}

@router.get("/check-auth", dependencies=[Depends(require_admin)])
def check_auth_endpoint():
    return {"message": "Authenticated"}
