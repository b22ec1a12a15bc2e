# =======================================================================================
# checkin/api/routes/auth.py - Admin Session Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends, HTTPException, Response

from ...config import config
from ...models.schemas import AdminLoginRequest, AuthResponse, SessionStatus
from ...utils.exceptions import AdminAuthError
from ..dependencies import auth_service, is_admin

router = APIRouter()


@router.get("/auth/session", response_model=SessionStatus)
def check_admin_session(admin: bool = Depends(is_admin)):
    return SessionStatus(is_admin=admin)


@router.post("/auth/login", response_model=AuthResponse)
def login_admin(request: AdminLoginRequest, response: Response):
    try:
        token = auth_service.login(request.password)
    except AdminAuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    response.set_cookie(
        config.ADMIN_COOKIE_NAME,
        token,
        httponly=True,
        secure=config.ADMIN_COOKIE_SECURE,
        samesite="lax",
    )
    return AuthResponse(success=True, message="Login successful")


@router.post("/auth/logout", response_model=AuthResponse)
def logout_admin(response: Response):
    response.delete_cookie(config.ADMIN_COOKIE_NAME)
    return AuthResponse(success=True)
