# =======================================================================================
# checkin/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..config import config
from ..database import db_manager
from ..services.auth_service import AuthService

logger = logging.getLogger(__name__)

auth_service = AuthService()


def get_db_connection() -> Connection:
    """Dependency to get a database connection; one transaction per request."""
    try:
        with db_manager.get_connection() as conn:
            yield conn
    except SQLAlchemyError as e:
        logger.exception("Database error")
        raise HTTPException(status_code=500, detail="Database error") from e


def is_admin(request: Request) -> bool:
    return auth_service.check_session(request.cookies.get(config.ADMIN_COOKIE_NAME))


def require_admin(admin: bool = Depends(is_admin)) -> None:
    """Gate for every /admin endpoint."""
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="관리자 로그인이 필요합니다.",
        )
