# =======================================================================================
# checkin/services/auth_service.py - Admin Authentication
# =======================================================================================
import hmac
import logging
from typing import Optional

from passlib.context import CryptContext

from ..config import config
from ..utils.exceptions import AdminAuthError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthService:
    """
    Single shared admin password (ADMIN_PASSWORD).

    The session cookie holds a salted pbkdf2 hash of the password, so a valid
    cookie can only be minted by someone who knew the password, and changing
    the password logs every session out.
    """

    def __init__(self, password: str = None):
        self._password = password if password is not None else config.ADMIN_PASSWORD

    def _session_secret(self) -> str:
        return f"admin-session:{self._password}"

    def verify_password(self, password: str) -> bool:
        return hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))

    def login(self, password: str) -> str:
        """Returns a session token, raises AdminAuthError on a wrong password."""
        if not self.verify_password(password or ""):
            logger.warning("Admin login failed")
            raise AdminAuthError("비밀번호가 올바르지 않습니다.")
        logger.info("Admin logged in")
        # hex keeps the cookie value free of characters that need quoting
        return pwd_context.hash(self._session_secret()).encode("ascii").hex()

    def check_session(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            return pwd_context.verify(self._session_secret(), bytes.fromhex(token).decode("ascii"))
        except ValueError:
            # malformed / foreign cookie value
            return False
