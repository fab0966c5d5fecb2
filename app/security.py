import logging
from datetime import timedelta
from typing import Callable

from fastapi import Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware
from werkzeug.security import check_password_hash, generate_password_hash

from app.config import settings
from app.storage.base import Storage, as_utc
from models.session import AdminSession
from models.user import User

ADMIN_PREFIX = "/api/admin"
SESSION_SECRET = settings.SESSION_SECRET or "streamsite-dev-secret"
SESSION_ALGORITHM = settings.SESSION_ALGORITHM or "HS256"
SESSION_TTL = timedelta(seconds=settings.SESSION_MAX_AGE)
logger = logging.getLogger("streamsite.security")


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(supplied: str, stored: str | None) -> bool:
    if not supplied or not stored:
        return False
    return check_password_hash(stored, supplied)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def audit_auth_failure(request: Request | None, reason: str, *, token_present: bool | None = None) -> None:
    if not request:
        logger.warning("AUTH_DENY reason=%s", reason)
        return
    path = getattr(getattr(request, "url", None), "path", "-")
    method = getattr(request, "method", "-")
    client = getattr(request, "client", None)
    ip = getattr(client, "host", "-") if client else "-"
    if token_present is None:
        token_present = bool(extract_session_token(request))
    logger.warning(
        "AUTH_DENY reason=%s method=%s path=%s ip=%s token_present=%s",
        reason,
        method,
        path,
        ip,
        int(bool(token_present)),
    )


def extract_session_token(request: Request) -> str | None:
    if not request:
        return None
    cookies = getattr(request, "cookies", None) or {}
    token = (cookies.get(settings.SESSION_COOKIE_NAME) or "").strip()
    return token or None


def encode_session_token(session: AdminSession) -> str:
    payload = {
        "sid": session.id,
        "sub": str(session.user_id),
        "exp": int(as_utc(session.expires_at).timestamp()),
    }
    return jwt.encode(payload, SESSION_SECRET, algorithm=SESSION_ALGORITHM)


def decode_session_token(token: str | None) -> str | None:
    """Return the session id carried by a signed cookie value, or ``None``."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, SESSION_SECRET, algorithms=[SESSION_ALGORITHM])
    except JWTError:
        return None
    session_id = payload.get("sid")
    return str(session_id) if session_id else None


def set_session_cookie(response: Response, session: AdminSession) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=encode_session_token(session),
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


async def authenticate_admin(request: Request, storage: Storage) -> User:
    """Resolve the session cookie to an admin user or raise a 401."""
    token = extract_session_token(request)
    if not token:
        audit_auth_failure(request, "missing_session", token_present=False)
        raise HTTPException(status_code=401, detail="Unauthorized")
    session_id = decode_session_token(token)
    if not session_id:
        audit_auth_failure(request, "invalid_token", token_present=True)
        raise HTTPException(status_code=401, detail="Unauthorized")
    session = await storage.get_session(session_id)
    if not session:
        audit_auth_failure(request, "unknown_or_expired_session", token_present=True)
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = await storage.get_user(session.user_id)
    if not user or not user.is_admin:
        audit_auth_failure(request, "not_admin", token_present=True)
        raise HTTPException(status_code=401, detail="Unauthorized")
    request.state.admin_session = session
    request.state.admin_user = user
    return user


async def require_admin(request: Request, storage: Storage = Depends(get_storage)) -> User:
    """Dependency handing the authenticated admin to a route handler."""
    user = getattr(request.state, "admin_user", None)
    if user is not None:
        return user
    return await authenticate_admin(request, storage)


class AdminGateMiddleware(BaseHTTPMiddleware):
    """
    Refuse every request under the admin prefix without a live admin session.

    Runs before routing, so unknown admin paths, wrong methods and malformed
    bodies all answer 401 to anonymous callers.
    """

    def __init__(self, app, prefix: str = ADMIN_PREFIX):
        super().__init__(app)
        self.prefix = prefix.rstrip("/")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path == self.prefix or path.startswith(self.prefix + "/"):
            try:
                await authenticate_admin(request, get_storage(request))
            except HTTPException as exc:
                return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
        return await call_next(request)
