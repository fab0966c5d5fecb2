import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from app.config import settings
from app.security import (
    SESSION_TTL,
    audit_auth_failure,
    clear_session_cookie,
    decode_session_token,
    extract_session_token,
    get_storage,
    hash_password,
    require_admin,
    set_session_cookie,
    verify_password,
)
from app.storage.base import Storage
from models.user import User
from schemas.auth import LoginRequest, MessageResponse, PasswordUpdateRequest, UserResponse

router = APIRouter()
logger = logging.getLogger("streamsite.auth")

MIN_PASSWORD_LENGTH = 6


@router.post("/login", response_model=UserResponse)
async def login(payload: LoginRequest, request: Request, response: Response, storage: Storage = Depends(get_storage)):
    username = (payload.username or "").strip() or settings.ADMIN_USERNAME
    user = await storage.get_user_by_username(username)
    if not user or not user.is_admin or not verify_password(payload.password, user.password):
        audit_auth_failure(request, "bad_credentials")
        raise HTTPException(status_code=401, detail="Invalid password")
    # a fresh login replaces whatever session the cookie pointed at
    old_session_id = decode_session_token(extract_session_token(request))
    if old_session_id:
        await storage.delete_session(old_session_id)
    session = await storage.create_session(user.id, SESSION_TTL)
    set_session_cookie(response, session)
    logger.info("Admin %s logged in", user.username)
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response, storage: Storage = Depends(get_storage)):
    session_id = decode_session_token(extract_session_token(request))
    if session_id:
        await storage.delete_session(session_id)
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(require_admin)):
    return user


@router.post("/update-password", response_model=MessageResponse)
async def update_password(
    payload: PasswordUpdateRequest,
    user: User = Depends(require_admin),
    storage: Storage = Depends(get_storage)
):
    if not payload.new_password or len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if payload.current_password is not None and not verify_password(payload.current_password, user.password):
        raise HTTPException(status_code=401, detail="Current password is incorrect")
    await storage.update_user_password(user.id, hash_password(payload.new_password))
    logger.info("Password updated for admin %s", user.username)
    return MessageResponse(message="Password updated successfully")
