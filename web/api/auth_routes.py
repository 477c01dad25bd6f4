"""Admin auth API routes: login, logout, auth check."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

import config
from portal.models import Admin
from portal.models.base import async_session_factory
from web.auth import (
    create_access_token,
    get_admin_by_username,
    get_current_admin,
    hash_password,
    verify_password,
)

logger = logging.getLogger("edufly.auth")

router = APIRouter(prefix="/api/admin", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    message: str = "Login successful"


async def _bootstrap_admin(username: str, password: str) -> Optional[Admin]:
    """Create the initial admin if INITIAL_ADMIN_PASSWORD is set and the credentials match it."""
    if not (
        config.INITIAL_ADMIN_PASSWORD
        and username == config.INITIAL_ADMIN_USERNAME
        and password == config.INITIAL_ADMIN_PASSWORD
    ):
        return None
    async with async_session_factory() as session:
        admin = Admin(username=username, password_hash=hash_password(password))
        session.add(admin)
        try:
            await session.commit()
        except IntegrityError:
            # A concurrent first login created it
            await session.rollback()
            return await get_admin_by_username(username)
        await session.refresh(admin)
    logger.info("Bootstrapped initial admin %s", username)
    return admin


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest):
    """Authenticate and return a signed token."""
    username = body.username.strip()
    logger.info("Login attempt for user %s", username)
    admin = await get_admin_by_username(username)
    if not admin:
        admin = await _bootstrap_admin(username, body.password)
        if not admin:
            logger.info("Login failed for user %s", username)
            raise HTTPException(status_code=401, detail="Invalid credentials")
    elif not verify_password(body.password, admin.password_hash):
        logger.info("Login failed for user %s", username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return LoginResponse(token=create_access_token(admin.username))


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client discards its copy and it expires on its own."""
    return {"message": "Logged out"}


@router.get("/check-auth")
async def check_auth(admin: Optional[Admin] = Depends(get_current_admin)):
    """Verify the caller's token signature, expiry and admin account."""
    if not admin:
        return JSONResponse(status_code=401, content={"authenticated": False})
    return {"authenticated": True}
