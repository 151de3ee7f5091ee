"""Login, logout and current-user routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from ...db import UserRepository
from ...schemas import UserRead
from ..auth import Claims, current_claims, login_session, logout_session
from ..deps import get_user_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/login")
async def login(request: Request, users: UserRepository = Depends(get_user_repo)):
    """Establish a session from the identity provider's assertion."""
    provider = request.app.state.identity_provider
    claims = provider.authenticate(request)
    if claims is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    user = await users.upsert(claims.to_user())
    login_session(request, claims)
    logger.info("User %s signed in", user.id)
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.get("/logout")
async def logout(request: Request):
    """End the session."""
    logout_session(request)
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.get("/auth/user", response_model=UserRead)
async def get_current_user(
    claims: Claims = Depends(current_claims),
    users: UserRepository = Depends(get_user_repo),
):
    """The signed-in user's record."""
    user = await users.get(claims.sub)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead.from_user(user)
