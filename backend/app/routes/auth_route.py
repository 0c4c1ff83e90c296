import logging
import re

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import settings
from app.core.logger import logs
from app.core.security import create_access_token, get_current_user_id
from app.models.base_model import LoginRequest, TokenResponse, UserInfo

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/login", response_model=TokenResponse)
async def login_endpoint(request: LoginRequest):
    """
    Development identity provider: any username gets a signed token whose
    subject is the normalized username. Disable with ALLOW_DEV_LOGIN=false
    when tokens are issued elsewhere.
    """
    if not settings.ALLOW_DEV_LOGIN:
        raise HTTPException(status_code=404, detail="Not Found")

    user_id = re.sub(r"\s+", "-", request.username.strip().lower())
    if not user_id:
        raise HTTPException(status_code=400, detail="Username must not be blank")

    logs.log(logging.INFO, f"Issued token for user {user_id}")
    return TokenResponse(access_token=create_access_token(user_id), user_id=user_id)

@router.get("/auth/user", response_model=UserInfo)
async def current_user_endpoint(user_id: str = Depends(get_current_user_id)):
    return UserInfo(user_id=user_id)
