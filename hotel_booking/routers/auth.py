"""
认证路由
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.errors import BookingSystemError
from hotel_booking.models.schemas import LoginRequest, TokenResponse
from hotel_booking.routers.deps import http_error
from hotel_booking.security.auth import authenticate

router = APIRouter(prefix="/auth", tags=["认证"])


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """用户登录"""
    try:
        token = authenticate(db, data.username, data.password)
    except BookingSystemError as e:
        raise http_error(e)
    return TokenResponse(access_token=token)
