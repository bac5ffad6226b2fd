"""
房间可用性路由
"""
from datetime import date
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.errors import BookingSystemError
from hotel_booking.models.ontology import User
from hotel_booking.models.schemas import RoomWithTypeResponse, RoomPage
from hotel_booking.routers.deps import http_error, PageParams
from hotel_booking.security.auth import get_current_user
from hotel_booking.services.availability_service import AvailabilityService

router = APIRouter(prefix="/rooms", tags=["房间"])


@router.get("/available", response_model=List[RoomWithTypeResponse])
def get_available_rooms(
    check_in: date,
    check_out: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取指定日期区间可预订的房间"""
    service = AvailabilityService(db)
    try:
        return service.get_available_rooms(check_in, check_out)
    except BookingSystemError as e:
        raise http_error(e)


@router.get("/with-room-type", response_model=RoomPage)
def list_rooms_with_room_type(
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """分页获取房间及房型"""
    service = AvailabilityService(db)
    try:
        items, total = service.list_rooms_with_room_type(page.skip, page.limit)
    except BookingSystemError as e:
        raise http_error(e)
    return RoomPage(items=items, total=total)
