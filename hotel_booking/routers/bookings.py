"""
预订路由
"""
from datetime import date
from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.errors import BookingSystemError, NoUpdatedDataError
from hotel_booking.models.ontology import User, BookingStatus
from hotel_booking.models.schemas import (
    BookingCreate, BookingUpdate, BookingFilter, BookingResponse, BookingPage,
    BookingUpdateResponse, BookingDetailResponse, BookingDetailPage
)
from hotel_booking.routers.deps import http_error, PageParams
from hotel_booking.security.auth import get_current_user
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.booking_payment_service import BookingPaymentService

router = APIRouter(prefix="/bookings", tags=["预订"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """创建预订并登记初始支付"""
    service = BookingPaymentService(db)
    try:
        booking = service.create_booking_and_payment(data, current_user.id)
    except BookingSystemError as e:
        raise http_error(e)
    return BookingResponse.model_validate(booking)


@router.post("/plain", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_plain_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """只创建预订，不登记支付"""
    service = BookingService(db)
    try:
        booking = service.create_booking(data, current_user.id)
    except BookingSystemError as e:
        raise http_error(e)
    return BookingResponse.model_validate(booking)


@router.get("", response_model=BookingPage)
def list_bookings(
    id: Optional[int] = None,
    customer_id: Optional[int] = None,
    rate_price_id: Optional[int] = None,
    room_id: Optional[int] = None,
    room_type_id: Optional[int] = None,
    check_in_date: Optional[date] = None,
    check_out_date: Optional[date] = None,
    status: Optional[BookingStatus] = None,
    total_amount: Optional[Decimal] = None,
    created_on: Optional[date] = None,
    updated_on: Optional[date] = None,
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订列表，未提供的条件不参与筛选"""
    criteria = BookingFilter(
        id=id, customer_id=customer_id, rate_price_id=rate_price_id,
        room_id=room_id, room_type_id=room_type_id,
        check_in_date=check_in_date, check_out_date=check_out_date,
        status=status, total_amount=total_amount,
        created_on=created_on, updated_on=updated_on,
    )
    service = BookingService(db)
    try:
        items, total = service.list_bookings_with_filter(criteria, page.skip, page.limit)
    except BookingSystemError as e:
        raise http_error(e)
    return BookingPage(items=[BookingResponse.model_validate(b) for b in items], total=total)


@router.get("/details", response_model=BookingDetailPage)
def list_booking_details(
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """分页获取预订详情"""
    service = BookingService(db)
    try:
        items, total = service.list_booking_details(page.skip, page.limit)
    except BookingSystemError as e:
        raise http_error(e)
    return BookingDetailPage(items=items, total=total)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订"""
    service = BookingService(db)
    try:
        return BookingResponse.model_validate(service.get_booking(booking_id))
    except BookingSystemError as e:
        raise http_error(e)


@router.get("/{booking_id}/details", response_model=BookingDetailResponse)
def get_booking_detail(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取预订详情（客户、房间、支付）"""
    service = BookingService(db)
    try:
        return service.get_booking_detail(booking_id)
    except BookingSystemError as e:
        raise http_error(e)


@router.put("/{booking_id}", response_model=BookingUpdateResponse)
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新预订；内容无变化时 updated 为 false"""
    service = BookingService(db)
    try:
        booking = service.update_booking(booking_id, data, current_user.id)
        updated = True
    except NoUpdatedDataError:
        booking = service.get_booking(booking_id)
        updated = False
    except BookingSystemError as e:
        raise http_error(e)
    return BookingUpdateResponse(updated=updated, booking=BookingResponse.model_validate(booking))


@router.delete("/{booking_id}")
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """删除预订"""
    service = BookingService(db)
    try:
        service.delete_booking(booking_id, current_user.id)
    except BookingSystemError as e:
        raise http_error(e)
    return {"message": "预订已删除", "booking_id": booking_id}
