"""
支付路由
"""
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.errors import BookingSystemError, NoUpdatedDataError
from hotel_booking.models.ontology import User
from hotel_booking.models.schemas import (
    PaymentCreate, PaymentUpdate, PaymentResponse, PaymentPage
)
from hotel_booking.routers.deps import http_error, PageParams
from hotel_booking.security.auth import get_current_user
from hotel_booking.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["支付"])


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    data: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """登记支付"""
    service = PaymentService(db)
    try:
        return PaymentResponse.model_validate(service.process_payment(data, current_user.id))
    except BookingSystemError as e:
        raise http_error(e)


@router.get("", response_model=PaymentPage)
def list_payments(
    booking_id: Optional[int] = None,
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取支付列表；指定 booking_id 时返回该预订的全部支付"""
    service = PaymentService(db)
    try:
        if booking_id is not None:
            items = service.list_booking_payments(booking_id)
            total = len(items)
        else:
            items, total = service.list_payments(page.skip, page.limit)
    except BookingSystemError as e:
        raise http_error(e)
    return PaymentPage(items=[PaymentResponse.model_validate(p) for p in items], total=total)


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取支付记录"""
    service = PaymentService(db)
    try:
        return PaymentResponse.model_validate(service.get_payment(payment_id))
    except BookingSystemError as e:
        raise http_error(e)


@router.put("/{payment_id}", response_model=PaymentResponse)
def update_payment(
    payment_id: int,
    data: PaymentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新支付；内容无变化时原样返回"""
    service = PaymentService(db)
    try:
        payment = service.update_payment(payment_id, data, current_user.id)
    except NoUpdatedDataError:
        payment = service.get_payment(payment_id)
    except BookingSystemError as e:
        raise http_error(e)
    return PaymentResponse.model_validate(payment)


@router.delete("/{payment_id}")
def delete_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """删除支付记录"""
    service = PaymentService(db)
    try:
        service.delete_payment(payment_id, current_user.id)
    except BookingSystemError as e:
        raise http_error(e)
    return {"message": "支付记录已删除", "payment_id": payment_id}
