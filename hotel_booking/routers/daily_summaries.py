"""
每日汇总路由
"""
from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.errors import BookingSystemError
from hotel_booking.models.ontology import User
from hotel_booking.models.schemas import (
    SummaryGenerateRequest, SummaryStatusUpdate, DailySummaryResponse, DailySummaryPage
)
from hotel_booking.routers.deps import http_error, PageParams
from hotel_booking.security.auth import get_current_user
from hotel_booking.services.daily_summary_service import DailySummaryService

router = APIRouter(prefix="/daily-summaries", tags=["每日汇总"])


@router.post("/generate", response_model=DailySummaryResponse)
def generate_daily_summary(
    data: SummaryGenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """生成（或重新生成）某日汇总"""
    try:
        service = DailySummaryService(db)
        summary = service.generate_daily_summary(data.summary_date, current_user.id)
    except BookingSystemError as e:
        raise http_error(e)
    return DailySummaryResponse.model_validate(summary)


@router.get("", response_model=DailySummaryPage)
def list_summaries(
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """汇总列表，日期倒序"""
    try:
        service = DailySummaryService(db)
        items, total = service.list_summaries(page.skip, page.limit)
    except BookingSystemError as e:
        raise http_error(e)
    return DailySummaryPage(
        items=[DailySummaryResponse.model_validate(s) for s in items], total=total
    )


@router.get("/{summary_date}", response_model=DailySummaryResponse)
def get_summary(
    summary_date: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取某日汇总"""
    try:
        service = DailySummaryService(db)
        return DailySummaryResponse.model_validate(service.get_summary_by_date(summary_date))
    except BookingSystemError as e:
        raise http_error(e)


@router.put("/{summary_date}/status", response_model=DailySummaryResponse)
def update_summary_status(
    summary_date: date,
    data: SummaryStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """修改汇总复核状态"""
    try:
        service = DailySummaryService(db)
        summary = service.update_summary_status(summary_date, data.status, current_user.id)
    except BookingSystemError as e:
        raise http_error(e)
    return DailySummaryResponse.model_validate(summary)
