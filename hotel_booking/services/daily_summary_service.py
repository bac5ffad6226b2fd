"""
每日汇总服务
按日期统计预订情况，供运营人员核对
"""
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from hotel_booking.config import settings
from hotel_booking.errors import DataNotFoundError, InternalError
from hotel_booking.models.ontology import (
    Booking, BookingStatus, DailyBookingSummary, SummaryStatus
)
from hotel_booking.repositories import (
    BookingRepository, DailyBookingSummaryRepository,
    SqlAlchemyBookingRepository, SqlAlchemyDailyBookingSummaryRepository
)
from hotel_booking.services.audit_service import AuditService, AuditAction
from hotel_booking.services.transaction import transaction, read_or_internal

logger = logging.getLogger(__name__)

SUMMARY_TABLE = "daily_booking_summaries"

# 状态 -> 计数字段
_STATUS_COUNTERS = {
    BookingStatus.PENDING: "pending_bookings",
    BookingStatus.CONFIRMED: "confirmed_bookings",
    BookingStatus.CHECKED_IN: "checked_in_bookings",
    BookingStatus.CHECKED_OUT: "checked_out_bookings",
    BookingStatus.CANCELED: "canceled_bookings",
    BookingStatus.COMPLETED: "completed_bookings",
}


def build_summary(day: date, bookings: Iterable[Booking],
                  revenue_statuses: Iterable[str]) -> DailyBookingSummary:
    """
    把一天的预订汇总为一条记录

    只有状态属于 revenue_statuses 的预订计入总金额；
    生成结果的复核状态总是 unchecked。
    """
    revenue = {BookingStatus(s) for s in revenue_statuses}
    counters = {field: 0 for field in _STATUS_COUNTERS.values()}
    total_amount = Decimal("0")
    ids: List[int] = []

    for booking in bookings:
        ids.append(booking.id)
        counters[_STATUS_COUNTERS[booking.status]] += 1
        if booking.status in revenue:
            total_amount += Decimal(booking.total_amount)

    return DailyBookingSummary(
        summary_date=day,
        total_bookings=len(ids),
        total_amount=total_amount,
        booking_ids=",".join(str(i) for i in sorted(ids)),
        status=SummaryStatus.UNCHECKED,
        **counters,
    )


def _resolve_statuses(values: Iterable[str]) -> List[BookingStatus]:
    """把配置的收入状态解析为 BookingStatus；配置错误属于内部错误"""
    try:
        return [BookingStatus(v) for v in values]
    except ValueError as e:
        logger.error(f"Invalid summary revenue statuses: {list(values)}")
        raise InternalError() from e


class DailySummaryService:
    """每日汇总服务"""

    def __init__(self, db: Session,
                 booking_repo: Optional[BookingRepository] = None,
                 summary_repo: Optional[DailyBookingSummaryRepository] = None,
                 audit_service: Optional[AuditService] = None,
                 date_field: Optional[str] = None,
                 revenue_statuses: Optional[List[str]] = None):
        self.db = db
        self.booking_repo = booking_repo or SqlAlchemyBookingRepository(db)
        self.summary_repo = summary_repo or SqlAlchemyDailyBookingSummaryRepository(db)
        self.audit_service = audit_service or AuditService(db)
        self.date_field = date_field or settings.SUMMARY_DATE_FIELD
        self.revenue_statuses = _resolve_statuses(
            revenue_statuses if revenue_statuses is not None
            else settings.SUMMARY_REVENUE_STATUSES
        )

    def generate_daily_summary(self, day: date, actor_id: Optional[int] = None) -> DailyBookingSummary:
        """
        生成（或重新生成）某日汇总

        同一日期只保留一行：已存在则覆盖统计字段并把状态重置为 unchecked。
        """
        with transaction(self.db, "generate daily summary"):
            try:
                bookings = self.booking_repo.list_for_day(day, self.date_field)
            except ValueError as e:
                logger.error(f"Invalid summary date field: {self.date_field}")
                raise InternalError() from e

            summary = self.summary_repo.upsert(
                build_summary(day, bookings, self.revenue_statuses)
            )

        logger.info(
            f"Daily summary generated: {day} bookings={summary.total_bookings} "
            f"amount={summary.total_amount}"
        )
        self.audit_service.append(AuditAction.CREATE, SUMMARY_TABLE, None, actor_id)
        return summary

    @read_or_internal("get daily summary")
    def _find(self, day: date) -> Optional[DailyBookingSummary]:
        return self.summary_repo.get_by_date(day)

    def get_summary_by_date(self, day: date) -> DailyBookingSummary:
        """获取某日汇总"""
        summary = self._find(day)
        if summary is None:
            raise DataNotFoundError("该日期没有汇总")
        return summary

    def update_summary_status(self, day: date, status: SummaryStatus,
                              actor_id: Optional[int] = None) -> DailyBookingSummary:
        """修改复核状态，其余字段不变"""
        summary = self.get_summary_by_date(day)

        with transaction(self.db, "update daily summary status"):
            summary.status = status
            summary = self.summary_repo.update(summary)

        logger.info(f"Daily summary {day} status -> {status.value}")
        self.audit_service.append(AuditAction.UPDATE, SUMMARY_TABLE, None, actor_id)
        return summary

    @read_or_internal("list daily summaries")
    def list_summaries(self, skip: int = 0, limit: int = 20) -> Tuple[List[DailyBookingSummary], int]:
        """分页获取汇总，日期倒序"""
        return self.summary_repo.list(skip, limit)
