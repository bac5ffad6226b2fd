"""
每日汇总仓储 - SQLAlchemy 实现
"""
from datetime import date, datetime
from typing import List, Optional, Tuple

from hotel_booking.models.ontology import DailyBookingSummary
from hotel_booking.repositories.base import SqlAlchemyRepository
from hotel_booking.repositories.interfaces import DailyBookingSummaryRepository

# 重新生成时覆盖的字段；created_at 保留
_GENERATED_FIELDS = (
    "total_bookings", "total_amount",
    "pending_bookings", "confirmed_bookings", "checked_in_bookings",
    "checked_out_bookings", "canceled_bookings", "completed_bookings",
    "booking_ids", "status",
)


class SqlAlchemyDailyBookingSummaryRepository(SqlAlchemyRepository, DailyBookingSummaryRepository):
    """每日汇总仓储"""

    def upsert(self, summary: DailyBookingSummary) -> DailyBookingSummary:
        now = datetime.utcnow()
        existing = self.get_by_date(summary.summary_date)
        if existing is None:
            summary.created_at = now
            summary.updated_at = now
            self.db.add(summary)
            self._flush()
            self.db.refresh(summary)
            return summary

        for name in _GENERATED_FIELDS:
            setattr(existing, name, getattr(summary, name))
        existing.updated_at = now
        self._flush()
        self.db.refresh(existing)
        return existing

    def get_by_date(self, summary_date: date) -> Optional[DailyBookingSummary]:
        return self.db.query(DailyBookingSummary).filter(
            DailyBookingSummary.summary_date == summary_date
        ).first()

    def list(self, skip: int, limit: int) -> Tuple[List[DailyBookingSummary], int]:
        total = self.db.query(DailyBookingSummary).count()
        items = (
            self.db.query(DailyBookingSummary)
            .order_by(DailyBookingSummary.summary_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def update(self, summary: DailyBookingSummary) -> DailyBookingSummary:
        summary.updated_at = datetime.utcnow()
        self._flush()
        self.db.refresh(summary)
        return summary
