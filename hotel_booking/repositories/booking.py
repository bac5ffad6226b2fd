"""
预订仓储 - SQLAlchemy 实现
"""
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, or_

from hotel_booking.models.ontology import Booking, INACTIVE_BOOKING_STATUSES
from hotel_booking.models.schemas import BookingFilter
from hotel_booking.repositories.base import SqlAlchemyRepository
from hotel_booking.repositories.interfaces import BookingRepository

# 每日汇总可用的日期归属字段
SUMMARY_DATE_FIELDS = ("booking_date", "created_at", "updated_at", "created_or_updated")

# 精确匹配的筛选列
_EQUALITY_FILTERS = (
    "id", "customer_id", "rate_price_id", "room_id", "room_type_id",
    "check_in_date", "check_out_date", "status", "total_amount",
)


def _day_range(column, day: date):
    """时间戳落在某一天 [00:00, 次日 00:00)"""
    start = datetime.combine(day, datetime.min.time())
    return and_(column >= start, column < start + timedelta(days=1))


def booking_detail(booking: Booking) -> Dict[str, Any]:
    """预订详情（客户、房间、房型、最近一次支付）"""
    customer = booking.customer
    room = booking.room
    payment = booking.payments[-1] if booking.payments else None
    return {
        'booking_id': booking.id,
        'customer_id': booking.customer_id,
        'booking_price': booking.total_amount,
        'booking_status': booking.status,
        'check_in_date': booking.check_in_date,
        'check_out_date': booking.check_out_date,
        'booking_created_at': booking.created_at,
        'booking_updated_at': booking.updated_at,
        'room_id': booking.room_id,
        'room_number': room.room_number if room else None,
        'floor': room.floor if room else None,
        'rate_price_id': booking.rate_price_id,
        'room_type_id': booking.room_type_id,
        'room_type_name': booking.room_type.name if booking.room_type else None,
        'customer_first_name': customer.first_name if customer else None,
        'customer_surname': customer.surname if customer else None,
        'customer_identity_number': customer.identity_number if customer else None,
        'customer_address': customer.address if customer else None,
        'payment_id': payment.id if payment else None,
        'payment_status': payment.status if payment else None,
        'payment_update_date': payment.updated_at if payment else None,
    }


class SqlAlchemyBookingRepository(SqlAlchemyRepository, BookingRepository):
    """预订仓储"""

    def create(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self._flush()
        self.db.refresh(booking)
        return booking

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def list(self, skip: int, limit: int) -> Tuple[List[Booking], int]:
        return self.list_with_filter(BookingFilter(), skip, limit)

    def _conditions(self, criteria: BookingFilter) -> List:
        """构建筛选条件，计数与分页共用"""
        conditions = []
        for name in _EQUALITY_FILTERS:
            value = getattr(criteria, name)
            if value is not None:
                conditions.append(getattr(Booking, name) == value)
        if criteria.created_on is not None:
            conditions.append(_day_range(Booking.created_at, criteria.created_on))
        if criteria.updated_on is not None:
            conditions.append(_day_range(Booking.updated_at, criteria.updated_on))
        return conditions

    def list_with_filter(self, criteria: BookingFilter, skip: int, limit: int) -> Tuple[List[Booking], int]:
        conditions = self._conditions(criteria)

        total = self.db.query(Booking).filter(*conditions).count()
        items = (
            self.db.query(Booking)
            .filter(*conditions)
            .order_by(Booking.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def update(self, booking: Booking, changes: Dict[str, Any]) -> Booking:
        for key, value in changes.items():
            if value is not None:
                setattr(booking, key, value)
        booking.updated_at = datetime.utcnow()
        self._flush()
        self.db.refresh(booking)
        return booking

    def delete(self, booking_id: int) -> bool:
        booking = self.get_by_id(booking_id)
        if not booking:
            return False
        self.db.delete(booking)
        self._flush()
        return True

    def find_overlapping(self, room_id: int, check_in: date, check_out: date,
                         exclude_id: Optional[int] = None) -> List[Booking]:
        query = self.db.query(Booking).filter(
            Booking.room_id == room_id,
            Booking.status.notin_(INACTIVE_BOOKING_STATUSES),
            Booking.check_in_date < check_out,
            Booking.check_out_date > check_in,
        )
        if exclude_id is not None:
            query = query.filter(Booking.id != exclude_id)
        return query.order_by(Booking.check_in_date).all()

    def list_for_day(self, day: date, date_field: str) -> List[Booking]:
        if date_field not in SUMMARY_DATE_FIELDS:
            raise ValueError(f"不支持的日期字段: {date_field}")

        if date_field == "created_or_updated":
            condition = or_(_day_range(Booking.created_at, day),
                            _day_range(Booking.updated_at, day))
        else:
            condition = _day_range(getattr(Booking, date_field), day)

        return self.db.query(Booking).filter(condition).order_by(Booking.id).all()

    def get_detail(self, booking_id: int) -> Optional[Dict[str, Any]]:
        booking = self.get_by_id(booking_id)
        if not booking:
            return None
        return booking_detail(booking)

    def list_details(self, skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        bookings, total = self.list(skip, limit)
        return [booking_detail(b) for b in bookings], total
