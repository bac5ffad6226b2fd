"""
存储接口
核心服务只依赖这些抽象；实现只 flush 不 commit，事务由服务层提交
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from hotel_booking.models.ontology import Booking, Payment, DailyBookingSummary, SystemLog
from hotel_booking.models.schemas import BookingFilter


class BookingRepository(ABC):
    """预订存储"""

    @abstractmethod
    def create(self, booking: Booking) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        raise NotImplementedError

    @abstractmethod
    def list(self, skip: int, limit: int) -> Tuple[List[Booking], int]:
        """返回 (当前页, 总数)"""
        raise NotImplementedError

    @abstractmethod
    def list_with_filter(self, criteria: BookingFilter, skip: int, limit: int) -> Tuple[List[Booking], int]:
        """总数与分页使用同一筛选条件，但不受 skip/limit 影响"""
        raise NotImplementedError

    @abstractmethod
    def update(self, booking: Booking, changes: Dict[str, Any]) -> Booking:
        """只写入值不为 None 的字段"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def find_overlapping(self, room_id: int, check_in: date, check_out: date,
                         exclude_id: Optional[int] = None) -> List[Booking]:
        """同一房间上与 [check_in, check_out) 重叠的有效预订"""
        raise NotImplementedError

    @abstractmethod
    def list_for_day(self, day: date, date_field: str) -> List[Booking]:
        """按时间字段所在日期取预订（每日汇总用）"""
        raise NotImplementedError

    @abstractmethod
    def get_detail(self, booking_id: int) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def list_details(self, skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        raise NotImplementedError


class PaymentRepository(ABC):
    """支付存储"""

    @abstractmethod
    def create(self, payment: Payment) -> Payment:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    @abstractmethod
    def list(self, skip: int, limit: int) -> Tuple[List[Payment], int]:
        raise NotImplementedError

    @abstractmethod
    def list_by_booking(self, booking_id: int) -> List[Payment]:
        raise NotImplementedError

    @abstractmethod
    def update(self, payment: Payment, changes: Dict[str, Any]) -> Payment:
        raise NotImplementedError

    @abstractmethod
    def delete(self, payment_id: int) -> bool:
        raise NotImplementedError


class RoomRepository(ABC):
    """房间查询（只读）"""

    @abstractmethod
    def get_available_rooms(self, check_in: date, check_out: date) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def list_rooms_with_room_type(self, skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        raise NotImplementedError


class DailyBookingSummaryRepository(ABC):
    """每日汇总存储，以日期为键"""

    @abstractmethod
    def upsert(self, summary: DailyBookingSummary) -> DailyBookingSummary:
        raise NotImplementedError

    @abstractmethod
    def get_by_date(self, summary_date: date) -> Optional[DailyBookingSummary]:
        raise NotImplementedError

    @abstractmethod
    def list(self, skip: int, limit: int) -> Tuple[List[DailyBookingSummary], int]:
        """按日期倒序"""
        raise NotImplementedError

    @abstractmethod
    def update(self, summary: DailyBookingSummary) -> DailyBookingSummary:
        raise NotImplementedError


class LogRepository(ABC):
    """审计日志存储"""

    @abstractmethod
    def append(self, action: str, table_name: str, record_id: Optional[int],
               user_id: int) -> SystemLog:
        raise NotImplementedError
