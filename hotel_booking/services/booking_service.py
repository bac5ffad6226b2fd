"""
预订服务 - 预订生命周期管理
负责预订的创建、查询、更新、删除，保证状态转换合法且同一房间不被重复预订
"""
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import logging

from sqlalchemy.orm import Session

from hotel_booking.domain import can_transition, dates_overlap
from hotel_booking.errors import (
    InvalidDataError, DataNotFoundError, ConflictingDataError, NoUpdatedDataError
)
from hotel_booking.models.ontology import Booking, BookingStatus, INACTIVE_BOOKING_STATUSES
from hotel_booking.models.schemas import BookingCreate, BookingUpdate, BookingFilter
from hotel_booking.repositories import BookingRepository, SqlAlchemyBookingRepository
from hotel_booking.services.audit_service import AuditService, AuditAction
from hotel_booking.services.room_lock import RoomLockRegistry, room_locks
from hotel_booking.services.transaction import transaction, read_or_internal

logger = logging.getLogger(__name__)

BOOKING_TABLE = "bookings"

# 参与“是否有变化”比较的可变字段
MUTABLE_FIELDS = (
    "customer_id", "rate_price_id", "room_id", "room_type_id",
    "check_in_date", "check_out_date", "status", "total_amount",
)

# 引用字段为 0 时视为未提供，不覆盖现有值
REFERENCE_FIELDS = ("customer_id", "rate_price_id", "room_id", "room_type_id")


def validate_booking_create(data: BookingCreate) -> None:
    """创建预订的前置校验，任何存储调用之前执行"""
    if not data.customer_id:
        raise InvalidDataError("客户不能为空")
    if not data.rate_price_id:
        raise InvalidDataError("价格方案不能为空")
    if data.check_in_date is None or data.check_out_date is None:
        raise InvalidDataError("入住日期和离店日期不能为空")
    if data.total_amount is None or data.total_amount <= 0:
        raise InvalidDataError("总金额必须大于0")
    if data.check_out_date <= data.check_in_date:
        raise InvalidDataError("离店日期必须晚于入住日期")


def build_booking(data: BookingCreate) -> Booking:
    """由已校验的输入构造预订，状态缺省为 pending，下单时间缺省为现在"""
    return Booking(
        customer_id=data.customer_id,
        rate_price_id=data.rate_price_id,
        room_id=data.room_id or None,
        room_type_id=data.room_type_id or None,
        check_in_date=data.check_in_date,
        check_out_date=data.check_out_date,
        status=data.status or BookingStatus.PENDING,
        total_amount=data.total_amount,
        booking_date=data.booking_date or datetime.utcnow(),
    )


class BookingService:
    """预订服务"""

    def __init__(self, db: Session,
                 booking_repo: Optional[BookingRepository] = None,
                 audit_service: Optional[AuditService] = None,
                 locks: Optional[RoomLockRegistry] = None):
        self.db = db
        self.booking_repo = booking_repo or SqlAlchemyBookingRepository(db)
        self.audit_service = audit_service or AuditService(db)
        self.locks = locks or room_locks

    # ============== 查询 ==============

    @read_or_internal("get booking")
    def _find(self, booking_id: int) -> Optional[Booking]:
        return self.booking_repo.get_by_id(booking_id)

    def get_booking(self, booking_id: int) -> Booking:
        """获取单个预订"""
        booking = self._find(booking_id)
        if not booking:
            raise DataNotFoundError("预订不存在")
        return booking

    @read_or_internal("list bookings")
    def list_bookings(self, skip: int = 0, limit: int = 20) -> Tuple[List[Booking], int]:
        """获取预订列表及总数"""
        return self.booking_repo.list(skip, limit)

    @read_or_internal("list bookings with filter")
    def list_bookings_with_filter(self, criteria: BookingFilter,
                                  skip: int = 0, limit: int = 20) -> Tuple[List[Booking], int]:
        """按条件筛选预订，总数与分页使用同一条件"""
        return self.booking_repo.list_with_filter(criteria, skip, limit)

    @read_or_internal("get booking detail")
    def _find_detail(self, booking_id: int) -> Optional[Dict[str, Any]]:
        return self.booking_repo.get_detail(booking_id)

    def get_booking_detail(self, booking_id: int) -> Dict[str, Any]:
        """获取预订详情（客户、房间、支付）"""
        detail = self._find_detail(booking_id)
        if detail is None:
            raise DataNotFoundError("预订不存在")
        return detail

    @read_or_internal("list booking details")
    def list_booking_details(self, skip: int = 0, limit: int = 20) -> Tuple[List[Dict[str, Any]], int]:
        """分页获取预订详情"""
        return self.booking_repo.list_details(skip, limit)

    # ============== 写操作 ==============

    def ensure_room_free(self, room_id: Optional[int], check_in, check_out,
                         exclude_id: Optional[int] = None) -> None:
        """写入时复查重叠，须在房间锁和写事务内调用"""
        if room_id is None:
            return
        candidates = self.booking_repo.find_overlapping(room_id, check_in, check_out, exclude_id)
        overlapping = [b for b in candidates
                       if dates_overlap(b.check_in_date, b.check_out_date, check_in, check_out)]
        if overlapping:
            ids = ", ".join(str(b.id) for b in overlapping)
            raise ConflictingDataError(f"房间在该时间段已被预订 (预订 {ids})")

    def create_booking(self, data: BookingCreate, actor_id: Optional[int] = None) -> Booking:
        """创建预订"""
        validate_booking_create(data)
        booking = build_booking(data)

        with self.locks.hold(booking.room_id):
            with transaction(self.db, "create booking"):
                if booking.is_active:
                    self.ensure_room_free(booking.room_id, booking.check_in_date, booking.check_out_date)
                booking = self.booking_repo.create(booking)

        logger.info(f"Booking created: {booking.id}")
        self.audit_service.append(AuditAction.CREATE, BOOKING_TABLE, booking.id, actor_id)
        return booking

    def update_booking(self, booking_id: int, data: BookingUpdate,
                       actor_id: Optional[int] = None) -> Booking:
        """
        更新预订

        只写入提供的字段；所有字段都与现有记录一致时抛出 NoUpdatedDataError，
        不做空写入
        """
        existing = self.get_booking(booking_id)
        changes = {
            key: value for key, value in data.model_dump(exclude_none=True).items()
            if not (key in REFERENCE_FIELDS and value == 0)
        }

        if all(getattr(existing, key) == value for key, value in changes.items()
               if key in MUTABLE_FIELDS):
            raise NoUpdatedDataError()

        merged: Dict[str, Any] = {key: changes.get(key, getattr(existing, key)) for key in MUTABLE_FIELDS}

        if 'total_amount' in changes and changes["total_amount"] <= 0:
            raise InvalidDataError("总金额必须大于0")
        if merged['check_out_date'] <= merged['check_in_date']:
            raise InvalidDataError("离店日期必须晚于入住日期")
        if not can_transition(existing.status, merged['status']):
            raise InvalidDataError(
                f"预订状态不能从 {existing.status.value} 变更为 {merged['status'].value}"
            )

        with self.locks.hold(merged['room_id']):
            with transaction(self.db, "update booking"):
                if merged['status'] not in INACTIVE_BOOKING_STATUSES:
                    self.ensure_room_free(
                        merged['room_id'], merged['check_in_date'], merged['check_out_date'],
                        exclude_id=existing.id
                    )
                booking = self.booking_repo.update(existing, changes)

        logger.info(f"Booking updated: {booking.id} fields={sorted(changes)}")
        self.audit_service.append(AuditAction.UPDATE, BOOKING_TABLE, booking.id, actor_id)
        return booking

    def delete_booking(self, booking_id: int, actor_id: Optional[int] = None) -> None:
        """删除预订，支付记录的级联由存储负责"""
        self.get_booking(booking_id)

        with transaction(self.db, "delete booking"):
            if not self.booking_repo.delete(booking_id):
                raise DataNotFoundError("预订不存在")

        logger.info(f"Booking deleted: {booking_id}")
        self.audit_service.append(AuditAction.DELETE, BOOKING_TABLE, booking_id, actor_id)
