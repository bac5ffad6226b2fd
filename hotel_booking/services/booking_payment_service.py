"""
预订+支付编排服务
在一次请求内创建预订及其初始支付记录

两次插入处于同一数据库事务，只有都成功才提交；
支付插入在 SAVEPOINT 内执行，失败时先对新预订做补偿删除再整体回滚，
保证调用方看不到没有支付记录的预订
"""
from datetime import datetime
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_booking.errors import BookingSystemError, InternalError
from hotel_booking.models.ontology import (
    Booking, Payment, PaymentMethod, PaymentStatus
)
from hotel_booking.models.schemas import BookingCreate
from hotel_booking.repositories import (
    BookingRepository, PaymentRepository,
    SqlAlchemyBookingRepository, SqlAlchemyPaymentRepository
)
from hotel_booking.services.audit_service import AuditService, AuditAction
from hotel_booking.services.booking_service import (
    BookingService, BOOKING_TABLE, validate_booking_create, build_booking
)
from hotel_booking.services.payment_service import PAYMENT_TABLE
from hotel_booking.services.room_lock import RoomLockRegistry, room_locks

logger = logging.getLogger(__name__)


class BookingPaymentService:
    """预订+支付编排服务"""

    def __init__(self, db: Session,
                 booking_repo: Optional[BookingRepository] = None,
                 payment_repo: Optional[PaymentRepository] = None,
                 audit_service: Optional[AuditService] = None,
                 locks: Optional[RoomLockRegistry] = None):
        self.db = db
        self.booking_repo = booking_repo or SqlAlchemyBookingRepository(db)
        self.payment_repo = payment_repo or SqlAlchemyPaymentRepository(db)
        self.audit_service = audit_service or AuditService(db)
        self.locks = locks or room_locks
        self.booking_service = BookingService(
            db, booking_repo=self.booking_repo, audit_service=self.audit_service, locks=self.locks
        )

    def create_booking_and_payment(self, data: BookingCreate,
                                   actor_id: Optional[int] = None) -> Booking:
        """
        创建预订及初始支付

        支付金额等于预订总额，支付方式待后续收集（not_specified），状态为 pending。

        Raises:
            InvalidDataError: 预订字段校验失败（不触达存储）
            ConflictingDataError: 房间时间段冲突或唯一性冲突
            InternalError: 预订或支付写入失败（已尝试撤销预订）
        """
        validate_booking_create(data)
        booking = build_booking(data)
        now = datetime.utcnow()

        with self.locks.hold(booking.room_id):
            try:
                if booking.is_active:
                    self.booking_service.ensure_room_free(
                        booking.room_id, booking.check_in_date, booking.check_out_date
                    )
                booking = self.booking_repo.create(booking)
            except BookingSystemError:
                self.db.rollback()
                raise
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.exception("Error creating booking")
                raise InternalError() from e

            payment = Payment(
                booking_id=booking.id,
                amount=booking.total_amount,
                payment_method=PaymentMethod.NOT_SPECIFIED,
                payment_date=now,
                status=PaymentStatus.PENDING,
            )
            try:
                with self.db.begin_nested():
                    payment = self.payment_repo.create(payment)
            except (SQLAlchemyError, BookingSystemError) as e:
                logger.error(f"Error creating payment for booking {booking.id}: {e}")
                self._compensate(booking.id)
                self.db.rollback()
                raise InternalError() from e

            try:
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.exception(f"Error committing booking {booking.id} with payment")
                raise InternalError() from e

        logger.info(f"Booking created with payment: booking={booking.id} payment={payment.id}")
        self.audit_service.append(AuditAction.CREATE, BOOKING_TABLE, booking.id, actor_id)
        self.audit_service.append(AuditAction.CREATE, PAYMENT_TABLE, payment.id, actor_id)
        return booking

    def _compensate(self, booking_id: int) -> None:
        """补偿删除刚创建的预订；失败只记录日志，保留原始错误"""
        try:
            self.booking_repo.delete(booking_id)
        except (SQLAlchemyError, BookingSystemError):
            logger.exception(
                f"Compensating delete failed for booking {booking_id}, manual cleanup required"
            )
