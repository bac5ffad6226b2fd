"""
支付服务
管理 Payment 对象：登记支付、查询、更新状态
"""
from typing import List, Optional, Tuple
from datetime import datetime
import logging

from sqlalchemy.orm import Session

from hotel_booking.errors import InvalidDataError, DataNotFoundError, NoUpdatedDataError
from hotel_booking.models.ontology import Payment, PaymentMethod, PaymentStatus
from hotel_booking.models.schemas import PaymentCreate, PaymentUpdate
from hotel_booking.repositories import (
    BookingRepository, PaymentRepository,
    SqlAlchemyBookingRepository, SqlAlchemyPaymentRepository
)
from hotel_booking.services.audit_service import AuditService, AuditAction
from hotel_booking.services.transaction import transaction, read_or_internal

logger = logging.getLogger(__name__)

PAYMENT_TABLE = "payments"


class PaymentService:
    """支付服务"""

    def __init__(self, db: Session,
                 payment_repo: Optional[PaymentRepository] = None,
                 booking_repo: Optional[BookingRepository] = None,
                 audit_service: Optional[AuditService] = None):
        self.db = db
        self.payment_repo = payment_repo or SqlAlchemyPaymentRepository(db)
        self.booking_repo = booking_repo or SqlAlchemyBookingRepository(db)
        self.audit_service = audit_service or AuditService(db)

    @read_or_internal("get payment")
    def _find(self, payment_id: int) -> Optional[Payment]:
        return self.payment_repo.get_by_id(payment_id)

    def get_payment(self, payment_id: int) -> Payment:
        """获取支付记录"""
        payment = self._find(payment_id)
        if not payment:
            raise DataNotFoundError("支付记录不存在")
        return payment

    @read_or_internal("get booking")
    def _booking_exists(self, booking_id: int) -> bool:
        return self.booking_repo.get_by_id(booking_id) is not None

    @read_or_internal("list payments")
    def list_payments(self, skip: int = 0, limit: int = 20) -> Tuple[List[Payment], int]:
        """获取支付列表及总数"""
        return self.payment_repo.list(skip, limit)

    @read_or_internal("list booking payments")
    def list_booking_payments(self, booking_id: int) -> List[Payment]:
        """获取预订的全部支付记录"""
        return self.payment_repo.list_by_booking(booking_id)

    def process_payment(self, data: PaymentCreate, actor_id: Optional[int] = None) -> Payment:
        """登记支付：金额必须为正，支付方式必须已指定"""
        if data.amount is None or data.amount <= 0:
            raise InvalidDataError("支付金额必须大于0")
        if data.payment_method == PaymentMethod.NOT_SPECIFIED:
            raise InvalidDataError("请指定支付方式")

        if not self._booking_exists(data.booking_id):
            raise DataNotFoundError("预订不存在")

        payment = Payment(
            booking_id=data.booking_id,
            amount=data.amount,
            payment_method=data.payment_method,
            payment_date=data.payment_date or datetime.utcnow(),
            status=data.status or PaymentStatus.PENDING,
        )
        with transaction(self.db, "create payment"):
            payment = self.payment_repo.create(payment)

        logger.info(f"Payment created: {payment.id} for booking {payment.booking_id}")
        self.audit_service.append(AuditAction.CREATE, PAYMENT_TABLE, payment.id, actor_id)
        return payment

    def update_payment(self, payment_id: int, data: PaymentUpdate,
                       actor_id: Optional[int] = None) -> Payment:
        """更新支付；标记为 completed 时支付方式不能是 not_specified"""
        existing = self.get_payment(payment_id)
        changes = data.model_dump(exclude_none=True)

        if all(getattr(existing, key) == value for key, value in changes.items()):
            raise NoUpdatedDataError()

        if 'amount' in changes and changes['amount'] <= 0:
            raise InvalidDataError("支付金额必须大于0")

        method = changes.get('payment_method', existing.payment_method)
        status = changes.get('status', existing.status)
        if status == PaymentStatus.COMPLETED and method == PaymentMethod.NOT_SPECIFIED:
            raise InvalidDataError("完成支付前请指定支付方式")

        with transaction(self.db, "update payment"):
            payment = self.payment_repo.update(existing, changes)

        self.audit_service.append(AuditAction.UPDATE, PAYMENT_TABLE, payment.id, actor_id)
        return payment

    def delete_payment(self, payment_id: int, actor_id: Optional[int] = None) -> None:
        """删除支付记录"""
        self.get_payment(payment_id)

        with transaction(self.db, "delete payment"):
            self.payment_repo.delete(payment_id)

        self.audit_service.append(AuditAction.DELETE, PAYMENT_TABLE, payment_id, actor_id)
