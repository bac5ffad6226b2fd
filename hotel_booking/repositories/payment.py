"""
支付仓储 - SQLAlchemy 实现
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from hotel_booking.models.ontology import Payment
from hotel_booking.repositories.base import SqlAlchemyRepository
from hotel_booking.repositories.interfaces import PaymentRepository


class SqlAlchemyPaymentRepository(SqlAlchemyRepository, PaymentRepository):
    """支付仓储"""

    def create(self, payment: Payment) -> Payment:
        self.db.add(payment)
        self._flush()
        self.db.refresh(payment)
        return payment

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.id == payment_id).first()

    def list(self, skip: int, limit: int) -> Tuple[List[Payment], int]:
        total = self.db.query(Payment).count()
        items = (
            self.db.query(Payment)
            .order_by(Payment.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return items, total

    def list_by_booking(self, booking_id: int) -> List[Payment]:
        return self.db.query(Payment).filter(
            Payment.booking_id == booking_id
        ).order_by(Payment.id).all()

    def update(self, payment: Payment, changes: Dict[str, Any]) -> Payment:
        for key, value in changes.items():
            if value is not None:
                setattr(payment, key, value)
        payment.updated_at = datetime.utcnow()
        self._flush()
        self.db.refresh(payment)
        return payment

    def delete(self, payment_id: int) -> bool:
        payment = self.get_by_id(payment_id)
        if not payment:
            return False
        self.db.delete(payment)
        self._flush()
        return True
