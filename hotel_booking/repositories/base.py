"""
SQLAlchemy 仓储公共部分
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotel_booking.errors import ConflictingDataError

# PostgreSQL: unique_violation, exclusion_violation
_CONFLICT_SQLSTATES = {"23505", "23P01"}


def is_conflict(exc: IntegrityError) -> bool:
    """判断完整性错误是否为唯一/排他约束冲突"""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _CONFLICT_SQLSTATES:
        return True
    message = str(orig if orig is not None else exc).lower()
    return "unique" in message or "duplicate" in message


class SqlAlchemyRepository:
    """绑定会话的仓储基类"""

    def __init__(self, db: Session):
        self.db = db

    def _flush(self) -> None:
        """flush 并把约束冲突翻译为 ConflictingDataError，其他错误原样抛出"""
        try:
            self.db.flush()
        except IntegrityError as e:
            if is_conflict(e):
                raise ConflictingDataError() from e
            raise
