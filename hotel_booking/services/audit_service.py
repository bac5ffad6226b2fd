"""
审计服务 - 尽力而为的操作日志
主操作提交后再写日志；缺少操作人或写入失败只记录本地日志，不影响主操作
"""
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_booking.errors import BookingSystemError
from hotel_booking.repositories import LogRepository, SqlAlchemyLogRepository

logger = logging.getLogger(__name__)


class AuditAction:
    """审计动作"""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditService:
    """审计服务"""

    def __init__(self, db: Session, log_repo: Optional[LogRepository] = None):
        self.db = db
        self.log_repo = log_repo or SqlAlchemyLogRepository(db)

    def append(self, action: str, table_name: str, record_id: Optional[int],
               actor_id: Optional[int]) -> bool:
        """
        追加审计日志

        Returns:
            是否写入成功
        """
        if actor_id is None:
            logger.warning(
                f"Audit skipped: no actor for {action} {table_name}#{record_id}"
            )
            return False

        try:
            self.log_repo.append(action, table_name, record_id, actor_id)
            self.db.commit()
        except (SQLAlchemyError, BookingSystemError):
            self.db.rollback()
            logger.exception(f"Error creating audit log for {action} {table_name}#{record_id}")
            return False
        return True
