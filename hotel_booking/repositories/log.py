"""
审计日志仓储 - SQLAlchemy 实现
"""
from typing import Optional

from hotel_booking.models.ontology import SystemLog
from hotel_booking.repositories.base import SqlAlchemyRepository
from hotel_booking.repositories.interfaces import LogRepository


class SqlAlchemyLogRepository(SqlAlchemyRepository, LogRepository):
    """审计日志仓储"""

    def append(self, action: str, table_name: str, record_id: Optional[int],
               user_id: int) -> SystemLog:
        log = SystemLog(
            action=action,
            table_name=table_name,
            record_id=record_id,
            user_id=user_id,
        )
        self.db.add(log)
        self._flush()
        return log
