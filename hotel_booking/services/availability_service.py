"""
可用性服务
回答“哪些房间可以接受 [check_in, check_out) 的预订”
"""
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_booking.errors import InvalidDataError, InternalError
from hotel_booking.repositories import RoomRepository, SqlAlchemyRoomRepository

logger = logging.getLogger(__name__)


class AvailabilityService:
    """可用性服务"""

    def __init__(self, db: Session, room_repo: Optional[RoomRepository] = None):
        self.db = db
        self.room_repo = room_repo or SqlAlchemyRoomRepository(db)

    def get_available_rooms(self, check_in: date, check_out: date) -> List[Dict[str, Any]]:
        """
        获取可预订房间

        房间状态为 available，且不存在未取消、未完成并与所求区间重叠的预订。
        入住日等于离店日（零晚）是允许的；结果为空不是错误。
        """
        if check_in is None or check_out is None:
            raise InvalidDataError("入住日期和离店日期不能为空")
        if check_in > check_out:
            raise InvalidDataError("入住日期不能晚于离店日期")

        try:
            return self.room_repo.get_available_rooms(check_in, check_out)
        except SQLAlchemyError as e:
            logger.exception("Error querying available rooms")
            raise InternalError() from e

    def list_rooms_with_room_type(self, skip: int = 0, limit: int = 20) -> Tuple[List[Dict[str, Any]], int]:
        """分页获取房间及房型名称"""
        try:
            return self.room_repo.list_rooms_with_room_type(skip, limit)
        except SQLAlchemyError as e:
            logger.exception("Error listing rooms with room type")
            raise InternalError() from e
