"""
房间仓储 - SQLAlchemy 实现（只读查询）
"""
from datetime import date
from typing import Any, Dict, List, Tuple

from sqlalchemy import and_, exists

from hotel_booking.models.ontology import (
    Room, RoomType, RoomStatus, Booking, INACTIVE_BOOKING_STATUSES
)
from hotel_booking.repositories.base import SqlAlchemyRepository
from hotel_booking.repositories.interfaces import RoomRepository


def room_with_type(room: Room, room_type_name: str) -> Dict[str, Any]:
    """房间及房型名称"""
    return {
        'id': room.id,
        'room_number': room.room_number,
        'room_type_id': room.room_type_id,
        'room_type_name': room_type_name,
        'description': room.description,
        'status': room.status,
        'floor': room.floor,
        'created_at': room.created_at,
        'updated_at': room.updated_at,
    }


class SqlAlchemyRoomRepository(SqlAlchemyRepository, RoomRepository):
    """房间仓储"""

    def get_available_rooms(self, check_in: date, check_out: date) -> List[Dict[str, Any]]:
        # 同一房间上存在与 [check_in, check_out) 重叠的有效预订
        conflicting = exists().where(and_(
            Booking.room_id == Room.id,
            Booking.status.notin_(INACTIVE_BOOKING_STATUSES),
            Booking.check_in_date < check_out,
            Booking.check_out_date > check_in,
        ))

        rows = (
            self.db.query(Room, RoomType.name)
            .join(RoomType, Room.room_type_id == RoomType.id)
            .filter(Room.status == RoomStatus.AVAILABLE, ~conflicting)
            .order_by(Room.id)
            .all()
        )
        return [room_with_type(room, type_name) for room, type_name in rows]

    def list_rooms_with_room_type(self, skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        query = self.db.query(Room, RoomType.name).join(RoomType, Room.room_type_id == RoomType.id)
        total = query.count()
        rows = query.order_by(Room.id).offset(skip).limit(limit).all()
        return [room_with_type(room, type_name) for room, type_name in rows], total
