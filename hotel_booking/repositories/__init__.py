# Store interfaces and SQLAlchemy implementations
from hotel_booking.repositories.interfaces import (
    BookingRepository, PaymentRepository, RoomRepository,
    DailyBookingSummaryRepository, LogRepository
)
from hotel_booking.repositories.booking import SqlAlchemyBookingRepository
from hotel_booking.repositories.payment import SqlAlchemyPaymentRepository
from hotel_booking.repositories.room import SqlAlchemyRoomRepository
from hotel_booking.repositories.summary import SqlAlchemyDailyBookingSummaryRepository
from hotel_booking.repositories.log import SqlAlchemyLogRepository

__all__ = [
    'BookingRepository', 'PaymentRepository', 'RoomRepository',
    'DailyBookingSummaryRepository', 'LogRepository',
    'SqlAlchemyBookingRepository', 'SqlAlchemyPaymentRepository',
    'SqlAlchemyRoomRepository', 'SqlAlchemyDailyBookingSummaryRepository',
    'SqlAlchemyLogRepository'
]
