# Ontology Models
from hotel_booking.models.ontology import (
    RoomType, Room, Customer, RatePrice, User,
    Booking, Payment, DailyBookingSummary, SystemLog
)

__all__ = [
    'RoomType', 'Room', 'Customer', 'RatePrice', 'User',
    'Booking', 'Payment', 'DailyBookingSummary', 'SystemLog'
]
