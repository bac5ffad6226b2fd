# API Routers
from hotel_booking.routers import auth, bookings, rooms, payments, daily_summaries

__all__ = ['auth', 'bookings', 'rooms', 'payments', 'daily_summaries']
