# Core Services
from hotel_booking.services.audit_service import AuditService, AuditAction
from hotel_booking.services.availability_service import AvailabilityService
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.booking_payment_service import BookingPaymentService
from hotel_booking.services.payment_service import PaymentService
from hotel_booking.services.daily_summary_service import DailySummaryService
from hotel_booking.services.room_lock import RoomLockRegistry, room_locks

__all__ = [
    'AuditService', 'AuditAction', 'AvailabilityService', 'BookingService',
    'BookingPaymentService', 'PaymentService', 'DailySummaryService',
    'RoomLockRegistry', 'room_locks'
]
