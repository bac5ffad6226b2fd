# Domain rules
from hotel_booking.domain.booking import booking_state_machine, can_transition, dates_overlap

__all__ = ['booking_state_machine', 'can_transition', 'dates_overlap']
