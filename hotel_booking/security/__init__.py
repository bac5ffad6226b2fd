# Security module
from hotel_booking.security.auth import (
    get_password_hash, verify_password, create_access_token,
    authenticate, get_current_user
)

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token',
    'authenticate', 'get_current_user'
]
