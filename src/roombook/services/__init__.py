from .notification_service import (
    NotificationGateway,
    LoggingNotificationGateway,
    TelegramNotificationGateway,
)
from .booking_service import BookingService

__all__ = [
    "NotificationGateway",
    "LoggingNotificationGateway",
    "TelegramNotificationGateway",
    "BookingService",
]
