"""roombook - meeting room booking core"""

__version__ = "0.1.0"

# Exceptions
from .exceptions import (
    RoomBookError,
    ConfigurationError,
    DatabaseError,
    NotificationError,
    ErrorKind,
    BookingError,
    InvalidArgumentError,
    RoomNotFoundError,
    BookingStateError,
)

# Domain
from .clock import Clock, SystemClock, FixedClock
from .models import Booking, Room

# Adapters
from .adapters import RoomRepository, InMemoryRoomRepository, SQLiteRoomRepository

# Services
from .services import (
    BookingService,
    NotificationGateway,
    LoggingNotificationGateway,
    TelegramNotificationGateway,
)

# Config management
from .base_config import RoomBookConfig
from .config import get_config, set_config, configure_logging

__all__ = [
    # Version
    "__version__",

    # Exceptions
    "RoomBookError",
    "ConfigurationError",
    "DatabaseError",
    "NotificationError",
    "ErrorKind",
    "BookingError",
    "InvalidArgumentError",
    "RoomNotFoundError",
    "BookingStateError",

    # Domain
    "Clock",
    "SystemClock",
    "FixedClock",
    "Booking",
    "Room",

    # Adapters
    "RoomRepository",
    "InMemoryRoomRepository",
    "SQLiteRoomRepository",

    # Services
    "BookingService",
    "NotificationGateway",
    "LoggingNotificationGateway",
    "TelegramNotificationGateway",

    # Config
    "RoomBookConfig",
    "get_config",
    "set_config",
    "configure_logging",
]
