"""
Base configuration abstractions for roombook.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from telegram import Bot

from roombook.adapters.base import RoomRepository
from roombook.clock import Clock, SystemClock
from roombook.services import (
    BookingService,
    LoggingNotificationGateway,
    NotificationGateway,
    TelegramNotificationGateway,
)

logger = logging.getLogger(__name__)


class RoomBookConfig(ABC):
    """Abstract configuration contract: where rooms live and where notifications go."""

    @abstractmethod
    def get_database_url(self) -> str: pass

    @abstractmethod
    def get_telegram_bot_token(self) -> Optional[str]: pass

    @abstractmethod
    def get_notification_chat_id(self) -> Optional[int]: pass

    @abstractmethod
    def create_repository(self) -> RoomRepository: pass

    def get_log_level(self) -> str: return "INFO"

    def create_clock(self) -> Clock:
        return SystemClock()

    def create_notification_gateway(self) -> NotificationGateway:
        token = self.get_telegram_bot_token()
        chat_id = self.get_notification_chat_id()
        if token and chat_id is not None:
            return TelegramNotificationGateway(telegram_bot=Bot(token=token), chat_id=chat_id)
        logger.info("Telegram not configured, notifications will only be logged.")
        return LoggingNotificationGateway()

    def create_booking_service(self) -> BookingService:
        return BookingService(
            clock=self.create_clock(),
            repository=self.create_repository(),
            notification_gateway=self.create_notification_gateway(),
        )
