import logging
from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest
from telegram.error import NetworkError, TelegramError

from roombook.adapters import InMemoryRoomRepository
from roombook.clock import FixedClock
from roombook.exceptions import NotificationError
from roombook.models import Booking
from roombook.services import (
    BookingService,
    LoggingNotificationGateway,
    NotificationGateway,
    TelegramNotificationGateway,
)
from roombook.services.notification_service import escape_markdown_v2

BOOKING = Booking(
    "1a2b3c4d-0000-0000-0000-000000000000",
    "room-1.a",
    datetime(2026, 2, 1, 10, 0),
    datetime(2026, 2, 1, 11, 0),
)


def make_bot(side_effect=None):
    bot = Mock()
    bot.send_message = AsyncMock(side_effect=side_effect)
    return bot


class TestEscapeMarkdown:

    def test_escapes_special_characters(self):
        assert escape_markdown_v2("room-1.a") == "room\\-1\\.a"
        assert escape_markdown_v2("plain") == "plain"


class TestLoggingNotificationGateway:

    def test_satisfies_protocol(self):
        assert isinstance(LoggingNotificationGateway(), NotificationGateway)

    def test_logs_messages(self, caplog):
        gateway = LoggingNotificationGateway()
        with caplog.at_level(logging.INFO, logger="roombook.services.notification_service"):
            gateway.send_booking_confirmation(BOOKING)
            gateway.send_cancellation_confirmation(BOOKING)

        assert "Booking confirmed: BKG-1A2B3C4D" in caplog.text
        assert "Booking cancelled: BKG-1A2B3C4D" in caplog.text


class TestTelegramNotificationGateway:

    def test_satisfies_protocol(self):
        assert isinstance(TelegramNotificationGateway(make_bot(), 42), NotificationGateway)

    def test_sends_booking_confirmation(self):
        bot = make_bot()
        TelegramNotificationGateway(bot, chat_id=42).send_booking_confirmation(BOOKING)

        bot.send_message.assert_awaited_once()
        kwargs = bot.send_message.call_args.kwargs
        assert kwargs["chat_id"] == 42
        assert kwargs["parse_mode"] == "MarkdownV2"
        assert "BKG\\-1A2B3C4D" in kwargs["text"]
        assert "room\\-1\\.a" in kwargs["text"]
        assert "2026\\-02\\-01 10:00" in kwargs["text"]

    def test_sends_cancellation_confirmation(self):
        bot = make_bot()
        TelegramNotificationGateway(bot, chat_id=42).send_cancellation_confirmation(BOOKING)

        assert "Booking Cancelled" in bot.send_message.call_args.kwargs["text"]

    @pytest.mark.parametrize("error", [TelegramError("boom"), NetworkError("offline")])
    def test_telegram_errors_become_notification_errors(self, error):
        gateway = TelegramNotificationGateway(make_bot(side_effect=error), chat_id=42)

        with pytest.raises(NotificationError, match="chat 42"):
            gateway.send_booking_confirmation(BOOKING)

    def test_unexpected_errors_become_notification_errors(self):
        gateway = TelegramNotificationGateway(make_bot(side_effect=RuntimeError("Event loop is closed")), chat_id=42)

        with pytest.raises(NotificationError, match="Event loop is closed"):
            gateway.send_cancellation_confirmation(BOOKING)

    def test_booking_survives_unexpected_send_error(self):
        repository = InMemoryRoomRepository()
        repository.add_room("room-1.a")
        service = BookingService(
            clock=FixedClock(datetime(2026, 1, 1, 9, 0)),
            repository=repository,
            notification_gateway=TelegramNotificationGateway(
                make_bot(side_effect=RuntimeError("Event loop is closed")), chat_id=42
            ),
        )

        assert service.book_room("room-1.a", BOOKING.start, BOOKING.end) is True
        assert len(repository.find_by_id("room-1.a").bookings) == 1
