from __future__ import annotations

import logging
import asyncio
import re
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Awaitable, Protocol, runtime_checkable

from telegram import Bot
from telegram.error import TelegramError

from roombook.exceptions import NotificationError
from roombook.models import Booking

logger = logging.getLogger(__name__)

SEND_TIMEOUT_SECONDS = 15


@runtime_checkable
class NotificationGateway(Protocol):
    """Delivers booking messages. Either method may raise NotificationError."""

    def send_booking_confirmation(self, booking: Booking) -> None: ...
    def send_cancellation_confirmation(self, booking: Booking) -> None: ...


def escape_markdown_v2(text: str) -> str:
    """Escapes Telegram MarkdownV2 special characters."""
    escape_chars = r'_*[]()~`>#+-=|{}.!'
    return re.sub(f'([{re.escape(escape_chars)}])', r'\\\1', str(text))


def _run_async(coro: Awaitable) -> Any:
    """
    Runs an async Bot API call from synchronous code.

    Reuses the running event loop when there is one, otherwise starts a new one.
    """
    try:
        loop = asyncio.get_running_loop()
        if loop.is_running():
            future = asyncio.run_coroutine_threadsafe(coro, loop)
            return future.result(timeout=SEND_TIMEOUT_SECONDS)
        return asyncio.run(coro)
    except RuntimeError:
        # no running loop in this thread
        return asyncio.run(coro)


def _format_booking_details(booking: Booking) -> str:
    room = escape_markdown_v2(booking.room_id)
    start = escape_markdown_v2(booking.start.strftime("%Y-%m-%d %H:%M"))
    end = escape_markdown_v2(booking.end.strftime("%Y-%m-%d %H:%M"))
    return (
        f"• *Room:* {room}\n"
        f"• *From:* {start}\n"
        f"• *To:* {end}"
    )


class LoggingNotificationGateway:
    """Gateway that only writes the notifications to the log."""

    def send_booking_confirmation(self, booking: Booking) -> None:
        logger.info(
            f"Booking confirmed: {booking.get_reference_code()} room={booking.room_id} "
            f"{booking.start.isoformat()} -> {booking.end.isoformat()}"
        )

    def send_cancellation_confirmation(self, booking: Booking) -> None:
        logger.info(f"Booking cancelled: {booking.get_reference_code()} room={booking.room_id}")


class TelegramNotificationGateway:
    """Sends booking confirmations to a Telegram chat."""

    def __init__(self, telegram_bot: Bot, chat_id: int):
        self.bot = telegram_bot
        self.chat_id = chat_id

    def _send(self, message: str) -> None:
        try:
            _run_async(self.bot.send_message(chat_id=self.chat_id, text=message, parse_mode='MarkdownV2'))
        except (TelegramError, FuturesTimeoutError) as e:
            raise NotificationError(f"Telegram message to chat {self.chat_id} failed: {e}") from e
        except Exception as e:
            # e.g. "Event loop is closed" from a reused HTTP client
            logger.exception(f"Unexpected error sending to chat {self.chat_id}")
            raise NotificationError(f"Telegram message to chat {self.chat_id} failed: {e!r}") from e

    def send_booking_confirmation(self, booking: Booking) -> None:
        logger.info(f"Sending booking confirmation (Chat ID: {self.chat_id})")
        ref = escape_markdown_v2(booking.get_reference_code())
        message = (
            f"✅ *Room Booked*\n\n"
            f"Reference: *{ref}*\n\n"
            f"{_format_booking_details(booking)}"
        )
        self._send(message)

    def send_cancellation_confirmation(self, booking: Booking) -> None:
        logger.info(f"Sending cancellation confirmation (Chat ID: {self.chat_id})")
        ref = escape_markdown_v2(booking.get_reference_code())
        message = (
            f"🗑️ *Booking Cancelled*\n\n"
            f"Booking *{ref}* has been cancelled\\.\n\n"
            f"{_format_booking_details(booking)}"
        )
        self._send(message)
