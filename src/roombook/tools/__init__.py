from __future__ import annotations
import inspect
from typing import Callable, Dict, List, Optional

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from roombook.config import get_config
from roombook.services import BookingService

# Global BookingService instance
_booking_service: Optional[BookingService] = None


# ------------------------------------
# Utilities
# ------------------------------------
def tool(func: Callable) -> Callable:
    """Marks a function as callable by the LLM; the docstring summary becomes its description."""
    func._tool_name = func.__name__
    func._tool_description = inspect.cleandoc(func.__doc__ or "").split("\n\n")[0]
    return func


def get_booking_service() -> BookingService:
    """
    Returns the global BookingService, building it from config on first use.
    """
    global _booking_service
    if _booking_service is None:
        _booking_service = get_config().create_booking_service()
    return _booking_service


def set_booking_service(service: Optional[BookingService]) -> None:
    """Replaces the global BookingService (useful in tests)."""
    global _booking_service
    _booking_service = service


# ------------------------------------
# Tool functions
# ------------------------------------
from .booking_tools import (
    book_room,
    cancel_booking,
    list_available_rooms,
)


# ------------------------------------
# Input schemas
# ------------------------------------
class BookRoomInput(BaseModel):
    room_id: str = Field(description="Id of the room to book")
    start: str = Field(description="Start of the booking, ISO-8601 (YYYY-MM-DDTHH:MM)")
    end: str = Field(description="End of the booking, ISO-8601 (YYYY-MM-DDTHH:MM)")


class CancelBookingInput(BaseModel):
    booking_id: str = Field(description="Id of the booking to cancel")


class ListAvailableRoomsInput(BaseModel):
    start: str = Field(description="Start of the interval, ISO-8601 (YYYY-MM-DDTHH:MM)")
    end: str = Field(description="End of the interval, ISO-8601 (YYYY-MM-DDTHH:MM)")


# LangChain cache
_tools: Optional[List[StructuredTool]] = None
_tool_map: Dict[str, StructuredTool] = {}


def get_tools() -> List[StructuredTool]:
    """Returns the LangChain `StructuredTool` list (built once)."""
    global _tools, _tool_map
    if _tools is None:
        _tools = [
            StructuredTool.from_function(
                func=func,
                name=func._tool_name,
                description=func._tool_description,
                args_schema=schema,
            )
            for func, schema in [
                (book_room, BookRoomInput),
                (cancel_booking, CancelBookingInput),
                (list_available_rooms, ListAvailableRoomsInput),
            ]
        ]
        _tool_map = {t.name: t for t in _tools}

    return _tools


def get_tool_map() -> Dict[str, StructuredTool]:
    """Maps tool names to their `StructuredTool`."""
    if not _tool_map:
        get_tools()
    return _tool_map


__all__ = [
    # Utilities
    "tool",
    "get_booking_service",
    "set_booking_service",

    # Tools
    "book_room",
    "cancel_booking",
    "list_available_rooms",

    # LangChain helpers
    "get_tools",
    "get_tool_map",
]
