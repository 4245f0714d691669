import os
import sys
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

# Add the project src directory to PYTHONPATH for tests
CURRENT_DIR = os.path.dirname(__file__)
SRC_PATH = os.path.abspath(os.path.join(CURRENT_DIR, "..", "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from roombook.adapters import InMemoryRoomRepository
from roombook.clock import FixedClock
from roombook.services import BookingService


NOW = datetime(2026, 1, 15, 9, 0)
DAY = timedelta(days=1)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def repository():
    repo = InMemoryRoomRepository()
    repo.add_room("room-a", "Room A")
    repo.add_room("room-b", "Room B")
    repo.add_room("room-c", "Room C")
    return repo


@pytest.fixture
def gateway():
    return Mock(spec=["send_booking_confirmation", "send_cancellation_confirmation"])


@pytest.fixture
def service(clock, repository, gateway):
    return BookingService(clock=clock, repository=repository, notification_gateway=gateway)
