from __future__ import annotations

import importlib
import os
import logging
from typing import List, Optional, Type

from dotenv import load_dotenv

from roombook.base_config import RoomBookConfig
from roombook.adapters.base import RoomRepository
from roombook.adapters.sqlite_adapter import SQLiteRoomRepository
from roombook.exceptions import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_CLASS = "roombook.config.EnvironmentRoomBookConfig"
CONFIG_ENV_KEY = "ROOMBOOK_CONFIG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def _import_config_class(path: str) -> Type[RoomBookConfig]:
    try:
        module_path, class_name = path.rsplit(".", 1)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid config path '{path}'") from exc

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import module '{module_path}'") from exc

    try:
        cls = getattr(module, class_name)
    except AttributeError as exc:
        raise ConfigurationError(f"Config class '{class_name}' not found in '{module_path}'") from exc

    if not isinstance(cls, type) or not issubclass(cls, RoomBookConfig):
        raise ConfigurationError(f"{path} is not a subclass of RoomBookConfig")

    return cls


class EnvironmentRoomBookConfig(RoomBookConfig):
    """Default configuration that reads from environment variables."""

    def __init__(self) -> None:
        self._env = os.environ

    def get_database_url(self) -> str:
        return self._env.get("DATABASE_URL", "sqlite:///roombook.db")

    def get_telegram_bot_token(self) -> Optional[str]:
        return self._env.get("TELEGRAM_BOT_TOKEN")

    def get_notification_chat_id(self) -> Optional[int]:
        raw = self._env.get("NOTIFICATION_CHAT_ID")
        if not raw:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid NOTIFICATION_CHAT_ID: {raw}")
            return None

    def get_log_level(self) -> str:
        return self._env.get("ROOMBOOK_LOG_LEVEL", "INFO").upper()

    def get_room_ids(self) -> List[str]:
        rooms_str = self._env.get("ROOMBOOK_ROOMS", "")
        return [r.strip() for r in rooms_str.split(",") if r.strip()]

    def create_repository(self) -> RoomRepository:
        """Opens the SQLite store and registers any rooms listed in ROOMBOOK_ROOMS."""
        repository = SQLiteRoomRepository(self.get_database_url())
        repository.init()

        for room_id in self.get_room_ids():
            if repository.find_by_id(room_id) is None:
                repository.create_room(room_id)

        return repository


_CONFIG: Optional[RoomBookConfig] = None


def get_config() -> RoomBookConfig:
    global _CONFIG
    if _CONFIG is None:
        class_path = os.getenv(CONFIG_ENV_KEY, DEFAULT_CONFIG_CLASS)
        cls = _import_config_class(class_path)
        _CONFIG = cls()
    return _CONFIG


def set_config(config: Optional[RoomBookConfig]) -> None:
    global _CONFIG
    _CONFIG = config


def configure_logging(config: Optional[RoomBookConfig] = None) -> None:
    config = config or get_config()
    logging.basicConfig(format=LOG_FORMAT, level=config.get_log_level())
