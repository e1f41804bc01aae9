"""
Game Store

Persistence of settings, statistics, the in-progress game snapshot and
finished-game history. Every record goes through the explicit schemas of the
models package.
"""

import copy
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple, Type

from pymongo import DESCENDING
from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..models.game import Difficulty, GameState
from ..models.progress import GameHistoryEntry, GameSettings, GameStatistics

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the storage backend fails to load or save."""


class GameStore(ABC):
    """Storage contract used by the game service."""

    # Settings
    @abstractmethod
    def load_settings(self) -> Optional[GameSettings]:
        """Stored settings, or None when nothing was saved yet."""

    @abstractmethod
    def save_settings(self, settings: GameSettings) -> None: ...

    @abstractmethod
    def reset_settings(self) -> None: ...

    # Statistics
    @abstractmethod
    def load_statistics(self) -> Optional[GameStatistics]:
        """Stored statistics, or None when nothing was saved yet."""

    @abstractmethod
    def save_statistics(self, stats: GameStatistics) -> None: ...

    @abstractmethod
    def reset_statistics(self) -> None:
        """Remove statistics together with the game history."""

    # Current game snapshot
    @abstractmethod
    def save_current_game(self, state: GameState) -> None: ...

    @abstractmethod
    def load_current_game(self) -> Optional[GameState]: ...

    @abstractmethod
    def clear_current_game(self) -> None: ...

    # History
    @abstractmethod
    def add_history(self, entry: GameHistoryEntry) -> None: ...

    @abstractmethod
    def get_history(self, difficulty: Optional[Difficulty] = None) -> List[GameHistoryEntry]:
        """Finished games, most recent first."""

    @abstractmethod
    def clear_history(self) -> None: ...


class InMemoryGameStore(GameStore):
    """
    Store that keeps records in process memory.

    Records are stored in serialized form so they go through the same
    schema as the MongoDB store.
    """

    def __init__(self):
        self._settings: Optional[Dict[str, Any]] = None
        self._statistics: Optional[Dict[str, Any]] = None
        self._current_game: Optional[Dict[str, Any]] = None
        self._history: List[Dict[str, Any]] = []

    def load_settings(self) -> Optional[GameSettings]:
        return GameSettings.from_record(self._settings) if self._settings else None

    def save_settings(self, settings: GameSettings) -> None:
        self._settings = settings.to_record()

    def reset_settings(self) -> None:
        self._settings = None

    def load_statistics(self) -> Optional[GameStatistics]:
        return GameStatistics.from_record(self._statistics) if self._statistics else None

    def save_statistics(self, stats: GameStatistics) -> None:
        self._statistics = stats.to_record()

    def reset_statistics(self) -> None:
        self._statistics = None
        self._history = []

    def save_current_game(self, state: GameState) -> None:
        self._current_game = copy.deepcopy(state.to_record())

    def load_current_game(self) -> Optional[GameState]:
        return GameState.from_record(self._current_game) if self._current_game else None

    def clear_current_game(self) -> None:
        self._current_game = None

    def add_history(self, entry: GameHistoryEntry) -> None:
        self._history.append(entry.to_record())

    def get_history(self, difficulty: Optional[Difficulty] = None) -> List[GameHistoryEntry]:
        entries = [GameHistoryEntry.from_record(record) for record in reversed(self._history)]
        if difficulty is not None:
            entries = [entry for entry in entries if entry.difficulty == difficulty]
        return entries

    def clear_history(self) -> None:
        self._history = []


@contextmanager
def _backend_errors(action: str, errors: Tuple[Type[Exception], ...] = (PyMongoError,)):
    try:
        yield
    except errors as e:
        logger.error("MongoDB error during %s: %s", action, e)
        raise PersistenceError(f"Failed to {action}: {e}") from e


def _strip_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if document is None:
        return None
    return {k: v for k, v in document.items() if k not in ("_id", "player_id")}


class MongoGameStore(GameStore):
    """
    MongoDB-backed store. One document per player in each of the settings,
    statistics and current-game collections; one document per finished game
    in the history collection.

    Args:
        mongo_uri: MongoDB connection string
        db_name: Database name
        player_id: Owner of the stored records
        database: Already opened database handle, used instead of connecting
    """

    def __init__(self, mongo_uri: Optional[str] = None, db_name: str = "word_game",
                 player_id: str = "default", database=None):
        self.player_id = player_id
        self.client = None

        if database is None:
            if not mongo_uri:
                raise ValueError("mongo_uri is required when no database is given")
            # Malformed URIs surface as ValueError from the URI parser
            with _backend_errors("connect to MongoDB", (PyMongoError, ValueError)):
                self.client = MongoClient(mongo_uri, server_api=ServerApi('1'))
                self.client.admin.command('ping')
            logger.info("Successfully connected to MongoDB")
            database = self.client[db_name]

        self.db = database
        self.settings_collection = self.db.settings
        self.statistics_collection = self.db.statistics
        self.current_game_collection = self.db.current_games
        self.history_collection = self.db.game_history

        with _backend_errors("create indexes"):
            self.settings_collection.create_index("player_id", unique=True)
            self.statistics_collection.create_index("player_id", unique=True)
            self.current_game_collection.create_index("player_id", unique=True)
            self.history_collection.create_index([("player_id", 1), ("end_time", DESCENDING)])

    def _owner(self) -> Dict[str, str]:
        return {"player_id": self.player_id}

    def _load(self, collection, action: str) -> Optional[Dict[str, Any]]:
        with _backend_errors(action):
            return _strip_document(collection.find_one(self._owner()))

    def _save(self, collection, record: Dict[str, Any], action: str) -> None:
        # Use upsert to replace any existing document for this player
        with _backend_errors(action):
            collection.replace_one(self._owner(), {**record, **self._owner()}, upsert=True)

    def _delete(self, collection, action: str) -> None:
        with _backend_errors(action):
            collection.delete_many(self._owner())

    def load_settings(self) -> Optional[GameSettings]:
        record = self._load(self.settings_collection, "load settings")
        return GameSettings.from_record(record) if record else None

    def save_settings(self, settings: GameSettings) -> None:
        self._save(self.settings_collection, settings.to_record(), "save settings")

    def reset_settings(self) -> None:
        self._delete(self.settings_collection, "reset settings")

    def load_statistics(self) -> Optional[GameStatistics]:
        record = self._load(self.statistics_collection, "load statistics")
        return GameStatistics.from_record(record) if record else None

    def save_statistics(self, stats: GameStatistics) -> None:
        self._save(self.statistics_collection, stats.to_record(), "save statistics")

    def reset_statistics(self) -> None:
        self._delete(self.statistics_collection, "reset statistics")
        self.clear_history()

    def save_current_game(self, state: GameState) -> None:
        self._save(self.current_game_collection, state.to_record(), "save current game")

    def load_current_game(self) -> Optional[GameState]:
        record = self._load(self.current_game_collection, "load current game")
        return GameState.from_record(record) if record else None

    def clear_current_game(self) -> None:
        self._delete(self.current_game_collection, "clear current game")

    def add_history(self, entry: GameHistoryEntry) -> None:
        with _backend_errors("add history"):
            self.history_collection.insert_one({**entry.to_record(), **self._owner()})

    def get_history(self, difficulty: Optional[Difficulty] = None) -> List[GameHistoryEntry]:
        query = self._owner()
        if difficulty is not None:
            query["difficulty"] = difficulty.value
        with _backend_errors("load history"):
            documents = list(self.history_collection.find(query).sort("end_time", DESCENDING))
        return [GameHistoryEntry.from_record(_strip_document(doc)) for doc in documents]

    def clear_history(self) -> None:
        self._delete(self.history_collection, "clear history")
