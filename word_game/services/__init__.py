"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameService, get_game_service, initialize_game_service
from .game_session import GameSession, SessionEvent
from .game_store import GameStore, InMemoryGameStore, MongoGameStore, PersistenceError
from .word_provider import JsonWordProvider, StaticWordProvider, WordProvider

__all__ = [
    'GameService', 'get_game_service', 'initialize_game_service',
    'GameSession', 'SessionEvent',
    'GameStore', 'InMemoryGameStore', 'MongoGameStore', 'PersistenceError',
    'JsonWordProvider', 'StaticWordProvider', 'WordProvider'
]
