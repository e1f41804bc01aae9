"""
Word Game Server - Main Entry Point

This is the main entry point for the word game server.
It initializes the word provider, the store and the game service, then
starts the Flask application.
"""

from word_game import create_app
from word_game.config import Config
from word_game.services.game_service import initialize_game_service
from word_game.services.game_store import InMemoryGameStore, MongoGameStore, PersistenceError
from word_game.services.word_provider import JsonWordProvider
from word_game.utils.game_logger import game_logger


def build_store():
    """MongoDB store when configured, in-memory store otherwise."""
    if not Config.MONGO_URI:
        print("✗ MongoDB URI not configured - progress is kept in memory only")
        return InMemoryGameStore()
    try:
        store = MongoGameStore(Config.MONGO_URI, Config.MONGO_DB_NAME)
        print("✓ MongoDB store initialized successfully")
        return store
    except PersistenceError as e:
        print(f"✗ Failed to connect to MongoDB, falling back to memory: {e}")
        game_logger.logger.error(f"MongoDB unavailable, using in-memory store: {e}")
        return InMemoryGameStore()


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        word_provider = JsonWordProvider(Config.COMMON_WORDS_FILE, Config.ALL_WORDS_PATH)
        stats = word_provider.word_statistics()
        print(f"✓ Loaded {stats['total_common_words']} common words, "
              f"{stats['total_all_words']} dictionary words")

        store = build_store()
        initialize_game_service(word_provider, store)
        print("✓ Game service initialized successfully")

        # Create Flask app
        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Word Game Server starting")

        print(f"\nStarting Word Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Word Game Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
