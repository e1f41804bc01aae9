"""
Word Game Server Application Package

This package contains the word-guessing game engine (matching, scoring,
hints, keyboard state, the game session state machine and statistics) and a
thin Flask layer that exposes a locally hosted session over HTTP.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.progress_controller import progress_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(progress_bp, url_prefix='/api')

    return app
