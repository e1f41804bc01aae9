"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))

_CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Database Settings (in-memory store is used when MONGO_URI is unset)
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'word_game')

    # Word List Settings
    COMMON_WORDS_FILE = os.getenv('COMMON_WORDS_FILE', os.path.join(_CONFIG_DIR, 'common-words.json'))
    ALL_WORDS_PATH = os.getenv('ALL_WORDS_PATH', os.path.join(_CONFIG_DIR, 'all-words.json'))

    # Game Settings
    DEFAULT_DIFFICULTY = os.getenv('DEFAULT_DIFFICULTY', 'medium')
    DEFAULT_WORD_LENGTH = int(os.getenv('DEFAULT_WORD_LENGTH', 5))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
