# config/__init__.py
"""
Configuration package
"""

from .base import Config, DevelopmentConfig, ProductionConfig, TestingConfig

CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(flask_env):
    """Return the config class for ``flask_env``; unknown names fall back to development."""
    return CONFIG_BY_ENV.get((flask_env or "development").lower(), DevelopmentConfig)


__all__ = [
    "Config",
    "DevelopmentConfig",
    "TestingConfig",
    "ProductionConfig",
    "CONFIG_BY_ENV",
    "get_config",
]
