"""Configuration adapters."""

from prix_carburants.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
