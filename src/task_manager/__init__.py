"""Application-wide configuration and logging for the task manager service."""

from .config import Config, ServerConfig, StoreConfig
from .logger import setup_logger

__all__ = ["Config", "ServerConfig", "StoreConfig", "setup_logger"]
