"""
Logging setup

Configured once when the server dependencies are imported; modules log
through ``logging.getLogger(__name__)``.
"""

import logging
from pathlib import Path
from typing import Optional


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = "logs/task_manager.log") -> None:
    """
    Set up the root logger

    Args:
        log_level: log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: log file path, or None/empty for console output only
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
