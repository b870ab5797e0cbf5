"""
Configuration

Related classes:
  - src.server.app.create_app: builds the app from this config
  - src.tasks.TaskStore: seeded from ``store.default_categories``
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from src.tasks import DEFAULT_CATEGORIES


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class StoreConfig:
    """In-memory store settings"""

    seed_default_categories: bool = True
    default_categories: List[Tuple[str, str]] = field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )


@dataclass
class Config:
    """Application configuration"""

    server: ServerConfig = None  # type: ignore
    store: StoreConfig = None  # type: ignore

    # logging
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/task_manager.log"

    def __post_init__(self):
        if self.server is None:
            self.server = ServerConfig()
        if self.store is None:
            self.store = StoreConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """Load settings from a YAML file

        Args:
            config_path: config file path (defaults to config/app_config.yaml)

        Returns:
            Config: the loaded settings, or defaults when the file is missing
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server") or {}
        store_data = yaml_data.get("store") or {}
        log_data = yaml_data.get("log") or {}

        default_categories = store_data.get("default_categories")
        if default_categories is None:
            categories = list(DEFAULT_CATEGORIES)
        else:
            categories = [(item["name"], item["color"]) for item in default_categories]

        return cls(
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 8000)),
                cors_origins=list(server_data.get("cors_origins", ["*"])),
            ),
            store=StoreConfig(
                seed_default_categories=bool(store_data.get("seed_default_categories", True)),
                default_categories=categories,
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/task_manager.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load settings from environment variables"""
        seed = os.getenv("TASK_MANAGER_SEED_CATEGORIES", "true").lower() in ("1", "true", "yes")
        return cls(
            server=ServerConfig(
                host=os.getenv("TASK_MANAGER_HOST", "0.0.0.0"),
                port=int(os.getenv("TASK_MANAGER_PORT", "8000")),
            ),
            store=StoreConfig(seed_default_categories=seed),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
        )
