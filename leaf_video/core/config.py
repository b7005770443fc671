"""
Configuration management for the Leaf video service.

This module handles all configuration settings including the database
connection, cache lifetimes, video field limits and HTTP server parameters.
"""

import json
import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict
from pathlib import Path


@dataclass
class DatabaseConfig:
    """Database configuration"""

    url: str = "sqlite+aiosqlite:///leaf_video.db"
    echo: bool = False  # Log every SQL statement


@dataclass
class CacheConfig:
    """Cache configuration"""

    upload_tracker: str = "database"  # "database" is shared with the upload handlers, "memory" is per process
    upload_link_ttl_minutes: int = 360  # How long an uploaded file stays attributable to its uploader
    click_window_minutes: int = 30  # One click per (video, ip) within this window
    cleanup_interval_seconds: float = 300  # How often expired entries are purged


@dataclass
class VideoConfig:
    """Video field limits"""

    title_max_length: int = 50
    max_page_size: int = 30


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "leaf_video.log"
    api_host: str = "0.0.0.0"
    api_port: int = 9000
    enable_api: bool = True

    # Caller identity is set by the upstream authentication gateway
    user_id_header: str = "X-User-Id"
    trust_forwarded_for: bool = False  # Enable only behind a proxy that rewrites X-Forwarded-For
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class PartitionSeed:
    """Top-level partition with its sub-partitions"""

    content: str
    children: List[str] = field(default_factory=list)


def default_partitions() -> List[PartitionSeed]:
    return [
        PartitionSeed(content="Games", children=["Gaming", "Esports", "Walkthroughs"]),
        PartitionSeed(content="Music", children=["Covers", "Original", "Live"]),
        PartitionSeed(content="Technology", children=["Programming", "Hardware"]),
        PartitionSeed(content="Life", children=["Vlog", "Food", "Travel"]),
    ]


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None, save_defaults: bool = True):
        self.config_file = config_file or "config.json"
        self.save_defaults = save_defaults
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.database = DatabaseConfig()
        self.cache = CacheConfig()
        self.video = VideoConfig()
        self.system = SystemConfig()
        self.partitions: List[PartitionSeed] = default_partitions()

        # Load configuration
        self.load_config()

        # Ensure the sqlite directory exists
        self._ensure_database_directory()

    def load_config(self) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "database" in config_data:
                    self.database = DatabaseConfig(**config_data["database"])

                if "cache" in config_data:
                    self.cache = CacheConfig(**config_data["cache"])

                if "video" in config_data:
                    self.video = VideoConfig(**config_data["video"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                if "partitions" in config_data:
                    self.partitions = [PartitionSeed(**seed) for seed in config_data["partitions"]]

                self.logger.info(f"Configuration loaded from {config_path}")

            except Exception as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            if self.save_defaults:
                self.save_config()

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except Exception as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def _ensure_database_directory(self) -> None:
        """Ensure the directory holding a file-based sqlite database exists"""
        url = self.database.url
        if not url.startswith("sqlite") or ":///" not in url or url.endswith(":memory:"):
            return

        try:
            Path(url.split(":///", 1)[1]).parent.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            self.logger.error(f"Error creating database directory: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "database": asdict(self.database),
            "cache": asdict(self.cache),
            "video": asdict(self.video),
            "system": asdict(self.system),
            "partitions": [asdict(seed) for seed in self.partitions],
        }
