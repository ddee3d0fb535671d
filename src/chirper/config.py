"""
Configuration loader for Chirper.
Loads configuration from YAML files and environment variables.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml
import os
from pydantic import BaseModel, ConfigDict
import logging

logger = logging.getLogger(__name__)


class ChirperConfig(BaseModel):
    """Main Chirper configuration."""

    model_config = ConfigDict(extra="allow")

    # Environment
    environment: str = "development"
    debug: bool = True

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Storage
    database_backend: str = "sqlite"  # sqlite | supabase
    database_path: str = "chirper.db"
    supabase_url: str = ""
    supabase_key: str = ""

    # Notifications
    notification_channel: str = "database"  # database | log

    # Chirps
    chirp_max_length: int = 255

    # Sessions
    session_duration_hours: int = 24 * 7

    # Logging
    log_level: str = "INFO"


class ConfigLoader:
    """Load and manage Chirper configuration."""

    def __init__(self, config_dir: str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        self.config: Optional[ChirperConfig] = None
        self.load()

    def load(self) -> ChirperConfig:
        """Load configuration from YAML and environment variables."""

        env = os.getenv("CHIRPER_ENV", "development")
        config_file = self.config_dir / f"{env}.yaml"

        # Load default config first
        merged = self._load_yaml(self.config_dir / "default.yaml")

        # Override with environment-specific config
        if config_file.exists():
            merged.update(self._load_yaml(config_file))
        else:
            logger.debug(f"Config file not found: {config_file}, using defaults")

        # Environment variables win over files
        merged.update(self._load_from_env())
        merged.setdefault("environment", env)

        self.config = ChirperConfig(**merged)

        logger.info(
            f"Configuration loaded (environment: {self.config.environment}, "
            f"backend: {self.config.database_backend})"
        )
        return self.config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML config file."""
        if not path.exists():
            return {}

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                return data or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load YAML config {path}: {e}")
            return {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        if env := os.getenv("CHIRPER_ENV"):
            config["environment"] = env
        if db_path := os.getenv("CHIRPER_DB_PATH"):
            config["database_path"] = db_path
        if backend := os.getenv("CHIRPER_DATABASE_BACKEND"):
            config["database_backend"] = backend
        if channel := os.getenv("CHIRPER_NOTIFICATION_CHANNEL"):
            config["notification_channel"] = channel
        if log_level := os.getenv("CHIRPER_LOG_LEVEL"):
            config["log_level"] = log_level
        if api_port := os.getenv("CHIRPER_API_PORT"):
            config["api_port"] = int(api_port)

        # Supabase
        if supabase_url := os.getenv("SUPABASE_URL"):
            config["supabase_url"] = supabase_url
        if supabase_key := os.getenv("SUPABASE_KEY"):
            config["supabase_key"] = supabase_key

        return config

    def get(self) -> ChirperConfig:
        """Get current configuration."""
        if not self.config:
            self.load()
        return self.config

    def reload(self):
        """Reload configuration (useful for development)."""
        logger.info("Reloading configuration...")
        self.load()


# Global config instance
_global_config_loader: Optional[ConfigLoader] = None


def get_config() -> ChirperConfig:
    """Get the global Chirper configuration."""
    global _global_config_loader
    if _global_config_loader is None:
        _global_config_loader = ConfigLoader()
    return _global_config_loader.get()


def initialize_config(config_dir: str = "config") -> ChirperConfig:
    """Initialize the global configuration loader."""
    global _global_config_loader
    _global_config_loader = ConfigLoader(config_dir)
    return _global_config_loader.get()


def configure_logging(config: ChirperConfig) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
