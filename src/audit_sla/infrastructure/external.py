"""
SLA External Service Integrations
==================================

External services for audit SLA monitoring:
- YAML window configuration loader
- Watchdog observer for config hot-reload
"""

import threading
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from src.audit_sla.application.services import ISLAWindowsProvider
from src.audit_sla.domain.value_objects import SLAWindowsConfig
from src.core.exceptions import ConfigurationException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ConfigFileHandler(FileSystemEventHandler):
    """Watchdog event handler for SLA config file changes."""

    def __init__(self, config_manager: "SLAWindowsConfigManager", config_path: Path):
        self.config_manager = config_manager
        self.config_path = config_path
        super().__init__()

    def on_modified(self, event):
        """Handle file modification event."""
        self._reload_if_config(event, event.src_path)

    def on_created(self, event):
        """Handle editors that save by writing a new file."""
        self._reload_if_config(event, event.src_path)

    def on_moved(self, event):
        """Handle atomic saves (temp file renamed over the config)."""
        self._reload_if_config(event, event.dest_path)

    def _reload_if_config(self, event, path):
        if event.is_directory:
            return
        if Path(path).resolve() == self.config_path.resolve():
            logger.info(f"Config file changed: {path}")
            self.config_manager.reload()


class SLAWindowsConfigManager(ISLAWindowsProvider):
    """
    Thread-safe SLA window configuration manager with hot-reload support.

    Uses watchdog to monitor file changes and reload configuration
    without restarting the service.
    """

    def __init__(self):
        self._config: Optional[SLAWindowsConfig] = None
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None

    def load(self, path: Path) -> SLAWindowsConfig:
        """
        Initial configuration load.

        Raises:
            ConfigurationException: file exists but is not a valid SLA config
        """
        self._path = Path(path)
        try:
            config = self._load_from_file(self._path)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            raise ConfigurationException(
                f"Invalid SLA config file: {self._path}",
                {"path": str(self._path), "error": str(e)}
            ) from e

        with self._lock:
            self._config = config
        return config

    def _load_from_file(self, path: Path) -> SLAWindowsConfig:
        """Load and parse YAML config file."""
        if not path.exists():
            logger.warning(f"SLA config file not found: {path}, using defaults")
            return SLAWindowsConfig()

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return SLAWindowsConfig(**data)

    def reload(self) -> bool:
        """Reload configuration from file, keeping the current one on failure."""
        if self._path is None:
            return False

        try:
            new_config = self._load_from_file(self._path)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            logger.error(f"Failed to reload SLA config: {e}")
            return False

        with self._lock:
            self._config = new_config
        logger.info("SLA configuration reloaded successfully")
        return True

    def start_watching(self) -> None:
        """
        Start watching configuration file for changes.

        Skips watching if the file doesn't exist or the platform has no
        usable file notification backend.
        """
        if self._path is None:
            raise ConfigurationException("Config not loaded. Call load() first.")

        if not self._path.exists():
            logger.info(
                f"Config file doesn't exist, skipping file watch: {self._path}. "
                "Using default SLA windows."
            )
            return

        try:
            self._observer = Observer()
            handler = ConfigFileHandler(self, self._path)
            self._observer.schedule(
                handler,
                str(self._path.parent),
                recursive=False
            )
            self._observer.start()
            logger.info(f"Started watching config file: {self._path}")
        except OSError as e:
            logger.warning(
                f"File watching not available, using static config: {e}"
            )
            self._observer = None

    def stop_watching(self) -> None:
        """Stop watching configuration file (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    @property
    def config(self) -> SLAWindowsConfig:
        """Get current configuration."""
        with self._lock:
            if self._config is None:
                raise ConfigurationException("SLA configuration not loaded")
            return self._config

    def get_config(self) -> SLAWindowsConfig:
        return self.config
