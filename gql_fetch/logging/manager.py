"""
Logging manager for gql_fetch.

This module provides centralized logging configuration. The library only
emits records through module-level loggers; applications opt into handlers
by calling ``setup_logging``.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self) -> None:
        """Initialize logging manager."""
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    @property
    def handlers(self) -> Dict[str, logging.Handler]:
        return dict(self._handlers)

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, config.level.value))

        if config.enable_console:
            self._setup_console_handler(config)

        if config.enable_file and config.file_path:
            self._setup_file_handler(config)

        for component, level in config.component_levels.items():
            logging.getLogger(component).setLevel(getattr(logging, level.value))

        self._configured = True
        logging.getLogger(__name__).debug("Logging system configured")

    def _formatter(self, config: LoggingConfig, console: bool) -> logging.Formatter:
        if config.enable_structured:
            return StructuredFormatter()
        if console:
            return ColoredFormatter(config.format)
        return logging.Formatter(config.format)

    def _setup_console_handler(self, config: LoggingConfig) -> None:
        """Setup console logging handler."""
        handler = logging.StreamHandler(sys.stdout)
        self._install("console", handler, config, console=True)

    def _setup_file_handler(self, config: LoggingConfig) -> None:
        """Setup rotating file handler."""
        log_path = Path(str(config.file_path))
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        self._install("file", handler, config, console=False)

    def _install(
        self, name: str, handler: logging.Handler, config: LoggingConfig, console: bool
    ) -> None:
        handler.setFormatter(self._formatter(config, console))
        handler.setLevel(getattr(logging, config.level.value))
        handler.addFilter(SensitiveDataFilter())
        logging.getLogger().addHandler(handler)
        self._handlers[name] = handler

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for root logger)
        """
        log_level = getattr(logging, level.value)

        if component:
            logging.getLogger(component).setLevel(log_level)
        else:
            logging.getLogger().setLevel(log_level)
            for handler in self._handlers.values():
                handler.setLevel(log_level)

    def cleanup(self) -> None:
        """Remove and close handlers installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self._handlers.values():
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self._configured = False


_manager = LoggingManager()


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Configure logging for applications using gql_fetch.

    Args:
        config: Logging configuration (defaults to console at INFO)

    Returns:
        The global LoggingManager
    """
    _manager.setup_logging(config or LoggingConfig())
    return _manager


def get_logging_manager() -> LoggingManager:
    return _manager
