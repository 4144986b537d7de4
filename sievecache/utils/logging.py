"""
Structured logging for sievecache.

Provides a JSON formatter, a thread-safe log manager that owns the root
handlers, and a small event logger for cache lifecycle events. Library modules
use ``logging.getLogger(__name__)`` directly; this module only decides where
those records go.
"""
import json
import logging
import logging.handlers
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno',
    'pathname', 'filename', 'module', 'lineno',
    'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process',
    'exc_info', 'exc_text', 'stack_info', 'taskName',
    'extra_fields', 'message', 'asctime',
])


class StructuredFormatter(logging.Formatter):
    """
    JSON-lines formatter.

    Each record becomes one JSON object with timestamp, level, logger name,
    message and source location. ``extra_fields`` and plain ``extra`` values
    of JSON-friendly types are merged into the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as structured JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        extra_fields = getattr(record, 'extra_fields', None)
        if isinstance(extra_fields, dict):
            log_entry.update(extra_fields)

        for key, value in record.__dict__.items():
            if key.startswith('_') or key in _RESERVED_ATTRS:
                continue
            if isinstance(value, (str, int, float, bool, list, dict, type(None))):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CacheEventLogger:
    """
    Emits DEBUG records for cache lifecycle events.

    Records carry an ``event_type`` plus event specific fields under
    ``extra_fields`` so the structured formatter flattens them.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _emit(self, message: str, event_type: str, **fields: Any) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug(
            message,
            extra={'extra_fields': {'event_type': event_type, **fields}}
        )

    def log_eviction(self, cache_name: str, key: Any, **kwargs):
        """
        Log an eviction.

        Args:
            cache_name: Name of the cache that evicted
            key: Evicted key
            **kwargs: Additional metadata
        """
        self._emit(
            "Cache eviction",
            'cache_eviction',
            cache_name=cache_name,
            cache_key=repr(key),
            **kwargs
        )

    def log_purge(self, cache_name: str, dropped: int, **kwargs):
        """
        Log a purge.

        Args:
            cache_name: Name of the purged cache
            dropped: Number of entries removed
            **kwargs: Additional metadata
        """
        self._emit(
            "Cache purged",
            'cache_purge',
            cache_name=cache_name,
            dropped=dropped,
            **kwargs
        )


class LogManager:
    """
    Thread-safe owner of the root logging configuration.

    Installs a stdout handler and, optionally, a rotating file handler, both
    using either the JSON or the plain text formatter.
    """

    def __init__(self,
                 log_level: str = "INFO",
                 log_format: str = "json",
                 log_file: Optional[str] = None,
                 max_bytes: int = 10 * 1024 * 1024,  # 10MB
                 backup_count: int = 5):
        """
        Initialize the log manager.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_format: Log format ('json' or 'text')
            log_file: Path to log file (optional)
            max_bytes: Maximum size of log file before rotation
            backup_count: Number of backup files to keep
        """
        self.log_level = getattr(logging, log_level.upper())
        self.log_format = log_format
        self.log_file = log_file
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self._lock = threading.RLock()
        self._handlers = []
        self._loggers: Dict[str, logging.Logger] = {}

        with self._lock:
            self._configure_root_logger()

        self.logger = self.get_logger("sievecache")
        self.events = CacheEventLogger(self.get_logger("sievecache.events"))

    def _make_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return StructuredFormatter()
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _configure_root_logger(self):
        """Configure the root logger with handlers."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        formatter = self._make_formatter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
        self._handlers.append(console_handler)

        if self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            )
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            self._handlers.append(file_handler)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger with the specified name.

        Args:
            name: Logger name

        Returns:
            Configured logger instance
        """
        with self._lock:
            if name not in self._loggers:
                logger = logging.getLogger(name)
                logger.setLevel(self.log_level)
                self._loggers[name] = logger
            return self._loggers[name]

    def shutdown(self):
        """Detach and close the handlers this manager installed."""
        with self._lock:
            root_logger = logging.getLogger()
            for handler in self._handlers:
                root_logger.removeHandler(handler)
                handler.close()
            self._handlers = []


_log_manager: Optional[LogManager] = None
_log_manager_lock = threading.RLock()


def initialize_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    force: bool = False
) -> LogManager:
    """
    Initialize the global logging system.

    Args:
        log_level: Logging level
        log_format: Log format ('json' or 'text')
        log_file: Path to log file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
        force: Replace an existing configuration instead of reusing it

    Returns:
        Configured log manager instance
    """
    global _log_manager

    with _log_manager_lock:
        if _log_manager is not None and force:
            _log_manager.shutdown()
            _log_manager = None
        if _log_manager is None:
            _log_manager = LogManager(
                log_level=log_level,
                log_format=log_format,
                log_file=log_file,
                max_bytes=max_bytes,
                backup_count=backup_count
            )

    return _log_manager


def shutdown_logging():
    """Tear down the global log manager, if any."""
    global _log_manager

    with _log_manager_lock:
        if _log_manager is not None:
            _log_manager.shutdown()
            _log_manager = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name, initializing logging on first use.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    with _log_manager_lock:
        if _log_manager is None:
            initialize_logging()
        return _log_manager.get_logger(name)


def get_cache_event_logger() -> CacheEventLogger:
    """
    Get the cache event logger.

    Unlike ``get_logger`` this never installs handlers: when logging has not
    been initialized the events go to the ``sievecache.events`` logger and
    follow whatever configuration the host application has.
    """
    with _log_manager_lock:
        if _log_manager is None:
            return CacheEventLogger(logging.getLogger("sievecache.events"))
        return _log_manager.events
