import json
import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from pathlib import Path
from decimal import Decimal
from enum import Enum

# Cache of StructuredLogger instances keyed by name; one set of handlers per name
_logger_cache: Dict[str, 'StructuredLogger'] = {}
_cache_lock = threading.RLock()


# --- JSON lines formatting ---

class DecimalJsonEncoder(json.JSONEncoder):
    """Serializes indicator values: Decimal keeps its exact digits as a string, enums their value."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    StructuredLogger passes {"event_type": ..., "data": {...}} as the record
    message; those keys are merged into the top level. Plain string records
    land under "message".
    """

    def format(self, record: logging.LogRecord) -> str:
        log_object = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "lineno": record.lineno,
        }
        if isinstance(record.msg, dict):
            log_object.update({str(k): v for k, v in record.msg.items()})
        else:
            log_object["message"] = record.getMessage()
        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, cls=DecimalJsonEncoder)


class StructuredLogger:
    """
    Thin wrapper over logging.Logger that emits (event_type, data) payloads.

    Handler setup is idempotent: calling it twice for the same name never
    duplicates console or file handlers.
    """

    def __init__(self, name: str, config: Any, filename: Optional[str] = None):
        self.logger = logging.getLogger(name)
        level = getattr(config.level, "value", config.level)
        self.logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        self.logger.propagate = False

        console_enabled = getattr(config, 'console_enabled', True)
        file_enabled = getattr(config, 'file_enabled', False)
        structured_logging = getattr(config, 'structured_logging', True)
        max_file_size_mb = getattr(config, 'max_file_size_mb', 100)
        backup_count = getattr(config, 'backup_count', 5)

        log_dir = getattr(config, 'log_dir', 'logs')
        if filename:
            log_file = str(Path(log_dir) / filename)
        elif file_enabled:
            log_file = str(Path(log_dir) / f"{name}.jsonl")
        else:
            log_file = None

        self._setup_console_handler(console_enabled, structured_logging)
        self._setup_file_handler(bool(log_file), log_file, max_file_size_mb, backup_count, structured_logging)

    @staticmethod
    def _make_formatter(structured: bool) -> logging.Formatter:
        if structured:
            return JsonFormatter()
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _setup_console_handler(self, enabled: bool, structured: bool):
        """Attach a stdout handler unless one is already present."""
        if not enabled:
            return

        for existing_handler in self.logger.handlers:
            if isinstance(existing_handler, logging.StreamHandler) and getattr(existing_handler, 'stream', None) is sys.stdout:
                return

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(self._make_formatter(structured))
        self.logger.addHandler(handler)

    def _setup_file_handler(self, enabled: bool, log_file: Optional[str], max_size_mb: int, backup_count: int, structured: bool):
        """Attach a rotating file handler unless one for the same file exists."""
        if not enabled or not log_file:
            return

        log_file_normalized = os.path.abspath(log_file)
        for existing_handler in self.logger.handlers:
            if isinstance(existing_handler, RotatingFileHandler):
                if os.path.abspath(existing_handler.baseFilename) == log_file_normalized:
                    return

        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        try:
            handler = RotatingFileHandler(
                log_file,
                maxBytes=max_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding='utf-8'
            )
        except OSError as e:
            # Logging must not break indicator construction; report on stderr instead
            print(f"ERROR: Failed to create file handler for {log_file}: {e}", file=sys.stderr)
            return

        handler.setFormatter(self._make_formatter(structured))
        self.logger.addHandler(handler)

    def _log(self, level: int, event_type: str, data: Dict[str, Any]):
        """Helper to log structured data."""
        if not self.logger.isEnabledFor(level):
            return
        payload = {"event_type": event_type, "data": data}
        self.logger.log(level, payload)

    def info(self, event_type: str, data: Dict[str, Any] = None):
        self._log(logging.INFO, event_type, data or {})

    def warning(self, event_type: str, data: Dict[str, Any] = None):
        self._log(logging.WARNING, event_type, data or {})

    def error(self, event_type: str, data: Dict[str, Any] = None, exc_info=False):
        """
        Log an error event.

        Args:
            event_type: Type of error event
            data: Optional error context data
            exc_info: Include exception info (default: False)
        """
        payload = {"event_type": event_type, "data": data or {}}
        self.logger.error(payload, exc_info=exc_info)

    def debug(self, event_type: str, data: Dict[str, Any] = None):
        self._log(logging.DEBUG, event_type, data or {})

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a cached structured logger instance for the given name.

    The first call for a name builds the logger from the process settings
    (see infrastructure.config.get_settings); later calls return the same
    instance so handlers never accumulate.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Cached StructuredLogger instance (singleton per name)
    """
    if name in _logger_cache:
        return _logger_cache[name]

    with _cache_lock:
        if name in _logger_cache:
            return _logger_cache[name]

        from ..infrastructure.config.config_loader import get_settings
        from ..infrastructure.config.settings import LoggingSettings
        try:
            config = get_settings().logging
        except (OSError, ValueError) as e:
            # Broken config file or env must not make the library unusable
            print(f"WARNING: Failed to load config for logger '{name}': {e}", file=sys.stderr)
            print("WARNING: Using default LoggingSettings", file=sys.stderr)
            config = LoggingSettings.model_construct()

        logger = StructuredLogger(name, config)
        _logger_cache[name] = logger
        return logger
