#!/usr/bin/env python3
"""
Spellcheck Configuration & Logging Module
=========================================
Centralized host configuration, structured logging, and error types.

Used by the HTTP host, the CLI, and the engine's dictionary I/O.
"""

import os
import sys
import json
import logging
import uuid
import time
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from dataclasses import dataclass, field
from contextlib import contextmanager
import threading

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5060
MAX_TEXT_BYTES = 5 * 1024 * 1024    # Largest request body the HTTP host accepts
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep

__version__ = "1.0.0"
VERSION = __version__
APP_NAME = "spellcheck"

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

@dataclass
class AppConfig:
    """Host process configuration."""

    # Server settings
    host: str = DEFAULT_HOST  # Localhost only by default
    port: int = DEFAULT_PORT
    debug: bool = False
    max_content_length: int = MAX_TEXT_BYTES

    # Paths
    log_dir: Path = field(default_factory=lambda: Path.cwd() / 'logs')

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # Options: json, text
    log_to_file: bool = False
    log_to_console: bool = True

    def __post_init__(self):
        self.log_dir = Path(self.log_dir)
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load configuration from environment variables."""
        return cls(
            host=os.environ.get('SPELL_HOST', DEFAULT_HOST),
            port=int(os.environ.get('SPELL_PORT', str(DEFAULT_PORT))),
            debug=os.environ.get('SPELL_DEBUG', 'false').lower() == 'true',
            max_content_length=int(os.environ.get('SPELL_MAX_CONTENT', str(MAX_TEXT_BYTES))),
            log_dir=Path(os.environ.get('SPELL_LOG_DIR', str(Path.cwd() / 'logs'))),
            log_level=os.environ.get('SPELL_LOG_LEVEL', 'INFO'),
            log_format=os.environ.get('SPELL_LOG_FORMAT', 'text'),
            log_to_file=os.environ.get('SPELL_LOG_TO_FILE', 'false').lower() == 'true',
        )

    def validate(self) -> tuple:
        """Validate configuration and return (is_valid, errors)."""
        errors = []

        if not 0 < self.port < 65536:
            errors.append(f"Port out of range: {self.port}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.log_level}")

        if self.log_format not in ('json', 'text'):
            errors.append(f"Invalid log_format: {self.log_format}. Must be 'json' or 'text'")

        if self.max_content_length <= 0:
            errors.append("max_content_length must be positive")

        return (len(errors) == 0, errors)


# Global config instance
_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Structured logger with per-thread correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config: Optional[AppConfig] = None):
        self.name = name
        self.config = config or get_config()
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))
        self.logger.handlers.clear()

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler with rotation
        if self.config.log_to_file:
            from logging.handlers import RotatingFileHandler
            log_file = self.config.log_dir / f"{self.name.lower()}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _render(self, message: str, **kwargs) -> str:
        if self.config.log_format != 'json':
            if not kwargs:
                return message
            context = ' '.join(f"{k}={v}" for k, v in kwargs.items())
            return f"{message} ({context})"
        return message

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self.logger.debug(self._render(message, **kwargs), extra=self._extra(kwargs))

    def info(self, message: str, **kwargs):
        """Log info message."""
        self.logger.info(self._render(message, **kwargs), extra=self._extra(kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self.logger.warning(self._render(message, **kwargs), extra=self._extra(kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self.logger.error(self._render(message, **kwargs), exc_info=exc_info,
                          extra=self._extra(kwargs))

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    def _extra(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        extra = {'correlation_id': self.get_correlation_id()}
        # LogRecord refuses to overwrite its own attributes
        for key, value in kwargs.items():
            if key in _RESERVED_RECORD_KEYS:
                key = f"ctx_{key}"
            extra[key] = value
        return extra

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


_RESERVED_RECORD_KEYS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
    'message', 'taskName', 'asctime',
))


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


_loggers: Dict[str, StructuredLogger] = {}

def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    logger = _loggers.get(name)
    if logger is None or logger.config is not get_config():
        logger = StructuredLogger(name, get_config())
        _loggers[name] = logger
    return logger


# =============================================================================
# ERROR HANDLING
# =============================================================================

class SpellcheckError(Exception):
    """Base exception for the spellcheck package."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 status_code: int = 500, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(SpellcheckError):
    """Input validation error."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400,
                         details={'field': field, **kwargs})


class DictionaryError(SpellcheckError):
    """A required dictionary could not be loaded."""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, code="DICTIONARY_ERROR", status_code=500,
                         details={'path': path, **kwargs})


class ProcessingError(SpellcheckError):
    """Unexpected failure while serving a request."""
    def __init__(self, message: str, stage: Optional[str] = None, **kwargs):
        super().__init__(message, code="PROCESSING_ERROR", status_code=500,
                         details={'stage': stage, **kwargs})
