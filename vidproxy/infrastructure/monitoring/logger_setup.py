"""Root logger configuration for vidproxy.

Diagnostics go to stderr so command output on stdout stays clean. A log
file, when configured, rotates by size. Proxy trace events reach these
handlers through LoggingEventSink at DEBUG level, so `--verbose` is what
makes cache hits and misses visible.
"""

import logging
import logging.handlers
import sys
from typing import List, Optional, Union

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_MAX_BYTES = 1_000_000
DEFAULT_BACKUP_COUNT = 3

def resolve_log_level(level: Union[int, str, None], default: int = DEFAULT_LOG_LEVEL) -> int:
    """Converts a level name such as 'debug' into its numeric value."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else default

def _file_handler(log_file: str, max_bytes: int, backup_count: int) -> Optional[logging.Handler]:
    try:
        return logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
        )
    except OSError as e:
        # Console logging still works; report through it once it is installed
        sys.stderr.write(f"vidproxy: cannot write log file {log_file}: {e}\n")
        return None

def _build_handlers(log_file: Optional[str], max_bytes: int, backup_count: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        file_handler = _file_handler(log_file, max_bytes, backup_count)
        if file_handler is not None:
            handlers.append(file_handler)
    return handlers

def setup_logging(
    log_level: Union[int, str] = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Replaces the root logger's handlers with vidproxy's.

    Args:
        log_level: Minimum level, as a number or a name like 'info'.
            Unknown names fall back to WARNING.
        log_format: Format string shared by every handler.
        log_file: Optional path of a size-rotated log file.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files to keep.

    Returns:
        The configured root logger.
    """
    level = resolve_log_level(log_level)
    formatter = logging.Formatter(log_format)

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
        old.close()

    root_logger.setLevel(level)
    for handler in _build_handlers(log_file, max_bytes, backup_count):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={logging.getLevelName(level)}, file={log_file or '-'}"
    )
    return root_logger
