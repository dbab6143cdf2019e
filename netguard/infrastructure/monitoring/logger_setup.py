"""Logging configuration for netguard.

The composition root calls `configure_logging` with the `logging.*`
configuration values. Retry attempts, fallbacks and probe results are
logged by the resilience and network modules through per-module loggers;
HTTP library chatter is held back so it does not bury CLI output.
"""

import logging
import sys
from typing import Iterable, Optional, Union

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# httpx and httpcore log every request line at INFO.
HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")
HTTP_LIBRARY_LOG_LEVEL = logging.WARNING

def resolve_log_level(level: Union[int, str, None]) -> int:
    """Maps a level name such as 'debug' to its logging constant, defaulting to INFO."""
    if isinstance(level, int):
        return level
    if not level:
        return DEFAULT_LOG_LEVEL
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LOG_LEVEL

def _file_handler(log_file: str) -> Optional[logging.Handler]:
    try:
        return logging.FileHandler(log_file, encoding='utf-8')
    except OSError:
        logging.getLogger(__name__).exception(f"Cannot log to file {log_file}; using stdout only")
        return None

def quiet_http_libraries(
    names: Iterable[str] = HTTP_LIBRARY_LOGGERS,
    level: int = HTTP_LIBRARY_LOG_LEVEL,
) -> None:
    """Raises the threshold of third-party HTTP loggers."""
    for name in names:
        logging.getLogger(name).setLevel(level)

def configure_logging(
    level: Union[int, str, None] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
) -> int:
    """Configures the root logger for a netguard process.

    Any handlers already on the root logger are replaced, so calling this
    twice (e.g. from tests) does not duplicate output.

    Args:
        level: Level name or constant; None or an unknown name means INFO.
        log_format: Format string for records; None uses DEFAULT_LOG_FORMAT.
        log_file: Optional path that receives the same records as stdout.

    Returns:
        The resolved numeric level.
    """
    log_level = resolve_log_level(level)
    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    if log_file:
        file_handler = _file_handler(log_file)
        if file_handler is not None:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    # At DEBUG the request lines are wanted too.
    quiet_http_libraries(level=HTTP_LIBRARY_LOG_LEVEL if log_level > logging.DEBUG else logging.NOTSET)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level={logging.getLevelName(log_level)}, file={log_file or 'none'}"
    )
    return log_level
