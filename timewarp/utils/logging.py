"""Logging setup shared by every timewarp module.

Each module calls ``setup_logger(__name__)`` once at import. Loggers are kept
in a registry so repeated setup never stacks handlers, and they do not
propagate to the root logger, so an application's own logging configuration
is left alone.

Per-call details (table sizes, path lengths, timings) go to DEBUG; broken
preconditions such as negative distances go to WARNING.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Any, Dict, Optional

_loggers: Dict[str, logging.Logger] = {}
_lock = threading.Lock()

_FORMATS = {
    "standard": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
    "simple": "%(levelname)s - %(message)s",
}


def _parse_level(level: str) -> int:
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    return numeric_level


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, format_type: str) -> None:
    handler.setFormatter(logging.Formatter(_FORMATS.get(format_type, _FORMATS["standard"])))
    handler.setLevel(level)
    logger.addHandler(handler)


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_type: str = "standard"
) -> logging.Logger:
    """Return the logger ``name``, configuring it on first use.

    Args:
        name: Logger name, normally the calling module's ``__name__``
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive)
        log_file: Also write records to this file (parents are created)
        format_type: 'standard', 'detailed' or 'simple'

    Returns:
        The configured logger. A logger that is already registered is
        returned as is; ``level`` and handlers are not changed.

    Raises:
        ValueError: If ``level`` is not a logging level name

    Example:
        >>> logger = setup_logger('timewarp.core.cost_matrix', level='DEBUG')
        >>> logger.debug('Accumulating cost over a 10x12 table')
    """
    with _lock:
        if name in _loggers:
            return _loggers[name]

        numeric_level = _parse_level(level)

        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        logger.handlers.clear()
        logger.propagate = False

        _attach(logger, logging.StreamHandler(sys.stdout), numeric_level, format_type)

        if log_file:
            log_file = Path(log_file)
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                _attach(logger, logging.FileHandler(log_file, mode="a"), numeric_level, "detailed")
            except OSError as e:
                logger.warning(f"Logging to console only, cannot open {log_file}: {e}")

        _loggers[name] = logger
        return logger


def set_level(logger: logging.Logger, level: str) -> None:
    """Change the level of ``logger`` and of all its handlers.

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    numeric_level = _parse_level(level)
    with _lock:
        logger.setLevel(numeric_level)
        for handler in logger.handlers:
            handler.setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """Registered logger ``name``, set up with defaults if missing."""
    with _lock:
        logger = _loggers.get(name)
    return logger if logger is not None else setup_logger(name)


def _log_measurement(logger: logging.Logger, message: str, **measurement: Any) -> None:
    # Bypasses the logger level; handler levels still filter
    record = logger.makeRecord(logger.name, logging.DEBUG, "", 0, message, (), None)
    for key, value in measurement.items():
        setattr(record, key, value)
    logger.handle(record)


def log_memory_usage(logger: logging.Logger, memory_mb: float, context: str = "") -> None:
    """DEBUG record of a memory measurement, exposed as ``record.memory_mb``."""
    _log_measurement(
        logger, f"Memory usage: {memory_mb:.1f}MB {context}".rstrip(), memory_mb=memory_mb
    )


def log_execution_time(logger: logging.Logger, duration_seconds: float, context: str = "") -> None:
    """DEBUG record of a duration, exposed as ``record.duration_seconds``."""
    _log_measurement(
        logger,
        f"Execution time: {duration_seconds:.4f}s {context}".rstrip(),
        duration_seconds=duration_seconds
    )


def shutdown_logging() -> None:
    """Close every handler of registered loggers and empty the registry."""
    with _lock:
        for logger in _loggers.values():
            while logger.handlers:
                handler = logger.handlers.pop()
                handler.close()
        _loggers.clear()
