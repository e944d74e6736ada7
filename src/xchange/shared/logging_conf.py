# src/xchange/shared/logging_conf.py
"""
Logging Configuration - Logging Setup and Configuration

This module configures logging for the host process embedding the
conversion core. Library modules only create module-level loggers;
handlers are attached here, once, by the composition root.

Files that USE this module:
- xchange.app (configure_logging calls setup_logging)

Files that this module USES:
- None (pure configuration module)
"""
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "xchange.log"

# every refresh and connectivity probe opens a connection; keep their logs out of INFO
NOISY_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return resolved
    return level


def _log_file_path(log_file: Optional[Union[str, Path]],
                   log_dir: Optional[Union[str, Path]]) -> Optional[Path]:
    """log_dir wins over log_file; the directory gets a fixed file name."""
    if log_dir:
        path = Path(log_dir) / LOG_FILE_NAME
    elif log_file:
        path = Path(log_file)
    else:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    log_to_stdout: Optional[bool] = None,
) -> Optional[Path]:
    """
    Configure root logging for stdout, a rotating file, or both.

    Calling it again replaces the previous configuration.

    Args:
        level: Logging level as int or name ("DEBUG", "info", ...)
        log_file: Optional path to log file (enables file logging)
        log_dir: Optional directory for log files; the file is named xchange.log
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup log files to keep (default: 5)
        log_to_stdout: Force stdout logging on/off; defaults to the
            XCHANGE_LOG_STDOUT environment variable

    Returns:
        Path of the log file, or None when logging to stdout only
    """
    level = _resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if log_to_stdout is None:
        log_to_stdout = os.environ.get("XCHANGE_LOG_STDOUT", "true").lower() == "true"
    if log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    log_path = _log_file_path(log_file, log_dir)
    if log_path is not None:
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ))

    if not handlers:
        # never leave the process silent
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, stdout=%s, file=%s",
        logging.getLevelName(level), log_to_stdout, log_path,
    )
    return log_path
