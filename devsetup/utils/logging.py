"""
Logging configuration and utilities.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Sequence


class ExcludeLoggersFilter(logging.Filter):
    """Drop records emitted by the given logger names (and their children)."""

    def __init__(self, names: Sequence[str]):
        super().__init__()
        self.names = tuple(names)

    def filter(self, record: logging.LogRecord) -> bool:
        return not any(
            record.name == name or record.name.startswith(name + ".")
            for name in self.names
        )


def setup_root_logger(log_file: Optional[Path] = None, 
                     level: str = "INFO",
                     max_file_size_mb: int = 10,
                     backup_count: int = 5,
                     console_exclude: Sequence[str] = ("devsetup.utils.reporter",)):
    """
    Set up the root logger for the application.
    
    Status lines are already printed by the reporter, so its records only go
    to the log file, never to the console handler.
    
    Args:
        log_file: Optional log file path
        level: Logging level
        max_file_size_mb: Rotate the log file past this size
        backup_count: Number of rotated log files to keep
        console_exclude: Logger names kept off the console
    """
    root_logger = logging.getLogger()
    
    # Clear any existing handlers
    root_logger.handlers.clear()
    
    root_logger.setLevel(getattr(logging, level.upper()))
    
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    )
    
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ExcludeLoggersFilter(console_exclude))
    root_logger.addHandler(console_handler)
    
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    
    # Set levels for third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
