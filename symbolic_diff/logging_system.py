"""
Verbosity-gated logging for the engine

The library itself only emits debug messages (parse and derivative summaries).
The command line front end writes its result to stdout and reports milestones
and failures through this logger, whose console handler writes to stderr.
"""

import logging
import sys
from typing import Optional
from enum import Enum
from datetime import datetime


class LogLevel(Enum):
    """How much the engine reports"""
    SILENT = 0      # nothing, not even failures
    MINIMAL = 1     # failures and warnings
    MODERATE = 2    # milestones: parsed, differentiated, bindings
    DETAILED = 3    # intermediate trees
    VERBOSE = 4     # everything, including per-step debug output

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


_FORMAT = '[%(asctime)s] %(levelname)-7s %(message)s'


def _attach(logger: logging.Logger, handler: logging.Handler):
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(handler)


class SymbolicDiffLogger:
    """
    Wraps the 'symbolic_diff' stdlib logger and filters messages by LogLevel
    """

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_file_path = None

        self.logger = logging.getLogger('symbolic_diff')
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        # reconfiguring replaces whatever a previous instance attached
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if log_level != LogLevel.SILENT:
            _attach(self.logger, logging.StreamHandler(sys.stderr))

        if log_to_file:
            self.log_file_path = log_file_path or \
                f"symbolic_diff_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            _attach(self.logger, logging.FileHandler(self.log_file_path))

    def enabled(self, level: LogLevel) -> bool:
        return self.log_level.value >= level.value

    def critical(self, message: str):
        """A failure that ends the current invocation; hidden only when silent"""
        if self.log_level != LogLevel.SILENT:
            self.logger.error(message)

    def info(self, message: str, required_level: LogLevel = LogLevel.MODERATE):
        if self.enabled(required_level):
            self.logger.info(message)

    def milestone(self, message: str):
        if self.enabled(LogLevel.MODERATE):
            self.logger.info(f"-- {message}")

    def warning(self, message: str):
        if self.enabled(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        if self.enabled(LogLevel.VERBOSE):
            self.logger.debug(message)


_logger: Optional[SymbolicDiffLogger] = None


def get_logger() -> SymbolicDiffLogger:
    """The process-wide logger, created at MINIMAL on first use"""
    global _logger
    if _logger is None:
        _logger = SymbolicDiffLogger()
    return _logger


def set_log_level(level: LogLevel):
    """Change the verbosity without touching handlers"""
    get_logger().log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> SymbolicDiffLogger:
    """Replace the process-wide logger"""
    global _logger
    _logger = SymbolicDiffLogger(log_level, log_to_file, log_file_path)
    return _logger


def log_info(message: str, level: LogLevel = LogLevel.MODERATE):
    get_logger().info(message, level)


def log_milestone(message: str):
    get_logger().milestone(message)


def log_warning(message: str):
    get_logger().warning(message)


def log_critical(message: str):
    get_logger().critical(message)


def log_debug(message: str):
    get_logger().debug(message)
