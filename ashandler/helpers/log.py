import inspect
import logging
import os
import time
from typing import Optional

LOG_LEVEL_ENV = "ASHANDLER_LOG_LEVEL"


class Colors:
    """ANSI escape sequences used by `AshandlerFormatter`."""

    RESET = "\033[0m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    BOLD = "\033[1m"


class AshandlerFormatter(logging.Formatter):
    """
    Formats log messages as ``[ashandler][method_name] msg``.

    Warnings are yellow; errors and critical messages are bold red and carry
    their level name.
    """

    def format(self, record):
        method_name = getattr(record, "method_name", record.funcName)
        if method_name == "<module>":
            prefix = "[ashandler]"
        else:
            prefix = f"[ashandler][{method_name}]"

        if record.levelno >= logging.ERROR:
            prefix = f"{Colors.BOLD}{Colors.RED}{prefix}[{record.levelname}]"
            suffix = Colors.RESET
        elif record.levelno >= logging.WARNING:
            prefix = f"{Colors.YELLOW}{prefix}"
            suffix = Colors.RESET
        else:
            suffix = ""

        original_format = self._style._fmt
        self._style._fmt = f"{prefix} %(message)s{suffix}"
        try:
            return super().format(record)
        finally:
            self._style._fmt = original_format


_logger = None


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return logging.WARNING
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.WARNING


def get_logger() -> logging.Logger:
    """
    Get or create the ashandler logger instance.

    The level defaults to WARNING and can be set with the
    ``ASHANDLER_LOG_LEVEL`` environment variable (``DEBUG``, ``INFO`` ...)
    or later with `set_log_level`.

    Returns
    -------
    logging.Logger
        Configured ``ashandler`` logger.
    """
    global _logger

    if _logger is None:
        _logger = logging.getLogger("ashandler")
        _logger.setLevel(_level_from_env())

        if not _logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(AshandlerFormatter())
            _logger.addHandler(handler)

        _logger.propagate = False

    return _logger


def _get_caller_name() -> str:
    frame = inspect.currentframe()
    if frame is not None:
        try:
            # this function -> log() -> log_info/log_warning/etc -> actual caller
            caller_frame = frame.f_back
            for _ in range(2):
                if caller_frame is None:
                    break
                caller_frame = caller_frame.f_back
            if caller_frame is not None:
                return caller_frame.f_code.co_name
        finally:
            del frame
    return "unknown"


def log(msg: str, method_name: Optional[str] = None, level: int = logging.INFO):
    """
    Log a message with automatic method name detection.

    Parameters
    ----------
    msg : str
        The message to log
    method_name : str, optional
        The name of the method/function. If None, it is read from the call stack.
    level : int, optional
        Logging level (default: logging.INFO)
    """
    if method_name is None:
        method_name = _get_caller_name()

    logger = get_logger()
    logger.log(level, msg, extra={"method_name": method_name})


def log_info(msg: str, method_name: Optional[str] = None):
    log(msg, method_name=method_name, level=logging.INFO)


def log_debug(msg: str, method_name: Optional[str] = None):
    log(msg, method_name=method_name, level=logging.DEBUG)


def log_warning(msg: str, method_name: Optional[str] = None):
    log(msg, method_name=method_name, level=logging.WARNING)


def log_error(msg: str, method_name: Optional[str] = None):
    log(msg, method_name=method_name, level=logging.ERROR)


def set_log_level(level: int):
    """
    Set the logging level for the ashandler logger.

    Examples
    --------
    >>> import logging
    >>> from ashandler.helpers.log import set_log_level
    >>> set_log_level(logging.DEBUG)  # show every dispatched event
    """
    get_logger().setLevel(level)


class LogTime:
    """
    Context manager that logs how long a block took, at debug level.

    Examples
    --------
    >>> with LogTime("handler 'add'"):
    ...     ...  # [ashandler][LogTime] handler 'add' took 0.01 seconds
    """

    def __init__(self, name: str = "process", level: int = logging.DEBUG):
        self.name = name
        self.level = level
        self.start = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.start
        log(f"{self.name} took {elapsed:.2f} seconds", method_name="LogTime", level=self.level)
        return False
