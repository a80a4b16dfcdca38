import logging
import sys
from typing import Any, Optional, TextIO, Union

DEFAULT_LOGGER_NAME = "placeholder-client"
DEFAULT_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level such as ``"debug"`` or ``"10"`` into its numeric value."""
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    numeric = logging.getLevelName(text.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    return numeric


class Logger:
    """Logger used by the client, transport and workflows.

    Each instance owns the standard library logger registered under its name:
    building a second Logger with the same name replaces (and closes) the
    handlers of the first. Components that keep their own default logger
    therefore use their own name.
    """

    def __init__(
        self,
        name: str = DEFAULT_LOGGER_NAME,
        level: Union[int, str] = logging.INFO,
        format_string: Optional[str] = None,
        stream: Optional[TextIO] = None,
        log_file: Optional[str] = None,
    ):
        """Initialize the logger.

        Args:
            name: Logger name
            level: Minimum logging level, numeric or by name
            format_string: Custom format string for log messages
            stream: Console stream (stderr when None)
            log_file: Optional file path to also log to
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(resolve_level(level))
        self.logger.propagate = False

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
        handlers = [logging.StreamHandler(stream or sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        for handler in handlers:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    @property
    def name(self) -> str:
        return self.logger.name

    @property
    def level(self) -> int:
        return self.logger.level

    def set_level(self, level: Union[int, str]) -> None:
        self.logger.setLevel(resolve_level(level))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if kwargs:
            context = " ".join(f"{key}={value}" for key, value in kwargs.items())
            message = f"{message} - {context}"
        self.logger.log(level, message)


class DefaultLogger(Logger):
    """Preconfigured stderr logger, named ``placeholder-client`` unless told otherwise."""

    def __init__(
        self,
        name: str = DEFAULT_LOGGER_NAME,
        level: Union[int, str] = logging.INFO,
        log_file: Optional[str] = None,
    ):
        super().__init__(name=name, level=level, format_string=DEFAULT_FORMAT, log_file=log_file)
