import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Any
from typing_extensions import override

from metadata_manager.common.common import LOG_NAME


class BaseLogger(ABC):
    """
    Abstract base class for all loggers.
    Provides standard logging methods that delegate to the underlying logger.
    """
    def __init__(self, name: str = LOG_NAME, debug: bool = False):
        self.name = name
        self.level = "DEBUG" if debug else "INFO"
        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        self.logger.setLevel(self.level)
        self.formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        self._setup_handler()

    @abstractmethod
    def _setup_handler(self) -> None:
        """Setup the specific handler for the logger implementation."""
        pass

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log a debug message."""
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log an info message."""
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log a warning message."""
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log an error message."""
        self.logger.error(msg, *args, **kwargs)


class CompositeLogger(BaseLogger):
    """
    Logger writing to the console and, when a log directory is given, to a file.

    Using the package name (the default) routes the records of every
    ``metadata_manager.*`` module logger through these handlers.
    """
    def __init__(self, name: str = LOG_NAME,
                 log_dir: Optional[str] = None,
                 filename: Optional[str] = None,
                 debug: bool = False):

        super().__init__(name, debug)

        self.log_dir = log_dir
        self.filename = filename if filename else f"{name}.log"
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers = [] # reset handlers

        # Setup both handlers
        self._setup_console_handler()
        if log_dir is not None:
            self._setup_file_handler(log_dir, self.filename)

    def _setup_handler(self) -> None:
        """Not used in CompositeLogger as we set up handlers separately"""
        pass

    def _setup_console_handler(self) -> None:
        """Setup console handler"""
        handler = logging.StreamHandler()
        handler.setFormatter(self.formatter)
        handler.setLevel(self.level)
        self.logger.addHandler(handler)

    def _setup_file_handler(self, log_dir: str, filename) -> None:
        """Setup file handler"""
        if not os.path.exists(log_dir):
            raise ValueError(f"Log directory {log_dir} does not exist")

        self.log_file = os.path.join(log_dir, filename)

        handler = logging.FileHandler(self.log_file)
        handler.setFormatter(self.formatter)
        handler.setLevel("DEBUG")
        self.logger.addHandler(handler)


class EmptyLogger(BaseLogger):
    """
    Logger implementation that does nothing.

    The package logger keeps whatever configuration the application gave it.
    """
    def __init__(self):
        self.name = LOG_NAME
        self.logger = logging.getLogger(LOG_NAME)

    def _setup_handler(self) -> None:
        """Setup the specific handler for the logger implementation."""
        pass

    @override
    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass

    @override
    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass

    @override
    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass

    @override
    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass
