import logging
from typing import List, Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

class GullLogger:
    def __init__(self, name: str, log_file: Optional[str] = None,
                 level: Union[int, str] = logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self._handlers: List[logging.Handler] = []

        # Console handler
        self._add_handler(logging.StreamHandler())

        # File handler if specified
        if log_file:
            self._add_handler(logging.FileHandler(log_file))

    def _add_handler(self, handler: logging.Handler):
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(handler)
        self._handlers.append(handler)

    def __getattr__(self, name):
        # Forward debug(), info(), error()... to the wrapped logger
        return getattr(self.logger, name)

    def close(self):
        """Detach and close the handlers installed by this instance."""
        while self._handlers:
            handler = self._handlers.pop()
            self.logger.removeHandler(handler)
            handler.close()

def setup_logging(level: Union[int, str] = "INFO",
                  log_file: Optional[str] = None) -> GullLogger:
    """Configure the package logger."""
    if isinstance(level, str):
        level = level.upper()
    return GullLogger("gull", log_file=log_file, level=level)
