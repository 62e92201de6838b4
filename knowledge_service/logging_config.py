"""
Logging for the knowledge hub service.

Flask serves requests on worker threads, and recommendation, catalogue and
registry code all log from those threads. Records are funnelled through one
queue and written to stdout by a single listener thread.
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Libraries whose INFO output is per-request chatter
NOISY_LOGGERS = ("werkzeug", "urllib3")


class ThreadSafeLoggingConfig:
    """Owns the queue and listener behind the root logger."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    @property
    def is_active(self) -> bool:
        return self._log_listener is not None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Route every log record through a queue to stdout.

        The root logger ends up with a single QueueHandler. Any handlers that
        were installed before are removed, and a previous listener is stopped,
        so calling this twice does not duplicate output.

        Args:
            debug: Log at DEBUG (catalogue swaps, per-query candidate counts)
                instead of INFO, and keep werkzeug request lines
        """
        self.stop()

        self._log_queue = Queue()
        queue_handler = logging.handlers.QueueHandler(self._log_queue)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            for name in NOISY_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)

    def stop(self) -> None:
        """Flush pending records and stop the listener thread."""
        if self._log_listener:
            self._log_listener.stop()
        self._log_listener = None
        self._log_queue = None


# Process-wide instance used by run_app.py
logging_config = ThreadSafeLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the knowledge hub process."""
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    logging_config.stop()


def get_logger(name: str) -> logging.Logger:
    """Module logger; records reach stdout once setup_logging() has run."""
    return logging.getLogger(name)
