import logging
import sys
import threading
from collections import deque
from typing import List, Optional


class LogStreamManager:
    """Keeps the most recent log lines in memory for diagnostics"""
    _instance = None

    def __init__(self, maxlen: int = 2000):
        # Buffer last 2000 lines
        self.buffer: deque = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = LogStreamManager()
        return cls._instance

    def add_log(self, message: str, level: str = "INFO"):
        """Adds a log message to the buffer."""
        entry = {
            "message": message,
            "level": level,
        }
        with self._lock:
            self.buffer.append(entry)

    def recent(self, limit: int = 100, level: Optional[str] = None) -> List[dict]:
        with self._lock:
            entries = list(self.buffer)
        if level:
            entries = [e for e in entries if e["level"] == level]
        return entries[-limit:]

    def clear(self):
        with self._lock:
            self.buffer.clear()


# Global instance
log_manager = LogStreamManager.get_instance()


class ListLogHandler(logging.Handler):
    """Custom logging handler to push logs into LogStreamManager."""
    def emit(self, record):
        try:
            msg = self.format(record)
            log_manager.add_log(msg, record.levelname)
        except Exception:
            self.handleError(record)


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure root logging

    stdout always, a log file when given, plus the in-memory buffer.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    buffer_handler = ListLogHandler()
    buffer_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers.append(buffer_handler)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
