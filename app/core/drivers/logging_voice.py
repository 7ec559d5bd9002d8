"""
Logging Voice Output

Fallback VoiceOutput used when no speech engine is configured: spoken
text goes to the log and is kept for inspection.
"""

import logging
from collections import deque
from typing import Deque

from .abstractions import VoiceOutput

logger = logging.getLogger(__name__)


class LoggingVoiceOutput(VoiceOutput):

    def __init__(self, history_size: int = 100):
        self.spoken: Deque[str] = deque(maxlen=history_size)

    async def speak(self, text: str) -> None:
        self.spoken.append(text)
        logger.info(f"[SPEAK] {text}")

    async def stop(self) -> None:
        pass
