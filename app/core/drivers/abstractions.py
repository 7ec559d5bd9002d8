"""
Voice Driver Abstractions

Speech synthesis lives outside the core; the reminder worker only
depends on this interface.

Implements:
- LSP: Any speech engine can be substituted
- DIP: Workers depend on abstractions, not concrete engines
"""

from abc import ABC, abstractmethod


class VoiceOutput(ABC):
    """Speaks text to the user"""

    @abstractmethod
    async def speak(self, text: str) -> None:
        """Speak the given text aloud"""
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop any in-progress speech (barge-in)"""
        pass
