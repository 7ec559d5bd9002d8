"""
Voice Drivers Package

Speech output interface consumed by the reminder worker, plus a
log-only output used when no speech engine is available.
"""

from .abstractions import VoiceOutput
from .logging_voice import LoggingVoiceOutput

__all__ = [
    "VoiceOutput",
    "LoggingVoiceOutput",
]
