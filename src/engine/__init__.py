"""
Core Engine for Space Explorer.

The engine orchestrates a game session:
- Movement across the galaxy (energy-budgeted)
- Combat resolution and mission progress
- Victory and game-over detection
- Save/load of the full session
"""

from __future__ import annotations

from src.engine.events import EventSink, NullEventSink, RecordingEventSink
from src.engine.game import GameSession
from src.engine.models import (
    ActionError,
    ActionResult,
    EngineConfig,
    SessionState,
    SessionStatus,
)

__all__ = [
    # Main session
    "GameSession",
    # Events
    "EventSink",
    "NullEventSink",
    "RecordingEventSink",
    # Models
    "ActionError",
    "ActionResult",
    "EngineConfig",
    "SessionState",
    "SessionStatus",
]
