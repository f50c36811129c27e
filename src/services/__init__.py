"""
Service layer for Space Explorer.

Services hold the game rules that span several models: mission
lifecycle, victory evaluation and persistence.
"""

from __future__ import annotations

from src.services.mission import MissionService
from src.services.persistence import SaveCorruptError, SaveError, SaveManager
from src.services.victory import VictoryCondition, VictoryReport, evaluate_victory

__all__ = [
    "MissionService",
    "SaveCorruptError",
    "SaveError",
    "SaveManager",
    "VictoryCondition",
    "VictoryReport",
    "evaluate_victory",
]
