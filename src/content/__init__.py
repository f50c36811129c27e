"""
Game content for Space Explorer.

Pre-built galaxies ready to play.
"""

from __future__ import annotations

from src.content.starter_galaxy import STARTER_CONNECTIONS, create_starter_galaxy

__all__ = [
    "STARTER_CONNECTIONS",
    "create_starter_galaxy",
]
