"""
Event sink interface for Space Explorer.

The engine never talks to a UI directly. It pushes feedback through an
EventSink; a console, web page or test recorder implements it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.models.mission import Mission
    from src.services.victory import VictoryReport


class EventSink(Protocol):
    """Receiver for engine feedback."""

    def console_message(self, message: str) -> None:
        """A line of narrative or feedback text."""
        ...

    def energy_changed(self, energy: int) -> None:
        ...

    def location_changed(self, location_id: str) -> None:
        ...

    def score_changed(self, score: int) -> None:
        ...

    def mission_changed(self, mission: Mission | None) -> None:
        ...

    def game_over(self) -> None:
        """Energy is exhausted; the session accepts no more actions."""
        ...

    def victory(self, report: VictoryReport) -> None:
        """A victory condition was met; the session is finished."""
        ...


class NullEventSink:
    """Discards every event."""

    def console_message(self, message: str) -> None:
        pass

    def energy_changed(self, energy: int) -> None:
        pass

    def location_changed(self, location_id: str) -> None:
        pass

    def score_changed(self, score: int) -> None:
        pass

    def mission_changed(self, mission: Mission | None) -> None:
        pass

    def game_over(self) -> None:
        pass

    def victory(self, report: VictoryReport) -> None:
        pass


@dataclass
class RecordingEventSink:
    """Keeps every event in memory, in order. Handy for tests and replays."""

    messages: list[str] = field(default_factory=list)
    energy_updates: list[int] = field(default_factory=list)
    location_updates: list[str] = field(default_factory=list)
    score_updates: list[int] = field(default_factory=list)
    mission_updates: list[str | None] = field(default_factory=list)
    game_over_count: int = 0
    victories: list[VictoryReport] = field(default_factory=list)

    def console_message(self, message: str) -> None:
        self.messages.append(message)

    def energy_changed(self, energy: int) -> None:
        self.energy_updates.append(energy)

    def location_changed(self, location_id: str) -> None:
        self.location_updates.append(location_id)

    def score_changed(self, score: int) -> None:
        self.score_updates.append(score)

    def mission_changed(self, mission: Mission | None) -> None:
        self.mission_updates.append(mission.title if mission is not None else None)

    def game_over(self) -> None:
        self.game_over_count += 1

    def victory(self, report: VictoryReport) -> None:
        self.victories.append(report)

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def clear(self) -> None:
        self.messages.clear()
        self.energy_updates.clear()
        self.location_updates.clear()
        self.score_updates.clear()
        self.mission_updates.clear()
        self.game_over_count = 0
        self.victories.clear()
