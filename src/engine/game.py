"""
Game Session for Space Explorer.

The orchestration layer that processes player actions. Coordinates
movement, combat, missions, search, victory and save/load, and pushes
feedback to an event sink.
"""

from __future__ import annotations

import functools
import logging
import threading
from copy import deepcopy
from dataclasses import dataclass, field

from src.engine.events import EventSink, NullEventSink
from src.engine.models import (
    ActionError,
    ActionResult,
    EngineConfig,
    SessionState,
    SessionStatus,
)
from src.models.mission import Mission, MissionCatalog
from src.models.world import Enemy, Location, WorldGraph, normalize_location_id
from src.services.mission import MissionService
from src.services.persistence import (
    SaveManager,
    build_snapshot,
    restore_locations,
    restore_mission,
)
from src.services.victory import evaluate_victory
from src.skills.combat import resolve_combat
from src.skills.dice import RandomSource, SystemRandomSource
from src.skills.search import search_locations_dfs

logger = logging.getLogger(__name__)


def _turn(method):
    """Run an action under the session lock with a fresh message buffer."""

    @functools.wraps(method)
    def wrapper(self: GameSession, *args, **kwargs):
        with self._lock:
            self._messages = []
            return method(self, *args, **kwargs)

    return wrapper


@dataclass
class GameSession:
    """
    A single player's game.

    One call is one turn: it runs to completion (a whole fight included)
    before returning. All public actions share one re-entrant lock, so
    combat, mission completion and victory are always observed together.
    """

    world: WorldGraph
    catalog: MissionCatalog
    rng: RandomSource = field(default_factory=SystemRandomSource)
    sink: EventSink = field(default_factory=NullEventSink)
    config: EngineConfig = field(default_factory=EngineConfig)

    # Components (initialized in __post_init__)
    state: SessionState = field(init=False)
    missions: MissionService = field(init=False)
    saves: SaveManager = field(init=False)

    _initial_locations: dict[str, Location] = field(init=False, repr=False)
    _messages: list[str] = field(init=False, default_factory=list, repr=False)
    _lock: threading.RLock = field(init=False, repr=False, default_factory=threading.RLock)

    def __post_init__(self) -> None:
        """Initialize session components."""
        self.state = SessionState(energy=self.config.initial_energy)
        self.missions = MissionService(self.catalog, self.rng)
        self.saves = SaveManager(self.config.save_dir, self.config.save_filename)
        self._initial_locations = deepcopy(self.world.locations)

    # Read-only views -------------------------------------------------------

    @property
    def current_location_id(self) -> str | None:
        return self.state.current_location_id

    @property
    def current_location(self) -> Location | None:
        if self.state.current_location_id is None:
            return None
        return self.world.locations.get(self.state.current_location_id)

    @property
    def energy(self) -> int:
        return self.state.energy

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def current_mission(self) -> Mission | None:
        return self.state.current_mission

    @property
    def completed_missions(self) -> int:
        return self.state.completed_missions

    @property
    def visited_locations(self) -> set[str]:
        return set(self.state.visited_locations)

    @property
    def status(self) -> SessionStatus:
        return self.state.status

    @property
    def critical_locations(self) -> frozenset[str]:
        return frozenset(normalize_location_id(c) for c in self.config.critical_locations)

    def possible_moves(self) -> set[str]:
        if self.state.current_location_id is None:
            return set()
        return self.world.neighbors(self.state.current_location_id)

    # Lifecycle --------------------------------------------------------------

    @_turn
    def start(self, start_location: str | None = None) -> ActionResult:
        """Place the player at the start location and issue the first mission."""
        self._start(start_location)
        return self._result(True)

    @_turn
    def restart(self) -> ActionResult:
        """
        Start over from the configured start location.

        Energy, score, missions, discoveries and the visited set are reset,
        and the galaxy goes back to how it was when the session was created.
        """
        self.world.replace_locations(deepcopy(self._initial_locations))
        logger.info("Session restarted")
        self._start(None)
        return self._result(True)

    def _start(self, start_location: str | None) -> None:
        location_id = normalize_location_id(start_location or self.config.start_location)
        location = self.world.locations.get(location_id)
        if location is None:
            raise ValueError(f"Start location '{location_id}' is not in the galaxy")

        self.state = SessionState(
            current_location_id=location_id,
            energy=self.config.initial_energy,
            status=SessionStatus.ACTIVE,
        )
        self.state.visited_locations.add(location_id)
        location.visited = True

        self.sink.location_changed(location_id)
        self._say(f"Starting exploration at {location.id}")
        self._say(location.description)
        logger.info(f"Session started at {location_id}")

        self._draw_mission()
        self.sink.score_changed(self.state.score)
        self.sink.energy_changed(self.state.energy)

    # Movement ---------------------------------------------------------------

    @_turn
    def move_to(self, destination: str) -> ActionResult:
        """
        Move to a directly connected location.

        Costs `move_cost` energy. Nothing changes if the destination is not
        a neighbor or energy is short.
        """
        refused = self._refuse_if_unavailable()
        if refused is not None:
            return refused

        destination = normalize_location_id(destination)
        if destination not in self.possible_moves():
            return self._refuse(
                ActionError.INVALID_MOVE,
                f"Cannot move to {destination} from current location.",
            )
        if self.state.energy < self.config.move_cost:
            return self._refuse(ActionError.INSUFFICIENT_ENERGY, "Insufficient energy for movement!")

        self.state.energy -= self.config.move_cost
        self.state.current_location_id = destination
        self.state.visited_locations.add(destination)
        self.world.locations[destination].visited = True

        self._discover(destination)
        self.sink.energy_changed(self.state.energy)
        self.sink.location_changed(destination)

        self._handle_arrival(check_missions=True)
        self._check_victory()
        self._check_exhaustion()
        return self._result(True)

    def _discover(self, location_id: str) -> None:
        critical = self.critical_locations
        discovered = self.state.discovered_critical_locations
        if location_id not in critical or location_id in discovered:
            return
        discovered.add(location_id)
        self._say(f"You've discovered a critical location: {location_id}!")
        if critical <= discovered:
            self._say("You've discovered all critical locations in the galaxy!")

    def _handle_arrival(self, *, check_missions: bool) -> None:
        location = self.current_location
        if location is None:
            return
        self._say(f"Arrived at {location.id}")
        self._say(location.description)

        if location.has_enemies:
            self._say("Warning: Enemies detected!")
            for enemy in location.enemies:
                self._say(f"- {enemy.describe()}")

        if check_missions and self.missions.check_arrival(self.state.current_mission, location.id):
            self._say("You've reached the mission target location!")
            self._complete_mission()

    # Combat -----------------------------------------------------------------

    @_turn
    def fight(self, enemy_fragment: str) -> ActionResult:
        """
        Fight the first enemy here whose name contains the fragment.

        The whole exchange is resolved in this one call.
        """
        refused = self._refuse_if_unavailable()
        if refused is not None:
            return refused

        location = self.current_location
        enemy = location.find_enemy(enemy_fragment) if location is not None else None
        if enemy is None:
            return self._refuse(
                ActionError.UNKNOWN_ENEMY, f"No such enemy here: {enemy_fragment.strip()}"
            )
        return self._engage(location, enemy)

    def _engage(self, location: Location, enemy: Enemy) -> ActionResult:
        if self.state.energy < self.config.combat_cost:
            return self._refuse(ActionError.INSUFFICIENT_ENERGY, "Insufficient energy for combat!")

        self._say(f"Engaging in combat with {enemy.name}")
        result = resolve_combat(
            enemy,
            self.state.energy,
            self.rng,
            cost=self.config.combat_cost,
            config=self.config.combat,
        )

        for round_ in result.rounds:
            critical = " Critical hit!" if round_.is_critical else ""
            self._say(f"You deal {round_.player_damage} damage to {enemy.name}.{critical}")
            if round_.enemy_damage is not None:
                self._say(f"{enemy.name} deals {round_.enemy_damage} damage")
                self.sink.energy_changed(round_.energy)
            percentage = int(round_.enemy_health * 100 / enemy.max_health)
            self._say(f"Status - Enemy Health: {percentage}%, Your Energy: {round_.energy}")

        self.state.energy = result.energy_after

        if result.is_victory:
            self._combat_victory(location, enemy)
        else:
            self._say("Combat failed - insufficient energy!")
            logger.info(f"Combat against {enemy.name} lost with {self.state.energy} energy left")
        self._check_exhaustion()
        return self._result(result.is_victory)

    def _combat_victory(self, location: Location, enemy: Enemy) -> None:
        self._say(f"Victory! {enemy.name} has been defeated!")
        self.state.score += self.config.combat_victory_score
        self.sink.score_changed(self.state.score)
        location.remove_enemy(enemy)
        logger.info(f"{enemy.name} defeated at {location.id}")

        if self.missions.check_combat_victory(self.state.current_mission, location.id, enemy.name):
            self._complete_mission()
        self._check_victory()

    # Missions ---------------------------------------------------------------

    def _draw_mission(self) -> None:
        if self.state.current_mission is not None:
            return
        mission = self.missions.draw_mission()
        self.state.current_mission = mission
        self.sink.mission_changed(mission)
        self._say("New Mission Acquired!")
        self._say(mission.describe())

    def _complete_mission(self) -> None:
        mission = self.state.current_mission
        if mission is None:
            return
        self.state.score += mission.reward
        self.state.completed_missions += 1
        self._say(
            f"Mission Complete: {mission.title}\n"
            f"Reward: {mission.reward} points\n"
            f"Total Missions Completed: {self.state.completed_missions}"
            f"/{self.config.missions_for_victory}"
        )
        self.sink.score_changed(self.state.score)
        logger.info(f"Mission completed: {mission.title} (+{mission.reward})")

        self.state.current_mission = None
        self.sink.mission_changed(None)
        self._draw_mission()
        self._check_victory()

    # Search -----------------------------------------------------------------

    @_turn
    def search_locations_dfs(self, property_key: str, property_value: str) -> ActionResult:
        """
        Depth-first search for locations with a matching property.

        Costs `search_cost` energy whether or not anything is found.
        """
        refused = self._refuse_if_unavailable()
        if refused is not None:
            return refused
        if self.state.energy < self.config.search_cost:
            return self._refuse(
                ActionError.INSUFFICIENT_ENERGY, "Insufficient energy for search operation!"
            )

        found = search_locations_dfs(
            self.world, self.state.current_location_id, property_key, property_value
        )
        self.state.energy -= self.config.search_cost
        self.sink.energy_changed(self.state.energy)

        if found:
            self._say("Found locations:")
            for location_id in found:
                self._say(f"- {location_id}")
        else:
            self._say(f"No locations found with {property_key} = {property_value}")

        self._check_exhaustion()
        return self._result(True, results=found)

    # Victory and defeat ----------------------------------------------------

    def _check_victory(self) -> None:
        if self.state.status != SessionStatus.ACTIVE:
            return
        report = evaluate_victory(
            self.state.completed_missions,
            self.state.score,
            self.state.discovered_critical_locations,
            locations_visited=len(self.state.visited_locations),
            energy_remaining=self.state.energy,
            missions_required=self.config.missions_for_victory,
            score_required=self.config.score_for_victory,
            critical_locations=self.critical_locations,
        )
        if report is None:
            return
        self.state.status = SessionStatus.VICTORY
        self._say(report.summary())
        self.sink.victory(report)
        logger.info(
            "Victory via %s with score %d",
            ", ".join(c.value for c in report.conditions),
            report.score,
        )

    def _check_exhaustion(self) -> None:
        if self.state.status != SessionStatus.ACTIVE or self.state.energy > 0:
            return
        self.state.status = SessionStatus.GAME_OVER
        self._say("Game Over! You've run out of energy.")
        self.sink.game_over()
        logger.info(f"Game over at {self.state.current_location_id} with score {self.state.score}")

    # Persistence ------------------------------------------------------------

    @_turn
    def save(self, filename: str | None = None) -> ActionResult:
        """
        Save the whole session and galaxy.

        Raises:
            SaveError: if the file cannot be written (the session is unchanged)
        """
        refused = self._refuse_if_unavailable()
        if refused is not None:
            return refused
        snapshot = build_snapshot(self.state, self.world)
        path = self.saves.save(snapshot, filename)
        self._say("Game saved successfully!")
        logger.debug(f"Snapshot written to {path}")
        return self._result(True)

    @_turn
    def load(self, filename: str | None = None) -> ActionResult:
        """
        Replace the session and galaxy with a saved snapshot.

        The snapshot is fully validated before anything is replaced. Arrival
        messages are regenerated; no energy is charged and no mission is
        completed by loading.

        Raises:
            SaveError: if the file is missing or unreadable
            SaveCorruptError: if the file is not a valid snapshot
        """
        snapshot = self.saves.load(filename)
        locations = restore_locations(snapshot)
        mission = restore_mission(snapshot)

        visited = {normalize_location_id(v) for v in snapshot.visited_locations}
        if snapshot.discovered_critical_locations is None:
            discovered = visited & self.critical_locations
        else:
            discovered = {normalize_location_id(d) for d in snapshot.discovered_critical_locations}

        state = SessionState(
            current_location_id=normalize_location_id(snapshot.current_location),
            energy=snapshot.energy,
            score=max(0, snapshot.score),
            visited_locations=visited,
            current_mission=mission,
            completed_missions=snapshot.completed_missions,
            discovered_critical_locations=discovered,
            status=SessionStatus.ACTIVE,
        )

        self.world.replace_locations(locations)
        self.state = state

        self.sink.location_changed(state.current_location_id)
        self.sink.energy_changed(state.energy)
        self.sink.score_changed(state.score)
        self.sink.mission_changed(state.current_mission)
        self._say("Game loaded successfully!")
        self._handle_arrival(check_missions=False)
        self._check_exhaustion()
        return self._result(True)

    # Descriptions -----------------------------------------------------------

    @_turn
    def describe_location(self) -> ActionResult:
        """Describe where the player is (the `look` action)."""
        location = self.current_location
        if location is None:
            return self._refuse(ActionError.NOT_STARTED, "Unknown location.")
        self._say(location.describe())
        self._say_moves()
        return self._result(True)

    @_turn
    def describe_moves(self) -> ActionResult:
        self._say_moves()
        return self._result(True)

    @_turn
    def describe_status(self) -> ActionResult:
        state = self.state
        self._say("Current Status:")
        self._say(f"Location: {state.current_location_id or 'nowhere'}")
        self._say(f"Energy: {state.energy}")
        self._say(f"Score: {state.score}")
        self._say(
            f"Missions Completed: {state.completed_missions}/{self.config.missions_for_victory}"
        )
        self._say(
            f"Critical Locations Discovered: {len(state.discovered_critical_locations)}"
            f"/{len(self.critical_locations)}"
        )
        if state.status != SessionStatus.ACTIVE:
            self._say(f"Session: {state.status.value.replace('_', ' ')}")
        if state.current_mission is not None:
            self._say("Current Mission:")
            self._say(state.current_mission.describe())
        else:
            self._say("No active mission.")
        self._say_moves()
        return self._result(True)

    @_turn
    def describe_help(self) -> ActionResult:
        config = self.config
        self._say(
            "\n".join(
                [
                    "Available Commands:",
                    "  move <location> - Move to a connected location",
                    "  look           - Examine current location",
                    "  moves          - Show available moves from current location",
                    "  status         - Display current game status",
                    "  fight <enemy>  - Engage in combat with an enemy",
                    "  search <property> <value> - Search for locations",
                    "  save           - Save current game",
                    "  load           - Load saved game",
                    "  restart        - Start a new game",
                    "  help           - Show this help message",
                    "",
                    "How to Complete Missions:",
                    "1. Exploration missions: reach the target location.",
                    "2. Combat missions: defeat the named enemy at the target location.",
                    "   Use the enemy's simple name (e.g. 'fight pirate').",
                    "",
                    "Ways to Win:",
                    f"1. Complete {config.missions_for_victory} missions",
                    f"2. Reach {config.score_for_victory} points",
                    "3. Discover all critical locations: "
                    + ", ".join(sorted(self.critical_locations)),
                    "",
                    "Energy Costs:",
                    f"- Moving: {config.move_cost} energy",
                    f"- Fighting: {config.combat_cost} energy",
                    f"- Searching: {config.search_cost} energy",
                ]
            )
        )
        self._say_moves()
        return self._result(True)

    def _say_moves(self) -> None:
        moves = self.possible_moves()
        if not moves:
            self._say("No available moves from current location!")
            return
        self._say(f"Possible moves from {self.state.current_location_id}:")
        for move in sorted(moves):
            self._say(f"  - {move}")

    # Helpers ----------------------------------------------------------------

    def _say(self, message: str) -> None:
        self._messages.append(message)
        self.sink.console_message(message)

    def _refuse(self, error: ActionError, message: str) -> ActionResult:
        self._say(message)
        return self._result(False, error=error)

    def _refuse_if_unavailable(self) -> ActionResult | None:
        if self.state.status == SessionStatus.NOT_STARTED:
            return self._refuse(
                ActionError.NOT_STARTED, "No game in progress. Start or load a game first."
            )
        if self.state.is_terminal:
            return self._refuse(
                ActionError.SESSION_OVER, "The game is over. Restart to play again."
            )
        return None

    def _result(
        self,
        success: bool,
        *,
        error: ActionError | None = None,
        results: list[str] | None = None,
    ) -> ActionResult:
        return ActionResult(
            success=success,
            messages=list(self._messages),
            error=error,
            results=results,
        )
