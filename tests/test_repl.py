"""Tests for the terminal REPL."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.cli.repl import ConsoleEventSink, GameREPL, ReplState, build_session
from src.engine import GameSession
from src.engine.models import EngineConfig
from src.models.mission import Mission, MissionCatalog
from src.models.world import WorldGraph
from src.skills.dice import SeededRandomSource


def _session(sink: ConsoleEventSink, save_dir: Path, **config) -> GameSession:
    world = WorldGraph.from_definitions(
        locations={"earth": "Home.", "mars": "Red.", "jupiter": "Stormy."},
        adjacency={"earth": ["mars"], "mars": ["earth", "jupiter"], "jupiter": ["mars"]},
        enemies={"mars": [("Warrior", 50, 12)]},
        properties={"earth": {"habitable": "yes"}, "mars": {"habitable": "no"}},
    )
    mission = Mission(title="Pirate Hunt", target_location="jupiter", target_enemy="Pirate", reward=300)
    return GameSession(
        world=world,
        catalog=MissionCatalog(templates=[mission]),
        rng=SeededRandomSource(1),
        sink=sink,
        config=EngineConfig(save_dir=str(save_dir), **config),
    )


def _scripted_input(*lines: str):
    """Input function that replays lines, then behaves like Ctrl-D."""
    remaining = list(lines)
    prompts: list[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return fake_input, prompts


@pytest.fixture
def repl() -> GameREPL:
    return GameREPL()


@pytest.fixture
def state(tmp_path: Path) -> ReplState:
    sink = ConsoleEventSink()
    session = _session(sink, tmp_path)
    session.start()
    sink.drain()
    return ReplState(session=session, sink=sink)


class TestCommands:
    """Command dispatch through process_input."""

    def test_help(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("help", state)
        assert "Commands:" in response
        assert "move (go, travel) - Move to a connected location" in response
        assert "Ways to Win:" in response

    def test_move(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("move mars", state)
        assert "Arrived at mars" in response
        assert state.sink.energy == 90
        assert state.sink.prompt() == "[mars | Energy: 90 | Score: 0] > "

    def test_move_alias(self, repl: GameREPL, state: ReplState):
        assert "Arrived at mars" in repl.process_input("go MARS", state)

    def test_move_without_destination(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("move", state)
        assert response.startswith("Move where? Specify a location.")
        assert "Possible moves from earth:" in response

    def test_invalid_move_lists_options(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("move jupiter", state)
        assert "Cannot move to jupiter from current location." in response
        assert "  - mars" in response

    def test_look_with_slash_prefix(self, repl: GameREPL, state: ReplState):
        assert "Location: earth" in repl.process_input("/LOOK", state)

    def test_moves_and_status(self, repl: GameREPL, state: ReplState):
        assert "Possible moves from earth:" in repl.process_input("moves", state)
        assert "Energy: 100" in repl.process_input("status", state)

    def test_fight_without_target(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("fight", state) == "Fight what? Specify an enemy."

    def test_fight_unknown_enemy(self, repl: GameREPL, state: ReplState):
        assert "No such enemy here: ghost" in repl.process_input("fight ghost", state)

    def test_search_usage(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("search habitable", state) == "Usage: search <property> <value>"

    def test_search(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("search habitable yes", state)
        assert "Found locations:" in response
        assert "- earth" in response
        assert state.sink.energy == 95

    def test_unknown_command(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("xyzzy", state) == "Unknown command. Type 'help' for commands."

    def test_blank_input(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("   ", state) == ""

    def test_quit(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("quit", state) == "Safe travels, explorer!"
        assert state.running is False

    def test_save_and_load(self, repl: GameREPL, state: ReplState):
        assert "Game saved successfully!" in repl.process_input("save", state)
        repl.process_input("move mars", state)

        response = repl.process_input("load", state)

        assert "Game loaded successfully!" in response
        assert state.session.current_location_id == "earth"
        assert state.sink.location == "earth"

    def test_load_without_save(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("load", state)
        assert response.startswith("ERROR: Error loading game:")

    def test_save_failure_reported(self, repl: GameREPL, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        sink = ConsoleEventSink()
        session = _session(sink, blocker)
        session.start()
        state = ReplState(session=session, sink=sink)

        assert repl.process_input("save", state).startswith("ERROR: Error saving game:")

    def test_restart(self, repl: GameREPL, state: ReplState):
        repl.process_input("move mars", state)
        response = repl.process_input("restart", state)
        assert "Starting exploration at earth" in response
        assert state.sink.energy == 100


class TestRun:
    """The interactive loop."""

    def test_quit(self, tmp_path: Path):
        fake_input, _ = _scripted_input("look", "quit")
        printed: list[str] = []
        sink = ConsoleEventSink()

        GameREPL(input_func=fake_input, print_func=printed.append).run(_session(sink, tmp_path), sink)

        output = "\n".join(printed)
        assert "SPACE EXPLORATION ADVENTURE" in output
        assert "Starting exploration at earth" in output
        assert "Location: earth" in output
        assert output.endswith("Thanks for playing!")

    def test_end_of_input(self, tmp_path: Path):
        fake_input, _ = _scripted_input()
        printed: list[str] = []
        sink = ConsoleEventSink()

        GameREPL(input_func=fake_input, print_func=printed.append).run(_session(sink, tmp_path), sink)

        assert printed[-1] == "Thanks for playing!"

    def test_game_over_then_decline(self, tmp_path: Path):
        fake_input, prompts = _scripted_input("move mars", "n")
        printed: list[str] = []
        sink = ConsoleEventSink()
        session = _session(sink, tmp_path, initial_energy=10)

        GameREPL(input_func=fake_input, print_func=printed.append).run(session, sink)

        assert "Game Over! You've run out of energy." in "\n".join(printed)
        assert any("Would you like to start a new game?" in p for p in prompts)
        assert printed[-1] == "Thanks for playing!"

    def test_game_over_then_restart(self, tmp_path: Path):
        fake_input, _ = _scripted_input("move mars", "y", "quit")
        printed: list[str] = []
        sink = ConsoleEventSink()
        session = _session(sink, tmp_path, initial_energy=10)

        GameREPL(input_func=fake_input, print_func=printed.append).run(session, sink)

        assert "\n".join(printed).count("Starting exploration at earth") == 2
        assert session.energy == 10
        assert not sink.is_finished

    def test_victory_prompt(self, tmp_path: Path):
        fake_input, prompts = _scripted_input("move mars", "no")
        sink = ConsoleEventSink()
        session = _session(sink, tmp_path, critical_locations=["mars"])

        GameREPL(input_func=fake_input, print_func=lambda _: None).run(session, sink)

        assert sink.victory_report is not None
        assert any("You've won the game!" in p for p in prompts)


class TestBuildSession:
    """Tests for the starter-galaxy session factory."""

    def test_seeded_sessions_match(self):
        first = build_session(ConsoleEventSink(), seed=11)
        second = build_session(ConsoleEventSink(), seed=11)
        first.start()
        second.start()
        assert first.current_mission.title == second.current_mission.title

    def test_uses_starter_galaxy(self):
        session = build_session(ConsoleEventSink(), seed=1, config=EngineConfig())
        session.start()
        assert session.current_location_id == "earth"
        assert session.possible_moves() == {"moon", "mars", "venus"}
