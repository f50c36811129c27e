"""
Interactive REPL for Space Explorer.

Provides a text-based interface for playing the game.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from src.content import create_starter_galaxy
from src.engine import GameSession
from src.engine.models import ActionResult, EngineConfig
from src.models.mission import Mission, create_default_catalog
from src.services.persistence import SaveError
from src.services.victory import VictoryReport
from src.skills.dice import RandomSource, SeededRandomSource, SystemRandomSource


@dataclass
class ConsoleEventSink:
    """
    Event sink for the terminal.

    Buffers console lines until the REPL prints them and keeps the values
    shown in the prompt.
    """

    energy: int = 0
    location: str = ""
    score: int = 0
    mission_title: str | None = None
    victory_report: VictoryReport | None = None
    is_game_over: bool = False
    _lines: list[str] = field(default_factory=list)

    def console_message(self, message: str) -> None:
        self._lines.append(message)

    def energy_changed(self, energy: int) -> None:
        self.energy = energy

    def location_changed(self, location_id: str) -> None:
        self.location = location_id

    def score_changed(self, score: int) -> None:
        self.score = score

    def mission_changed(self, mission: Mission | None) -> None:
        self.mission_title = mission.title if mission is not None else None

    def game_over(self) -> None:
        self.is_game_over = True

    def victory(self, report: VictoryReport) -> None:
        self.victory_report = report

    @property
    def is_finished(self) -> bool:
        return self.is_game_over or self.victory_report is not None

    def reset_outcome(self) -> None:
        self.victory_report = None
        self.is_game_over = False

    def drain(self) -> str:
        text = "\n".join(self._lines)
        self._lines.clear()
        return text

    def prompt(self) -> str:
        return f"[{self.location} | Energy: {self.energy} | Score: {self.score}] > "


@dataclass
class ReplState:
    """Current state of the REPL."""

    session: GameSession
    sink: ConsoleEventSink
    running: bool = True


@dataclass
class Command:
    """A REPL command."""

    name: str
    aliases: list[str]
    description: str
    handler: Callable[[ReplState, list[str]], str | None]


class GameREPL:
    """
    Interactive REPL for playing Space Explorer.

    Handles user input, dispatches commands to the session, and prints
    the session's feedback.
    """

    def __init__(
        self,
        *,
        input_func: Callable[[str], str] = input,
        print_func: Callable[[str], None] = print,
    ) -> None:
        self.input_func = input_func
        self.print = print_func
        self.commands: dict[str, Command] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all commands."""
        commands = [
            Command(
                name="move",
                aliases=["go", "travel"],
                description="Move to a connected location",
                handler=self._cmd_move,
            ),
            Command(
                name="look",
                aliases=["l"],
                description="Examine the current location",
                handler=self._cmd_look,
            ),
            Command(
                name="moves",
                aliases=["exits"],
                description="Show available moves",
                handler=self._cmd_moves,
            ),
            Command(
                name="status",
                aliases=["stats"],
                description="Show energy, score and mission",
                handler=self._cmd_status,
            ),
            Command(
                name="fight",
                aliases=["attack"],
                description="Fight an enemy at this location",
                handler=self._cmd_fight,
            ),
            Command(
                name="search",
                aliases=[],
                description="Search for locations: search <property> <value>",
                handler=self._cmd_search,
            ),
            Command(
                name="save",
                aliases=[],
                description="Save the current game",
                handler=self._cmd_save,
            ),
            Command(
                name="load",
                aliases=[],
                description="Load the saved game",
                handler=self._cmd_load,
            ),
            Command(
                name="restart",
                aliases=["new"],
                description="Start a new game",
                handler=self._cmd_restart,
            ),
            Command(
                name="help",
                aliases=["?", "h"],
                description="Show available commands",
                handler=self._cmd_help,
            ),
            Command(
                name="quit",
                aliases=["exit", "q"],
                description="Exit the game",
                handler=self._cmd_quit,
            ),
        ]

        for cmd in commands:
            self.commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self.commands[alias] = cmd

    # Command handlers ------------------------------------------------------

    def _cmd_move(self, state: ReplState, args: list[str]) -> str | None:
        """Handle move command."""
        if not args:
            state.session.describe_moves()
            return "Move where? Specify a location.\n" + state.sink.drain()
        result = state.session.move_to(args[0])
        if not result.success:
            state.session.describe_moves()
        return state.sink.drain()

    def _cmd_look(self, state: ReplState, args: list[str]) -> str | None:
        state.session.describe_location()
        return state.sink.drain()

    def _cmd_moves(self, state: ReplState, args: list[str]) -> str | None:
        state.session.describe_moves()
        return state.sink.drain()

    def _cmd_status(self, state: ReplState, args: list[str]) -> str | None:
        state.session.describe_status()
        return state.sink.drain()

    def _cmd_fight(self, state: ReplState, args: list[str]) -> str | None:
        """Handle fight command - the enemy name may be partial."""
        if not args:
            return "Fight what? Specify an enemy."
        state.session.fight(" ".join(args))
        return state.sink.drain()

    def _cmd_search(self, state: ReplState, args: list[str]) -> str | None:
        if len(args) < 2:
            return "Usage: search <property> <value>"
        state.session.search_locations_dfs(args[0], args[1])
        return state.sink.drain()

    def _cmd_save(self, state: ReplState, args: list[str]) -> str | None:
        try:
            state.session.save()
        except SaveError as exc:
            state.sink.drain()
            return f"ERROR: Error saving game: {exc}"
        return state.sink.drain()

    def _cmd_load(self, state: ReplState, args: list[str]) -> str | None:
        try:
            result: ActionResult = state.session.load()
        except SaveError as exc:
            state.sink.drain()
            return f"ERROR: Error loading game: {exc}"
        if result.success:
            state.sink.reset_outcome()
        return state.sink.drain()

    def _cmd_restart(self, state: ReplState, args: list[str]) -> str | None:
        state.sink.drain()
        state.sink.reset_outcome()
        state.session.restart()
        return state.sink.drain()

    def _cmd_help(self, state: ReplState, args: list[str]) -> str | None:
        """Handle help command."""
        lines = [
            "Commands:",
            "-" * 40,
        ]
        seen = set()
        for cmd in self.commands.values():
            if cmd.name not in seen:
                aliases = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
                lines.append(f"  {cmd.name}{aliases} - {cmd.description}")
                seen.add(cmd.name)
        lines.append("")

        state.session.describe_help()
        return "\n".join(lines) + "\n" + state.sink.drain()

    def _cmd_quit(self, state: ReplState, args: list[str]) -> str | None:
        state.running = False
        return "Safe travels, explorer!"

    # Input handling ---------------------------------------------------------

    def _parse_command(self, text: str) -> tuple[str, list[str]]:
        """Parse input into a lower-cased command name and arguments."""
        parts = text.strip().lstrip("/").lower().split()
        if not parts:
            return "", []
        return parts[0], parts[1:]

    def process_input(self, text: str, state: ReplState) -> str:
        """Process one line of input and return the response."""
        name, args = self._parse_command(text)
        if not name:
            return ""
        command = self.commands.get(name)
        if command is None:
            return "Unknown command. Type 'help' for commands."
        return command.handler(state, args) or ""

    def _offer_restart(self, state: ReplState) -> None:
        """After a win or loss, ask whether to play again."""
        if state.sink.victory_report is not None:
            question = "Congratulations! You've won the game! Start a new game? (y/n) "
        else:
            question = "Game Over! Would you like to start a new game? (y/n) "
        answer = self.input_func(question).strip().lower()
        if answer in {"y", "yes"}:
            self.print(self._cmd_restart(state, []) or "")
        else:
            state.running = False

    def _print_banner(self) -> None:
        self.print("=" * 40)
        self.print("   SPACE EXPLORATION ADVENTURE")
        self.print("=" * 40)
        self.print("Type 'help' for commands.\n")

    def run(self, session: GameSession, sink: ConsoleEventSink) -> None:
        """Run the interactive loop until the player quits."""
        state = ReplState(session=session, sink=sink)

        self._print_banner()
        session.start()
        self.print(sink.drain())
        self.print("")

        while state.running:
            try:
                user_input = self.input_func(sink.prompt()).strip()
                if not user_input:
                    continue

                response = self.process_input(user_input, state)
                if response:
                    self.print("")
                    self.print(response)
                    self.print("")

                if state.running and sink.is_finished:
                    self._offer_restart(state)

            except (KeyboardInterrupt, EOFError):
                self.print("\n")
                state.running = False

        self.print("Thanks for playing!")


def build_session(
    sink: ConsoleEventSink,
    *,
    seed: int | None = None,
    config: EngineConfig | None = None,
) -> GameSession:
    """Create a session on the starter galaxy with the default missions."""
    rng: RandomSource = SeededRandomSource(seed) if seed is not None else SystemRandomSource()
    return GameSession(
        world=create_starter_galaxy(),
        catalog=create_default_catalog(),
        rng=rng,
        sink=sink,
        config=config or EngineConfig.from_env(),
    )


def run_game(
    seed: int | None = None,
    save_dir: str | None = None,
    start_location: str | None = None,
) -> None:
    """
    Run Space Explorer in the terminal.

    Args:
        seed: Seed for reproducible combat and missions
        save_dir: Directory for save files
        start_location: Where the game begins
    """
    config = EngineConfig.from_env(save_dir=save_dir, start_location=start_location)
    sink = ConsoleEventSink()
    session = build_session(sink, seed=seed, config=config)
    GameREPL().run(session, sink)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Space Exploration Adventure")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a replayable game")
    parser.add_argument("--save-dir", default=None, help="Directory for save files")
    parser.add_argument("--start", default=None, help="Starting location id")
    parser.add_argument("--debug", action="store_true", help="Log engine internals to stderr")

    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    run_game(seed=args.seed, save_dir=args.save_dir, start_location=args.start)


if __name__ == "__main__":
    main()
