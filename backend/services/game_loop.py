"""
Driving loop for a snake session.

Ticks the engine at a fixed interval, optionally asks the autoplay player for
a direction first, and hands every new board to the frame sinks. Pausing
only stops ticks; it never touches the game state. A new session discards the
engine and player and builds fresh ones.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from domain.constants import DEFAULT_TICK_MS, Direction
from domain.game_state import BoardSnapshot, GameState
from players import create_player
from players.base import Player

logger = logging.getLogger(__name__)

COUNTDOWN_STEPS = 3
COUNTDOWN_STEP_SECONDS = 0.5
PAUSE_POLL_SECONDS = 0.1
DEAD_SEGMENT_DELAY_SECONDS = 0.05
GAME_OVER_HOLD_SECONDS = 1.0

FrameSink = Callable[..., None]


@dataclass
class SessionResult:
    """Summary of one finished session"""

    session: int
    score: int
    ticks: int
    length: int
    game_over: bool
    death_reason: Optional[str]
    player: str

    def to_dict(self) -> dict:
        return {
            "session": self.session,
            "score": self.score,
            "ticks": self.ticks,
            "length": self.length,
            "game_over": self.game_over,
            "death_reason": self.death_reason,
            "player": self.player,
        }


class GameLoop:
    """
    Manages:
      - the current GameState and its autoplay Player
      - tick timing, pause state and the countdown
      - sound toggling
      - pushing frames to renderers/recorders after every tick
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        tick_ms: int = DEFAULT_TICK_MS,
        sounds_enabled: bool = True,
        audio=None,
        seed: Optional[int] = None,
        player_variant: Optional[str] = None,
        autoplay: bool = True,
        frame_sinks: Sequence[FrameSink] = (),
        board_printer: Optional[Callable[[str], None]] = None,
        input_hook: Optional[Callable[["GameLoop"], None]] = None,
        countdown: bool = True,
        max_ticks: Optional[int] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.rows = rows
        self.columns = columns
        self.tick_seconds = tick_ms / 1000.0
        self.sounds_enabled = sounds_enabled
        self.audio = audio
        self.seed = seed
        self.player_variant = player_variant
        self.autoplay = autoplay
        self.frame_sinks: List[FrameSink] = list(frame_sinks)
        self.board_printer = board_printer
        self.input_hook = input_hook
        self.countdown = countdown
        self.max_ticks = max_ticks
        self._sleep = sleep or time.sleep

        self.paused = False
        self.sessions_started = 0
        self.game_state: Optional[GameState] = None
        self.player: Optional[Player] = None
        self.new_session()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def new_session(self) -> GameState:
        """Discard the current game and start a fresh one."""
        seed = None if self.seed is None else self.seed + self.sessions_started
        self.sessions_started += 1

        self.game_state = GameState(
            self.rows,
            self.columns,
            sounds_enabled=self.sounds_enabled,
            rng=random.Random(seed),
            audio=self.audio,
        )
        self.player = create_player(self.player_variant, self.game_state, rng=random.Random(seed))
        if self.autoplay:
            self.player.toggle_running()
        self.paused = False

        logger.info(
            f"Session {self.sessions_started} started: {self.rows}x{self.columns}, "
            f"player={self.player.name}, autoplay={self.autoplay}, seed={seed}"
        )
        return self.game_state

    def run(self) -> SessionResult:
        """Play the current session until game over (or max_ticks) and return its result."""
        self._draw()
        if self.countdown:
            self._show_countdown()

        while not self.game_state.game_over:
            if self.max_ticks is not None and self.game_state.tick >= self.max_ticks:
                logger.info(f"Stopping session after {self.game_state.tick} ticks")
                break
            self._poll_input()
            while self.paused:
                self._sleep(PAUSE_POLL_SECONDS)
                self._poll_input()
            self._sleep(self.tick_seconds)
            self.step()

        if self.game_state.game_over:
            self._show_game_over()

        result = self.result()
        logger.info(f"Session {result.session} finished: score={result.score}, ticks={result.ticks}")
        return result

    def run_sessions(self, count: int) -> List[SessionResult]:
        """Play `count` sessions back to back, starting a new one after each."""
        results = []
        for i in range(count):
            if i > 0:
                self.new_session()
            results.append(self.run())
        return results

    def result(self) -> SessionResult:
        state = self.game_state
        return SessionResult(
            session=self.sessions_started,
            score=state.score,
            ticks=state.tick,
            length=len(state.snake) + state.growth_credit,
            game_over=state.game_over,
            death_reason=state.snake.death_reason,
            player=self.player.name,
        )

    # ------------------------------------------------------------------
    # One tick
    # ------------------------------------------------------------------

    def step(self) -> None:
        """Ask the autoplay player (if running), advance the engine, redraw."""
        if self.game_state.game_over:
            return
        if self.player.is_running():
            self.game_state.request_direction_change(self.player.get_move(self.game_state))
        self.game_state.advance()
        self._draw()

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def change_direction(self, direction: Direction) -> bool:
        """Manual turn request. Ignored while autoplay holds the controls."""
        if self.player.is_running():
            return False
        return self.game_state.request_direction_change(direction)

    def toggle_autoplay(self) -> bool:
        self.autoplay = self.player.toggle_running()
        logger.info(f"Autoplay {'on' if self.autoplay else 'off'}")
        return self.autoplay

    def toggle_sounds(self) -> bool:
        self.sounds_enabled = not self.sounds_enabled
        self.game_state.set_sounds_enabled(self.sounds_enabled)
        return self.sounds_enabled

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def _poll_input(self) -> None:
        if self.input_hook is not None:
            self.input_hook(self)

    def _draw(self, dead_reveal: Optional[int] = None) -> None:
        snapshot: BoardSnapshot = self.game_state.snapshot()
        for sink in self.frame_sinks:
            sink(snapshot, dead_reveal=dead_reveal)
        if self.board_printer is not None and dead_reveal is None:
            self.board_printer(
                f"\nTick {snapshot.tick}  Score {snapshot.score}\n{self.game_state.print_board()}\n"
            )

    def _show_countdown(self) -> None:
        for i in range(COUNTDOWN_STEPS, 0, -1):
            logger.debug(f"Starting in {i}")
            self._sleep(COUNTDOWN_STEP_SECONDS)

    def _show_game_over(self) -> None:
        for i in range(1, len(self.game_state.snake) + 1):
            self._draw(dead_reveal=i)
            self._sleep(DEAD_SEGMENT_DELAY_SECONDS)
        self._sleep(GAME_OVER_HOLD_SECONDS)
