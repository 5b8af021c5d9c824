import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from config import Settings, apply_overrides, load_settings
from players import AVAILABLE_VARIANTS
from services.audio import create_audio
from services.game_loop import GameLoop

logger = logging.getLogger(__name__)


# -------------------------------
# Session Function
# -------------------------------

def run_session(settings: Settings, game_params: argparse.Namespace) -> Dict:
    """
    Runs one snake session headless, driven by the autoplay player.

    Args:
        settings: Settings loaded from the environment.
        game_params: An object (like argparse.Namespace) with the CLI overrides
                     (rows, columns, tick_ms, seed, max_ticks, ...).

    Returns:
        A dictionary summarizing the session (score, ticks, length, death reason).
    """
    settings = apply_overrides(
        settings,
        rows=game_params.rows,
        columns=game_params.columns,
        tick_ms=game_params.tick_ms,
        seed=game_params.seed,
        player=game_params.player,
    )

    frame_sinks = []
    recorder = None
    if getattr(game_params, 'record', None):
        from services.video_generator import SessionRecorder
        recorder = SessionRecorder(fps=game_params.fps)
        frame_sinks.append(recorder)

    sounds = settings.sounds and not getattr(game_params, 'no_sounds', False)
    audio = create_audio(sounds, settings.assets_dir)

    loop = GameLoop(
        rows=settings.rows,
        columns=settings.columns,
        tick_ms=settings.tick_ms,
        sounds_enabled=sounds,
        audio=audio,
        seed=settings.seed,
        player_variant=settings.player,
        autoplay=True,
        frame_sinks=frame_sinks,
        board_printer=print if getattr(game_params, 'print_board', False) else None,
        countdown=not getattr(game_params, 'no_countdown', False),
        max_ticks=game_params.max_ticks,
    )

    result = loop.run()
    summary = result.to_dict()

    if recorder is not None:
        summary["video"] = recorder.write_video(game_params.record)

    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a snake session driven by the autoplay solver."
    )
    parser.add_argument("--rows", type=int, default=None,
                        help="Number of board rows (default: SNAKE_ROWS or 20)")
    parser.add_argument("--columns", type=int, default=None,
                        help="Number of board columns (default: SNAKE_COLUMNS or 20)")
    parser.add_argument("--tick-ms", dest="tick_ms", type=int, default=None,
                        help="Milliseconds between ticks (default: SNAKE_TICK_MS or 100)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for a reproducible session")
    parser.add_argument("--max-ticks", dest="max_ticks", type=int, default=None,
                        help="Stop the session after this many ticks")
    parser.add_argument("--player", choices=AVAILABLE_VARIANTS, default=None,
                        help="Autoplay variant (default: SNAKE_PLAYER or heuristic)")
    parser.add_argument("--no-sounds", dest="no_sounds", action="store_true",
                        help="Do not play eat/game-over cues")
    parser.add_argument("--no-countdown", dest="no_countdown", action="store_true",
                        help="Skip the 3-2-1 countdown")
    parser.add_argument("--print-board", dest="print_board", action="store_true",
                        help="Print the board to stdout after every tick")
    parser.add_argument("--record", type=str, default=None,
                        help="Write an MP4 of the session to this path")
    parser.add_argument("--fps", type=int, default=10,
                        help="Frames per second of the recorded video (default: 10)")
    parser.add_argument("--env-file", dest="env_file", type=str, default=None,
                        help="Path to a .env file with SNAKE_* settings")
    return parser


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_overrides(
            load_settings(args.env_file),
            rows=args.rows,
            columns=args.columns,
            tick_ms=args.tick_ms,
            seed=args.seed,
            player=args.player,
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        result = run_session(settings, args)
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return 1

    print("\nSession Result Summary:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
