import argparse
import concurrent.futures
import json
import logging
import os
import statistics
from typing import Any, Dict, List, Optional

from players import AVAILABLE_VARIANTS
from services.audio import SilentCues
from services.game_loop import GameLoop, SessionResult

logger = logging.getLogger(__name__)


def run_single_session(
    rows: int,
    columns: int,
    seed: Optional[int],
    player: str,
    max_ticks: Optional[int],
) -> SessionResult:
    """Play one session as fast as possible (no tick delay, no sound)."""
    loop = GameLoop(
        rows=rows,
        columns=columns,
        tick_ms=0,
        sounds_enabled=False,
        audio=SilentCues(),
        seed=seed,
        player_variant=player,
        autoplay=True,
        countdown=False,
        max_ticks=max_ticks,
        sleep=lambda seconds: None,
    )
    return loop.run()


def summarize(results: List[SessionResult]) -> Dict[str, Any]:
    """Aggregate score and survival statistics over a batch of sessions."""
    if not results:
        return {"sessions": 0}

    scores = [r.score for r in results]
    ticks = [r.ticks for r in results]
    reasons: Dict[str, int] = {}
    for r in results:
        key = r.death_reason or "survived"
        reasons[key] = reasons.get(key, 0) + 1

    return {
        "sessions": len(results),
        "mean_score": statistics.mean(scores),
        "max_score": max(scores),
        "min_score": min(scores),
        "mean_ticks": statistics.mean(ticks),
        "max_length": max(r.length for r in results),
        "death_reasons": reasons,
    }


def run_batch_sessions(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    parser = argparse.ArgumentParser(
        description="Run a batch of seeded autoplay sessions and report statistics."
    )
    parser.add_argument("--num-sessions", type=int, required=True,
                        help="Number of sessions to play.")
    parser.add_argument("--player", choices=AVAILABLE_VARIANTS, default="heuristic",
                        help="Autoplay variant (default: heuristic).")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed of the first session; session i uses seed + i (default: 0).")
    parser.add_argument("--max-workers", type=int, default=os.cpu_count(),
                        help="Maximum number of parallel session workers (threads).")

    # Game configuration arguments (mirroring main.py)
    parser.add_argument("--rows", type=int, default=20,
                        help="Board rows (default: 20).")
    parser.add_argument("--columns", type=int, default=20,
                        help="Board columns (default: 20).")
    parser.add_argument("--max-ticks", type=int, default=5000,
                        help="Maximum ticks per session (default: 5000).")

    args = parser.parse_args(argv)

    logger.info(f"Starting {args.num_sessions} sessions with up to {args.max_workers} workers...")
    results: List[SessionResult] = []

    # Each worker owns its own GameLoop; nothing is shared between threads
    with concurrent.futures.ThreadPoolExecutor(max_workers=args.max_workers) as executor:
        futures = {
            executor.submit(
                run_single_session,
                args.rows,
                args.columns,
                args.seed + i,
                args.player,
                args.max_ticks,
            ): args.seed + i
            for i in range(args.num_sessions)
        }

        for future in concurrent.futures.as_completed(futures):
            seed = futures[future]
            try:
                result = future.result()
            except Exception as exc:
                logger.error(f"Session with seed {seed} raised an exception: {exc}", exc_info=True)
                continue
            results.append(result)
            logger.info(f"Seed {seed}: score {result.score} after {result.ticks} ticks ({result.death_reason})")

    summary = summarize(results)
    summary["player"] = args.player
    return summary


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    print(json.dumps(run_batch_sessions(), indent=2))
