"""
Registry for autoplay player variants.

Maps variant keys (e.g., 'heuristic', 'random') to player classes.
To add a new variant, create a module with a Player subclass, import it here
and add an entry to PLAYER_VARIANT_LOADERS.
"""

import random
from typing import Callable, Dict, Optional, Type

from domain.game_state import GameState
from .base import Player


# Lazy imports keep the registry importable from the player modules themselves
def _get_heuristic_player() -> Type[Player]:
    from .heuristic_player import HeuristicSolver
    return HeuristicSolver


def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "heuristic": _get_heuristic_player,
    "random": _get_random_player,
}

DEFAULT_VARIANT = "heuristic"

# Canonical list of available variant keys (for CLI choices)
AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given variant key.

    Args:
        variant_key: One of AVAILABLE_VARIANTS. If None or empty, returns the default.

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def create_player(
    variant_key: Optional[str],
    game_state: GameState,
    rng: Optional[random.Random] = None,
) -> Player:
    """Instantiate a player of the given variant for a fresh session."""
    player_class = get_player_class(variant_key)
    return player_class(game_state=game_state, rng=rng)


def list_variants() -> list:
    """
    Return metadata about all available player variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": "heuristic", "description": "BFS solver: food if the tail stays reachable, else chase the tail"},
        {"key": "random", "description": "Random safe move, baseline for comparisons"},
    ]
