"""
Audio cue sink for the game engine.

The engine asks for two fire-and-forget cues, "eat" and "game over". Sound
failures (no audio device, missing files) must never stop a game, so every
pygame error is logged and the affected cue is skipped.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

logger = logging.getLogger(__name__)

EAT_SOUND = "Eat.wav"
GAME_OVER_SOUND = "Die.wav"


class SilentCues:
    """Cue sink that plays nothing."""

    def play_eat(self) -> None:
        pass

    def play_game_over(self) -> None:
        pass


class SoundCues:
    """Plays the eat and game-over sounds through pygame.mixer."""

    def __init__(self, assets_dir: Union[str, Path]):
        self.assets_dir = Path(assets_dir)
        self._sounds: Dict[str, Optional["pygame.mixer.Sound"]] = {}
        self._mixer_ready = self._init_mixer()

        for cue, filename in (("eat", EAT_SOUND), ("game_over", GAME_OVER_SOUND)):
            self._sounds[cue] = self._load(filename) if self._mixer_ready else None

    @staticmethod
    def _init_mixer() -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            return True
        except pygame.error as e:
            logger.warning(f"Audio disabled, could not initialise mixer: {e}")
            return False

    def _load(self, filename: str) -> Optional["pygame.mixer.Sound"]:
        path = self.assets_dir / filename
        try:
            return pygame.mixer.Sound(str(path))
        except (pygame.error, FileNotFoundError) as e:
            logger.warning(f"Could not load sound {path}: {e}")
            return None

    @property
    def available(self) -> bool:
        return any(sound is not None for sound in self._sounds.values())

    def _play(self, cue: str) -> None:
        sound = self._sounds.get(cue)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.warning(f"Could not play {cue} sound, muting it: {e}")
            self._sounds[cue] = None

    def play_eat(self) -> None:
        self._play("eat")

    def play_game_over(self) -> None:
        self._play("game_over")


def create_audio(enabled: bool, assets_dir: Union[str, Path]):
    """Return a SoundCues sink, or SilentCues when sound is off or unavailable."""
    if not enabled:
        return SilentCues()
    cues = SoundCues(assets_dir)
    if not cues.available:
        logger.info("No sounds could be loaded, continuing silently")
        return SilentCues()
    return cues
