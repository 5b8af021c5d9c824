"""
Video export for snake sessions.

The recorder is a frame sink for the game loop: it renders every snapshot it
receives with BoardRenderer and, at the end of the session, encodes the
frames to MP4 with MoviePy/FFmpeg.
"""

import logging
import os
from typing import List, Optional

import numpy as np
from moviepy import ImageSequenceClip

from domain.game_state import BoardSnapshot
from .renderer import BoardRenderer

logger = logging.getLogger(__name__)

DEFAULT_FPS = 10  # Matches the default 100ms tick


class SessionRecorder:
    """Collect rendered frames of a session and write them as a video"""

    def __init__(self, renderer: Optional[BoardRenderer] = None, fps: int = DEFAULT_FPS):
        self.renderer = renderer or BoardRenderer()
        self.fps = fps
        self.frames: List[np.ndarray] = []

    def __call__(self, snapshot: BoardSnapshot, dead_reveal: Optional[int] = None) -> None:
        frame = self.renderer.render(snapshot, dead_reveal=dead_reveal)
        self.frames.append(np.array(frame))

    def reset(self) -> None:
        self.frames = []

    def write_video(self, output_path: str) -> str:
        """
        Encode the collected frames to `output_path`.

        Returns:
            Path to the generated video file
        """
        if not self.frames:
            raise ValueError("No frames recorded, nothing to write.")

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        logger.info(f"Encoding {len(self.frames)} frames to {output_path}")
        clip = ImageSequenceClip(self.frames, fps=self.fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info(f"Video created successfully at {output_path}")
        return output_path
